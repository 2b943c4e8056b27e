"""Tests for the peer commands command."""

from fabricarch.cli.commands import commands_command
from fabricarch.core.errors import ExitCode


def test_prints_all_commands(network_file, capsys):
    exit_code = commands_command(str(network_file))

    assert exit_code == ExitCode.SUCCESS
    out = capsys.readouterr().out
    assert "Create Channel" in out
    assert "peer lifecycle chaincode approveformyorg" in out
    assert "--channelID prodchannel" in out


def test_single_command_is_plain(network_file, capsys):
    exit_code = commands_command(str(network_file), command="join-channel")

    assert exit_code == 0
    assert capsys.readouterr().out == "peer channel join \\\n  -b prodchannel.block\n"


def test_missing_network_file(tmp_path):
    assert commands_command(str(tmp_path / "missing.yaml")) == ExitCode.CONFIG_ERROR
