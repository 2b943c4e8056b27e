"""Tests for the generate command."""

import yaml
from fabricarch.cli.generate import generate_command
from fabricarch.core.errors import ExitCode


def test_generate_all(network_file, tmp_path):
    out = tmp_path / "out"

    exit_code = generate_command("all", str(network_file), output_dir=str(out))

    assert exit_code == ExitCode.SUCCESS
    assert sorted(p.name for p in out.iterdir()) == [
        "configtx.yaml",
        "crypto-config.yaml",
        "docker-compose.yaml",
    ]
    configtx = yaml.safe_load((out / "configtx.yaml").read_text())
    assert "prodchannelGenesis" in configtx["Profiles"]


def test_generate_single_document(network_file, tmp_path):
    out = tmp_path / "out"

    exit_code = generate_command("crypto-config", str(network_file), output_dir=str(out))

    assert exit_code == 0
    assert [p.name for p in out.iterdir()] == ["crypto-config.yaml"]


def test_dry_run_writes_nothing(network_file, tmp_path, capsys):
    out = tmp_path / "out"

    exit_code = generate_command("all", str(network_file), output_dir=str(out), dry_run=True)

    assert exit_code == 0
    assert not out.exists()
    assert "DRY RUN" in capsys.readouterr().out


def test_missing_network_file(tmp_path, capsys):
    exit_code = generate_command("all", str(tmp_path / "missing.yaml"), output_dir=str(tmp_path))

    assert exit_code == ExitCode.CONFIG_ERROR
    assert "not found" in capsys.readouterr().out


def test_unwritable_output(network_file, tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")

    exit_code = generate_command("all", str(network_file), output_dir=str(blocker))

    assert exit_code == ExitCode.CONFIG_ERROR
