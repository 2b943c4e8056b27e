"""Tests for peer CLI command generation."""

import pytest
from fabricarch.domain.models import NetworkConfig
from fabricarch.generators import (
    PeerCommandKind,
    network_peer_command,
    network_peer_commands,
)

CLI_CRYPTO = "/opt/gopath/src/github.com/hyperledger/fabric/peer/crypto"
ORDERER_CA = (
    f"{CLI_CRYPTO}/ordererOrganizations/prod.com/orderers/orderer.prod.com"
    "/msp/tlscacerts/tlsca.prod.com-cert.pem"
)
PEER_TLS_ROOT = f"{CLI_CRYPTO}/peerOrganizations/org1.example.com/peers/peer0.org1.example.com/tls/ca.crt"


@pytest.fixture
def prod(production_network) -> NetworkConfig:
    return production_network.model_copy(update={"name": "Prod"})


def test_commands_in_lifecycle_order(prod):
    commands = network_peer_commands(prod)

    assert [c.kind for c in commands] == list(PeerCommandKind)
    assert [c.to_dict()["id"] for c in commands] == [
        "create-channel",
        "join-channel",
        "install-chaincode",
        "approve-chaincode",
        "commit-chaincode",
        "invoke-chaincode",
    ]


def test_create_channel(prod):
    command = network_peer_command(prod, PeerCommandKind.create_channel)

    assert command.title == "Create Channel"
    assert command.description == 'Initialize channel "prodchannel" on the network'
    assert command.command == (
        "peer channel create \\\n"
        "  -o orderer.prod.com:7050 \\\n"
        "  -c prodchannel \\\n"
        "  -f ./channel-artifacts/prodchannel.tx \\\n"
        f"  --tls --cafile {ORDERER_CA}"
    )


def test_join_and_install_target_first_peer(prod):
    join = network_peer_command(prod, "join-channel")
    install = network_peer_command(prod, "install-chaincode")

    assert join.description == 'Join peer0.org1.example.com to channel "prodchannel"'
    assert join.command == "peer channel join \\\n  -b prodchannel.block"
    assert install.command == "peer lifecycle chaincode install \\\n  asset-transfer.tar.gz"


def test_approve_uses_first_chaincode(prod):
    command = network_peer_command(prod, PeerCommandKind.approve_chaincode)

    assert command.description == "Approve chaincode definition for Org1"
    assert "--name asset-transfer" in command.command
    assert "--version 1.0" in command.command
    assert "--package-id asset-transfer_1.0:hash" in command.command
    assert "--sequence 1" in command.command


def test_commit_and_invoke_endorse_through_peer0(prod):
    for kind in (PeerCommandKind.commit_chaincode, PeerCommandKind.invoke_chaincode):
        lines = network_peer_command(prod, kind).command.split(" \\\n  ")

        assert "--peerAddresses peer0.org1.example.com:7051" in lines
        assert f"--tlsRootCertFiles {PEER_TLS_ROOT}" in lines
        assert f"--tls --cafile {ORDERER_CA}" in lines

    invoke = network_peer_command(prod, PeerCommandKind.invoke_chaincode).command
    assert "-c '{\"function\":\"initLedger\",\"Args\":[]}'" in invoke


def test_empty_network_uses_defaults():
    network = NetworkConfig(id="n1", name="Net", channel_name="")

    commands = {c.kind: c.command for c in network_peer_commands(network)}

    assert "-o orderer.net.com:7050" in commands[PeerCommandKind.create_channel]
    assert "-c mychannel" in commands[PeerCommandKind.create_channel]
    assert commands[PeerCommandKind.install_chaincode].endswith("mycc.tar.gz")
    assert "--peerAddresses peer0.org1.example.com:7051" in commands[PeerCommandKind.commit_chaincode]


def test_graph_network_resolves_from_canvas():
    network = NetworkConfig.model_validate(
        {
            "id": "g1",
            "name": "Canvas",
            "nodes": [
                {"id": "o", "type": "organization", "label": "Acme"},
                {"id": "ord", "type": "orderer", "label": "ord"},
            ],
        }
    )

    create = network_peer_command(network, PeerCommandKind.create_channel).command
    commit = network_peer_command(network, PeerCommandKind.commit_chaincode).command

    assert "-o orderer.canvas.com:7050" in create
    assert "--peerAddresses peer0.acme.example.com:7051" in commit


def test_unknown_command_kind(prod):
    with pytest.raises(ValueError):
        network_peer_command(prod, "upgrade-chaincode")
