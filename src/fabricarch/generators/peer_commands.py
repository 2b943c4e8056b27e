"""
``peer`` CLI command generator.

Renders the channel and chaincode lifecycle commands an operator runs from
the Fabric CLI container once the network is up. Hostnames, ports and TLS
certificate paths come from the same extracted topology as the YAML
documents, so the commands address the containers docker-compose starts.

The first orderer, the first organization and its ``peer0`` are targeted.
Networks without them fall back to the default names.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

import structlog

from fabricarch.core.naming import (
    PEER_PORT,
    cli_crypto_path,
    default_domain,
    default_msp_id,
    orderer_hostname,
    peer_hostname,
    peer_node_dir,
)
from fabricarch.domain.models import NetworkConfig
from fabricarch.topology.extractor import extract_network
from fabricarch.topology.models import ExtractedOrderer, ExtractedOrganization, ExtractedTopology

logger = structlog.get_logger()

DEFAULT_CHANNEL = "mychannel"
DEFAULT_ORGANIZATION = "Org1"
DEFAULT_CHAINCODE = "mycc"
DEFAULT_CHAINCODE_VERSION = "1.0"
CHAINCODE_SEQUENCE = 1
INIT_ARGS = '{"function":"initLedger","Args":[]}'

CONTINUATION = " \\\n  "


class PeerCommandKind(StrEnum):
    create_channel = "create-channel"
    join_channel = "join-channel"
    install_chaincode = "install-chaincode"
    approve_chaincode = "approve-chaincode"
    commit_chaincode = "commit-chaincode"
    invoke_chaincode = "invoke-chaincode"


@dataclass(frozen=True)
class PeerCommand:
    kind: PeerCommandKind
    title: str
    description: str
    command: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.kind.value,
            "title": self.title,
            "description": self.description,
            "command": self.command,
        }


@dataclass(frozen=True)
class CommandTarget:
    """Endpoints and names every command is rendered against."""

    channel: str
    organization: str
    peer: str
    peer_address: str
    peer_tls_root: str
    orderer_address: str
    orderer_ca_file: str
    chaincode: str
    chaincode_version: str

    @property
    def orderer_tls(self) -> str:
        return f"--tls --cafile {self.orderer_ca_file}"

    @property
    def package_id(self) -> str:
        return f"{self.chaincode}_{self.chaincode_version}:hash"


def resolve_target(topology: ExtractedTopology, channel_name: str = "") -> CommandTarget:
    orderer = (
        topology.orderers[0]
        if topology.orderers
        else ExtractedOrderer(
            id="", index=0, hostname=orderer_hostname(0), domain=topology.orderer_domain
        )
    )
    organization = (
        topology.organizations[0]
        if topology.organizations
        else ExtractedOrganization(
            id="",
            name=DEFAULT_ORGANIZATION,
            msp_id=default_msp_id(DEFAULT_ORGANIZATION),
            domain=default_domain(DEFAULT_ORGANIZATION),
        )
    )
    chaincodes = topology.collections.chaincodes
    peer = peer_hostname(0, organization.domain)

    return CommandTarget(
        channel=channel_name or DEFAULT_CHANNEL,
        organization=organization.name,
        peer=peer,
        peer_address=f"{peer}:{PEER_PORT}",
        peer_tls_root=cli_crypto_path(f"{peer_node_dir(organization.domain, peer)}/tls/ca.crt"),
        orderer_address=orderer.endpoint,
        orderer_ca_file=cli_crypto_path(
            f"{orderer.node_dir}/msp/tlscacerts/tlsca.{orderer.domain}-cert.pem"
        ),
        chaincode=chaincodes[0].name if chaincodes else DEFAULT_CHAINCODE,
        chaincode_version=chaincodes[0].version if chaincodes else DEFAULT_CHAINCODE_VERSION,
    )


def _join(*parts: str) -> str:
    return CONTINUATION.join(parts)


def build_peer_command(kind: PeerCommandKind, target: CommandTarget) -> PeerCommand:
    peer_endorsement = (
        f"--peerAddresses {target.peer_address}",
        f"--tlsRootCertFiles {target.peer_tls_root}",
    )

    if kind is PeerCommandKind.create_channel:
        return PeerCommand(
            kind,
            "Create Channel",
            f'Initialize channel "{target.channel}" on the network',
            _join(
                "peer channel create",
                f"-o {target.orderer_address}",
                f"-c {target.channel}",
                f"-f ./channel-artifacts/{target.channel}.tx",
                target.orderer_tls,
            ),
        )
    if kind is PeerCommandKind.join_channel:
        return PeerCommand(
            kind,
            "Join Channel",
            f'Join {target.peer} to channel "{target.channel}"',
            _join("peer channel join", f"-b {target.channel}.block"),
        )
    if kind is PeerCommandKind.install_chaincode:
        return PeerCommand(
            kind,
            "Install Chaincode",
            f"Install chaincode on {target.peer}",
            _join("peer lifecycle chaincode install", f"{target.chaincode}.tar.gz"),
        )
    if kind is PeerCommandKind.approve_chaincode:
        return PeerCommand(
            kind,
            "Approve Chaincode",
            f"Approve chaincode definition for {target.organization}",
            _join(
                "peer lifecycle chaincode approveformyorg",
                f"-o {target.orderer_address}",
                f"--channelID {target.channel}",
                f"--name {target.chaincode}",
                f"--version {target.chaincode_version}",
                f"--package-id {target.package_id}",
                f"--sequence {CHAINCODE_SEQUENCE}",
                target.orderer_tls,
            ),
        )
    if kind is PeerCommandKind.commit_chaincode:
        return PeerCommand(
            kind,
            "Commit Chaincode",
            "Commit chaincode definition to the channel",
            _join(
                "peer lifecycle chaincode commit",
                f"-o {target.orderer_address}",
                f"--channelID {target.channel}",
                f"--name {target.chaincode}",
                f"--version {target.chaincode_version}",
                f"--sequence {CHAINCODE_SEQUENCE}",
                target.orderer_tls,
                *peer_endorsement,
            ),
        )
    return PeerCommand(
        kind,
        "Invoke Chaincode",
        "Invoke a chaincode function",
        _join(
            "peer chaincode invoke",
            f"-o {target.orderer_address}",
            f"-C {target.channel}",
            f"-n {target.chaincode}",
            f"-c '{INIT_ARGS}'",
            target.orderer_tls,
            *peer_endorsement,
        ),
    )


def render_peer_commands(topology: ExtractedTopology, channel_name: str = "") -> list[PeerCommand]:
    """All commands in lifecycle order."""
    target = resolve_target(topology, channel_name)
    return [build_peer_command(kind, target) for kind in PeerCommandKind]


def network_peer_commands(network: NetworkConfig) -> list[PeerCommand]:
    commands = render_peer_commands(extract_network(network), network.channel_name)
    logger.debug("peer_commands_generated", network=network.name, commands=len(commands))
    return commands


def network_peer_command(network: NetworkConfig, kind: PeerCommandKind | str) -> PeerCommand:
    target = resolve_target(extract_network(network), network.channel_name)
    return build_peer_command(PeerCommandKind(kind), target)
