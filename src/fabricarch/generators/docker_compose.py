"""
docker-compose.yaml generator.

One orderer service per orderer and exactly two peer services per
organization, regardless of how many peers the topology draws. Host ports
follow ``7050 + i`` for orderers and ``7051 + p + 10 * o`` for peers.
"""

from __future__ import annotations

from typing import Any, Sequence

import structlog

from fabricarch.core.naming import (
    ORDERER_MSP_ID,
    ORDERER_PORT,
    PEER_PORT,
    PEERS_PER_ORGANIZATION,
    peer_external_port,
    peer_hostname,
    peer_node_dir,
)
from fabricarch.domain.models import Orderer, Organization
from fabricarch.generators.serializers import FABRIC_VERSION_TAG, render_document
from fabricarch.topology.extractor import DEFAULT_NETWORK_NAME, extract_topology
from fabricarch.topology.models import (
    CollectionInput,
    ExtractedOrderer,
    ExtractedOrganization,
    ExtractedTopology,
)

logger = structlog.get_logger()

COMPOSE_VERSION = "3.7"
COMPOSE_NETWORK = "fabric-network"
ORDERER_IMAGE = "hyperledger/fabric-orderer:2.5"
PEER_IMAGE = "hyperledger/fabric-peer:2.5"
LOGGING_SPEC = "INFO"

ORDERER_HOME = "/var/hyperledger/orderer"
PEER_HOME = "/etc/hyperledger/fabric"

REFERENCE_URL = "https://hyperledger-fabric.readthedocs.io/en/latest/test_network.html"


def build_orderer_service(orderer: ExtractedOrderer) -> dict[str, Any]:
    return {
        "container_name": orderer.fqdn,
        "image": ORDERER_IMAGE,
        "environment": [
            f"FABRIC_LOGGING_SPEC={LOGGING_SPEC}",
            "ORDERER_GENERAL_LISTENADDRESS=0.0.0.0",
            f"ORDERER_GENERAL_LISTENPORT={ORDERER_PORT}",
            f"ORDERER_GENERAL_LOCALMSPID={ORDERER_MSP_ID}",
            f"ORDERER_GENERAL_LOCALMSPDIR={ORDERER_HOME}/msp",
            "ORDERER_GENERAL_TLS_ENABLED=true",
            f"ORDERER_GENERAL_TLS_PRIVATEKEY={ORDERER_HOME}/tls/server.key",
            f"ORDERER_GENERAL_TLS_CERTIFICATE={ORDERER_HOME}/tls/server.crt",
            f"ORDERER_GENERAL_TLS_ROOTCAS=[{ORDERER_HOME}/tls/ca.crt]",
        ],
        "working_dir": "/opt/gopath/src/github.com/hyperledger/fabric",
        "command": "orderer",
        "ports": [f"{orderer.external_port}:{ORDERER_PORT}"],
        "volumes": [
            f"./{orderer.node_dir}/msp:{ORDERER_HOME}/msp",
            f"./{orderer.node_dir}/tls:{ORDERER_HOME}/tls",
        ],
        "networks": [COMPOSE_NETWORK],
    }


def build_peer_service(
    org: ExtractedOrganization, org_index: int, peer_index: int
) -> tuple[str, dict[str, Any]]:
    """Service name and definition for peer ``peer_index`` of an organization."""
    name = peer_hostname(peer_index, org.domain)
    address = f"{name}:{PEER_PORT}"
    node_dir = peer_node_dir(org.domain, name)

    return name, {
        "container_name": name,
        "image": PEER_IMAGE,
        "environment": [
            f"FABRIC_LOGGING_SPEC={LOGGING_SPEC}",
            f"CORE_PEER_ID={name}",
            f"CORE_PEER_ADDRESS={address}",
            f"CORE_PEER_LOCALMSPID={org.msp_id}",
            "CORE_PEER_TLS_ENABLED=true",
            f"CORE_PEER_TLS_CERT_FILE={PEER_HOME}/tls/server.crt",
            f"CORE_PEER_TLS_KEY_FILE={PEER_HOME}/tls/server.key",
            f"CORE_PEER_TLS_ROOTCERT_FILE={PEER_HOME}/tls/ca.crt",
            f"CORE_PEER_GOSSIP_BOOTSTRAP={address}",
            f"CORE_PEER_GOSSIP_EXTERNALENDPOINT={address}",
        ],
        "working_dir": "/opt/gopath/src/github.com/hyperledger/fabric/peer",
        "command": "peer node start",
        "ports": [f"{peer_external_port(org_index, peer_index)}:{PEER_PORT}"],
        "volumes": [
            f"./{node_dir}/msp:{PEER_HOME}/msp",
            f"./{node_dir}/tls:{PEER_HOME}/tls",
        ],
        "networks": [COMPOSE_NETWORK],
    }


def build_docker_compose(topology: ExtractedTopology) -> dict[str, Any]:
    services: dict[str, Any] = {}

    for orderer in topology.orderers:
        services[orderer.fqdn] = build_orderer_service(orderer)

    for org_index, org in enumerate(topology.organizations):
        for peer_index in range(PEERS_PER_ORGANIZATION):
            name, service = build_peer_service(org, org_index, peer_index)
            if name in services:
                logger.warning(
                    "compose_service_replaced",
                    service=name,
                    organization=org.name,
                    domain=org.domain,
                )
            services[name] = service

    return {
        "version": COMPOSE_VERSION,
        "networks": {
            COMPOSE_NETWORK: {"name": COMPOSE_NETWORK},
        },
        "services": services,
    }


def render_docker_compose(topology: ExtractedTopology) -> str:
    header = [
        "Docker Compose configuration for Hyperledger Fabric network",
        f"Network: {topology.network_name}",
        f"Generated for Fabric {FABRIC_VERSION_TAG}",
        "",
        "Usage: docker-compose up -d",
        f"Reference: {REFERENCE_URL}",
    ]
    logger.debug(
        "artifact_generated",
        artifact="docker-compose",
        network=topology.network_name,
        organizations=len(topology.organizations),
        orderers=len(topology.orderers),
    )
    return render_document(header, build_docker_compose(topology))


def generate_docker_compose_yaml(
    organizations: Sequence[Organization],
    orderers: Sequence[Orderer],
    *,
    network_name: str = DEFAULT_NETWORK_NAME,
) -> str:
    """Generate docker-compose.yaml text from typed collections."""
    topology = extract_topology(
        CollectionInput(organizations=organizations, orderers=orderers),
        network_name=network_name,
    )
    return render_docker_compose(topology)
