"""
crypto-config.yaml generator.

Describes the certificate material ``cryptogen`` should create: one orderer
organization listing every orderer hostname, and one peer organization per
application organization with a fixed template of two peers and one user.
"""

from __future__ import annotations

from typing import Any, Sequence

import structlog

from fabricarch.core.naming import ORDERER_ORG_NAME, PEERS_PER_ORGANIZATION
from fabricarch.domain.models import Orderer, Organization
from fabricarch.generators.serializers import FABRIC_VERSION_TAG, render_document
from fabricarch.topology.extractor import DEFAULT_NETWORK_NAME, extract_topology
from fabricarch.topology.models import CollectionInput, ExtractedTopology

logger = structlog.get_logger()

REFERENCE_URL = "https://hyperledger-fabric.readthedocs.io/en/latest/commands/cryptogen.html"

USERS_PER_ORGANIZATION = 1


def build_crypto_config(topology: ExtractedTopology) -> dict[str, Any]:
    orderer_orgs: list[dict[str, Any]] = []
    if topology.has_orderers:
        orderer_orgs.append(
            {
                "Name": ORDERER_ORG_NAME,
                "Domain": topology.orderer_domain,
                "EnableNodeOUs": True,
                "Specs": [{"Hostname": orderer.hostname} for orderer in topology.orderers],
            }
        )

    peer_orgs = [
        {
            "Name": org.name,
            "Domain": org.domain,
            "EnableNodeOUs": True,
            "Template": {"Count": PEERS_PER_ORGANIZATION},
            "Users": {"Count": USERS_PER_ORGANIZATION},
        }
        for org in topology.organizations
    ]

    return {
        "OrdererOrgs": orderer_orgs,
        "PeerOrgs": peer_orgs,
    }


def render_crypto_config(topology: ExtractedTopology) -> str:
    header = [
        "Hyperledger Fabric crypto-config.yaml",
        f"Network: {topology.network_name}",
        f"Generated for Fabric {FABRIC_VERSION_TAG}, for use with the cryptogen tool",
        "",
        f"Reference: {REFERENCE_URL}",
    ]
    logger.debug(
        "artifact_generated",
        artifact="crypto-config",
        network=topology.network_name,
        organizations=len(topology.organizations),
        orderers=len(topology.orderers),
    )
    return render_document(header, build_crypto_config(topology))


def generate_crypto_config_yaml(
    organizations: Sequence[Organization],
    orderers: Sequence[Orderer],
    *,
    network_name: str = DEFAULT_NETWORK_NAME,
) -> str:
    """Generate crypto-config.yaml text from typed collections."""
    topology = extract_topology(
        CollectionInput(organizations=organizations, orderers=orderers),
        network_name=network_name,
    )
    return render_crypto_config(topology)
