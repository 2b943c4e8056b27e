"""
configtx.yaml generator.

Builds the channel and policy configuration consumed by ``configtxgen``:
organization MSP definitions and policies, capabilities, application,
orderer and channel sections, and the genesis/channel profiles.
"""

from __future__ import annotations

from typing import Any, Sequence

import structlog

from fabricarch.core.naming import ORDERER_MSP_ID, ORDERER_PORT
from fabricarch.domain.models import ConsensusType, Orderer, Organization, Peer
from fabricarch.generators.serializers import FABRIC_VERSION_TAG, render_document
from fabricarch.topology.extractor import extract_topology
from fabricarch.topology.models import (
    CollectionInput,
    ExtractedOrderer,
    ExtractedOrganization,
    ExtractedTopology,
)

logger = structlog.get_logger()

REFERENCE_URL = (
    "https://hyperledger-fabric.readthedocs.io/en/latest/create_channel/create_channel_config.html"
)

SMART_BFT_DEFAULTS: dict[str, Any] = {
    "RequestBatchMaxCount": 100,
    "RequestBatchMaxInterval": "50ms",
    "IncomingMessageBufferSize": 200,
    "RequestPoolSize": 400,
    "LeaderHeartbeatTimeout": "1s",
}


def signature_policy(rule: str) -> dict[str, str]:
    return {"Type": "Signature", "Rule": rule}


def implicit_meta_policy(rule: str) -> dict[str, str]:
    return {"Type": "ImplicitMeta", "Rule": rule}


def organization_policies(msp_id: str) -> dict[str, dict[str, str]]:
    """Readers/Writers/Admins/Endorsement signature rules for an application org."""
    return {
        "Readers": signature_policy(f"OR('{msp_id}.admin','{msp_id}.peer','{msp_id}.client')"),
        "Writers": signature_policy(f"OR('{msp_id}.admin','{msp_id}.client')"),
        "Admins": signature_policy(f"OR('{msp_id}.admin')"),
        "Endorsement": signature_policy(f"OR('{msp_id}.peer')"),
    }


def orderer_organization_policies(msp_id: str = ORDERER_MSP_ID) -> dict[str, dict[str, str]]:
    return {
        "Readers": signature_policy(f"OR('{msp_id}.member')"),
        "Writers": signature_policy(f"OR('{msp_id}.member')"),
        "Admins": signature_policy(f"OR('{msp_id}.admin')"),
    }


def build_organization(org: ExtractedOrganization) -> dict[str, Any]:
    return {
        "Name": org.msp_id,
        "ID": org.msp_id,
        "MSPDir": org.msp_dir,
        "Policies": organization_policies(org.msp_id),
        "AnchorPeers": [anchor.to_dict() for anchor in org.anchor_peers],
    }


def build_orderer_organization(topology: ExtractedTopology) -> dict[str, Any] | None:
    """The OrdererMSP organization, or None when the network has no orderers."""
    if not topology.has_orderers:
        return None
    return {
        "Name": ORDERER_MSP_ID,
        "ID": ORDERER_MSP_ID,
        "MSPDir": topology.orderer_msp_dir,
        "Policies": orderer_organization_policies(),
        "OrdererEndpoints": [orderer.endpoint for orderer in topology.orderers],
    }


def build_consenters(orderers: Sequence[ExtractedOrderer]) -> list[dict[str, Any]]:
    return [
        {
            "Host": orderer.fqdn,
            "Port": ORDERER_PORT,
            "ClientTLSCert": orderer.tls_cert,
            "ServerTLSCert": orderer.tls_cert,
        }
        for orderer in orderers
    ]


def build_orderer_section(
    orderers: Sequence[ExtractedOrderer], consensus: ConsensusType
) -> dict[str, Any]:
    section: dict[str, Any] = {
        "OrdererType": consensus.value,
        "BatchTimeout": "2s",
        "BatchSize": {
            "MaxMessageCount": 500,
            "AbsoluteMaxBytes": "10 MB",
            "PreferredMaxBytes": "2 MB",
        },
        "Organizations": None,
        "Policies": {
            "Readers": implicit_meta_policy("ANY Readers"),
            "Writers": implicit_meta_policy("ANY Writers"),
            "Admins": implicit_meta_policy("MAJORITY Admins"),
            "BlockValidation": implicit_meta_policy("ANY Writers"),
        },
        "Capabilities": {"V2_0": True},
    }

    if consensus == ConsensusType.etcdraft:
        section["EtcdRaft"] = {"Consenters": build_consenters(orderers)}
    elif consensus == ConsensusType.bft:
        section["SmartBFT"] = dict(SMART_BFT_DEFAULTS)

    return section


def build_profiles(
    topology: ExtractedTopology,
    orderer_org: dict[str, Any] | None,
    channel_name: str,
    consensus: ConsensusType,
) -> dict[str, Any]:
    """Genesis and channel-creation profiles, referencing organizations by {Name, ID}."""
    org_refs = [org.reference() for org in topology.organizations]
    orderer_refs = [{"Name": orderer_org["Name"], "ID": orderer_org["ID"]}] if orderer_org else []

    return {
        f"{channel_name}Genesis": {
            "Orderer": {
                "OrdererType": consensus.value,
                "Organizations": orderer_refs,
            },
            "Application": {
                "Organizations": org_refs,
            },
            "Capabilities": {"V3_0": True},
        },
        f"{channel_name}Channel": {
            "Application": {
                "Organizations": [dict(ref) for ref in org_refs],
                "Capabilities": {"V2_5": True},
            },
        },
    }


def build_configtx(
    topology: ExtractedTopology,
    *,
    consensus_type: ConsensusType | str = ConsensusType.etcdraft,
    channel_name: str = "mychannel",
) -> dict[str, Any]:
    """
    Build the configtx document body.

    Top-level sections are emitted in the fixed order Organizations,
    Capabilities, Application, Orderer, Channel, Profiles.
    """
    consensus = ConsensusType.parse(consensus_type)
    orderer_org = build_orderer_organization(topology)

    organizations = [build_organization(org) for org in topology.organizations]
    if orderer_org is not None:
        organizations.insert(0, orderer_org)

    return {
        "Organizations": organizations,
        "Capabilities": {
            "Channel": {"V3_0": True},
            "Orderer": {"V2_0": True},
            "Application": {"V2_5": True},
        },
        "Application": {
            "Organizations": None,
            "Policies": {
                "Readers": implicit_meta_policy("ANY Readers"),
                "Writers": implicit_meta_policy("ANY Writers"),
                "Admins": implicit_meta_policy("MAJORITY Admins"),
                "LifecycleEndorsement": implicit_meta_policy("MAJORITY Endorsement"),
                "Endorsement": implicit_meta_policy("MAJORITY Endorsement"),
            },
            "Capabilities": {"V2_5": True},
        },
        "Orderer": build_orderer_section(topology.orderers, consensus),
        "Channel": {
            "Policies": {
                "Readers": implicit_meta_policy("ANY Readers"),
                "Writers": implicit_meta_policy("ANY Writers"),
                "Admins": implicit_meta_policy("MAJORITY Admins"),
            },
            "Capabilities": {"V3_0": True},
        },
        "Profiles": build_profiles(topology, orderer_org, channel_name, consensus),
    }


def render_configtx(
    topology: ExtractedTopology,
    *,
    consensus_type: ConsensusType | str = ConsensusType.etcdraft,
    channel_name: str = "mychannel",
) -> str:
    consensus = ConsensusType.parse(consensus_type)
    header = [
        "Hyperledger Fabric configtx.yaml",
        f"Network: {topology.network_name}",
        f"Generated for Fabric {FABRIC_VERSION_TAG}",
        f"Consensus: {consensus.value}",
        f"Channel: {channel_name}",
        "",
        f"Reference: {REFERENCE_URL}",
    ]
    body = build_configtx(topology, consensus_type=consensus, channel_name=channel_name)
    logger.debug(
        "artifact_generated",
        artifact="configtx",
        network=topology.network_name,
        organizations=len(topology.organizations),
        orderers=len(topology.orderers),
    )
    return render_document(header, body)


def generate_configtx_yaml(
    network_name: str,
    consensus_type: ConsensusType | str,
    channel_name: str,
    organizations: Sequence[Organization],
    orderers: Sequence[Orderer],
    *,
    peers: Sequence[Peer] | None = None,
) -> str:
    """
    Generate configtx.yaml text from typed collections.

    Args:
        network_name: Network name, used for the orderer domain and header
        consensus_type: ``etcdraft`` (or ``raft``), ``bft`` or ``solo``
        channel_name: Prefix of the Genesis/Channel profile names
        organizations: Application organizations, in output order
        orderers: Ordering nodes, in output order
        peers: Optional peers, used to resolve anchor peers per organization

    Returns:
        Document text: comment header, blank line, YAML body
    """
    topology = extract_topology(
        CollectionInput(organizations=organizations, orderers=orderers, peers=peers or ()),
        network_name=network_name,
    )
    return render_configtx(topology, consensus_type=consensus_type, channel_name=channel_name)
