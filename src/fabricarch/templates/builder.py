"""
Expand a network template into a full network definition.

Ids are derived from positions (``org-0``, ``peer-3``, ``orderer-1``), so
building the same template twice yields identical networks. Each
organization gets its peers, a certificate authority and ``peer0`` as anchor
peer; one channel joins every organization and orderer. Organization, peer
and orderer nodes are laid out on the canvas with peer-organization edges.
"""

from __future__ import annotations

import structlog

from fabricarch.core.naming import (
    default_domain,
    orderer_domain,
    orderer_hostname,
    peer_hostname,
)
from fabricarch.domain.models import (
    AnchorPeer,
    CanvasEdge,
    CanvasNode,
    CertificateAuthority,
    Channel,
    ConsensusType,
    NetworkCreate,
    NodeKind,
    Orderer,
    Organization,
    Peer,
    Position,
)
from fabricarch.templates.registry import NetworkTemplate, get_template

logger = structlog.get_logger()

ORGANIZATION_SPACING = 300
PEER_SPACING = 120
ORDERER_SPACING = 150
ORDERERS_PER_COLUMN = 3


def build_template_network(
    template: NetworkTemplate | str,
    *,
    name: str | None = None,
    channel_name: str = "mychannel",
    consensus_type: ConsensusType = ConsensusType.etcdraft,
) -> NetworkCreate:
    """
    Build the network described by a template.

    Args:
        template: Template or template id
        name: Network name; defaults to the slugged template name
        channel_name: Name of the single channel
        consensus_type: Ordering service consensus

    Raises:
        TemplateNotFoundError: If ``template`` is an unknown id
    """
    if isinstance(template, str):
        template = get_template(template)

    network_name = name or template.network_name
    organizations: list[Organization] = []
    peers: list[Peer] = []
    cas: list[CertificateAuthority] = []
    nodes: list[CanvasNode] = []
    edges: list[CanvasEdge] = []

    per_org = template.peers_per_organization
    for org_index in range(template.org_count):
        org_name = f"Org{org_index + 1}"
        domain = default_domain(org_name)
        org_id = f"org-{org_index}"
        x = 100 + org_index * ORGANIZATION_SPACING

        member_count = max(0, min(per_org, template.peer_count - org_index * per_org))
        organizations.append(
            Organization(
                id=org_id,
                name=org_name,
                domain=domain,
                anchor_peers=[AnchorPeer(host=peer_hostname(0, domain))] if member_count else None,
            )
        )
        cas.append(
            CertificateAuthority(
                id=f"ca-{org_index}",
                name=f"ca.{org_name.lower()}",
                organization_id=org_id,
                host=f"ca.{domain}",
            )
        )
        nodes.append(
            CanvasNode(
                id=org_id,
                type=NodeKind.organization,
                label=org_name,
                description=f"Organization {org_index + 1}",
                position=Position(x=x, y=100),
            )
        )

        for peer_index in range(member_count):
            peer_id = f"peer-{org_index * per_org + peer_index}"
            peer_name = f"peer{peer_index}.{org_name.lower()}"
            peers.append(
                Peer(
                    id=peer_id,
                    name=peer_name,
                    organization_id=org_id,
                    host=peer_hostname(peer_index, domain),
                )
            )
            nodes.append(
                CanvasNode(
                    id=peer_id,
                    type=NodeKind.peer,
                    label=peer_name,
                    description=f"Peer node for {org_name}",
                    position=Position(x=x, y=250 + peer_index * PEER_SPACING),
                )
            )
            edges.append(
                CanvasEdge(id=f"edge-{peer_id}-{org_id}", source=peer_id, target=org_id, type="smoothstep")
            )

    orderers: list[Orderer] = []
    for index in range(template.orderer_count):
        orderer_id = f"orderer-{index}"
        orderer_name = f"orderer{index + 1}"
        orderers.append(
            Orderer(
                id=orderer_id,
                name=orderer_name,
                host=f"{orderer_hostname(index)}.{orderer_domain(network_name)}",
            )
        )
        nodes.append(
            CanvasNode(
                id=orderer_id,
                type=NodeKind.orderer,
                label=orderer_name,
                description=f"Orderer node {index + 1}",
                position=Position(
                    x=600 + (index // ORDERERS_PER_COLUMN) * 200,
                    y=100 + (index % ORDERERS_PER_COLUMN) * ORDERER_SPACING,
                ),
            )
        )

    channel = Channel(
        id="channel-0",
        name=channel_name,
        organization_ids=[org.id for org in organizations],
        orderer_ids=[orderer.id for orderer in orderers],
    )

    logger.debug(
        "template_network_built",
        template=template.id,
        organizations=len(organizations),
        peers=len(peers),
        orderers=len(orderers),
    )
    return NetworkCreate(
        name=network_name,
        consensus_type=consensus_type,
        channel_name=channel_name,
        organizations=organizations,
        peers=peers,
        orderers=orderers,
        cas=cas,
        channels=[channel],
        nodes=nodes,
        edges=edges,
    )
