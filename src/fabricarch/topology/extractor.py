"""
Topology extraction.

Normalizes either a canvas graph or typed entity collections into the
``ExtractedTopology`` consumed by the document builders. Graph mode converts
the graph into collections first, so both modes share a single code path for
domains, MSP ids, anchor peers and orderer hostnames.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Sequence

import structlog

from fabricarch.core.naming import orderer_domain, orderer_hostname, peer_hostname
from fabricarch.domain.models import (
    AnchorPeer,
    CanvasEdge,
    CanvasNode,
    CertificateAuthority,
    Chaincode,
    ChaincodeLanguage,
    Channel,
    NetworkConfig,
    NodeKind,
    Orderer,
    Organization,
    Peer,
)
from fabricarch.topology.models import (
    CollectionInput,
    ExtractedOrderer,
    ExtractedOrganization,
    ExtractedTopology,
    GraphInput,
    ResolvedAnchorPeer,
    TopologySource,
)

logger = structlog.get_logger()

DEFAULT_NETWORK_NAME = "fabric-network"


def extract_topology(
    source: TopologySource,
    *,
    network_name: str = DEFAULT_NETWORK_NAME,
) -> ExtractedTopology:
    """
    Normalize a topology source for the document builders.

    Args:
        source: ``GraphInput`` (canvas mode) or ``CollectionInput`` (direct mode)
        network_name: Network name; the orderer domain is derived from it

    Returns:
        ExtractedTopology with organizations and orderers in input order

    Raises:
        TypeError: If ``source`` is neither input variant
    """
    if isinstance(source, GraphInput):
        collections = collections_from_graph(source)
        mode = "graph"
    elif isinstance(source, CollectionInput):
        collections = source
        mode = "collections"
    else:
        raise TypeError(
            f"Expected GraphInput or CollectionInput, got {type(source).__name__}"
        )

    network_name = network_name or DEFAULT_NETWORK_NAME
    domain = orderer_domain(network_name)
    organizations = [
        _extract_organization(org, collections.peers) for org in collections.organizations
    ]
    orderers = [
        ExtractedOrderer(id=orderer.id, index=index, hostname=orderer_hostname(index), domain=domain)
        for index, orderer in enumerate(collections.orderers)
    ]

    topology = ExtractedTopology(
        network_name=network_name,
        orderer_domain=domain,
        organizations=organizations,
        orderers=orderers,
        collections=collections,
        counts=_count_entities(collections),
    )
    logger.debug(
        "topology_extracted",
        mode=mode,
        network=network_name,
        organizations=len(organizations),
        orderers=len(orderers),
    )
    return topology


def source_for_network(network: NetworkConfig) -> TopologySource:
    """Pick the input mode for a saved network; typed collections take precedence."""
    if network.organizations or network.orderers or not network.nodes:
        return CollectionInput(
            organizations=network.organizations,
            orderers=network.orderers,
            peers=network.peers,
            cas=network.cas,
            channels=network.channels,
            chaincodes=network.chaincodes,
        )
    return GraphInput(nodes=network.nodes, edges=network.edges)


def extract_network(network: NetworkConfig) -> ExtractedTopology:
    return extract_topology(source_for_network(network), network_name=network.name)


# ---------------------------------------------------------------------------
# Graph mode
# ---------------------------------------------------------------------------


def group_nodes_by_kind(nodes: Sequence[CanvasNode]) -> dict[NodeKind, list[CanvasNode]]:
    """Group nodes by kind, preserving canvas order within each group."""
    groups: dict[NodeKind, list[CanvasNode]] = {kind: [] for kind in NodeKind}
    for node in nodes:
        groups[node.type].append(node)
    return groups


def build_adjacency(nodes: Sequence[CanvasNode], edges: Sequence[CanvasEdge]) -> dict[str, list[str]]:
    """
    Undirected adjacency by node id.

    Neighbours keep edge order and are deduplicated. Edges referencing an
    unknown node and self-loops are skipped.
    """
    known = {node.id for node in nodes}
    adjacency: dict[str, list[str]] = defaultdict(list)
    for edge in edges:
        if edge.source not in known or edge.target not in known:
            logger.debug("dangling_edge_skipped", edge=edge.id)
            continue
        if edge.source == edge.target:
            continue
        if edge.target not in adjacency[edge.source]:
            adjacency[edge.source].append(edge.target)
        if edge.source not in adjacency[edge.target]:
            adjacency[edge.target].append(edge.source)
    return adjacency


def collections_from_graph(graph: GraphInput) -> CollectionInput:
    """Derive typed collections from a canvas graph by resolving adjacency."""
    groups = group_nodes_by_kind(graph.nodes)
    adjacency = build_adjacency(graph.nodes, graph.edges)
    kind_by_id = {node.id: node.type for node in graph.nodes}

    def neighbours(node: CanvasNode, kind: NodeKind) -> list[str]:
        return [other for other in adjacency.get(node.id, []) if kind_by_id[other] == kind]

    def first_neighbour(node: CanvasNode, kind: NodeKind) -> str:
        found = neighbours(node, kind)
        return found[0] if found else ""

    organizations = []
    for index, node in enumerate(groups[NodeKind.organization]):
        data = node.data or {}
        name = node.label.strip() or f"Org{index + 1}"
        organization = Organization(
            id=node.id,
            name=name,
            msp_id=str(data.get("mspId") or ""),
            domain=str(data.get("domain") or ""),
        )
        # A peer linked to several organizations anchors each of them.
        adjacent_peers = neighbours(node, NodeKind.peer)
        if adjacent_peers:
            organization.anchor_peers = [
                AnchorPeer(host=peer_hostname(i, organization.domain))
                for i in range(len(adjacent_peers))
            ]
        organizations.append(organization)

    peers = [
        Peer(
            id=node.id,
            name=node.label or node.id,
            organization_id=first_neighbour(node, NodeKind.organization),
        )
        for node in groups[NodeKind.peer]
    ]
    orderers = [
        Orderer(
            id=node.id,
            name=node.label or node.id,
            organization_id=first_neighbour(node, NodeKind.organization) or None,
        )
        for node in groups[NodeKind.orderer]
    ]
    cas = [
        CertificateAuthority(
            id=node.id,
            name=node.label or node.id,
            organization_id=first_neighbour(node, NodeKind.organization),
        )
        for node in groups[NodeKind.ca]
    ]
    channels = [
        Channel(
            id=node.id,
            name=node.label or node.id,
            organization_ids=neighbours(node, NodeKind.organization),
            orderer_ids=neighbours(node, NodeKind.orderer),
        )
        for node in groups[NodeKind.channel]
    ]
    chaincodes = []
    for node in groups[NodeKind.chaincode]:
        data = node.data or {}
        chaincodes.append(
            Chaincode(
                id=node.id,
                name=node.label or node.id,
                version=str(data.get("version", "1.0")),
                language=_chaincode_language(data.get("language")),
                channel_id=first_neighbour(node, NodeKind.channel),
            )
        )

    return CollectionInput(
        organizations=organizations,
        orderers=orderers,
        peers=peers,
        cas=cas,
        channels=channels,
        chaincodes=chaincodes,
    )


# ---------------------------------------------------------------------------
# Shared normalization
# ---------------------------------------------------------------------------


def resolve_anchor_peers(
    organization: Organization, peers: Sequence[Peer]
) -> tuple[ResolvedAnchorPeer, ...]:
    """
    Anchor peers for an organization.

    Explicit ``anchor_peers`` win; otherwise one ``peer<i>.<domain>`` entry
    per member peer; otherwise ``peer0.<domain>``.
    """
    if organization.anchor_peers:
        return tuple(_from_anchor(anchor) for anchor in organization.anchor_peers)

    members = [peer for peer in peers if peer.organization_id == organization.id]
    count = max(len(members), 1)
    return tuple(
        ResolvedAnchorPeer(host=peer_hostname(index, organization.domain))
        for index in range(count)
    )


def _chaincode_language(value: object) -> ChaincodeLanguage:
    try:
        return ChaincodeLanguage(str(value))
    except ValueError:
        return ChaincodeLanguage.go


def _from_anchor(anchor: AnchorPeer) -> ResolvedAnchorPeer:
    return ResolvedAnchorPeer(host=anchor.host, port=anchor.port)


def _extract_organization(organization: Organization, peers: Sequence[Peer]) -> ExtractedOrganization:
    return ExtractedOrganization(
        id=organization.id,
        name=organization.name,
        msp_id=organization.msp_id,
        domain=organization.domain,
        anchor_peers=resolve_anchor_peers(organization, peers),
    )


def _count_entities(collections: CollectionInput) -> dict[NodeKind, int]:
    return {
        NodeKind.organization: len(collections.organizations),
        NodeKind.peer: len(collections.peers),
        NodeKind.orderer: len(collections.orderers),
        NodeKind.ca: len(collections.cas),
        NodeKind.channel: len(collections.channels),
        NodeKind.chaincode: len(collections.chaincodes),
    }
