"""
Topology extraction for network compilation.

Normalizes a canvas graph or typed entity collections into the shape
consumed by the configtx, crypto-config and docker-compose builders.
"""

from fabricarch.topology.extractor import (
    build_adjacency,
    collections_from_graph,
    extract_network,
    extract_topology,
    group_nodes_by_kind,
    resolve_anchor_peers,
    source_for_network,
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

__all__ = [
    # Models
    "GraphInput",
    "CollectionInput",
    "TopologySource",
    "ResolvedAnchorPeer",
    "ExtractedOrganization",
    "ExtractedOrderer",
    "ExtractedTopology",
    # Extraction
    "extract_topology",
    "extract_network",
    "source_for_network",
    "collections_from_graph",
    "group_nodes_by_kind",
    "build_adjacency",
    "resolve_anchor_peers",
]
