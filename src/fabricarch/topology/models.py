"""
Extractor input variants and the normalized topology handed to the builders.

``GraphInput`` carries the raw canvas graph, ``CollectionInput`` carries typed
entity lists maintained independently of the canvas. Both are normalized into
an ``ExtractedTopology``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence, Union

from fabricarch.core.naming import (
    ORDERER_PORT,
    PEER_PORT,
    orderer_external_port,
    orderer_node_dir,
    orderer_org_dir,
    peer_org_dir,
)
from fabricarch.domain.models import (
    CanvasEdge,
    CanvasNode,
    CertificateAuthority,
    Chaincode,
    Channel,
    NodeKind,
    Orderer,
    Organization,
    Peer,
)


@dataclass(frozen=True)
class GraphInput:
    """Canvas graph: typed nodes plus undirected adjacency edges."""

    nodes: Sequence[CanvasNode] = ()
    edges: Sequence[CanvasEdge] = ()


@dataclass(frozen=True)
class CollectionInput:
    """Typed entity collections supplied directly, bypassing the canvas."""

    organizations: Sequence[Organization] = ()
    orderers: Sequence[Orderer] = ()
    peers: Sequence[Peer] = ()
    cas: Sequence[CertificateAuthority] = ()
    channels: Sequence[Channel] = ()
    chaincodes: Sequence[Chaincode] = ()


TopologySource = Union[GraphInput, CollectionInput]


@dataclass(frozen=True)
class ResolvedAnchorPeer:
    host: str
    port: int = PEER_PORT

    def to_dict(self) -> dict[str, Any]:
        return {"Host": self.host, "Port": self.port}


@dataclass(frozen=True)
class ExtractedOrganization:
    """Application organization with defaults applied and anchor peers resolved."""

    id: str
    name: str
    msp_id: str
    domain: str
    anchor_peers: tuple[ResolvedAnchorPeer, ...] = ()

    @property
    def msp_dir(self) -> str:
        return f"{peer_org_dir(self.domain)}/msp"

    def reference(self) -> dict[str, str]:
        """``{Name, ID}`` pair used by profiles instead of the full definition."""
        return {"Name": self.msp_id, "ID": self.msp_id}


@dataclass(frozen=True)
class ExtractedOrderer:
    """Ordering node at position ``index`` with its generated hostname."""

    id: str
    index: int
    hostname: str
    domain: str
    port: int = ORDERER_PORT

    @property
    def fqdn(self) -> str:
        return f"{self.hostname}.{self.domain}"

    @property
    def endpoint(self) -> str:
        return f"{self.fqdn}:{self.port}"

    @property
    def external_port(self) -> int:
        return orderer_external_port(self.index)

    @property
    def node_dir(self) -> str:
        return orderer_node_dir(self.domain, self.fqdn)

    @property
    def tls_cert(self) -> str:
        return f"{self.node_dir}/tls/server.crt"


@dataclass
class ExtractedTopology:
    """Normalized view of a network, identical in shape for both input modes."""

    network_name: str
    orderer_domain: str
    organizations: list[ExtractedOrganization] = field(default_factory=list)
    orderers: list[ExtractedOrderer] = field(default_factory=list)
    collections: CollectionInput = field(default_factory=CollectionInput)
    counts: dict[NodeKind, int] = field(default_factory=dict)

    @property
    def has_orderers(self) -> bool:
        return bool(self.orderers)

    @property
    def orderer_msp_dir(self) -> str:
        return f"{orderer_org_dir(self.orderer_domain)}/msp"

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "network_name": self.network_name,
            "organizations": [
                {
                    "id": org.id,
                    "name": org.name,
                    "msp_id": org.msp_id,
                    "domain": org.domain,
                    "anchor_peers": [peer.to_dict() for peer in org.anchor_peers],
                }
                for org in self.organizations
            ],
            "orderers": [
                {"id": o.id, "hostname": o.hostname, "endpoint": o.endpoint}
                for o in self.orderers
            ],
            "counts": {kind.value: count for kind, count in self.counts.items()},
        }
