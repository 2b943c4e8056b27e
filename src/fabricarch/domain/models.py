from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from fabricarch.core.naming import (
    CA_PORT,
    ORDERER_PORT,
    PEER_PORT,
    resolve_domain,
    resolve_msp_id,
)


class NodeKind(StrEnum):
    """Component kinds that can be placed on the canvas."""

    organization = "organization"
    peer = "peer"
    orderer = "orderer"
    ca = "ca"
    channel = "channel"
    chaincode = "chaincode"


class ConsensusType(StrEnum):
    """Ordering service consensus families."""

    etcdraft = "etcdraft"
    bft = "bft"
    solo = "solo"

    @classmethod
    def parse(cls, value: Any) -> ConsensusType:
        """Accept enum members, canonical names and the ``raft`` shorthand."""
        if isinstance(value, cls):
            return value
        name = str(value).strip().lower()
        if name == "raft":
            name = "etcdraft"
        try:
            return cls(name)
        except ValueError:
            choices = ", ".join(member.value for member in cls)
            raise ValueError(f"Unknown consensus type {value!r} (expected one of: {choices})")


class NetworkStatus(StrEnum):
    """Lifecycle status shared by networks and deployments."""

    active = "active"
    deploying = "deploying"
    stopped = "stopped"
    error = "error"


class ChaincodeLanguage(StrEnum):
    go = "go"
    node = "node"
    java = "java"


class FabricModel(BaseModel):
    """Base model: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Canvas graph
# ---------------------------------------------------------------------------


class Position(FabricModel):
    x: float = 0.0
    y: float = 0.0


class CanvasNode(FabricModel):
    id: str
    type: NodeKind
    label: str = ""
    description: str | None = None
    position: Position = Field(default_factory=Position)
    data: dict[str, Any] | None = None


class CanvasEdge(FabricModel):
    id: str
    source: str
    target: str
    type: str | None = None


# ---------------------------------------------------------------------------
# Typed network entities
# ---------------------------------------------------------------------------


class AnchorPeer(FabricModel):
    host: str
    port: int = PEER_PORT


class Organization(FabricModel):
    """Network member. ``msp_id`` and ``domain`` are derived from the name when unset."""

    id: str
    name: str = Field(min_length=1)
    msp_id: str = ""
    domain: str = ""
    anchor_peers: list[AnchorPeer] | None = None

    @model_validator(mode="after")
    def _fill_defaults(self) -> Organization:
        self.msp_id = resolve_msp_id(self.name, self.msp_id)
        self.domain = resolve_domain(self.name, self.domain)
        return self


class Peer(FabricModel):
    id: str
    name: str = Field(min_length=1)
    organization_id: str = ""
    host: str = ""
    port: int = PEER_PORT
    tls_enabled: bool = True
    couch_db_enabled: bool = False


class Orderer(FabricModel):
    id: str
    name: str = Field(min_length=1)
    organization_id: str | None = None
    host: str = ""
    port: int = ORDERER_PORT
    tls_enabled: bool = True


class CertificateAuthority(FabricModel):
    id: str
    name: str = Field(min_length=1)
    organization_id: str = ""
    host: str = ""
    port: int = CA_PORT
    tls_enabled: bool = True


class Channel(FabricModel):
    id: str
    name: str = Field(min_length=1)
    organization_ids: list[str] = Field(default_factory=list, alias="organizations")
    orderer_ids: list[str] = Field(default_factory=list, alias="orderers")


class Chaincode(FabricModel):
    id: str
    name: str = Field(min_length=1)
    version: str = "1.0"
    language: ChaincodeLanguage = ChaincodeLanguage.go
    channel_id: str = ""


# ---------------------------------------------------------------------------
# Aggregates
# ---------------------------------------------------------------------------


class NetworkCreate(FabricModel):
    """A network topology as submitted on save, before an id is assigned."""

    name: str = Field(min_length=1)
    consensus_type: ConsensusType = ConsensusType.etcdraft
    channel_name: str = "mychannel"
    organizations: list[Organization] = Field(default_factory=list)
    peers: list[Peer] = Field(default_factory=list)
    orderers: list[Orderer] = Field(default_factory=list)
    cas: list[CertificateAuthority] = Field(default_factory=list)
    channels: list[Channel] = Field(default_factory=list)
    chaincodes: list[Chaincode] = Field(default_factory=list)
    nodes: list[CanvasNode] = Field(default_factory=list)
    edges: list[CanvasEdge] = Field(default_factory=list)
    created_at: str | None = None
    updated_at: str | None = None
    status: NetworkStatus | None = None

    @field_validator("consensus_type", mode="before")
    @classmethod
    def _normalize_consensus(cls, value: Any) -> ConsensusType:
        return ConsensusType.parse(value)


class NetworkConfig(NetworkCreate):
    """Persisted network: the aggregate root handed to the compiler."""

    id: str


class NetworkUpdate(FabricModel):
    """Partial update; only fields explicitly set are applied."""

    name: str | None = Field(default=None, min_length=1)
    consensus_type: ConsensusType | None = None
    channel_name: str | None = None
    organizations: list[Organization] | None = None
    peers: list[Peer] | None = None
    orderers: list[Orderer] | None = None
    cas: list[CertificateAuthority] | None = None
    channels: list[Channel] | None = None
    chaincodes: list[Chaincode] | None = None
    nodes: list[CanvasNode] | None = None
    edges: list[CanvasEdge] | None = None
    status: NetworkStatus | None = None

    @field_validator("consensus_type", mode="before")
    @classmethod
    def _normalize_consensus(cls, value: Any) -> ConsensusType | None:
        if value is None:
            return None
        return ConsensusType.parse(value)


class Deployment(FabricModel):
    id: str
    network_id: str
    network_name: str
    status: NetworkStatus
    total_nodes: int
    peer_count: int
    orderer_count: int
    ca_count: int
    uptime: str | None = None
    progress: int | None = None
    created_at: str
    last_active: str | None = None


class DeploymentCreate(FabricModel):
    network_id: str


class DeploymentUpdate(FabricModel):
    status: NetworkStatus | None = None
    uptime: str | None = None
    progress: int | None = Field(default=None, ge=0, le=100)
    last_active: str | None = None
