"""
Registry of built-in network templates.

Each template is a named topology size: organization, peer and orderer
counts. ``build_template_network`` turns one into a saveable network.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from fabricarch.core.errors import TemplateNotFoundError


@dataclass(frozen=True)
class NetworkTemplate:
    id: str
    name: str
    description: str
    org_count: int
    peer_count: int
    orderer_count: int
    featured: bool = False

    @property
    def peers_per_organization(self) -> int:
        """Peers are spread evenly; the last organizations may get fewer."""
        return math.ceil(self.peer_count / self.org_count)

    @property
    def network_name(self) -> str:
        return "-".join(self.name.lower().split())

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "orgCount": self.org_count,
            "peerCount": self.peer_count,
            "ordererCount": self.orderer_count,
            "featured": self.featured,
        }


TWO_ORG_BASIC = NetworkTemplate(
    id="two-org-basic",
    name="Two-Org Basic Network",
    description="Simple network with two organizations, ideal for development and testing",
    org_count=2,
    peer_count=4,
    orderer_count=1,
    featured=True,
)

THREE_ORG_PRODUCTION = NetworkTemplate(
    id="three-org-production",
    name="Three-Org Production",
    description="Production-ready network with three organizations and Raft consensus",
    org_count=3,
    peer_count=6,
    orderer_count=3,
    featured=True,
)

MULTI_CHANNEL_ENTERPRISE = NetworkTemplate(
    id="multi-channel-enterprise",
    name="Multi-Channel Enterprise",
    description="Enterprise setup with multiple channels for different business processes",
    org_count=4,
    peer_count=8,
    orderer_count=5,
)

DEV_SINGLE_ORG = NetworkTemplate(
    id="dev-single-org",
    name="Dev Single Org",
    description="Minimal single organization setup for rapid prototyping",
    org_count=1,
    peer_count=2,
    orderer_count=1,
)

HIGH_AVAILABILITY = NetworkTemplate(
    id="high-availability",
    name="High Availability Cluster",
    description="Fault-tolerant configuration with redundant orderers and peers",
    org_count=3,
    peer_count=9,
    orderer_count=5,
)

SUPPLY_CHAIN = NetworkTemplate(
    id="supply-chain",
    name="Supply Chain Network",
    description="Pre-configured for supply chain use cases with multiple stakeholders",
    org_count=5,
    peer_count=10,
    orderer_count=3,
    featured=True,
)

_TEMPLATES: dict[str, NetworkTemplate] = {
    template.id: template
    for template in (
        TWO_ORG_BASIC,
        THREE_ORG_PRODUCTION,
        MULTI_CHANNEL_ENTERPRISE,
        DEV_SINGLE_ORG,
        HIGH_AVAILABILITY,
        SUPPLY_CHAIN,
    )
}


def list_templates() -> list[NetworkTemplate]:
    """Templates in catalogue order."""
    return list(_TEMPLATES.values())


def get_template(template_id: str) -> NetworkTemplate:
    """
    Look up a template by id.

    Raises:
        TemplateNotFoundError: If no template has that id
    """
    template = _TEMPLATES.get(template_id.lower())
    if template is None:
        raise TemplateNotFoundError(
            f"Unknown network template: {template_id}",
            details={"template": template_id, "available": ", ".join(_TEMPLATES)},
        )
    return template
