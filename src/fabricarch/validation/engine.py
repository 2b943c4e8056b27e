"""
Network validation rules.

Six structural rules run in a fixed order, every time, with no
short-circuiting. Each rule yields one status (passed/warning/error) and
one issue per offending entity. Graph integrity (duplicate node ids,
dangling edges) is checked separately by ``check_graph_integrity``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Sequence

import structlog

from fabricarch.domain.models import (
    CanvasEdge,
    CanvasNode,
    CertificateAuthority,
    Chaincode,
    Channel,
    NetworkConfig,
    Orderer,
    Organization,
    Peer,
)
from fabricarch.topology.extractor import collections_from_graph, source_for_network
from fabricarch.topology.models import GraphInput

logger = structlog.get_logger()


class Severity(Enum):
    """Validation issue severity levels."""

    ERROR = "error"
    WARNING = "warning"


class RuleStatus(Enum):
    """Outcome of a single rule."""

    PASSED = "passed"
    WARNING = "warning"
    ERROR = "error"
    PENDING = "pending"
    NOT_RUN = "not_run"


@dataclass
class ValidationIssue:
    """A single problem found in a network, tied to a rule and usually an entity."""

    id: str
    rule_id: str
    severity: Severity
    title: str
    description: str
    node_id: str | None = None
    fixable: bool = False

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR

    @property
    def is_warning(self) -> bool:
        return self.severity == Severity.WARNING

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id,
            "ruleId": self.rule_id,
            "type": self.severity.value,
            "title": self.title,
            "description": self.description,
            "fixable": self.fixable,
        }
        if self.node_id is not None:
            result["nodeId"] = self.node_id
        return result


@dataclass
class RuleResult:
    id: str
    name: str
    status: RuleStatus
    issue_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "status": self.status.value,
            "issueCount": self.issue_count,
        }


@dataclass
class ValidationReport:
    """Per-rule statuses plus the flattened issue list."""

    rule_results: list[RuleResult] = field(default_factory=list)
    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not any(issue.is_error for issue in self.issues)

    @property
    def error_count(self) -> int:
        return sum(1 for issue in self.issues if issue.is_error)

    @property
    def warning_count(self) -> int:
        return sum(1 for issue in self.issues if issue.is_warning)

    def issues_for(self, rule_id: str) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.rule_id == rule_id]

    def to_dict(self) -> dict[str, Any]:
        return {
            "tests": [result.to_dict() for result in self.rule_results],
            "issues": [issue.to_dict() for issue in self.issues],
        }


@dataclass(frozen=True)
class NetworkSnapshot:
    """Immutable view of the collections the rules inspect."""

    organizations: Sequence[Organization] = ()
    peers: Sequence[Peer] = ()
    orderers: Sequence[Orderer] = ()
    cas: Sequence[CertificateAuthority] = ()
    channels: Sequence[Channel] = ()
    chaincodes: Sequence[Chaincode] = ()


class BaseRule(ABC):
    """Base class for network rules."""

    id: str = "base"
    name: str = "Base rule"
    severity: Severity = Severity.WARNING

    @abstractmethod
    def check(self, snapshot: NetworkSnapshot) -> list[ValidationIssue]:
        """Return one issue per violation; an empty list means the rule passed."""

    def evaluate(self, snapshot: NetworkSnapshot) -> tuple[RuleResult, list[ValidationIssue]]:
        issues = self.check(snapshot)
        if not issues:
            status = RuleStatus.PASSED
        elif self.severity == Severity.ERROR:
            status = RuleStatus.ERROR
        else:
            status = RuleStatus.WARNING
        return RuleResult(self.id, self.name, status, len(issues)), issues

    def issue(
        self,
        title: str,
        description: str,
        *,
        node_id: str | None = None,
        fixable: bool,
    ) -> ValidationIssue:
        return ValidationIssue(
            id=f"{self.id}:{node_id}" if node_id else self.id,
            rule_id=self.id,
            severity=self.severity,
            title=title,
            description=description,
            node_id=node_id,
            fixable=fixable,
        )


class OrganizationCountRule(BaseRule):
    id = "org-count"
    name = "Organization Count"
    severity = Severity.ERROR

    def check(self, snapshot: NetworkSnapshot) -> list[ValidationIssue]:
        if snapshot.organizations:
            return []
        return [
            self.issue(
                "No organizations defined",
                "Network must have at least one organization",
                fixable=False,
            )
        ]


class OrdererPresenceRule(BaseRule):
    id = "orderer-count"
    name = "Orderer Presence"
    severity = Severity.ERROR

    def check(self, snapshot: NetworkSnapshot) -> list[ValidationIssue]:
        if snapshot.orderers:
            return []
        return [
            self.issue(
                "No orderers defined",
                "Network must have at least one orderer node",
                fixable=False,
            )
        ]


class PeerOrganizationRule(BaseRule):
    id = "peer-org"
    name = "Peer-Organization Mapping"

    def check(self, snapshot: NetworkSnapshot) -> list[ValidationIssue]:
        return [
            self.issue(
                f"Peer {peer.name} has no organization",
                "Each peer should be connected to an organization",
                node_id=peer.id,
                fixable=True,
            )
            for peer in snapshot.peers
            if not peer.organization_id
        ]


class ChannelOrganizationsRule(BaseRule):
    id = "channel-orgs"
    name = "Channel Organizations"

    MIN_ORGANIZATIONS = 2

    def check(self, snapshot: NetworkSnapshot) -> list[ValidationIssue]:
        return [
            self.issue(
                f"Channel {channel.name} has fewer than {self.MIN_ORGANIZATIONS} organizations",
                "Channels should have at least two organizations for proper decentralization",
                node_id=channel.id,
                fixable=True,
            )
            for channel in snapshot.channels
            if len(channel.organization_ids) < self.MIN_ORGANIZATIONS
        ]


class ChaincodeChannelRule(BaseRule):
    id = "chaincode-channel"
    name = "Chaincode Deployment"

    def check(self, snapshot: NetworkSnapshot) -> list[ValidationIssue]:
        return [
            self.issue(
                f"Chaincode {chaincode.name} has no channel",
                "Chaincodes must be associated with a channel",
                node_id=chaincode.id,
                fixable=True,
            )
            for chaincode in snapshot.chaincodes
            if not chaincode.channel_id
        ]


class CertificateAuthorityRule(BaseRule):
    id = "ca-org"
    name = "CA Configuration"

    def check(self, snapshot: NetworkSnapshot) -> list[ValidationIssue]:
        ca_org_ids = {ca.organization_id for ca in snapshot.cas}
        return [
            self.issue(
                f"Organization {org.name} has no Certificate Authority",
                "Each organization should have a Certificate Authority for identity management",
                node_id=org.id,
                fixable=True,
            )
            for org in snapshot.organizations
            if org.id not in ca_org_ids
        ]


DEFAULT_RULES: tuple[BaseRule, ...] = (
    OrganizationCountRule(),
    OrdererPresenceRule(),
    PeerOrganizationRule(),
    ChannelOrganizationsRule(),
    ChaincodeChannelRule(),
    CertificateAuthorityRule(),
)


def run_rules(
    snapshot: NetworkSnapshot, rules: Sequence[BaseRule] = DEFAULT_RULES
) -> ValidationReport:
    """Evaluate every rule in order and collect results and issues."""
    report = ValidationReport()
    for rule in rules:
        result, issues = rule.evaluate(snapshot)
        report.rule_results.append(result)
        report.issues.extend(issues)

    logger.debug(
        "validation_completed",
        rules=len(report.rule_results),
        errors=report.error_count,
        warnings=report.warning_count,
    )
    return report


def validate(
    organizations: Sequence[Organization],
    peers: Sequence[Peer],
    orderers: Sequence[Orderer],
    cas: Sequence[CertificateAuthority],
    channels: Sequence[Channel],
    chaincodes: Sequence[Chaincode],
) -> ValidationReport:
    """Validate typed network collections against the six structural rules."""
    return run_rules(
        NetworkSnapshot(
            organizations=organizations,
            peers=peers,
            orderers=orderers,
            cas=cas,
            channels=channels,
            chaincodes=chaincodes,
        )
    )


def validate_network(network: NetworkConfig | None) -> ValidationReport:
    """
    Validate a saved network.

    A missing network validates as an empty one: the organization and orderer
    rules fail, the remaining rules pass vacuously.
    """
    if network is None:
        return run_rules(NetworkSnapshot())

    source = source_for_network(network)
    if isinstance(source, GraphInput):
        source = collections_from_graph(source)

    return validate(
        source.organizations,
        source.peers,
        source.orderers,
        source.cas,
        source.channels,
        source.chaincodes,
    )


def check_graph_integrity(
    nodes: Sequence[CanvasNode], edges: Sequence[CanvasEdge]
) -> list[ValidationIssue]:
    """Report duplicate node ids and edges whose endpoints do not exist."""
    issues: list[ValidationIssue] = []

    seen: set[str] = set()
    for node in nodes:
        if node.id in seen:
            issues.append(
                ValidationIssue(
                    id=f"node-ids:{node.id}",
                    rule_id="node-ids",
                    severity=Severity.WARNING,
                    title=f"Duplicate node id {node.id}",
                    description="Node ids must be unique within a topology",
                    node_id=node.id,
                    fixable=True,
                )
            )
        seen.add(node.id)

    for edge in edges:
        missing = [end for end in (edge.source, edge.target) if end not in seen]
        if missing:
            issues.append(
                ValidationIssue(
                    id=f"edge-endpoints:{edge.id}",
                    rule_id="edge-endpoints",
                    severity=Severity.WARNING,
                    title=f"Edge {edge.id} references a missing node",
                    description=f"Unknown endpoint(s): {', '.join(missing)}",
                    node_id=edge.id,
                    fixable=True,
                )
            )

    return issues
