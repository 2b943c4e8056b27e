"""Validation module for network topology checks."""

from fabricarch.validation.engine import (
    DEFAULT_RULES,
    BaseRule,
    CertificateAuthorityRule,
    ChaincodeChannelRule,
    ChannelOrganizationsRule,
    NetworkSnapshot,
    OrdererPresenceRule,
    OrganizationCountRule,
    PeerOrganizationRule,
    RuleResult,
    RuleStatus,
    Severity,
    ValidationIssue,
    ValidationReport,
    check_graph_integrity,
    run_rules,
    validate,
    validate_network,
)

__all__ = [
    # Results
    "Severity",
    "RuleStatus",
    "ValidationIssue",
    "RuleResult",
    "ValidationReport",
    # Rules
    "BaseRule",
    "NetworkSnapshot",
    "OrganizationCountRule",
    "OrdererPresenceRule",
    "PeerOrganizationRule",
    "ChannelOrganizationsRule",
    "ChaincodeChannelRule",
    "CertificateAuthorityRule",
    "DEFAULT_RULES",
    # Entry points
    "run_rules",
    "validate",
    "validate_network",
    "check_graph_integrity",
]
