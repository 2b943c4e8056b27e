"""
Validate command.
"""

from __future__ import annotations

import json

from fabricarch.cli.common import load_network_or_report
from fabricarch.cli.ux import console, error, header, print_table, success, warning
from fabricarch.core.errors import ValidationFailedError, WarningResult, main_with_error_handling
from fabricarch.validation import RuleStatus, check_graph_integrity, validate_network

STATUS_STYLES = {
    RuleStatus.PASSED: "success",
    RuleStatus.WARNING: "warning",
    RuleStatus.ERROR: "error",
}


@main_with_error_handling()
def validate_command(
    network_file: str,
    output_format: str = "table",
    strict: bool = False,
) -> int:
    """
    Validate a network file.

    Args:
        network_file: Path to network YAML/JSON file
        output_format: table or json
        strict: Treat warnings as failures

    Returns:
        Exit code (0 = valid, 1 = warnings under --strict, 12 = errors)
    """
    network = load_network_or_report(network_file)
    report = validate_network(network)
    graph_issues = check_graph_integrity(network.nodes, network.edges)
    warning_count = report.warning_count + len(graph_issues)

    if output_format == "json":
        payload = {
            "network": network.name,
            "passed": report.passed,
            **report.to_dict(),
            "graphIssues": [issue.to_dict() for issue in graph_issues],
        }
        print(json.dumps(payload, indent=2))
    else:
        header(f"Validate Network: {network.name}")
        console.print()
        print_table(
            "Validation Rules",
            ["Rule", "Status", "Issues"],
            [
                [
                    result.name,
                    f"[{STATUS_STYLES.get(result.status, 'muted')}]{result.status.value}[/]",
                    str(result.issue_count),
                ]
                for result in report.rule_results
            ],
        )
        console.print()

        for issue in [*report.issues, *graph_issues]:
            style = "error" if issue.is_error else "warning"
            console.print(f"  [{style}]•[/{style}] {issue.title}", soft_wrap=True)
            console.print(f"    [muted]{issue.description}[/muted]", soft_wrap=True)
        if report.issues or graph_issues:
            console.print()

    if not report.passed:
        if output_format != "json":
            error(f"Validation failed with {report.error_count} error(s)")
        raise ValidationFailedError(
            f"Network {network.name} failed validation",
            details={"errors": report.error_count, "warnings": warning_count},
        )

    if warning_count and strict:
        if output_format != "json":
            warning(f"{warning_count} warning(s) (strict mode treats warnings as failures)")
        raise WarningResult(
            f"Network {network.name} has warnings",
            details={"warnings": warning_count},
        )

    if output_format != "json":
        success("Network is valid")
        console.print()
    return 0
