"""
Templates command.
"""

from __future__ import annotations

from pathlib import Path

import yaml

from fabricarch.cli.ux import console, error, header, print_table, success
from fabricarch.core.errors import ConfigurationError, TemplateNotFoundError, main_with_error_handling
from fabricarch.templates import build_template_network, get_template, list_templates


@main_with_error_handling()
def templates_command(template_id: str | None = None, output: str | None = None) -> int:
    """
    List network templates, or expand one into a network file.

    Args:
        template_id: Template to expand; lists all templates when omitted
        output: File to write the network YAML to; printed when omitted

    Returns:
        Exit code (0 = success, 10 = unknown template or write failure)
    """
    if template_id is None:
        header("Network Templates")
        print_table(
            "Templates",
            ["ID", "Name", "Orgs", "Peers", "Orderers"],
            [
                [
                    f"[highlight]{t.id}[/highlight]" if t.featured else t.id,
                    t.name,
                    str(t.org_count),
                    str(t.peer_count),
                    str(t.orderer_count),
                ]
                for t in list_templates()
            ],
        )
        console.print()
        return 0

    try:
        template = get_template(template_id)
    except TemplateNotFoundError as e:
        error(e.message)
        raise

    network = build_template_network(template)
    document = yaml.dump(
        network.model_dump(mode="json", by_alias=True, exclude_none=True),
        sort_keys=False,
        default_flow_style=False,
    )

    if output is None:
        print(document, end="")
        return 0

    path = Path(output)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(document, encoding="utf-8")
    except OSError as e:
        error(f"Could not write {path}: {e}")
        raise ConfigurationError(f"Could not write network file {path}", details={"error": str(e)}) from e

    success(f"Wrote {template.name} to {path}")
    console.print(f"   [muted]Next:[/muted] fabricarch generate all {path}", soft_wrap=True)
    console.print()
    return 0
