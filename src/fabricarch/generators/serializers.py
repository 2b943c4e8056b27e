"""
YAML rendering shared by every generated document.

Keys keep insertion order, short lists of scalars are written inline,
``None`` is written as ``null`` and repeated objects are expanded instead
of being emitted as anchors and aliases.
"""

from __future__ import annotations

from typing import Any, Sequence

import yaml

FABRIC_VERSION_TAG = "v2.5/v3.0"

# Lists of scalars whose rendered items fit in this many characters go inline
INLINE_LIST_MAX_WIDTH = 60


class DocumentDumper(yaml.SafeDumper):
    """SafeDumper without anchors/aliases and with inline short scalar lists."""

    def ignore_aliases(self, data: Any) -> bool:
        return True


def _is_scalar(value: Any) -> bool:
    return value is None or isinstance(value, (str, int, float, bool))


def _represent_list(dumper: yaml.SafeDumper, data: Sequence[Any]) -> yaml.Node:
    inline = all(_is_scalar(item) for item in data) and (
        sum(len(str(item)) + 2 for item in data) <= INLINE_LIST_MAX_WIDTH
    )
    return dumper.represent_sequence("tag:yaml.org,2002:seq", data, flow_style=inline)


DocumentDumper.add_representer(list, _represent_list)
DocumentDumper.add_representer(tuple, _represent_list)


def dump_yaml(body: dict[str, Any]) -> str:
    """Serialize a document body with 2-space indentation and stable key order."""
    return yaml.dump(
        body,
        Dumper=DocumentDumper,
        sort_keys=False,
        default_flow_style=False,
        indent=2,
        width=120,
        allow_unicode=True,
    )


def render_header(lines: Sequence[str]) -> str:
    """Render comment lines; an empty string becomes a bare ``#`` line."""
    return "".join(f"# {line}\n" if line else "#\n" for line in lines)


def render_document(header_lines: Sequence[str], body: dict[str, Any]) -> str:
    """Header comment, a blank line, then the YAML body."""
    return f"{render_header(header_lines)}\n{dump_yaml(body)}"
