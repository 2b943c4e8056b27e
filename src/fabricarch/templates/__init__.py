"""
Built-in network templates.

Pre-sized topologies that expand into complete, saveable networks.
"""

from fabricarch.templates.builder import build_template_network
from fabricarch.templates.registry import NetworkTemplate, get_template, list_templates

__all__ = [
    "NetworkTemplate",
    "get_template",
    "list_templates",
    "build_template_network",
]
