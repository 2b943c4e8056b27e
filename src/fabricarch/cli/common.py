from __future__ import annotations

from fabricarch.cli.ux import console, error
from fabricarch.core.errors import NetworkLoadError, format_error_message
from fabricarch.domain.models import NetworkConfig
from fabricarch.loader import load_network


def load_network_or_report(network_file: str) -> NetworkConfig:
    """Load a network file, printing a readable message before re-raising on failure."""
    try:
        return load_network(network_file)
    except NetworkLoadError as e:
        error(format_error_message(e))
        console.print()
        raise
