"""
Network definition loader.

Reads a ``NetworkConfig`` from a YAML or JSON file (JSON is parsed as YAML).
Fields are camelCase as on the wire; snake_case is accepted too.

Usage:
    from fabricarch.loader import load_network

    network = load_network("networks/production.yaml")
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import ValidationError

from fabricarch.config import Settings, get_settings
from fabricarch.core.errors import NetworkLoadError
from fabricarch.domain.models import NetworkConfig

logger = structlog.get_logger()


def load_network(file_path: str | Path, *, settings: Settings | None = None) -> NetworkConfig:
    """
    Load a network definition.

    Missing ``name``, ``channelName`` and ``consensusType`` fall back to the
    configured defaults; a missing ``id`` becomes the file stem.

    Raises:
        NetworkLoadError: If the file is missing, unparseable or invalid
    """
    settings = settings or get_settings()
    path = Path(file_path)

    if not path.is_file():
        raise NetworkLoadError(f"Network file not found: {file_path}", details={"path": str(path)})

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise NetworkLoadError(f"Invalid YAML in {file_path}: {e}", details={"path": str(path)}) from e

    if not isinstance(data, dict):
        raise NetworkLoadError(f"Expected a mapping in {file_path}", details={"path": str(path)})

    data = _apply_defaults(data, path, settings)

    try:
        network = NetworkConfig.model_validate(data)
    except ValidationError as e:
        raise NetworkLoadError(
            f"Invalid network definition in {file_path}",
            details={"path": str(path), "errors": e.error_count()},
        ) from e

    logger.debug("network_loaded", path=str(path), network_id=network.id, name=network.name)
    return network


def _apply_defaults(data: dict[str, Any], path: Path, settings: Settings) -> dict[str, Any]:
    merged = dict(data)
    merged.setdefault("id", path.stem)
    if not merged.get("name"):
        merged["name"] = settings.default_network_name
    if not (merged.get("channelName") or merged.get("channel_name")):
        merged["channelName"] = settings.default_channel_name
    if not (merged.get("consensusType") or merged.get("consensus_type")):
        merged["consensusType"] = settings.default_consensus
    return merged
