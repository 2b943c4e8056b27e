"""
Render and write the full artifact set for a saved network.

The topology is extracted once and shared by all three builders, so every
document sees the same hostnames, domains and ports.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Callable, Sequence

import structlog

from fabricarch.domain.models import NetworkConfig
from fabricarch.generators.configtx import render_configtx
from fabricarch.generators.crypto_config import render_crypto_config
from fabricarch.generators.docker_compose import render_docker_compose
from fabricarch.topology.extractor import extract_network
from fabricarch.topology.models import ExtractedTopology

logger = structlog.get_logger()


class ArtifactKind(StrEnum):
    configtx = "configtx"
    crypto_config = "crypto-config"
    docker_compose = "docker-compose"

    @property
    def filename(self) -> str:
        return f"{self.value}.yaml"


def _render(kind: ArtifactKind, topology: ExtractedTopology, network: NetworkConfig) -> str:
    renderers: dict[ArtifactKind, Callable[[], str]] = {
        ArtifactKind.configtx: lambda: render_configtx(
            topology,
            consensus_type=network.consensus_type,
            channel_name=network.channel_name,
        ),
        ArtifactKind.crypto_config: lambda: render_crypto_config(topology),
        ArtifactKind.docker_compose: lambda: render_docker_compose(topology),
    }
    return renderers[kind]()


def render_artifact(network: NetworkConfig, kind: ArtifactKind | str) -> str:
    """Render a single document for a saved network."""
    return _render(ArtifactKind(kind), extract_network(network), network)


def render_network_artifacts(
    network: NetworkConfig,
    kinds: Sequence[ArtifactKind] | None = None,
) -> dict[ArtifactKind, str]:
    """Render the requested documents (all three by default), keyed by kind."""
    topology = extract_network(network)
    selected = list(kinds) if kinds else list(ArtifactKind)
    return {kind: _render(kind, topology, network) for kind in selected}


@dataclass
class ArtifactGenerationResult:
    """Result of writing network artifacts to disk."""

    success: bool
    network: str
    output_files: list[Path] = field(default_factory=list)
    error: str | None = None


def write_network_artifacts(
    network: NetworkConfig,
    output_dir: str | Path,
    kinds: Sequence[ArtifactKind] | None = None,
) -> ArtifactGenerationResult:
    """
    Write the requested documents into ``output_dir``.

    Args:
        network: Network to compile
        output_dir: Directory to write into (created if missing)
        kinds: Documents to write; all three when omitted

    Returns:
        ArtifactGenerationResult listing the written files
    """
    try:
        rendered = render_network_artifacts(network, kinds)

        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        written: list[Path] = []
        for kind, text in rendered.items():
            output_file = output_dir / kind.filename
            output_file.write_text(text)
            written.append(output_file)

        logger.info("artifacts_written", network=network.name, files=[str(p) for p in written])
        return ArtifactGenerationResult(success=True, network=network.name, output_files=written)

    except OSError as e:
        logger.error("artifact_write_failed", network=network.name, error=str(e))
        return ArtifactGenerationResult(success=False, network=network.name, error=str(e))
