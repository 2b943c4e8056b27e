"""
Document generators.

Renders configtx.yaml, crypto-config.yaml and docker-compose.yaml from a
network topology, plus the peer CLI commands that operate it.
"""

from fabricarch.generators.artifacts import (
    ArtifactGenerationResult,
    ArtifactKind,
    render_artifact,
    render_network_artifacts,
    write_network_artifacts,
)
from fabricarch.generators.configtx import build_configtx, generate_configtx_yaml, render_configtx
from fabricarch.generators.crypto_config import (
    build_crypto_config,
    generate_crypto_config_yaml,
    render_crypto_config,
)
from fabricarch.generators.docker_compose import (
    build_docker_compose,
    generate_docker_compose_yaml,
    render_docker_compose,
)
from fabricarch.generators.peer_commands import (
    PeerCommand,
    PeerCommandKind,
    network_peer_command,
    network_peer_commands,
    render_peer_commands,
)

__all__ = [
    # configtx
    "build_configtx",
    "render_configtx",
    "generate_configtx_yaml",
    # crypto-config
    "build_crypto_config",
    "render_crypto_config",
    "generate_crypto_config_yaml",
    # docker-compose
    "build_docker_compose",
    "render_docker_compose",
    "generate_docker_compose_yaml",
    # peer CLI commands
    "PeerCommand",
    "PeerCommandKind",
    "render_peer_commands",
    "network_peer_commands",
    "network_peer_command",
    # Network artifacts
    "ArtifactKind",
    "ArtifactGenerationResult",
    "render_artifact",
    "render_network_artifacts",
    "write_network_artifacts",
]
