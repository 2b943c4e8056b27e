"""Repositories for saved networks and deployments."""

from fabricarch.storage.interface import DeploymentRepository, NetworkRepository
from fabricarch.storage.memory import InMemoryDeploymentRepository, InMemoryNetworkRepository

__all__ = [
    "NetworkRepository",
    "DeploymentRepository",
    "InMemoryNetworkRepository",
    "InMemoryDeploymentRepository",
]
