from __future__ import annotations

from fastapi import Depends

from fabricarch.config import Settings, get_settings
from fabricarch.storage import (
    DeploymentRepository,
    InMemoryDeploymentRepository,
    InMemoryNetworkRepository,
    NetworkRepository,
)

_network_repository: InMemoryNetworkRepository | None = None
_deployment_repository: InMemoryDeploymentRepository | None = None


async def get_network_repository(
    settings: Settings = Depends(get_settings),  # noqa: B008
) -> NetworkRepository:
    global _network_repository

    if _network_repository is None:
        _network_repository = InMemoryNetworkRepository()
        if settings.seed_sample_data:
            await _network_repository.seed_sample_data()
    return _network_repository


async def get_deployment_repository(
    settings: Settings = Depends(get_settings),  # noqa: B008
) -> DeploymentRepository:
    global _deployment_repository

    if _deployment_repository is None:
        _deployment_repository = InMemoryDeploymentRepository()
        if settings.seed_sample_data:
            await _deployment_repository.seed_sample_data()
    return _deployment_repository


def reset_repositories() -> None:
    """Drop the process-wide stores; the next request recreates them."""
    global _network_repository, _deployment_repository

    _network_repository = None
    _deployment_repository = None
