"""Tests for the lazily created process-wide repositories."""

import pytest
from fabricarch.api import deps
from fabricarch.config import Settings


@pytest.fixture(autouse=True)
def fresh_repositories():
    deps.reset_repositories()
    yield
    deps.reset_repositories()


@pytest.mark.asyncio
async def test_repositories_are_seeded_and_reused():
    settings = Settings(_env_file=None, seed_sample_data=True)

    networks = await deps.get_network_repository(settings)
    deployments = await deps.get_deployment_repository(settings)

    assert [n.id for n in await networks.list_networks()] == ["sample-1"]
    assert [d.id for d in await deployments.list_deployments()] == ["deploy-1"]
    assert await deps.get_network_repository(settings) is networks


@pytest.mark.asyncio
async def test_seeding_can_be_disabled():
    settings = Settings(_env_file=None, seed_sample_data=False)

    networks = await deps.get_network_repository(settings)

    assert await networks.list_networks() == []
