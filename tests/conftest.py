"""Root test configuration."""

import logging

import pytest
import structlog
import yaml
from fabricarch.domain.models import NetworkConfig, Orderer, Organization
from fabricarch.storage.memory import sample_network


def pytest_configure(config):
    """Configure structlog for tests to suppress debug/info output."""
    logging.basicConfig(level=logging.WARNING, force=True)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


@pytest.fixture
def production_network() -> NetworkConfig:
    """The seeded two-organization sample network."""
    return sample_network("2024-01-01T00:00:00+00:00")


@pytest.fixture
def org1() -> Organization:
    return Organization(id="org1", name="Org1")


@pytest.fixture
def one_orderer() -> list[Orderer]:
    return [Orderer(id="o0", name="orderer0")]


@pytest.fixture
def network_file(tmp_path, production_network):
    """The sample network written as a camelCase YAML file."""
    path = tmp_path / "production.yaml"
    path.write_text(yaml.safe_dump(production_network.model_dump(mode="json", by_alias=True)))
    return path
