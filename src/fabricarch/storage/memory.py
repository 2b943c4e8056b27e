from __future__ import annotations

import asyncio
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

import structlog

from fabricarch.domain.models import Deployment, NetworkConfig, NetworkCreate, NetworkStatus
from fabricarch.storage.interface import DeploymentRepository, NetworkRepository

logger = structlog.get_logger()

SAMPLE_NETWORK_ID = "sample-1"
SAMPLE_DEPLOYMENT_ID = "deploy-1"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


class InMemoryNetworkRepository(NetworkRepository):
    """Process-local network store. Records are copied in and out."""

    def __init__(
        self,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        self._networks: dict[str, NetworkConfig] = {}
        self._lock = asyncio.Lock()
        self._clock = clock
        self._id_factory = id_factory

    async def list_networks(self) -> list[NetworkConfig]:
        async with self._lock:
            return [network.model_copy(deep=True) for network in self._networks.values()]

    async def get_network(self, network_id: str) -> NetworkConfig | None:
        async with self._lock:
            network = self._networks.get(network_id)
            return network.model_copy(deep=True) if network else None

    async def create_network(self, network: NetworkCreate) -> NetworkConfig:
        now = self._clock().isoformat()
        record = NetworkConfig.model_validate(
            {
                **network.model_dump(),
                "id": self._id_factory(),
                "created_at": now,
                "updated_at": now,
                "status": network.status or NetworkStatus.active,
            }
        )
        async with self._lock:
            self._networks[record.id] = record
        logger.info("network_created", network_id=record.id, name=record.name)
        return record.model_copy(deep=True)

    async def update_network(self, network_id: str, changes: dict[str, Any]) -> NetworkConfig | None:
        async with self._lock:
            existing = self._networks.get(network_id)
            if existing is None:
                return None
            data = {**existing.model_dump(), **changes}
            data["id"] = network_id
            data["updated_at"] = self._clock().isoformat()
            updated = NetworkConfig.model_validate(data)
            self._networks[network_id] = updated
        logger.info("network_updated", network_id=network_id, fields=sorted(changes))
        return updated.model_copy(deep=True)

    async def delete_network(self, network_id: str) -> bool:
        async with self._lock:
            deleted = self._networks.pop(network_id, None) is not None
        if deleted:
            logger.info("network_deleted", network_id=network_id)
        return deleted

    async def seed_sample_data(self) -> None:
        async with self._lock:
            if SAMPLE_NETWORK_ID not in self._networks:
                now = self._clock().isoformat()
                self._networks[SAMPLE_NETWORK_ID] = sample_network(now)


class InMemoryDeploymentRepository(DeploymentRepository):
    """Process-local deployment store. Records are copied in and out."""

    def __init__(
        self,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        self._deployments: dict[str, Deployment] = {}
        self._lock = asyncio.Lock()
        self._clock = clock
        self._id_factory = id_factory

    async def list_deployments(self) -> list[Deployment]:
        async with self._lock:
            return [d.model_copy(deep=True) for d in self._deployments.values()]

    async def get_deployment(self, deployment_id: str) -> Deployment | None:
        async with self._lock:
            deployment = self._deployments.get(deployment_id)
            return deployment.model_copy(deep=True) if deployment else None

    async def create_deployment(self, fields: dict[str, Any]) -> Deployment:
        record = Deployment.model_validate({**fields, "id": self._id_factory()})
        async with self._lock:
            self._deployments[record.id] = record
        logger.info("deployment_created", deployment_id=record.id, network_id=record.network_id)
        return record.model_copy(deep=True)

    async def update_deployment(self, deployment_id: str, changes: dict[str, Any]) -> Deployment | None:
        async with self._lock:
            existing = self._deployments.get(deployment_id)
            if existing is None:
                return None
            updated = Deployment.model_validate(
                {**existing.model_dump(), **changes, "id": deployment_id}
            )
            self._deployments[deployment_id] = updated
        return updated.model_copy(deep=True)

    async def delete_deployment(self, deployment_id: str) -> bool:
        async with self._lock:
            deleted = self._deployments.pop(deployment_id, None) is not None
        if deleted:
            logger.info("deployment_deleted", deployment_id=deployment_id)
        return deleted

    async def seed_sample_data(self) -> None:
        async with self._lock:
            if SAMPLE_DEPLOYMENT_ID not in self._deployments:
                self._deployments[SAMPLE_DEPLOYMENT_ID] = sample_deployment(self._clock())


def sample_network(timestamp: str) -> NetworkConfig:
    """Two-organization production network used to seed a fresh store."""
    return NetworkConfig.model_validate(
        {
            "id": SAMPLE_NETWORK_ID,
            "name": "Production Network",
            "consensusType": "etcdraft",
            "channelName": "prodchannel",
            "organizations": [
                {"id": "org1", "name": "Org1", "mspId": "Org1MSP", "domain": "org1.example.com"},
                {"id": "org2", "name": "Org2", "mspId": "Org2MSP", "domain": "org2.example.com"},
            ],
            "peers": [
                {
                    "id": "peer0-org1",
                    "name": "peer0.org1",
                    "organizationId": "org1",
                    "host": "peer0.org1.example.com",
                },
                {
                    "id": "peer0-org2",
                    "name": "peer0.org2",
                    "organizationId": "org2",
                    "host": "peer0.org2.example.com",
                },
            ],
            "orderers": [{"id": "orderer0", "name": "orderer0", "host": "orderer.example.com"}],
            "cas": [
                {"id": "ca-org1", "name": "ca.org1", "organizationId": "org1", "host": "ca.org1.example.com"},
                {"id": "ca-org2", "name": "ca.org2", "organizationId": "org2", "host": "ca.org2.example.com"},
            ],
            "channels": [
                {"id": "ch1", "name": "prodchannel", "organizations": ["org1", "org2"], "orderers": ["orderer0"]}
            ],
            "chaincodes": [
                {"id": "cc1", "name": "asset-transfer", "version": "1.0", "language": "go", "channelId": "ch1"}
            ],
            "createdAt": timestamp,
            "updatedAt": timestamp,
            "status": "active",
        }
    )


def sample_deployment(now: datetime) -> Deployment:
    return Deployment(
        id=SAMPLE_DEPLOYMENT_ID,
        network_id=SAMPLE_NETWORK_ID,
        network_name="Production Network",
        status="active",
        total_nodes=5,
        peer_count=2,
        orderer_count=1,
        ca_count=2,
        uptime="14d 6h 23m",
        created_at=(now - timedelta(days=14)).isoformat(),
        last_active=now.isoformat(),
    )
