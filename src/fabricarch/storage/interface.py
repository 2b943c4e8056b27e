import abc
from typing import Any

from fabricarch.domain.models import Deployment, NetworkConfig, NetworkCreate


class NetworkRepository(abc.ABC):
    """Create/read/update/delete for saved network topologies."""

    @abc.abstractmethod
    async def list_networks(self) -> list[NetworkConfig]: ...

    @abc.abstractmethod
    async def get_network(self, network_id: str) -> NetworkConfig | None: ...

    @abc.abstractmethod
    async def create_network(self, network: NetworkCreate) -> NetworkConfig: ...

    @abc.abstractmethod
    async def update_network(
        self, network_id: str, changes: dict[str, Any]
    ) -> NetworkConfig | None: ...

    @abc.abstractmethod
    async def delete_network(self, network_id: str) -> bool: ...


class DeploymentRepository(abc.ABC):
    """Create/read/update/delete for deployment records."""

    @abc.abstractmethod
    async def list_deployments(self) -> list[Deployment]: ...

    @abc.abstractmethod
    async def get_deployment(self, deployment_id: str) -> Deployment | None: ...

    @abc.abstractmethod
    async def create_deployment(self, fields: dict[str, Any]) -> Deployment: ...

    @abc.abstractmethod
    async def update_deployment(
        self, deployment_id: str, changes: dict[str, Any]
    ) -> Deployment | None: ...

    @abc.abstractmethod
    async def delete_deployment(self, deployment_id: str) -> bool: ...
