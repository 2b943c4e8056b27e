from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Response, status

from fabricarch.api.deps import get_network_repository
from fabricarch.domain.models import NetworkConfig, NetworkCreate, NetworkUpdate
from fabricarch.generators import (
    ArtifactKind,
    PeerCommandKind,
    network_peer_command,
    network_peer_commands,
    render_artifact,
)
from fabricarch.logging import bind_context
from fabricarch.storage import NetworkRepository
from fabricarch.validation import check_graph_integrity, validate_network

router = APIRouter()

YAML_MEDIA_TYPE = "text/yaml"
SHELL_MEDIA_TYPE = "text/plain"


async def _require_network(repo: NetworkRepository, network_id: str) -> NetworkConfig:
    network = await repo.get_network(network_id)
    if network is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Network {network_id} not found",
        )
    return network


@router.get("/networks", response_model=list[NetworkConfig])
async def list_networks(
    repo: NetworkRepository = Depends(get_network_repository),  # noqa: B008
) -> list[NetworkConfig]:
    return await repo.list_networks()


@router.get("/networks/{network_id}", response_model=NetworkConfig)
async def get_network(
    network_id: str,
    repo: NetworkRepository = Depends(get_network_repository),  # noqa: B008
) -> NetworkConfig:
    return await _require_network(repo, network_id)


@router.post("/networks", response_model=NetworkConfig, status_code=status.HTTP_201_CREATED)
async def create_network(
    payload: NetworkCreate,
    repo: NetworkRepository = Depends(get_network_repository),  # noqa: B008
) -> NetworkConfig:
    return await repo.create_network(payload)


@router.patch("/networks/{network_id}", response_model=NetworkConfig)
async def update_network(
    network_id: str,
    payload: NetworkUpdate,
    repo: NetworkRepository = Depends(get_network_repository),  # noqa: B008
) -> NetworkConfig:
    changes = {
        key: value
        for key, value in payload.model_dump(exclude_unset=True).items()
        if value is not None
    }
    network = await repo.update_network(network_id, changes)
    if network is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Network {network_id} not found",
        )
    return network


@router.delete("/networks/{network_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_network(
    network_id: str,
    repo: NetworkRepository = Depends(get_network_repository),  # noqa: B008
) -> Response:
    if not await repo.delete_network(network_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Network {network_id} not found",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/networks/{network_id}/export/{kind}")
async def export_artifact(
    network_id: str,
    kind: ArtifactKind,
    repo: NetworkRepository = Depends(get_network_repository),  # noqa: B008
) -> Response:
    network = await _require_network(repo, network_id)
    document = render_artifact(network, kind)
    bind_context(network_id=network_id).info("artifact_exported", kind=kind.value)
    return Response(
        content=document,
        media_type=YAML_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{kind.filename}"'},
    )


@router.post("/networks/{network_id}/validate")
async def validate_saved_network(
    network_id: str,
    repo: NetworkRepository = Depends(get_network_repository),  # noqa: B008
) -> dict[str, Any]:
    network = await _require_network(repo, network_id)
    report = validate_network(network)
    graph_issues = check_graph_integrity(network.nodes, network.edges)

    bind_context(network_id=network_id).info(
        "network_validated",
        errors=report.error_count,
        warnings=report.warning_count,
        graph_issues=len(graph_issues),
    )
    return {
        **report.to_dict(),
        "graphIssues": [issue.to_dict() for issue in graph_issues],
    }


@router.get("/networks/{network_id}/commands")
async def list_peer_commands(
    network_id: str,
    repo: NetworkRepository = Depends(get_network_repository),  # noqa: B008
) -> list[dict[str, Any]]:
    network = await _require_network(repo, network_id)
    return [command.to_dict() for command in network_peer_commands(network)]


@router.get("/networks/{network_id}/commands/{kind}")
async def get_peer_command(
    network_id: str,
    kind: PeerCommandKind,
    repo: NetworkRepository = Depends(get_network_repository),  # noqa: B008
) -> Response:
    network = await _require_network(repo, network_id)
    command = network_peer_command(network, kind)
    return Response(content=command.command + "\n", media_type=SHELL_MEDIA_TYPE)
