from __future__ import annotations

from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel, Field

from fabricarch.api.deps import get_deployment_repository, get_network_repository
from fabricarch.deployments import InvalidTransitionError, advance, check_transition, start_deployment
from fabricarch.domain.models import Deployment, DeploymentCreate, DeploymentUpdate
from fabricarch.storage import DeploymentRepository, NetworkRepository

router = APIRouter()
logger = structlog.get_logger()


class ProgressRequest(BaseModel):
    progress: int | None = Field(default=None, ge=0, le=100)


def _not_found(deployment_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Deployment {deployment_id} not found",
    )


def _conflict(exc: InvalidTransitionError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=exc.message)


@router.get("/deployments", response_model=list[Deployment])
async def list_deployments(
    repo: DeploymentRepository = Depends(get_deployment_repository),  # noqa: B008
) -> list[Deployment]:
    return await repo.list_deployments()


@router.get("/deployments/{deployment_id}", response_model=Deployment)
async def get_deployment(
    deployment_id: str,
    repo: DeploymentRepository = Depends(get_deployment_repository),  # noqa: B008
) -> Deployment:
    deployment = await repo.get_deployment(deployment_id)
    if deployment is None:
        raise _not_found(deployment_id)
    return deployment


@router.post("/deployments", response_model=Deployment, status_code=status.HTTP_201_CREATED)
async def create_deployment(
    payload: DeploymentCreate,
    repo: DeploymentRepository = Depends(get_deployment_repository),  # noqa: B008
    networks: NetworkRepository = Depends(get_network_repository),  # noqa: B008
) -> Deployment:
    network = await networks.get_network(payload.network_id)
    if network is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Network {payload.network_id} not found",
        )
    return await repo.create_deployment(start_deployment(network, datetime.now(timezone.utc)))


@router.patch("/deployments/{deployment_id}", response_model=Deployment)
async def update_deployment(
    deployment_id: str,
    payload: DeploymentUpdate,
    repo: DeploymentRepository = Depends(get_deployment_repository),  # noqa: B008
) -> Deployment:
    existing = await repo.get_deployment(deployment_id)
    if existing is None:
        raise _not_found(deployment_id)

    changes = {
        key: value
        for key, value in payload.model_dump(exclude_unset=True, exclude={"status", "progress"}).items()
        if value is not None
    }
    try:
        # progress goes through the state machine; status is checked against the result
        if payload.progress is not None:
            changes.update(advance(existing, datetime.now(timezone.utc), payload.progress))
        if payload.status is not None:
            check_transition(changes.get("status", existing.status), payload.status)
            changes["status"] = payload.status
    except InvalidTransitionError as exc:
        logger.warning("deployment_transition_rejected", deployment_id=deployment_id, reason=exc.message)
        raise _conflict(exc) from exc

    deployment = await repo.update_deployment(deployment_id, changes)
    if deployment is None:
        raise _not_found(deployment_id)
    return deployment


@router.post("/deployments/{deployment_id}/progress", response_model=Deployment)
async def advance_deployment(
    deployment_id: str,
    payload: ProgressRequest | None = None,
    repo: DeploymentRepository = Depends(get_deployment_repository),  # noqa: B008
) -> Deployment:
    existing = await repo.get_deployment(deployment_id)
    if existing is None:
        raise _not_found(deployment_id)

    target = payload.progress if payload else None
    try:
        changes = advance(existing, datetime.now(timezone.utc), target)
    except InvalidTransitionError as exc:
        logger.warning("deployment_transition_rejected", deployment_id=deployment_id, reason=exc.message)
        raise _conflict(exc) from exc

    deployment = await repo.update_deployment(deployment_id, changes)
    if deployment is None:
        raise _not_found(deployment_id)
    logger.info(
        "deployment_progressed",
        deployment_id=deployment_id,
        progress=deployment.progress,
        status=deployment.status.value,
    )
    return deployment


@router.delete("/deployments/{deployment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_deployment(
    deployment_id: str,
    repo: DeploymentRepository = Depends(get_deployment_repository),  # noqa: B008
) -> Response:
    if not await repo.delete_deployment(deployment_id):
        raise _not_found(deployment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
