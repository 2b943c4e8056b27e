from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status

from fabricarch.api.deps import get_network_repository
from fabricarch.core.errors import TemplateNotFoundError
from fabricarch.domain.models import NetworkConfig, NetworkCreate
from fabricarch.logging import bind_context
from fabricarch.storage import NetworkRepository
from fabricarch.templates import NetworkTemplate, build_template_network, get_template, list_templates

router = APIRouter()


def _require_template(template_id: str) -> NetworkTemplate:
    try:
        return get_template(template_id)
    except TemplateNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message) from exc


@router.get("/templates")
async def list_network_templates() -> list[dict[str, Any]]:
    return [template.to_dict() for template in list_templates()]


@router.get("/templates/{template_id}", response_model=NetworkCreate)
async def preview_template(template_id: str) -> NetworkCreate:
    return build_template_network(_require_template(template_id))


@router.post(
    "/templates/{template_id}/networks",
    response_model=NetworkConfig,
    status_code=status.HTTP_201_CREATED,
)
async def create_network_from_template(
    template_id: str,
    repo: NetworkRepository = Depends(get_network_repository),  # noqa: B008
) -> NetworkConfig:
    template = _require_template(template_id)
    network = await repo.create_network(build_template_network(template))
    bind_context(network_id=network.id).info("network_created_from_template", template=template.id)
    return network
