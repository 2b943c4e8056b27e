from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fabricarch import __version__
from fabricarch.api.routes import deployments, health, networks, templates
from fabricarch.config import get_settings
from fabricarch.logging import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    configure_logging(settings.log_level)
    yield


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title="Fabric Architect API",
        version=__version__,
        docs_url=f"{settings.api_prefix}/docs",
        openapi_url=f"{settings.api_prefix}/openapi.json",
        debug=settings.debug,
        lifespan=lifespan,
    )

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[str(origin) for origin in settings.cors_origins],
            allow_methods=["*"],
            allow_headers=["*"],
            allow_credentials=True,
        )

    app.include_router(networks.router, prefix=settings.api_prefix, tags=["networks"])
    app.include_router(deployments.router, prefix=settings.api_prefix, tags=["deployments"])
    app.include_router(templates.router, prefix=settings.api_prefix, tags=["templates"])
    app.include_router(health.router, tags=["health"])
    return app


app = create_app()
