"""
HTTP adapter for the CRUD core
Maps /api/{resource} routes onto the request handler
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from crud_core import __version__
from crud_core.config.settings import DEFAULT_RESOURCE, EAGER_INIT, KEY_POLICY, RESOURCES
from crud_core.api.routes import health, resources
from crud_core.gateway.container import build_registry
from crud_core.gateway.registry import DependencyRegistry, get_registry, reset_registry
from crud_core.utils.error_handling import setup_error_handling

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    logger.info(f"Serving resources: {', '.join(app.state.registry.names())}")
    yield
    logger.info("Shutting down - in-memory stores discarded")


def create_app(registry: Optional[DependencyRegistry] = None) -> FastAPI:
    """
    Build the FastAPI application

    Args:
        registry: Pre-populated registry; when omitted the process-wide
            registry is reset and populated from settings
    """
    if registry is None:
        # Each app built from settings gets a freshly populated global registry
        reset_registry()
        registry = build_registry(
            RESOURCES,
            key_policy=KEY_POLICY,
            default_resource=DEFAULT_RESOURCE,
            eager=EAGER_INIT,
            registry=get_registry()
        )

    app = FastAPI(
        title="CRUD Core",
        description="In-memory CRUD stores behind a dependency registry",
        version=__version__,
        lifespan=lifespan
    )
    app.state.registry = registry

    # Setup centralized error handling
    setup_error_handling(app)

    # Include API routes
    app.include_router(health.router, tags=["Health"])
    app.include_router(resources.router, prefix="/api", tags=["Resources"])

    return app
