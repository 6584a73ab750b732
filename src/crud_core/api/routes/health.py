"""
Health check API route
"""

from fastapi import APIRouter, Request

from crud_core.gateway.handler import STORE_PREFIX
from crud_core.utils.structured_logging import utc_timestamp

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """Report liveness and the resources backed by a store"""
    registry = request.app.state.registry
    resources = [
        name[len(STORE_PREFIX):] for name in registry.names()
        if name.startswith(STORE_PREFIX)
    ]
    return {
        "status": "healthy",
        "timestamp": utc_timestamp(),
        "resources": resources,
        "constructed": registry.construction_order
    }
