"""
Process initialization - explicit registration of stores and the request handler
"""

import logging
from typing import Iterable, Optional

from crud_core.gateway.handler import RequestHandler, store_dependency_name
from crud_core.gateway.registry import DependencyRegistry, get_registry
from crud_core.services.store import EntityStore

logger = logging.getLogger(__name__)

REQUEST_HANDLER = "request_handler"


def build_registry(
    resources: Iterable[str],
    key_policy: str = "caller",
    default_resource: Optional[str] = None,
    eager: bool = False,
    registry: Optional[DependencyRegistry] = None
) -> DependencyRegistry:
    """
    Register one store per resource and the request handler

    Args:
        resources: Resource names to back with an in-memory store
        key_policy: "caller" or "auto" key assignment for every store
        default_resource: Resource used by operations that name none
        eager: Construct everything now instead of on first resolve
        registry: Registry to populate (defaults to the process-wide one)

    Returns:
        The populated registry
    """
    registry = registry if registry is not None else get_registry()
    resources = list(resources)

    for resource in resources:
        registry.register(
            store_dependency_name(resource),
            lambda resource=resource: EntityStore(resource, key_policy=key_policy),
            eager=eager
        )

    registry.register(
        REQUEST_HANDLER,
        lambda: RequestHandler(registry, default_resource=default_resource),
        eager=eager
    )

    if eager:
        registry.initialize()

    logger.info(f"Registry built for resources: {', '.join(resources)}")
    return registry


def get_request_handler(registry: Optional[DependencyRegistry] = None) -> RequestHandler:
    """Get the request handler from a registry (defaults to the process-wide one)"""
    registry = registry if registry is not None else get_registry()
    return registry.resolve(REQUEST_HANDLER)
