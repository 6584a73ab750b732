"""
pytest configuration and fixtures for the CRUD core testing suite
"""

import pytest
from fastapi.testclient import TestClient

from crud_core.app import create_app
from crud_core.gateway.container import build_registry, get_request_handler
from crud_core.gateway.registry import DependencyRegistry
from crud_core.services.store import EntityStore


@pytest.fixture
def journal_store() -> EntityStore:
    """Empty journal entry store with caller-assigned keys"""
    return EntityStore("journal_entries")


@pytest.fixture
def auto_store() -> EntityStore:
    """Empty store that assigns integer keys"""
    return EntityStore("users", key_policy="auto")


@pytest.fixture
def registry() -> DependencyRegistry:
    """Fresh, empty registry"""
    return DependencyRegistry()


@pytest.fixture
def wired_registry() -> DependencyRegistry:
    """Registry populated the way the application populates it"""
    return build_registry(
        ["journal_entries", "users", "greetings"],
        default_resource="journal_entries",
        registry=DependencyRegistry()
    )


@pytest.fixture
def handler(wired_registry):
    return get_request_handler(wired_registry)


@pytest.fixture
def client(wired_registry):
    """HTTP client against an app backed by its own registry"""
    with TestClient(create_app(wired_registry)) as test_client:
        yield test_client
