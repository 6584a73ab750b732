"""
Error taxonomy for stores, the dependency registry and the request handler
"""

from typing import Any, Optional


class CrudCoreError(Exception):
    """Base class for all recoverable core errors"""

    error_type = "CRUD_CORE_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(CrudCoreError):
    """Raised when no live entity exists for a key"""

    error_type = "RESOURCE_NOT_FOUND"

    def __init__(self, key: Any, resource: Optional[str] = None):
        where = f" in {resource}" if resource else ""
        super().__init__(f"No entity with key {key!r}{where}")
        self.key = key
        self.resource = resource


class DuplicateKey(CrudCoreError):
    """Raised when inserting an entity whose key is already taken"""

    error_type = "CONFLICT"

    def __init__(self, key: Any, resource: Optional[str] = None):
        where = f" in {resource}" if resource else ""
        super().__init__(f"Entity with key {key!r} already exists{where}")
        self.key = key
        self.resource = resource


class BadRequest(CrudCoreError):
    """Raised for malformed operation descriptors or entities"""

    error_type = "INVALID_QUERY"


class AlreadyRegistered(CrudCoreError):
    """Raised when a dependency name is bound twice"""

    error_type = "ALREADY_REGISTERED"

    def __init__(self, name: str):
        super().__init__(f"Dependency already registered: {name}")
        self.name = name


class UnknownDependency(CrudCoreError):
    """Raised when resolving a name that has no registered factory"""

    error_type = "UNKNOWN_DEPENDENCY"

    def __init__(self, name: str):
        super().__init__(f"No factory registered for dependency: {name}")
        self.name = name


class CircularDependency(CrudCoreError):
    """Raised when a dependency chain leads back to itself"""

    error_type = "CIRCULAR_DEPENDENCY"

    def __init__(self, chain):
        super().__init__(f"Circular dependency: {' -> '.join(chain)}")
        self.chain = list(chain)
