"""
Dependency registry - named factories with cached singleton construction
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from crud_core.errors import AlreadyRegistered, CircularDependency, UnknownDependency

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Provider:
    """Registered construction recipe for a logical service name"""
    name: str
    factory: Callable[..., Any]
    depends_on: Tuple[str, ...] = ()
    singleton: bool = True
    eager: bool = False


class DependencyRegistry:
    """
    Minimal inversion-of-control container

    Factories are bound to logical names with ``register`` and constructed on
    first ``resolve``. Names listed in ``depends_on`` are resolved first and
    passed to the factory positionally, in the order given. Singleton
    instances are cached for the lifetime of the registry.
    """

    def __init__(self):
        self._providers: Dict[str, Provider] = {}
        self._instances: Dict[str, Any] = {}
        self._construction_order: List[str] = []
        self._resolving: List[str] = []
        self._lock = threading.RLock()

    def register(
        self,
        name: str,
        factory: Callable[..., Any],
        depends_on: Sequence[str] = (),
        singleton: bool = True,
        eager: bool = False
    ) -> None:
        """
        Bind a logical name to a construction function

        Args:
            name: Logical service name
            factory: Callable receiving the resolved ``depends_on`` instances
            depends_on: Names of services the factory needs
            singleton: Cache the first constructed instance (default)
            eager: Construct during ``initialize()`` instead of on first use

        Raises:
            AlreadyRegistered: If the name is already bound
        """
        with self._lock:
            if name in self._providers:
                raise AlreadyRegistered(name)
            self._providers[name] = Provider(
                name=name,
                factory=factory,
                depends_on=tuple(depends_on),
                singleton=singleton,
                eager=eager
            )
        logger.debug(f"Registered dependency: {name}")

    def resolve(self, name: str) -> Any:
        """
        Return the instance for a logical name, constructing it if needed

        Raises:
            UnknownDependency: If no factory was registered for the name
            CircularDependency: If the name is already being constructed
        """
        with self._lock:
            if name in self._instances:
                return self._instances[name]

            provider = self._providers.get(name)
            if provider is None:
                raise UnknownDependency(name)
            if name in self._resolving:
                raise CircularDependency(self._resolving[self._resolving.index(name):] + [name])

            self._resolving.append(name)
            try:
                args = [self.resolve(dep) for dep in provider.depends_on]
                instance = provider.factory(*args)
            finally:
                self._resolving.pop()

            if provider.singleton:
                self._instances[name] = instance
                self._construction_order.append(name)
                logger.info(f"Constructed singleton: {name}")
            return instance

    def initialize(self) -> None:
        """Construct every eager provider in registration order"""
        with self._lock:
            eager = [p.name for p in self._providers.values() if p.eager]
        for name in eager:
            self.resolve(name)
        logger.info(f"Registry initialized - {len(eager)} eager services constructed")

    def is_registered(self, name: str) -> bool:
        return name in self._providers

    def names(self) -> List[str]:
        """Registered names in registration order"""
        return list(self._providers.keys())

    @property
    def construction_order(self) -> List[str]:
        """Singleton names in the order they were first constructed"""
        return list(self._construction_order)


# Global registry instance
_registry: Optional[DependencyRegistry] = None


def get_registry() -> DependencyRegistry:
    """Get the process-wide registry instance"""
    global _registry
    if _registry is None:
        _registry = DependencyRegistry()
    return _registry


def reset_registry() -> None:
    """Discard the process-wide registry and everything it constructed"""
    global _registry
    _registry = None
