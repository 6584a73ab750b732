"""
In-memory entity store with exclusive ownership of its key -> entity mapping
"""

import logging
import threading
from typing import Any, Dict, List, Mapping, Union
from pydantic import ValidationError

from crud_core.errors import BadRequest, DuplicateKey, NotFound
from crud_core.models.entity import Entity, EntityKey

logger = logging.getLogger(__name__)

EntityInput = Union[Entity, Mapping[str, Any]]


class EntityStore:
    """
    Keyed in-memory collection supporting CRUD operations

    Every public operation runs under the store lock, so each one is an
    atomic unit. Entities are deep-copied on the way in and on the way out;
    callers never hold a reference into the mapping.
    """

    def __init__(self, resource_name: str, key_policy: str = "caller"):
        if key_policy not in ("caller", "auto"):
            raise ValueError(f"Unsupported key policy: {key_policy}")
        self.resource_name = resource_name
        self.key_policy = key_policy
        # dicts keep insertion order, which is the listing order
        self._entities: Dict[EntityKey, Entity] = {}
        self._lock = threading.Lock()
        self._next_key = 1
        logger.info(f"EntityStore initialized for resource: {resource_name} (key policy: {key_policy})")

    def insert(self, entity: EntityInput) -> Entity:
        """
        Add a new entity

        Args:
            entity: Entity (or mapping of fields) to store

        Returns:
            Copy of the stored entity, carrying its assigned key

        Raises:
            DuplicateKey: If the key is already taken
            BadRequest: If the key is missing under the caller key policy
        """
        entity = self._coerce(entity)
        with self._lock:
            key = entity.key
            if key is None:
                if self.key_policy != "auto":
                    raise BadRequest(f"Entity key is required for {self.resource_name}")
                key = self._generate_key()
            elif key in self._entities:
                raise DuplicateKey(key, self.resource_name)

            stored = entity.with_key(key)
            self._entities[key] = stored
            logger.debug(f"Inserted {self.resource_name}/{key}")
            return stored.model_copy(deep=True)

    def get(self, key: EntityKey) -> Entity:
        """Return the entity for a key or raise NotFound"""
        with self._lock:
            return self._lookup(key).model_copy(deep=True)

    def list(self) -> List[Entity]:
        """Snapshot of all entities in insertion order"""
        with self._lock:
            return [entity.model_copy(deep=True) for entity in self._entities.values()]

    def update(self, key: EntityKey, entity: EntityInput) -> Entity:
        """
        Replace the entity stored under key wholesale

        The stored entity always carries the given key, whatever key the
        replacement body names.

        Raises:
            NotFound: If no entity exists for key
        """
        entity = self._coerce(entity)
        with self._lock:
            self._lookup(key)
            stored = entity.with_key(key)
            self._entities[key] = stored
            logger.debug(f"Replaced {self.resource_name}/{key}")
            return stored.model_copy(deep=True)

    def delete(self, key: EntityKey) -> Entity:
        """Remove and return the entity for a key or raise NotFound"""
        with self._lock:
            self._lookup(key)
            removed = self._entities.pop(key)
            logger.debug(f"Deleted {self.resource_name}/{key}")
            return removed

    def contains(self, key: EntityKey) -> bool:
        with self._lock:
            return key in self._entities

    def count(self) -> int:
        with self._lock:
            return len(self._entities)

    def clear(self) -> None:
        """Drop every entity and restart automatic key assignment"""
        with self._lock:
            self._entities.clear()
            self._next_key = 1

    def _lookup(self, key: EntityKey) -> Entity:
        # Caller must hold the lock
        try:
            return self._entities[key]
        except KeyError:
            raise NotFound(key, self.resource_name) from None

    def _generate_key(self) -> int:
        # Caller must hold the lock; skips integers already used as caller keys
        while self._next_key in self._entities:
            self._next_key += 1
        key = self._next_key
        self._next_key += 1
        return key

    @staticmethod
    def _coerce(entity: EntityInput) -> Entity:
        if isinstance(entity, Entity):
            return entity
        if isinstance(entity, Mapping):
            try:
                return Entity(**entity)
            except ValidationError as e:
                raise BadRequest(f"Invalid entity: {e.errors()[0]['msg']}") from e
        raise BadRequest(f"Expected an entity or mapping, got {type(entity).__name__}")
