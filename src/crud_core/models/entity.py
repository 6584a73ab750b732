"""
Entity pydantic model
"""

from typing import Any, Dict, Optional, Union
from pydantic import BaseModel, ConfigDict

EntityKey = Union[int, str]


class Entity(BaseModel):
    """Keyed record with an open set of named fields"""
    model_config = ConfigDict(extra="allow")

    key: Optional[EntityKey] = None

    @property
    def fields(self) -> Dict[str, Any]:
        """Named fields other than the key"""
        return dict(self.model_extra or {})

    def with_key(self, key: EntityKey) -> "Entity":
        """Deep copy of this entity carrying the given key"""
        return Entity(key=key, **self.fields).model_copy(deep=True)

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump()
