"""
Operation descriptor models for transport-independent CRUD requests
"""

from enum import Enum
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict

from crud_core.models.entity import EntityKey


class Verb(str, Enum):
    """Supported CRUD verbs"""
    CREATE = "CREATE"
    READ = "READ"
    LIST = "LIST"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


# Verbs that must carry a key / a body to be well formed
KEYED_VERBS = {Verb.READ, Verb.UPDATE, Verb.DELETE}
BODY_VERBS = {Verb.CREATE, Verb.UPDATE}


class OperationDescriptor(BaseModel):
    """Client request independent of transport"""
    model_config = ConfigDict(extra="forbid")

    verb: Verb
    resource: Optional[str] = None  # Falls back to the handler's default resource
    key: Optional[EntityKey] = None
    body: Optional[Dict[str, Any]] = None

    def missing_parts(self) -> list:
        """Names of required parts absent for this verb"""
        missing = []
        if self.verb in KEYED_VERBS and self.key is None:
            missing.append("key")
        if self.verb in BODY_VERBS and self.body is None:
            missing.append("body")
        return missing
