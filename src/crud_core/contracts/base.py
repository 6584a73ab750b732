"""
Base contract models for resource operations
"""

from typing import Any, Dict, List
from pydantic import BaseModel

from crud_core.models.operation import Verb


class ContractField(BaseModel):
    """Field definition within a resource contract"""
    name: str
    required: bool = True


class ResourceContract(BaseModel):
    """Operations and fields accepted for a resource"""
    resource: str
    ops_allowed: List[Verb] = list(Verb)
    fields: List[ContractField] = []

    def get_field(self, field_name: str):
        """Get field definition by name"""
        return next((f for f in self.fields if f.name == field_name), None)

    def is_operation_allowed(self, verb: Verb) -> bool:
        """Check if operation is allowed"""
        return verb in self.ops_allowed

    def missing_fields(self, body: Dict[str, Any]) -> List[str]:
        """Required fields absent (or null) in an entity body"""
        return [
            f.name for f in self.fields
            if f.required and body.get(f.name) is None
        ]
