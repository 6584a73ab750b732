"""
Response descriptor models for CRUD operations
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel


class ResponseStatus(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    BAD_REQUEST = "bad_request"


Payload = Union[Dict[str, Any], List[Dict[str, Any]], None]


class ResponseDescriptor(BaseModel):
    """Handler result independent of transport"""
    status: ResponseStatus
    payload: Payload = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == ResponseStatus.OK

    @classmethod
    def success(cls, payload: Payload) -> "ResponseDescriptor":
        """Create successful response"""
        return cls(status=ResponseStatus.OK, payload=payload)

    @classmethod
    def error(cls, status: ResponseStatus, message: str) -> "ResponseDescriptor":
        """Create error response with an empty payload"""
        return cls(status=status, payload=None, message=message)
