"""
Resource CRUD API routes - translate HTTP requests into operation descriptors
"""

import logging
import re
from typing import Any, Dict, Optional, Union

from fastapi import APIRouter, Body, Depends, Request
from fastapi.responses import JSONResponse

from crud_core.gateway.container import get_request_handler
from crud_core.gateway.handler import RequestHandler
from crud_core.models.operation import OperationDescriptor, Verb
from crud_core.models.response import ResponseDescriptor, ResponseStatus
from crud_core.utils.error_handling import error_body

router = APIRouter()
logger = logging.getLogger(__name__)

INTEGER_KEY = re.compile(r"-?[0-9]+")

HTTP_STATUS = {
    ResponseStatus.OK: 200,
    ResponseStatus.NOT_FOUND: 404,
    ResponseStatus.CONFLICT: 409,
    ResponseStatus.BAD_REQUEST: 400,
}


def get_handler(request: Request) -> RequestHandler:
    """FastAPI dependency returning the handler wired at startup"""
    return get_request_handler(request.app.state.registry)


def parse_path_key(raw_key: str) -> Union[int, str]:
    """
    Path keys written as a canonical ASCII integer address integer keys

    Anything else, including "007" or non-ASCII digits, stays a string key.
    """
    if not INTEGER_KEY.fullmatch(raw_key):
        return raw_key
    try:
        key = int(raw_key)
    except ValueError:
        # Beyond the interpreter's int conversion digit limit
        return raw_key
    return key if str(key) == raw_key else raw_key


def to_http_response(
    request: Request,
    response: ResponseDescriptor,
    success_status: int = 200
) -> JSONResponse:
    """Translate a response descriptor into an HTTP response"""
    if response.ok:
        return JSONResponse(status_code=success_status, content=response.payload)
    return JSONResponse(
        status_code=HTTP_STATUS[response.status],
        content=error_body(
            response.status.value,
            response.message or "",
            getattr(request.state, "trace_id", None)
        )
    )


async def _run(
    request: Request,
    handler: RequestHandler,
    verb: Verb,
    resource: str,
    key: Optional[str] = None,
    body: Optional[Dict[str, Any]] = None,
    success_status: int = 200
) -> JSONResponse:
    operation = OperationDescriptor(
        verb=verb,
        resource=resource,
        key=parse_path_key(key) if key is not None else None,
        body=body
    )
    response = await handler.execute(operation)
    return to_http_response(request, response, success_status)


@router.post("/{resource}")
async def create_entity(
    resource: str,
    request: Request,
    body: Dict[str, Any] = Body(...),
    handler: RequestHandler = Depends(get_handler)
):
    """Create a new entity"""
    return await _run(request, handler, Verb.CREATE, resource, body=body, success_status=201)


@router.get("/{resource}")
async def list_entities(
    resource: str,
    request: Request,
    handler: RequestHandler = Depends(get_handler)
):
    """List all entities in insertion order"""
    return await _run(request, handler, Verb.LIST, resource)


@router.get("/{resource}/{key}")
async def get_entity(
    resource: str,
    key: str,
    request: Request,
    handler: RequestHandler = Depends(get_handler)
):
    """Get entity by key"""
    return await _run(request, handler, Verb.READ, resource, key=key)


@router.put("/{resource}/{key}")
async def replace_entity(
    resource: str,
    key: str,
    request: Request,
    body: Dict[str, Any] = Body(...),
    handler: RequestHandler = Depends(get_handler)
):
    """Replace entity wholesale"""
    return await _run(request, handler, Verb.UPDATE, resource, key=key, body=body)


@router.delete("/{resource}/{key}")
async def delete_entity(
    resource: str,
    key: str,
    request: Request,
    handler: RequestHandler = Depends(get_handler)
):
    """Delete entity and return it"""
    return await _run(request, handler, Verb.DELETE, resource, key=key)
