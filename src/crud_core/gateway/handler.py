"""
Request handler - dispatches operation descriptors to entity stores
"""

import logging
from typing import Any, Callable, Dict, Mapping, Optional, Union

from pydantic import ValidationError

from crud_core.contracts.base import ResourceContract
from crud_core.contracts.registry import get_contract
from crud_core.errors import BadRequest, CrudCoreError, DuplicateKey, NotFound, UnknownDependency
from crud_core.gateway.registry import DependencyRegistry
from crud_core.models.operation import BODY_VERBS, OperationDescriptor, Verb
from crud_core.models.response import ResponseDescriptor, ResponseStatus
from crud_core.services.store import EntityStore
from crud_core.utils.structured_logging import log_business_error

logger = logging.getLogger(__name__)

STORE_PREFIX = "stores."


def store_dependency_name(resource: str) -> str:
    """Registry name under which the store for a resource is bound"""
    return f"{STORE_PREFIX}{resource}"


# Error class -> response status
ERROR_STATUS = (
    (NotFound, ResponseStatus.NOT_FOUND),
    (UnknownDependency, ResponseStatus.NOT_FOUND),
    (DuplicateKey, ResponseStatus.CONFLICT),
    (BadRequest, ResponseStatus.BAD_REQUEST),
)
HANDLED_ERRORS = tuple(error_cls for error_cls, _ in ERROR_STATUS)


class RequestHandler:
    """Maps operation descriptors to store operations and response descriptors"""

    def __init__(
        self,
        registry: DependencyRegistry,
        default_resource: Optional[str] = None,
        contract_lookup: Callable[[str], ResourceContract] = get_contract
    ):
        self.registry = registry
        self.default_resource = default_resource
        self.contract_lookup = contract_lookup
        self._dispatch: Dict[Verb, Callable[[EntityStore, OperationDescriptor], Any]] = {
            Verb.CREATE: self._create,
            Verb.READ: self._read,
            Verb.LIST: self._list,
            Verb.UPDATE: self._update,
            Verb.DELETE: self._delete,
        }

    async def execute(
        self,
        operation: Union[OperationDescriptor, Mapping[str, Any]]
    ) -> ResponseDescriptor:
        """
        Execute one operation against its resource store

        Args:
            operation: Operation descriptor, or a mapping to validate as one

        Returns:
            ResponseDescriptor; request errors are translated into a status
        """
        try:
            descriptor = self._parse(operation)
            resource = descriptor.resource or self.default_resource
            if not resource:
                raise BadRequest("Operation does not name a resource and no default is configured")

            self._check_contract(descriptor, self.contract_lookup(resource))
            store = self._resolve_store(resource)
            result = self._dispatch[descriptor.verb](store, descriptor)
        except HANDLED_ERRORS as e:
            return self._error_response(e, operation)

        logger.info(f"{descriptor.verb.value} operation successful on {resource}")
        return ResponseDescriptor.success(result)

    def get_supported_operations(self):
        """Get list of supported verbs"""
        return [verb.value for verb in self._dispatch]

    def _resolve_store(self, resource: str) -> EntityStore:
        """
        Resolve the store backing a resource

        Raises:
            UnknownDependency: If no store is registered for the resource
            RuntimeError: If the store is registered but cannot be constructed
        """
        name = store_dependency_name(resource)
        if not self.registry.is_registered(name):
            raise UnknownDependency(name)
        try:
            return self.registry.resolve(name)
        except UnknownDependency as e:
            # Misconfigured store wiring, not a client error
            logger.error(f"Store for {resource} could not be constructed: {e}")
            raise RuntimeError(f"Store construction failed for {resource}: {e.message}") from e

    @staticmethod
    def _parse(operation: Union[OperationDescriptor, Mapping[str, Any]]) -> OperationDescriptor:
        if isinstance(operation, OperationDescriptor):
            descriptor = operation
        elif isinstance(operation, Mapping):
            try:
                descriptor = OperationDescriptor.model_validate(dict(operation))
            except ValidationError as e:
                first = e.errors()[0]
                location = ".".join(str(part) for part in first.get("loc", ()))
                raise BadRequest(f"Malformed operation descriptor: {location}: {first['msg']}") from e
        else:
            raise BadRequest(f"Malformed operation descriptor: {type(operation).__name__}")

        missing = descriptor.missing_parts()
        if missing:
            raise BadRequest(f"{descriptor.verb.value} requires {' and '.join(missing)}")
        return descriptor

    @staticmethod
    def _check_contract(descriptor: OperationDescriptor, contract: ResourceContract) -> None:
        if not contract.is_operation_allowed(descriptor.verb):
            raise BadRequest(f"{descriptor.verb.value} is not allowed on {contract.resource}")
        if descriptor.verb in BODY_VERBS:
            missing = contract.missing_fields(descriptor.body)
            if missing:
                raise BadRequest(f"Missing required fields for {contract.resource}: {', '.join(missing)}")

    @staticmethod
    def _body_with_key(descriptor: OperationDescriptor) -> Dict[str, Any]:
        body = dict(descriptor.body)
        body_key = body.get("key")
        if descriptor.key is not None:
            if body_key is not None and body_key != descriptor.key:
                raise BadRequest(f"Body key {body_key!r} does not match key {descriptor.key!r}")
            body["key"] = descriptor.key
        return body

    def _create(self, store: EntityStore, descriptor: OperationDescriptor):
        return store.insert(self._body_with_key(descriptor)).to_payload()

    def _read(self, store: EntityStore, descriptor: OperationDescriptor):
        return store.get(descriptor.key).to_payload()

    def _list(self, store: EntityStore, descriptor: OperationDescriptor):
        return [entity.to_payload() for entity in store.list()]

    def _update(self, store: EntityStore, descriptor: OperationDescriptor):
        return store.update(descriptor.key, self._body_with_key(descriptor)).to_payload()

    def _delete(self, store: EntityStore, descriptor: OperationDescriptor):
        return store.delete(descriptor.key).to_payload()

    @staticmethod
    def _error_response(error: CrudCoreError, operation: Any) -> ResponseDescriptor:
        status = next(status for error_cls, status in ERROR_STATUS if isinstance(error, error_cls))
        context = operation.model_dump() if isinstance(operation, OperationDescriptor) else operation
        log_business_error(
            status.value,
            error.message,
            context={"operation": context if isinstance(context, Mapping) else repr(context)}
        )
        return ResponseDescriptor.error(status, error.message)
