"""
Outcome-to-HTTP mapping for the broker API.

Single source of truth for turning a domain result or a raised domain
error into an HTTP status code and body. Routers, the centralized
error handlers and the API version middleware all delegate here;
status codes are not decided anywhere else.

Body conventions of ``HttpOutcome.body``:
    None        no payload (rendered as ``{}`` on the wire)
    EMPTY_JSON  the literal two-character JSON object ``{}``
    dict        a JSON object
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from fastapi.responses import JSONResponse, Response

from servicebroker.domain.broker.entities import (
    Catalog,
    CreateServiceInstanceAppBindingResponse,
    CreateServiceInstanceBindingResponse,
    CreateServiceInstanceResponse,
    CreateServiceInstanceRouteBindingResponse,
    DeleteServiceInstanceResponse,
    GetServiceInstanceAppBindingResponse,
    GetServiceInstanceBindingResponse,
    GetServiceInstanceRouteBindingResponse,
    UpdateServiceInstanceResponse,
)
from servicebroker.domain.broker.errors import (
    ApiVersionMismatchError,
    AsyncRequiredError,
    BindingAlreadyExistsError,
    BindingDoesNotExistError,
    ConcurrencyError,
    InstanceUpdateNotSupportedError,
    MalformedRequestError,
    OperationInProgressError,
    ServiceBrokerError,
    ServiceDefinitionUnknownError,
    ServiceInstanceAlreadyExistsError,
    ServiceInstanceDoesNotExistError,
)
from servicebroker.interfaces.broker.schemas import (
    AppBindingResponseSchema,
    CatalogSchema,
    ErrorMessage,
    GetAppBindingResponseSchema,
    GetRouteBindingResponseSchema,
    OperationResponseSchema,
    ProvisionResponseSchema,
    RouteBindingResponseSchema,
)

HTTP_200 = 200
HTTP_201 = 201
HTTP_202 = 202
HTTP_400 = 400
HTTP_404 = 404
HTTP_409 = 409
HTTP_410 = 410
HTTP_412 = 412
HTTP_422 = 422
HTTP_429 = 429
HTTP_500 = 500

EMPTY_JSON = "{}"
JSON_MEDIA_TYPE = "application/json"
INTERNAL_ERROR_MESSAGE = "Internal server error"


class Operation(str, Enum):
    """Broker operations whose error mapping may differ."""

    GET_CATALOG = "get_catalog"
    CREATE_SERVICE_INSTANCE = "create_service_instance"
    UPDATE_SERVICE_INSTANCE = "update_service_instance"
    DELETE_SERVICE_INSTANCE = "delete_service_instance"
    CREATE_BINDING = "create_service_instance_binding"
    GET_BINDING = "get_service_instance_binding"
    DELETE_BINDING = "delete_service_instance_binding"


@dataclass(frozen=True)
class HttpOutcome:
    """Wire-level result of a broker exchange."""

    status_code: int
    body: Union[None, str, dict[str, Any]] = None


# Status per error type; looked up along the exception's MRO.
ERROR_STATUS: dict[type[ServiceBrokerError], int] = {
    BindingAlreadyExistsError: HTTP_409,
    BindingDoesNotExistError: HTTP_410,
    ServiceInstanceDoesNotExistError: HTTP_400,
    ServiceDefinitionUnknownError: HTTP_422,
    MalformedRequestError: HTTP_422,
    ServiceInstanceAlreadyExistsError: HTTP_409,
    InstanceUpdateNotSupportedError: HTTP_422,
    AsyncRequiredError: HTTP_422,
    ConcurrencyError: HTTP_422,
    ApiVersionMismatchError: HTTP_412,
    ServiceBrokerError: HTTP_500,
}

# Deleting something already gone reaches the goal state: 410 with "{}".
GONE_ON: frozenset[tuple[Operation, type[ServiceBrokerError]]] = frozenset({
    (Operation.DELETE_BINDING, BindingDoesNotExistError),
    (Operation.DELETE_SERVICE_INSTANCE, ServiceInstanceDoesNotExistError),
})

NOT_FOUND_ON: frozenset[tuple[Operation, type[ServiceBrokerError]]] = frozenset({
    (Operation.GET_BINDING, BindingDoesNotExistError),
    (Operation.GET_BINDING, ServiceInstanceDoesNotExistError),
})


def error_body(message: str) -> dict[str, Any]:
    """Return an ErrorMessage body."""
    return ErrorMessage(message=message).model_dump()


def _dump(model: Any) -> dict[str, Any]:
    return model.model_dump(mode="json", exclude_none=True)


# ------------------------------------------------------------------
# Failures
# ------------------------------------------------------------------


def map_error(exc: Exception, operation: Optional[Operation] = None) -> HttpOutcome:
    """Map any exception raised while serving ``operation`` to an outcome.

    Broker errors follow ERROR_STATUS with per-operation overrides.
    Anything else is a generic 500 that never exposes internals.
    """
    if not isinstance(exc, ServiceBrokerError):
        return HttpOutcome(HTTP_500, error_body(INTERNAL_ERROR_MESSAGE))

    if isinstance(exc, OperationInProgressError):
        if exc.operation:
            return HttpOutcome(HTTP_202, _dump(OperationResponseSchema(operation=exc.operation)))
        return HttpOutcome(HTTP_202, EMPTY_JSON)

    for cls in type(exc).__mro__:
        if (operation, cls) in GONE_ON:
            return HttpOutcome(HTTP_410, EMPTY_JSON)
        if (operation, cls) in NOT_FOUND_ON:
            return HttpOutcome(HTTP_404, error_body(exc.message))

    for cls in type(exc).__mro__:
        status = ERROR_STATUS.get(cls)
        if status is not None:
            return HttpOutcome(status, error_body(exc.message))
    return HttpOutcome(HTTP_500, error_body(exc.message))


def map_validation_error(errors: list[dict[str, Any]]) -> HttpOutcome:
    """Map request validation failures to a 422 ErrorMessage."""
    parts = []
    for error in errors:
        location = ".".join(str(part) for part in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg', 'invalid')}")
    message = "; ".join(parts) if parts else "Request validation failed"
    return HttpOutcome(HTTP_422, error_body(message))


def map_rate_limited(detail: str) -> HttpOutcome:
    return HttpOutcome(HTTP_429, error_body(f"Rate limit exceeded: {detail}"))


# ------------------------------------------------------------------
# Successes
# ------------------------------------------------------------------


def map_catalog(catalog: Catalog) -> HttpOutcome:
    return HttpOutcome(HTTP_200, _dump(CatalogSchema.from_domain(catalog)))


def binding_body(response: CreateServiceInstanceBindingResponse) -> dict[str, Any]:
    """Serialize a created binding according to its concrete type."""
    if isinstance(response, CreateServiceInstanceRouteBindingResponse):
        return _dump(RouteBindingResponseSchema.from_domain(response))
    if isinstance(response, CreateServiceInstanceAppBindingResponse):
        return _dump(AppBindingResponseSchema.from_domain(response))
    return {}


def map_create_binding(
    response: Optional[CreateServiceInstanceBindingResponse],
) -> HttpOutcome:
    """Absent response or a new binding is 201; a binding that existed is 200."""
    if response is None:
        return HttpOutcome(HTTP_201, None)
    status = HTTP_200 if response.binding_existed else HTTP_201
    return HttpOutcome(status, binding_body(response))


def map_get_binding(response: GetServiceInstanceBindingResponse) -> HttpOutcome:
    if isinstance(response, GetServiceInstanceRouteBindingResponse):
        return HttpOutcome(HTTP_200, _dump(GetRouteBindingResponseSchema.from_domain(response)))
    if isinstance(response, GetServiceInstanceAppBindingResponse):
        return HttpOutcome(HTTP_200, _dump(GetAppBindingResponseSchema.from_domain(response)))
    return HttpOutcome(HTTP_200, {"parameters": dict(response.parameters)})


def map_delete_binding() -> HttpOutcome:
    return HttpOutcome(HTTP_200, EMPTY_JSON)


def map_create_service_instance(response: CreateServiceInstanceResponse) -> HttpOutcome:
    """202 when asynchronous, 200 when the instance existed, otherwise 201."""
    body = _dump(ProvisionResponseSchema.from_domain(response))
    if response.is_async:
        return HttpOutcome(HTTP_202, body)
    if response.instance_existed:
        return HttpOutcome(HTTP_200, body)
    return HttpOutcome(HTTP_201, body)


def map_update_service_instance(response: UpdateServiceInstanceResponse) -> HttpOutcome:
    body = _dump(ProvisionResponseSchema.from_domain(response))
    return HttpOutcome(HTTP_202 if response.is_async else HTTP_200, body)


def map_delete_service_instance(response: DeleteServiceInstanceResponse) -> HttpOutcome:
    if response.is_async:
        return HttpOutcome(HTTP_202, _dump(OperationResponseSchema(operation=response.operation)))
    return HttpOutcome(HTTP_200, EMPTY_JSON)


# ------------------------------------------------------------------
# Rendering
# ------------------------------------------------------------------


def render(outcome: HttpOutcome) -> Response:
    """Build the HTTP response for an outcome.

    Payload-less outcomes are written as the literal ``{}``, never as an
    empty byte stream.
    """
    if outcome.body is None or outcome.body == EMPTY_JSON:
        return Response(
            content=EMPTY_JSON,
            status_code=outcome.status_code,
            media_type=JSON_MEDIA_TYPE,
        )
    return JSONResponse(content=outcome.body, status_code=outcome.status_code)
