"""
Dependency injection for the broker bounded context.

Provides FastAPI dependency functions that wire infrastructure
adapters into use cases via constructor injection.
Long-lived collaborators are built by ``create_app`` and read from
``app.state``; tests swap them through ``app.dependency_overrides``.
"""

import base64
import binascii
import json
from typing import Callable, Optional

from fastapi import Depends, Header, Request

from servicebroker.application.broker.create_binding import (
    CreateServiceInstanceBindingUseCase,
)
from servicebroker.application.broker.create_instance import CreateServiceInstanceUseCase
from servicebroker.application.broker.delete_binding import (
    DeleteServiceInstanceBindingUseCase,
)
from servicebroker.application.broker.delete_instance import DeleteServiceInstanceUseCase
from servicebroker.application.broker.get_binding import GetServiceInstanceBindingUseCase
from servicebroker.application.broker.get_catalog import GetCatalogUseCase
from servicebroker.application.broker.update_instance import UpdateServiceInstanceUseCase
from servicebroker.core.config import Settings
from servicebroker.domain.broker.entities import BrokerRequestInfo, PlatformContext
from servicebroker.domain.broker.errors import MalformedRequestError
from servicebroker.domain.broker.ports import (
    CatalogService,
    ServiceInstanceBindingService,
    ServiceInstanceService,
)
from servicebroker.infrastructure.broker.binding_adapter import (
    InMemoryServiceInstanceBindingService,
)
from servicebroker.infrastructure.broker.in_memory_state import InMemoryBrokerState
from servicebroker.infrastructure.broker.service_instance_adapter import (
    InMemoryServiceInstanceService,
)
from servicebroker.interfaces.broker.outcomes import Operation

OPERATION_STATE_KEY = "broker_operation"


def broker_operation(operation: Operation) -> Callable[[Request], None]:
    """Build a dependency that tags the request with the operation being served.

    The centralized error handlers read the tag to pick
    operation-specific mappings.
    """

    def _tag(request: Request) -> None:
        setattr(request.state, OPERATION_STATE_KEY, operation)

    return _tag


def parse_originating_identity(header: str) -> PlatformContext:
    """Decode ``X-Broker-API-Originating-Identity: <platform> <base64 JSON>``.

    Raises:
        MalformedRequestError: If the header is not in the expected format.
    """
    platform, _, encoded = header.strip().partition(" ")
    if not platform or not encoded.strip():
        raise MalformedRequestError(
            "X-Broker-API-Originating-Identity must be '<platform> <base64 value>'"
        )
    try:
        properties = json.loads(base64.b64decode(encoded.strip(), validate=True))
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise MalformedRequestError(
            f"X-Broker-API-Originating-Identity value is not base64 JSON: {exc}"
        ) from exc
    if not isinstance(properties, dict):
        raise MalformedRequestError(
            "X-Broker-API-Originating-Identity value must be a JSON object"
        )
    return PlatformContext(platform=platform, properties=properties)


def get_request_info(
    request: Request,
    x_api_info_location: Optional[str] = Header(default=None),
    x_broker_api_originating_identity: Optional[str] = Header(default=None),
) -> BrokerRequestInfo:
    """Collect the per-exchange metadata shared by every broker request."""
    identity = None
    if x_broker_api_originating_identity:
        identity = parse_originating_identity(x_broker_api_originating_identity)
    return BrokerRequestInfo(
        platform_instance_id=request.path_params.get("platform_instance_id"),
        api_info_location=x_api_info_location,
        originating_identity=identity,
    )


# ------------------------------------------------------------------
# Collaborators
# ------------------------------------------------------------------


def get_settings(request: Request) -> Settings:
    """Return the Settings the running application was built with."""
    return request.app.state.settings


def get_broker_state(request: Request) -> InMemoryBrokerState:
    """Return the application-wide in-memory instance and binding state."""
    return request.app.state.broker_state


def get_catalog_service(request: Request) -> CatalogService:
    """Return the catalog loaded from the application's ``catalog_path``."""
    return request.app.state.catalog_service


def get_binding_service(
    state: InMemoryBrokerState = Depends(get_broker_state),
) -> ServiceInstanceBindingService:
    return InMemoryServiceInstanceBindingService(state)


def get_instance_service(
    state: InMemoryBrokerState = Depends(get_broker_state),
) -> ServiceInstanceService:
    return InMemoryServiceInstanceService(state)


# ------------------------------------------------------------------
# Use cases
# ------------------------------------------------------------------


def get_catalog_use_case(
    catalog_service: CatalogService = Depends(get_catalog_service),
) -> GetCatalogUseCase:
    """Build GetCatalogUseCase with its catalog collaborator."""
    return GetCatalogUseCase(catalog_service=catalog_service)


def get_create_binding_use_case(
    catalog_service: CatalogService = Depends(get_catalog_service),
    binding_service: ServiceInstanceBindingService = Depends(get_binding_service),
) -> CreateServiceInstanceBindingUseCase:
    """Build CreateServiceInstanceBindingUseCase with its collaborators."""
    return CreateServiceInstanceBindingUseCase(
        catalog_service=catalog_service,
        binding_service=binding_service,
    )


def get_get_binding_use_case(
    binding_service: ServiceInstanceBindingService = Depends(get_binding_service),
) -> GetServiceInstanceBindingUseCase:
    return GetServiceInstanceBindingUseCase(binding_service=binding_service)


def get_delete_binding_use_case(
    binding_service: ServiceInstanceBindingService = Depends(get_binding_service),
) -> DeleteServiceInstanceBindingUseCase:
    """Build DeleteServiceInstanceBindingUseCase with its binding collaborator."""
    return DeleteServiceInstanceBindingUseCase(binding_service=binding_service)


def get_create_instance_use_case(
    catalog_service: CatalogService = Depends(get_catalog_service),
    instance_service: ServiceInstanceService = Depends(get_instance_service),
) -> CreateServiceInstanceUseCase:
    """Build CreateServiceInstanceUseCase with its collaborators."""
    return CreateServiceInstanceUseCase(
        catalog_service=catalog_service,
        instance_service=instance_service,
    )


def get_update_instance_use_case(
    catalog_service: CatalogService = Depends(get_catalog_service),
    instance_service: ServiceInstanceService = Depends(get_instance_service),
) -> UpdateServiceInstanceUseCase:
    return UpdateServiceInstanceUseCase(
        catalog_service=catalog_service,
        instance_service=instance_service,
    )


def get_delete_instance_use_case(
    instance_service: ServiceInstanceService = Depends(get_instance_service),
) -> DeleteServiceInstanceUseCase:
    return DeleteServiceInstanceUseCase(instance_service=instance_service)
