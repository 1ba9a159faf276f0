"""
Adapter: In-memory service instance bindings.

Implements ServiceInstanceBindingService port.
Repeating an identical bind returns the stored response flagged with
``binding_existed``; a bind with different attributes is a conflict.
"""

import dataclasses
import logging
import secrets

from servicebroker.domain.broker.entities import (
    CreateServiceInstanceAppBindingResponse,
    CreateServiceInstanceBindingRequest,
    CreateServiceInstanceBindingResponse,
    CreateServiceInstanceRouteBindingResponse,
    DeleteServiceInstanceBindingRequest,
    GetServiceInstanceAppBindingResponse,
    GetServiceInstanceBindingRequest,
    GetServiceInstanceBindingResponse,
    GetServiceInstanceRouteBindingResponse,
)
from servicebroker.domain.broker.errors import (
    BindingAlreadyExistsError,
    BindingDoesNotExistError,
    ServiceInstanceDoesNotExistError,
)
from servicebroker.domain.broker.ports import ServiceInstanceBindingService
from servicebroker.infrastructure.broker.in_memory_state import (
    InMemoryBrokerState,
    StoredBinding,
)

logger = logging.getLogger(__name__)

ROUTE_FORWARDING = "route_forwarding"


def _new_response(
    request: CreateServiceInstanceBindingRequest,
) -> CreateServiceInstanceBindingResponse:
    definition = request.service_definition
    if definition is not None and ROUTE_FORWARDING in definition.requires:
        return CreateServiceInstanceRouteBindingResponse(
            route_service_url=request.parameters.get("route_service_url"),
        )
    return CreateServiceInstanceAppBindingResponse(
        credentials={
            "uri": f"memory://{request.service_instance_id}/{request.binding_id}",
            "username": request.binding_id,
            "password": secrets.token_urlsafe(16),
        },
    )


def _same_binding(stored: StoredBinding, request: CreateServiceInstanceBindingRequest) -> bool:
    return (
        stored.service_definition_id == request.service_definition_id
        and stored.plan_id == request.plan_id
        and stored.app_guid == request.app_guid
        and dict(stored.bind_resource) == dict(request.bind_resource)
        and dict(stored.parameters) == dict(request.parameters)
    )


class InMemoryServiceInstanceBindingService(ServiceInstanceBindingService):
    """Keeps bindings in an InMemoryBrokerState next to their instances."""

    def __init__(self, state: InMemoryBrokerState) -> None:
        self._state = state

    def create_service_instance_binding(
        self, request: CreateServiceInstanceBindingRequest
    ) -> CreateServiceInstanceBindingResponse:
        key = (request.service_instance_id, request.binding_id)
        with self._state.lock:
            if request.service_instance_id not in self._state.instances:
                raise ServiceInstanceDoesNotExistError(request.service_instance_id)

            stored = self._state.bindings.get(key)
            if stored is not None:
                if not _same_binding(stored, request):
                    raise BindingAlreadyExistsError(
                        request.service_instance_id, request.binding_id
                    )
                return dataclasses.replace(stored.response, binding_existed=True)

            response = _new_response(request)
            self._state.bindings[key] = StoredBinding(
                service_instance_id=request.service_instance_id,
                binding_id=request.binding_id,
                service_definition_id=request.service_definition_id,
                plan_id=request.plan_id,
                app_guid=request.app_guid,
                bind_resource=dict(request.bind_resource),
                parameters=dict(request.parameters),
                response=response,
            )
        logger.info(
            "Created binding %s for service instance %s",
            request.binding_id,
            request.service_instance_id,
        )
        return response

    def get_service_instance_binding(
        self, request: GetServiceInstanceBindingRequest
    ) -> GetServiceInstanceBindingResponse:
        with self._state.lock:
            if request.service_instance_id not in self._state.instances:
                raise ServiceInstanceDoesNotExistError(request.service_instance_id)
            stored = self._state.bindings.get(
                (request.service_instance_id, request.binding_id)
            )
        if stored is None:
            raise BindingDoesNotExistError(request.binding_id)

        response = stored.response
        if isinstance(response, CreateServiceInstanceRouteBindingResponse):
            return GetServiceInstanceRouteBindingResponse(
                parameters=stored.parameters,
                route_service_url=response.route_service_url,
            )
        if isinstance(response, CreateServiceInstanceAppBindingResponse):
            return GetServiceInstanceAppBindingResponse(
                parameters=stored.parameters,
                credentials=response.credentials,
                syslog_drain_url=response.syslog_drain_url,
                volume_mounts=response.volume_mounts,
            )
        return GetServiceInstanceBindingResponse(parameters=stored.parameters)

    def delete_service_instance_binding(
        self, request: DeleteServiceInstanceBindingRequest
    ) -> None:
        key = (request.service_instance_id, request.binding_id)
        with self._state.lock:
            if request.service_instance_id not in self._state.instances:
                raise ServiceInstanceDoesNotExistError(request.service_instance_id)
            if self._state.bindings.pop(key, None) is None:
                raise BindingDoesNotExistError(request.binding_id)
        logger.info(
            "Deleted binding %s for service instance %s",
            request.binding_id,
            request.service_instance_id,
        )
