"""
Adapter: In-memory service instances.

Implements ServiceInstanceService port.
Provisioning is synchronous and idempotent: repeating an identical
request reports ``instance_existed`` instead of provisioning twice.
"""

import logging

from servicebroker.domain.broker.entities import (
    CreateServiceInstanceRequest,
    CreateServiceInstanceResponse,
    DeleteServiceInstanceRequest,
    DeleteServiceInstanceResponse,
    ServiceDefinition,
    UpdateServiceInstanceRequest,
    UpdateServiceInstanceResponse,
)
from servicebroker.domain.broker.errors import (
    InstanceUpdateNotSupportedError,
    MalformedRequestError,
    ServiceInstanceAlreadyExistsError,
    ServiceInstanceDoesNotExistError,
)
from servicebroker.domain.broker.ports import ServiceInstanceService
from servicebroker.infrastructure.broker.in_memory_state import (
    InMemoryBrokerState,
    StoredInstance,
)

logger = logging.getLogger(__name__)


def _require_plan(definition: ServiceDefinition | None, plan_id: str) -> None:
    if definition is not None and plan_id not in definition.plan_ids:
        raise MalformedRequestError(
            f"plan {plan_id} is not offered by service {definition.id}"
        )


class InMemoryServiceInstanceService(ServiceInstanceService):
    """Keeps provisioned instances in an InMemoryBrokerState."""

    def __init__(self, state: InMemoryBrokerState) -> None:
        self._state = state

    def create_service_instance(
        self, request: CreateServiceInstanceRequest
    ) -> CreateServiceInstanceResponse:
        _require_plan(request.service_definition, request.plan_id)
        with self._state.lock:
            existing = self._state.instances.get(request.service_instance_id)
            if existing is not None:
                same = (
                    existing.service_definition_id == request.service_definition_id
                    and existing.plan_id == request.plan_id
                    and dict(existing.parameters) == dict(request.parameters)
                )
                if not same:
                    raise ServiceInstanceAlreadyExistsError(
                        request.service_instance_id, request.service_definition_id
                    )
                return CreateServiceInstanceResponse(instance_existed=True)

            self._state.instances[request.service_instance_id] = StoredInstance(
                service_instance_id=request.service_instance_id,
                service_definition_id=request.service_definition_id,
                plan_id=request.plan_id,
                organization_guid=request.organization_guid,
                space_guid=request.space_guid,
                parameters=dict(request.parameters),
                context=request.context,
            )
        logger.info("Provisioned service instance %s", request.service_instance_id)
        return CreateServiceInstanceResponse()

    def update_service_instance(
        self, request: UpdateServiceInstanceRequest
    ) -> UpdateServiceInstanceResponse:
        with self._state.lock:
            existing = self._state.instances.get(request.service_instance_id)
            if existing is None:
                raise ServiceInstanceDoesNotExistError(request.service_instance_id)

            if request.plan_id and request.plan_id != existing.plan_id:
                definition = request.service_definition
                if definition is not None and not definition.plan_updateable:
                    raise InstanceUpdateNotSupportedError(
                        f"service {definition.id} does not allow plan changes"
                    )
                _require_plan(definition, request.plan_id)
                existing.plan_id = request.plan_id

            existing.parameters = {**existing.parameters, **request.parameters}
            if request.context is not None:
                existing.context = request.context
        logger.info("Updated service instance %s", request.service_instance_id)
        return UpdateServiceInstanceResponse()

    def delete_service_instance(
        self, request: DeleteServiceInstanceRequest
    ) -> DeleteServiceInstanceResponse:
        with self._state.lock:
            if self._state.instances.pop(request.service_instance_id, None) is None:
                raise ServiceInstanceDoesNotExistError(request.service_instance_id)
            orphaned = [
                key for key in self._state.bindings
                if key[0] == request.service_instance_id
            ]
            for key in orphaned:
                del self._state.bindings[key]
        logger.info(
            "Deprovisioned service instance %s (%d bindings dropped)",
            request.service_instance_id,
            len(orphaned),
        )
        return DeleteServiceInstanceResponse()
