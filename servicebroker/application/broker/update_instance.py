"""
Use case: Update a service instance.

Input: UpdateServiceInstanceRequest
Output: UpdateServiceInstanceResponse
Side effects: Delegated to the service instance collaborator.
Failure cases: ServiceDefinitionUnknownError, ServiceInstanceDoesNotExistError,
    InstanceUpdateNotSupportedError.
"""

import dataclasses
import logging

from servicebroker.application.broker.catalog_lookup import resolve_service_definition
from servicebroker.domain.broker.entities import (
    UpdateServiceInstanceRequest,
    UpdateServiceInstanceResponse,
)
from servicebroker.domain.broker.ports import CatalogService, ServiceInstanceService

logger = logging.getLogger(__name__)


class UpdateServiceInstanceUseCase:
    """Resolves the service definition and delegates the update."""

    def __init__(
        self,
        catalog_service: CatalogService,
        instance_service: ServiceInstanceService,
    ) -> None:
        self._catalog_service = catalog_service
        self._instance_service = instance_service

    def execute(self, request: UpdateServiceInstanceRequest) -> UpdateServiceInstanceResponse:
        """Run the update use case."""
        definition = resolve_service_definition(
            self._catalog_service, request.service_definition_id
        )
        logger.info(
            "Updating service instance: service_instance_id=%s, plan_id=%s",
            request.service_instance_id,
            request.plan_id,
        )
        return self._instance_service.update_service_instance(
            dataclasses.replace(request, service_definition=definition)
        )
