"""
Use case: Provision a service instance.

Input: CreateServiceInstanceRequest
Output: CreateServiceInstanceResponse
Side effects: Delegated to the service instance collaborator.
Failure cases: ServiceDefinitionUnknownError, ServiceInstanceAlreadyExistsError,
    AsyncRequiredError.
"""

import dataclasses
import logging

from servicebroker.application.broker.catalog_lookup import resolve_service_definition
from servicebroker.domain.broker.entities import (
    CreateServiceInstanceRequest,
    CreateServiceInstanceResponse,
)
from servicebroker.domain.broker.ports import CatalogService, ServiceInstanceService

logger = logging.getLogger(__name__)


class CreateServiceInstanceUseCase:
    """Orchestrates provisioning.

    Resolves the service definition, then delegates to the
    ServiceInstanceService.
    """

    def __init__(
        self,
        catalog_service: CatalogService,
        instance_service: ServiceInstanceService,
    ) -> None:
        self._catalog_service = catalog_service
        self._instance_service = instance_service

    def execute(self, request: CreateServiceInstanceRequest) -> CreateServiceInstanceResponse:
        """Run the provisioning use case.

        Raises:
            ServiceDefinitionUnknownError: If the service id is not in the catalog.
        """
        definition = resolve_service_definition(
            self._catalog_service, request.service_definition_id
        )
        logger.info(
            "Creating service instance: service_instance_id=%s, plan_id=%s",
            request.service_instance_id,
            request.plan_id,
        )
        return self._instance_service.create_service_instance(
            dataclasses.replace(request, service_definition=definition)
        )
