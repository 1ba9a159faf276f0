"""
Use case: Create a service instance binding.

Input: CreateServiceInstanceBindingRequest
Output: CreateServiceInstanceBindingResponse or None
Side effects: Delegated to the binding collaborator.
Failure cases: ServiceDefinitionUnknownError, BindingAlreadyExistsError,
    ServiceInstanceDoesNotExistError.
"""

import dataclasses
import logging
from typing import Optional

from servicebroker.application.broker.catalog_lookup import resolve_service_definition
from servicebroker.domain.broker.entities import (
    CreateServiceInstanceBindingRequest,
    CreateServiceInstanceBindingResponse,
)
from servicebroker.domain.broker.ports import CatalogService, ServiceInstanceBindingService

logger = logging.getLogger(__name__)


class CreateServiceInstanceBindingUseCase:
    """Orchestrates binding creation.

    Resolves the service definition against the catalog, then calls the
    binding collaborator exactly once. Errors raised by the collaborator
    propagate untouched; ``binding_existed`` is whatever it reports.
    """

    def __init__(
        self,
        catalog_service: CatalogService,
        binding_service: ServiceInstanceBindingService,
    ) -> None:
        self._catalog_service = catalog_service
        self._binding_service = binding_service

    def execute(
        self, request: CreateServiceInstanceBindingRequest
    ) -> Optional[CreateServiceInstanceBindingResponse]:
        """Run the create binding use case.

        Args:
            request: The binding request as parsed from the HTTP exchange.

        Returns:
            The collaborator's response, possibly None.

        Raises:
            ServiceDefinitionUnknownError: If the service id is not in the catalog.
        """
        definition = resolve_service_definition(
            self._catalog_service, request.service_definition_id
        )
        logger.info(
            "Creating binding: service_instance_id=%s, binding_id=%s",
            request.service_instance_id,
            request.binding_id,
        )
        return self._binding_service.create_service_instance_binding(
            dataclasses.replace(request, service_definition=definition)
        )
