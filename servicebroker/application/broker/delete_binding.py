"""
Use case: Delete a service instance binding.

Input: DeleteServiceInstanceBindingRequest
Output: None
Side effects: Delegated to the binding collaborator.
Failure cases: BindingDoesNotExistError, ServiceInstanceDoesNotExistError.
"""

import logging

from servicebroker.domain.broker.entities import DeleteServiceInstanceBindingRequest
from servicebroker.domain.broker.ports import ServiceInstanceBindingService

logger = logging.getLogger(__name__)


class DeleteServiceInstanceBindingUseCase:
    """Hands the delete request to the binding collaborator, once."""

    def __init__(self, binding_service: ServiceInstanceBindingService) -> None:
        self._binding_service = binding_service

    def execute(self, request: DeleteServiceInstanceBindingRequest) -> None:
        """Run the delete binding use case."""
        logger.info(
            "Deleting binding: service_instance_id=%s, binding_id=%s",
            request.service_instance_id,
            request.binding_id,
        )
        self._binding_service.delete_service_instance_binding(request)
