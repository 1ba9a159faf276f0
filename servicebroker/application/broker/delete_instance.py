"""
Use case: Deprovision a service instance.

Input: DeleteServiceInstanceRequest
Output: DeleteServiceInstanceResponse
Side effects: Delegated to the service instance collaborator.
Failure cases: ServiceInstanceDoesNotExistError.
"""

import logging

from servicebroker.domain.broker.entities import (
    DeleteServiceInstanceRequest,
    DeleteServiceInstanceResponse,
)
from servicebroker.domain.broker.ports import ServiceInstanceService

logger = logging.getLogger(__name__)


class DeleteServiceInstanceUseCase:
    """Hands the deprovision request to the service instance collaborator."""

    def __init__(self, instance_service: ServiceInstanceService) -> None:
        self._instance_service = instance_service

    def execute(self, request: DeleteServiceInstanceRequest) -> DeleteServiceInstanceResponse:
        """Run the deprovision use case."""
        logger.info(
            "Deleting service instance: service_instance_id=%s",
            request.service_instance_id,
        )
        return self._instance_service.delete_service_instance(request)
