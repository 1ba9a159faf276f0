"""
Use case: Fetch a service instance binding.

Input: GetServiceInstanceBindingRequest
Output: GetServiceInstanceBindingResponse
Side effects: None.
Failure cases: BindingDoesNotExistError, ServiceInstanceDoesNotExistError.
"""

import logging

from servicebroker.domain.broker.entities import (
    GetServiceInstanceBindingRequest,
    GetServiceInstanceBindingResponse,
)
from servicebroker.domain.broker.ports import ServiceInstanceBindingService

logger = logging.getLogger(__name__)


class GetServiceInstanceBindingUseCase:
    def __init__(self, binding_service: ServiceInstanceBindingService) -> None:
        self._binding_service = binding_service

    def execute(
        self, request: GetServiceInstanceBindingRequest
    ) -> GetServiceInstanceBindingResponse:
        logger.debug(
            "Fetching binding: service_instance_id=%s, binding_id=%s",
            request.service_instance_id,
            request.binding_id,
        )
        return self._binding_service.get_service_instance_binding(request)
