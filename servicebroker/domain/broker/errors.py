"""
Domain-specific errors for the broker bounded context.

All failure conditions a broker collaborator may signal are defined here.
These are mapped to HTTP responses at the interface layer.
No framework imports allowed.
"""

from typing import Optional


class ServiceBrokerError(Exception):
    """Base error for all broker domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class BindingAlreadyExistsError(ServiceBrokerError):
    """Raised when a binding exists with different parameters."""

    def __init__(self, service_instance_id: str, binding_id: str) -> None:
        super().__init__(
            "Service instance binding already exists: "
            f"serviceInstanceId={service_instance_id}, bindingId={binding_id}"
        )
        self.service_instance_id = service_instance_id
        self.binding_id = binding_id


class BindingDoesNotExistError(ServiceBrokerError):
    """Raised when a binding to delete or fetch is unknown."""

    def __init__(self, binding_id: str) -> None:
        super().__init__(f"Service instance binding does not exist: bindingId={binding_id}")
        self.binding_id = binding_id


class ServiceInstanceDoesNotExistError(ServiceBrokerError):
    """Raised when the targeted service instance is unknown."""

    def __init__(self, service_instance_id: str) -> None:
        super().__init__(
            f"Service instance does not exist: serviceInstanceId={service_instance_id}"
        )
        self.service_instance_id = service_instance_id


class ServiceDefinitionUnknownError(ServiceBrokerError):
    """Raised when a service definition id is not in the catalog."""

    def __init__(self, service_definition_id: str) -> None:
        super().__init__(
            f"Service definition does not exist: serviceDefinitionId={service_definition_id}"
        )
        self.service_definition_id = service_definition_id


class MalformedRequestError(ServiceBrokerError):
    """Raised when a request is malformed or carries unsupported values."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Malformed request: {reason}")
        self.reason = reason


class ServiceInstanceAlreadyExistsError(ServiceBrokerError):
    """Raised when an instance exists with different attributes."""

    def __init__(self, service_instance_id: str, service_definition_id: str) -> None:
        super().__init__(
            "Service instance already exists: "
            f"serviceInstanceId={service_instance_id}, "
            f"serviceDefinitionId={service_definition_id}"
        )
        self.service_instance_id = service_instance_id
        self.service_definition_id = service_definition_id


class InstanceUpdateNotSupportedError(ServiceBrokerError):
    """Raised when the requested instance update cannot be performed."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Service instance update not supported: {reason}")
        self.reason = reason


class AsyncRequiredError(ServiceBrokerError):
    """Raised when an operation can only complete asynchronously."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            f"This service broker requires accepts_incomplete=true for {operation}"
        )
        self.operation = operation


class ConcurrencyError(ServiceBrokerError):
    """Raised when another operation on the same resource is running."""

    def __init__(self, resource_id: str) -> None:
        super().__init__(
            f"Another operation for this resource is in progress: id={resource_id}"
        )
        self.resource_id = resource_id


class OperationInProgressError(ServiceBrokerError):
    """Raised when the requested operation is still being processed."""

    def __init__(self, operation: Optional[str] = None) -> None:
        super().__init__("Service broker operation is in progress")
        self.operation = operation


class ApiVersionMismatchError(ServiceBrokerError):
    """Raised when the platform speaks an unsupported broker API version."""

    def __init__(self, expected: str, provided: Optional[str]) -> None:
        super().__init__(
            "The provided service broker API version is not supported: "
            f"Expected Version = {expected}, Provided Version = {provided}"
        )
        self.expected = expected
        self.provided = provided
