"""
Port interfaces (ABCs) for the broker bounded context.

Ports define the contracts the broker requires from its collaborators.
Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.
"""

from abc import ABC, abstractmethod
from typing import Optional

from servicebroker.domain.broker.entities import (
    Catalog,
    CreateServiceInstanceBindingRequest,
    CreateServiceInstanceBindingResponse,
    CreateServiceInstanceRequest,
    CreateServiceInstanceResponse,
    DeleteServiceInstanceBindingRequest,
    DeleteServiceInstanceRequest,
    DeleteServiceInstanceResponse,
    GetServiceInstanceBindingRequest,
    GetServiceInstanceBindingResponse,
    ServiceDefinition,
    UpdateServiceInstanceRequest,
    UpdateServiceInstanceResponse,
)


class CatalogService(ABC):
    """Port for reading the broker's service catalog."""

    @abstractmethod
    def get_catalog(self) -> Catalog:
        """Return the full catalog."""
        raise NotImplementedError

    @abstractmethod
    def get_service_definition(self, service_id: str) -> Optional[ServiceDefinition]:
        """Return the service definition with the given id, or None if unknown."""
        raise NotImplementedError


class ServiceInstanceBindingService(ABC):
    """Port for creating, fetching and deleting service instance bindings.

    Implementations signal failures by raising errors from
    ``servicebroker.domain.broker.errors``.
    """

    @abstractmethod
    def create_service_instance_binding(
        self, request: CreateServiceInstanceBindingRequest
    ) -> Optional[CreateServiceInstanceBindingResponse]:
        """Create a binding.

        Returns:
            The binding response, or None when there is nothing to report.
            ``binding_existed`` must be True when an identical binding was
            already in place.

        Raises:
            BindingAlreadyExistsError: Binding exists with different parameters.
            ServiceInstanceDoesNotExistError: Target instance is unknown.
        """
        raise NotImplementedError

    @abstractmethod
    def get_service_instance_binding(
        self, request: GetServiceInstanceBindingRequest
    ) -> GetServiceInstanceBindingResponse:
        """Return an existing binding.

        Raises:
            BindingDoesNotExistError: Binding is unknown.
        """
        raise NotImplementedError

    @abstractmethod
    def delete_service_instance_binding(
        self, request: DeleteServiceInstanceBindingRequest
    ) -> None:
        """Delete a binding.

        Raises:
            BindingDoesNotExistError: Binding is unknown.
            ServiceInstanceDoesNotExistError: Target instance is unknown.
        """
        raise NotImplementedError


class ServiceInstanceService(ABC):
    """Port for provisioning, updating and deprovisioning service instances."""

    @abstractmethod
    def create_service_instance(
        self, request: CreateServiceInstanceRequest
    ) -> CreateServiceInstanceResponse:
        """Provision a service instance.

        Raises:
            ServiceInstanceAlreadyExistsError: Instance exists with other attributes.
            AsyncRequiredError: Only asynchronous provisioning is possible.
        """
        raise NotImplementedError

    @abstractmethod
    def update_service_instance(
        self, request: UpdateServiceInstanceRequest
    ) -> UpdateServiceInstanceResponse:
        """Update a service instance.

        Raises:
            ServiceInstanceDoesNotExistError: Instance is unknown.
            InstanceUpdateNotSupportedError: The change cannot be applied.
        """
        raise NotImplementedError

    @abstractmethod
    def delete_service_instance(
        self, request: DeleteServiceInstanceRequest
    ) -> DeleteServiceInstanceResponse:
        """Deprovision a service instance.

        Raises:
            ServiceInstanceDoesNotExistError: Instance is unknown.
        """
        raise NotImplementedError
