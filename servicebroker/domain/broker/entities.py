"""
Domain entities for the broker bounded context.

Every value here is an immutable, flat record constructed once per
HTTP exchange. Behavior lives in use cases and the interface layer.
They contain no framework imports and no IO operations.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class Plan:
    """A plan offered by a service definition."""

    id: str
    name: str
    description: str
    free: bool = True
    bindable: Optional[bool] = None
    metadata: Mapping[str, Any] = field(default_factory=dict)
    schemas: Optional[Mapping[str, Any]] = None
    maintenance_info: Optional[Mapping[str, Any]] = None


@dataclass(frozen=True)
class DashboardClient:
    """OAuth client the platform registers for the service dashboard."""

    id: str
    secret: Optional[str] = None
    redirect_uri: Optional[str] = None


@dataclass(frozen=True)
class ServiceDefinition:
    """A service offered in the broker catalog."""

    id: str
    name: str
    description: str
    bindable: bool = False
    plans: tuple[Plan, ...] = ()
    tags: tuple[str, ...] = ()
    requires: tuple[str, ...] = ()
    metadata: Mapping[str, Any] = field(default_factory=dict)
    plan_updateable: bool = False
    instances_retrievable: bool = False
    bindings_retrievable: bool = False
    dashboard_client: Optional[DashboardClient] = None

    @property
    def plan_ids(self) -> frozenset[str]:
        """Return the identifiers of all plans of this service."""
        return frozenset(plan.id for plan in self.plans)


@dataclass(frozen=True)
class Catalog:
    """Ordered sequence of service definitions exposed by the broker."""

    services: tuple[ServiceDefinition, ...] = ()


@dataclass(frozen=True)
class PlatformContext:
    """Platform-specific contextual data.

    Used for the OSB ``context`` body object and for the decoded
    X-Broker-API-Originating-Identity header.
    """

    platform: str
    properties: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class BrokerRequestInfo:
    """Per-exchange metadata shared by every broker request.

    Attributes:
        platform_instance_id: Optional leading path segment naming the platform.
        api_info_location: Value of the X-Api-Info-Location header.
        originating_identity: Decoded X-Broker-API-Originating-Identity header.
    """

    platform_instance_id: Optional[str] = None
    api_info_location: Optional[str] = None
    originating_identity: Optional[PlatformContext] = None


# ------------------------------------------------------------------
# Service instance bindings
# ------------------------------------------------------------------


@dataclass(frozen=True)
class CreateServiceInstanceBindingRequest:
    """Request to bind an application or route to a service instance.

    ``service_definition`` is attached by the use case once
    ``service_definition_id`` resolves against the catalog.
    """

    service_instance_id: str
    binding_id: str
    service_definition_id: str
    plan_id: str
    app_guid: Optional[str] = None
    bind_resource: Mapping[str, Any] = field(default_factory=dict)
    context: Optional[PlatformContext] = None
    parameters: Mapping[str, Any] = field(default_factory=dict)
    service_definition: Optional[ServiceDefinition] = None
    info: BrokerRequestInfo = field(default_factory=BrokerRequestInfo)


@dataclass(frozen=True)
class CreateServiceInstanceBindingResponse:
    """Base response for a created binding.

    ``binding_existed`` is reported by the binding collaborator when the
    binding was already in place with identical parameters.
    """

    binding_existed: bool = False


@dataclass(frozen=True)
class VolumeMount:
    """A volume mount handed to an application binding."""

    driver: str
    container_dir: str
    mode: str
    device_type: str
    device: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class CreateServiceInstanceAppBindingResponse(CreateServiceInstanceBindingResponse):
    """Binding response for an application binding."""

    credentials: Mapping[str, Any] = field(default_factory=dict)
    syslog_drain_url: Optional[str] = None
    volume_mounts: tuple[VolumeMount, ...] = ()


@dataclass(frozen=True)
class CreateServiceInstanceRouteBindingResponse(CreateServiceInstanceBindingResponse):
    """Binding response for a route service binding."""

    route_service_url: Optional[str] = None


@dataclass(frozen=True)
class DeleteServiceInstanceBindingRequest:
    """Request to remove a binding from a service instance."""

    service_instance_id: str
    binding_id: str
    service_definition_id: str
    plan_id: str
    info: BrokerRequestInfo = field(default_factory=BrokerRequestInfo)


@dataclass(frozen=True)
class GetServiceInstanceBindingRequest:
    """Request to fetch an existing binding."""

    service_instance_id: str
    binding_id: str
    info: BrokerRequestInfo = field(default_factory=BrokerRequestInfo)


@dataclass(frozen=True)
class GetServiceInstanceBindingResponse:
    """Base response for a fetched binding."""

    parameters: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class GetServiceInstanceAppBindingResponse(GetServiceInstanceBindingResponse):
    """Fetched application binding."""

    credentials: Mapping[str, Any] = field(default_factory=dict)
    syslog_drain_url: Optional[str] = None
    volume_mounts: tuple[VolumeMount, ...] = ()


@dataclass(frozen=True)
class GetServiceInstanceRouteBindingResponse(GetServiceInstanceBindingResponse):
    """Fetched route service binding."""

    route_service_url: Optional[str] = None


# ------------------------------------------------------------------
# Service instances
# ------------------------------------------------------------------


@dataclass(frozen=True)
class CreateServiceInstanceRequest:
    """Request to provision a service instance."""

    service_instance_id: str
    service_definition_id: str
    plan_id: str
    organization_guid: Optional[str] = None
    space_guid: Optional[str] = None
    context: Optional[PlatformContext] = None
    parameters: Mapping[str, Any] = field(default_factory=dict)
    accepts_incomplete: bool = False
    service_definition: Optional[ServiceDefinition] = None
    info: BrokerRequestInfo = field(default_factory=BrokerRequestInfo)


@dataclass(frozen=True)
class CreateServiceInstanceResponse:
    """Response for a provisioned service instance."""

    dashboard_url: Optional[str] = None
    operation: Optional[str] = None
    is_async: bool = False
    instance_existed: bool = False


@dataclass(frozen=True)
class PreviousValues:
    """Values of the instance before an update, as sent by the platform."""

    service_definition_id: Optional[str] = None
    plan_id: Optional[str] = None
    organization_guid: Optional[str] = None
    space_guid: Optional[str] = None


@dataclass(frozen=True)
class UpdateServiceInstanceRequest:
    """Request to change the plan or parameters of a service instance."""

    service_instance_id: str
    service_definition_id: str
    plan_id: Optional[str] = None
    previous_values: Optional[PreviousValues] = None
    context: Optional[PlatformContext] = None
    parameters: Mapping[str, Any] = field(default_factory=dict)
    accepts_incomplete: bool = False
    service_definition: Optional[ServiceDefinition] = None
    info: BrokerRequestInfo = field(default_factory=BrokerRequestInfo)


@dataclass(frozen=True)
class UpdateServiceInstanceResponse:
    """Response for an updated service instance."""

    dashboard_url: Optional[str] = None
    operation: Optional[str] = None
    is_async: bool = False


@dataclass(frozen=True)
class DeleteServiceInstanceRequest:
    """Request to deprovision a service instance."""

    service_instance_id: str
    service_definition_id: str
    plan_id: str
    accepts_incomplete: bool = False
    info: BrokerRequestInfo = field(default_factory=BrokerRequestInfo)


@dataclass(frozen=True)
class DeleteServiceInstanceResponse:
    """Response for a deprovisioned service instance."""

    is_async: bool = False
    operation: Optional[str] = None
