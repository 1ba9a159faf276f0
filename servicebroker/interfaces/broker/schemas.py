"""
Pydantic schemas for the Open Service Broker wire format.

These schemas define the API contract: request bodies are validated here
and domain responses are rendered through them. Field names are the
snake_case names used on the wire by the OSB API.
No business logic belongs here.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field

from servicebroker.domain.broker.entities import (
    Catalog,
    CreateServiceInstanceAppBindingResponse,
    CreateServiceInstanceResponse,
    CreateServiceInstanceRouteBindingResponse,
    DashboardClient,
    GetServiceInstanceAppBindingResponse,
    GetServiceInstanceRouteBindingResponse,
    Plan,
    PlatformContext,
    PreviousValues,
    ServiceDefinition,
    UpdateServiceInstanceResponse,
    VolumeMount,
)

SERVICE_ID_DESCRIPTION = "Catalog id of the service definition"
PLAN_ID_DESCRIPTION = "Catalog id of the plan"


def to_platform_context(raw: Optional[dict[str, Any]]) -> Optional[PlatformContext]:
    """Split an OSB ``context`` object into platform name and properties."""
    if raw is None:
        return None
    properties = {key: value for key, value in raw.items() if key != "platform"}
    return PlatformContext(platform=str(raw.get("platform", "")), properties=properties)


class ErrorMessage(BaseModel):
    """Body of every non-2xx broker response."""

    message: str


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    status: str
    version: str


# ------------------------------------------------------------------
# Catalog
# ------------------------------------------------------------------


class PlanSchema(BaseModel):
    id: str
    name: str
    description: str
    free: bool = True
    bindable: Optional[bool] = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    schemas: Optional[dict[str, Any]] = None
    maintenance_info: Optional[dict[str, Any]] = None

    @classmethod
    def from_domain(cls, plan: Plan) -> "PlanSchema":
        return cls(
            id=plan.id,
            name=plan.name,
            description=plan.description,
            free=plan.free,
            bindable=plan.bindable,
            metadata=dict(plan.metadata),
            schemas=dict(plan.schemas) if plan.schemas is not None else None,
            maintenance_info=(
                dict(plan.maintenance_info) if plan.maintenance_info is not None else None
            ),
        )


class DashboardClientSchema(BaseModel):
    id: str
    secret: Optional[str] = None
    redirect_uri: Optional[str] = None

    @classmethod
    def from_domain(cls, client: DashboardClient) -> "DashboardClientSchema":
        return cls(id=client.id, secret=client.secret, redirect_uri=client.redirect_uri)


class ServiceDefinitionSchema(BaseModel):
    id: str
    name: str
    description: str
    bindable: bool = False
    plans: list[PlanSchema] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    requires: list[str] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)
    plan_updateable: bool = False
    instances_retrievable: bool = False
    bindings_retrievable: bool = False
    dashboard_client: Optional[DashboardClientSchema] = None

    @classmethod
    def from_domain(cls, service: ServiceDefinition) -> "ServiceDefinitionSchema":
        return cls(
            id=service.id,
            name=service.name,
            description=service.description,
            bindable=service.bindable,
            plans=[PlanSchema.from_domain(plan) for plan in service.plans],
            tags=list(service.tags),
            requires=list(service.requires),
            metadata=dict(service.metadata),
            plan_updateable=service.plan_updateable,
            instances_retrievable=service.instances_retrievable,
            bindings_retrievable=service.bindings_retrievable,
            dashboard_client=(
                DashboardClientSchema.from_domain(service.dashboard_client)
                if service.dashboard_client is not None
                else None
            ),
        )


class CatalogSchema(BaseModel):
    """Response schema for GET /v2/catalog."""

    services: list[ServiceDefinitionSchema] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, catalog: Catalog) -> "CatalogSchema":
        return cls(
            services=[ServiceDefinitionSchema.from_domain(s) for s in catalog.services]
        )


# ------------------------------------------------------------------
# Service instance bindings
# ------------------------------------------------------------------


class CreateServiceInstanceBindingBody(BaseModel):
    """Request body for PUT .../service_bindings/{binding_id}."""

    service_id: str = Field(..., min_length=1, description=SERVICE_ID_DESCRIPTION)
    plan_id: str = Field(..., min_length=1, description=PLAN_ID_DESCRIPTION)
    app_guid: Optional[str] = None
    bind_resource: Optional[dict[str, Any]] = None
    context: Optional[dict[str, Any]] = None
    parameters: Optional[dict[str, Any]] = None


class VolumeMountSchema(BaseModel):
    driver: str
    container_dir: str
    mode: str
    device_type: str
    device: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, mount: VolumeMount) -> "VolumeMountSchema":
        return cls(
            driver=mount.driver,
            container_dir=mount.container_dir,
            mode=mount.mode,
            device_type=mount.device_type,
            device=dict(mount.device),
        )


class AppBindingResponseSchema(BaseModel):
    """Response schema for a created application binding.

    ``binding_existed`` is deliberately absent: it only selects the status code.
    """

    credentials: dict[str, Any] = Field(default_factory=dict)
    syslog_drain_url: Optional[str] = None
    volume_mounts: Optional[list[VolumeMountSchema]] = None

    @classmethod
    def from_domain(
        cls, response: CreateServiceInstanceAppBindingResponse
    ) -> "AppBindingResponseSchema":
        return cls(
            credentials=dict(response.credentials),
            syslog_drain_url=response.syslog_drain_url,
            volume_mounts=[VolumeMountSchema.from_domain(m) for m in response.volume_mounts]
            or None,
        )


class RouteBindingResponseSchema(BaseModel):
    """Response schema for a created route service binding."""

    route_service_url: Optional[str] = None

    @classmethod
    def from_domain(
        cls, response: CreateServiceInstanceRouteBindingResponse
    ) -> "RouteBindingResponseSchema":
        return cls(route_service_url=response.route_service_url)


class GetAppBindingResponseSchema(AppBindingResponseSchema):
    parameters: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_domain(
        cls, response: GetServiceInstanceAppBindingResponse
    ) -> "GetAppBindingResponseSchema":
        return cls(
            credentials=dict(response.credentials),
            syslog_drain_url=response.syslog_drain_url,
            volume_mounts=[VolumeMountSchema.from_domain(m) for m in response.volume_mounts]
            or None,
            parameters=dict(response.parameters),
        )


class GetRouteBindingResponseSchema(RouteBindingResponseSchema):
    parameters: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_domain(
        cls, response: GetServiceInstanceRouteBindingResponse
    ) -> "GetRouteBindingResponseSchema":
        return cls(
            route_service_url=response.route_service_url,
            parameters=dict(response.parameters),
        )


# ------------------------------------------------------------------
# Service instances
# ------------------------------------------------------------------


class CreateServiceInstanceBody(BaseModel):
    """Request body for PUT /v2/service_instances/{instance_id}."""

    service_id: str = Field(..., min_length=1, description=SERVICE_ID_DESCRIPTION)
    plan_id: str = Field(..., min_length=1, description=PLAN_ID_DESCRIPTION)
    organization_guid: Optional[str] = None
    space_guid: Optional[str] = None
    context: Optional[dict[str, Any]] = None
    parameters: Optional[dict[str, Any]] = None


class PreviousValuesSchema(BaseModel):
    service_id: Optional[str] = None
    plan_id: Optional[str] = None
    organization_id: Optional[str] = None
    space_id: Optional[str] = None

    def to_domain(self) -> PreviousValues:
        return PreviousValues(
            service_definition_id=self.service_id,
            plan_id=self.plan_id,
            organization_guid=self.organization_id,
            space_guid=self.space_id,
        )


class UpdateServiceInstanceBody(BaseModel):
    """Request body for PATCH /v2/service_instances/{instance_id}."""

    service_id: str = Field(..., min_length=1, description=SERVICE_ID_DESCRIPTION)
    plan_id: Optional[str] = Field(default=None, description=PLAN_ID_DESCRIPTION)
    previous_values: Optional[PreviousValuesSchema] = None
    context: Optional[dict[str, Any]] = None
    parameters: Optional[dict[str, Any]] = None


class ProvisionResponseSchema(BaseModel):
    """Response schema for provisioning and updating an instance."""

    dashboard_url: Optional[str] = None
    operation: Optional[str] = None

    @classmethod
    def from_domain(
        cls, response: CreateServiceInstanceResponse | UpdateServiceInstanceResponse
    ) -> "ProvisionResponseSchema":
        return cls(dashboard_url=response.dashboard_url, operation=response.operation)


class OperationResponseSchema(BaseModel):
    """Body of a 202 Accepted response."""

    operation: Optional[str] = None
