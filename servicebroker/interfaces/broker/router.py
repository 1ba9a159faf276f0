"""
FastAPI router for the Open Service Broker API.

All routes delegate to use cases. No business logic here.
Input validation is handled by Pydantic schemas.
Status codes and bodies come from the outcome mapper; raised domain
errors are mapped by the centralized error handlers.
"""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from servicebroker.application.broker.create_binding import (
    CreateServiceInstanceBindingUseCase,
)
from servicebroker.application.broker.create_instance import CreateServiceInstanceUseCase
from servicebroker.application.broker.delete_binding import (
    DeleteServiceInstanceBindingUseCase,
)
from servicebroker.application.broker.delete_instance import DeleteServiceInstanceUseCase
from servicebroker.application.broker.get_binding import GetServiceInstanceBindingUseCase
from servicebroker.application.broker.get_catalog import GetCatalogUseCase
from servicebroker.application.broker.update_instance import UpdateServiceInstanceUseCase
from servicebroker.domain.broker.entities import (
    BrokerRequestInfo,
    CreateServiceInstanceBindingRequest,
    CreateServiceInstanceRequest,
    DeleteServiceInstanceBindingRequest,
    DeleteServiceInstanceRequest,
    GetServiceInstanceBindingRequest,
    UpdateServiceInstanceRequest,
)
from servicebroker.interfaces.broker.dependencies import (
    broker_operation,
    get_catalog_use_case,
    get_create_binding_use_case,
    get_create_instance_use_case,
    get_delete_binding_use_case,
    get_delete_instance_use_case,
    get_get_binding_use_case,
    get_request_info,
    get_update_instance_use_case,
)
from servicebroker.interfaces.broker.outcomes import (
    Operation,
    map_catalog,
    map_create_binding,
    map_create_service_instance,
    map_delete_binding,
    map_delete_service_instance,
    map_get_binding,
    map_update_service_instance,
    render,
)
from servicebroker.interfaces.broker.schemas import (
    AppBindingResponseSchema,
    CatalogSchema,
    CreateServiceInstanceBindingBody,
    CreateServiceInstanceBody,
    ErrorMessage,
    GetAppBindingResponseSchema,
    ProvisionResponseSchema,
    UpdateServiceInstanceBody,
    to_platform_context,
)

router = APIRouter(prefix="/v2", tags=["broker"])

SERVICE_ID_QUERY = "Catalog id of the service definition"
PLAN_ID_QUERY = "Catalog id of the plan"
ACCEPTS_INCOMPLETE_QUERY = "Platform accepts an asynchronous operation"


@router.get(
    "/catalog",
    response_model=CatalogSchema,
    dependencies=[Depends(broker_operation(Operation.GET_CATALOG))],
    summary="Get the service catalog",
)
def get_catalog(
    use_case: GetCatalogUseCase = Depends(get_catalog_use_case),
) -> Response:
    """Return the catalog exactly as the catalog collaborator provides it."""
    return render(map_catalog(use_case.execute()))


# ------------------------------------------------------------------
# Service instance bindings
# ------------------------------------------------------------------


@router.put(
    "/service_instances/{instance_id}/service_bindings/{binding_id}",
    response_model=AppBindingResponseSchema,
    status_code=201,
    responses={
        200: {"model": AppBindingResponseSchema},
        409: {"model": ErrorMessage},
        422: {"model": ErrorMessage},
    },
    dependencies=[Depends(broker_operation(Operation.CREATE_BINDING))],
    summary="Create a service instance binding",
)
def create_service_instance_binding(
    instance_id: str,
    binding_id: str,
    body: CreateServiceInstanceBindingBody,
    info: BrokerRequestInfo = Depends(get_request_info),
    use_case: CreateServiceInstanceBindingUseCase = Depends(get_create_binding_use_case),
) -> Response:
    """Bind to a service instance; 200 when the identical binding already existed."""
    request = CreateServiceInstanceBindingRequest(
        service_instance_id=instance_id,
        binding_id=binding_id,
        service_definition_id=body.service_id,
        plan_id=body.plan_id,
        app_guid=body.app_guid,
        bind_resource=body.bind_resource or {},
        context=to_platform_context(body.context),
        parameters=body.parameters or {},
        info=info,
    )
    return render(map_create_binding(use_case.execute(request)))


@router.get(
    "/service_instances/{instance_id}/service_bindings/{binding_id}",
    response_model=GetAppBindingResponseSchema,
    responses={404: {"model": ErrorMessage}},
    dependencies=[Depends(broker_operation(Operation.GET_BINDING))],
    summary="Fetch a service instance binding",
)
def get_service_instance_binding(
    instance_id: str,
    binding_id: str,
    info: BrokerRequestInfo = Depends(get_request_info),
    use_case: GetServiceInstanceBindingUseCase = Depends(get_get_binding_use_case),
) -> Response:
    request = GetServiceInstanceBindingRequest(
        service_instance_id=instance_id,
        binding_id=binding_id,
        info=info,
    )
    return render(map_get_binding(use_case.execute(request)))


@router.delete(
    "/service_instances/{instance_id}/service_bindings/{binding_id}",
    responses={410: {"description": "Binding does not exist"}, 422: {"model": ErrorMessage}},
    dependencies=[Depends(broker_operation(Operation.DELETE_BINDING))],
    summary="Delete a service instance binding",
)
def delete_service_instance_binding(
    instance_id: str,
    binding_id: str,
    service_id: str = Query(..., min_length=1, description=SERVICE_ID_QUERY),
    plan_id: str = Query(..., min_length=1, description=PLAN_ID_QUERY),
    info: BrokerRequestInfo = Depends(get_request_info),
    use_case: DeleteServiceInstanceBindingUseCase = Depends(get_delete_binding_use_case),
) -> Response:
    """Unbind; both success and an already missing binding answer ``{}``."""
    request = DeleteServiceInstanceBindingRequest(
        service_instance_id=instance_id,
        binding_id=binding_id,
        service_definition_id=service_id,
        plan_id=plan_id,
        info=info,
    )
    use_case.execute(request)
    return render(map_delete_binding())


# ------------------------------------------------------------------
# Service instances
# ------------------------------------------------------------------


@router.put(
    "/service_instances/{instance_id}",
    response_model=ProvisionResponseSchema,
    status_code=201,
    responses={
        200: {"model": ProvisionResponseSchema},
        202: {"model": ProvisionResponseSchema},
        409: {"model": ErrorMessage},
        422: {"model": ErrorMessage},
    },
    dependencies=[Depends(broker_operation(Operation.CREATE_SERVICE_INSTANCE))],
    summary="Provision a service instance",
)
def create_service_instance(
    instance_id: str,
    body: CreateServiceInstanceBody,
    accepts_incomplete: bool = Query(False, description=ACCEPTS_INCOMPLETE_QUERY),
    info: BrokerRequestInfo = Depends(get_request_info),
    use_case: CreateServiceInstanceUseCase = Depends(get_create_instance_use_case),
) -> Response:
    request = CreateServiceInstanceRequest(
        service_instance_id=instance_id,
        service_definition_id=body.service_id,
        plan_id=body.plan_id,
        organization_guid=body.organization_guid,
        space_guid=body.space_guid,
        context=to_platform_context(body.context),
        parameters=body.parameters or {},
        accepts_incomplete=accepts_incomplete,
        info=info,
    )
    return render(map_create_service_instance(use_case.execute(request)))


@router.patch(
    "/service_instances/{instance_id}",
    response_model=ProvisionResponseSchema,
    responses={202: {"model": ProvisionResponseSchema}, 422: {"model": ErrorMessage}},
    dependencies=[Depends(broker_operation(Operation.UPDATE_SERVICE_INSTANCE))],
    summary="Update a service instance",
)
def update_service_instance(
    instance_id: str,
    body: UpdateServiceInstanceBody,
    accepts_incomplete: bool = Query(False, description=ACCEPTS_INCOMPLETE_QUERY),
    info: BrokerRequestInfo = Depends(get_request_info),
    use_case: UpdateServiceInstanceUseCase = Depends(get_update_instance_use_case),
) -> Response:
    request = UpdateServiceInstanceRequest(
        service_instance_id=instance_id,
        service_definition_id=body.service_id,
        plan_id=body.plan_id,
        previous_values=body.previous_values.to_domain() if body.previous_values else None,
        context=to_platform_context(body.context),
        parameters=body.parameters or {},
        accepts_incomplete=accepts_incomplete,
        info=info,
    )
    return render(map_update_service_instance(use_case.execute(request)))


@router.delete(
    "/service_instances/{instance_id}",
    responses={410: {"description": "Service instance does not exist"}},
    dependencies=[Depends(broker_operation(Operation.DELETE_SERVICE_INSTANCE))],
    summary="Deprovision a service instance",
)
def delete_service_instance(
    instance_id: str,
    service_id: str = Query(..., min_length=1, description=SERVICE_ID_QUERY),
    plan_id: str = Query(..., min_length=1, description=PLAN_ID_QUERY),
    accepts_incomplete: bool = Query(False, description=ACCEPTS_INCOMPLETE_QUERY),
    info: BrokerRequestInfo = Depends(get_request_info),
    use_case: DeleteServiceInstanceUseCase = Depends(get_delete_instance_use_case),
) -> Response:
    request = DeleteServiceInstanceRequest(
        service_instance_id=instance_id,
        service_definition_id=service_id,
        plan_id=plan_id,
        accepts_incomplete=accepts_incomplete,
        info=info,
    )
    return render(map_delete_service_instance(use_case.execute(request)))
