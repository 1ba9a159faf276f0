"""
Shared fixtures for the broker test suite.

Rate limiting is switched off before the application settings are
imported so suites that issue many requests never hit HTTP 429.
"""

import os

os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.pop("BROKER_API_VERSION", None)
os.environ.pop("CATALOG_PATH", None)

from unittest.mock import MagicMock  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from servicebroker.domain.broker.entities import (  # noqa: E402
    Catalog,
    Plan,
    ServiceDefinition,
)
from servicebroker.domain.broker.ports import (  # noqa: E402
    CatalogService,
    ServiceInstanceBindingService,
    ServiceInstanceService,
)
from servicebroker.infrastructure.broker.catalog_adapter import (  # noqa: E402
    ConfiguredCatalogService,
)
from servicebroker.infrastructure.broker.in_memory_state import (  # noqa: E402
    InMemoryBrokerState,
)
from servicebroker.interfaces.broker.dependencies import (  # noqa: E402
    get_binding_service,
    get_broker_state,
    get_catalog_service,
    get_instance_service,
)
from servicebroker.main import create_app  # noqa: E402

SERVICE_ID = "service-definition-id"
PLAN_ID = "plan-id"
OTHER_PLAN_ID = "other-plan-id"
ROUTE_SERVICE_ID = "route-service-id"


@pytest.fixture
def service_definition() -> ServiceDefinition:
    return ServiceDefinition(
        id=SERVICE_ID,
        name="mysql",
        description="A MySQL database",
        bindable=True,
        plans=(
            Plan(id=PLAN_ID, name="small", description="Small plan"),
            Plan(id=OTHER_PLAN_ID, name="large", description="Large plan", free=False),
        ),
        tags=("mysql", "relational"),
        metadata={"displayName": "MySQL"},
        plan_updateable=True,
    )


@pytest.fixture
def route_service_definition() -> ServiceDefinition:
    return ServiceDefinition(
        id=ROUTE_SERVICE_ID,
        name="logger",
        description="A route service",
        bindable=True,
        plans=(Plan(id=PLAN_ID, name="default", description="Default plan"),),
        requires=("route_forwarding",),
    )


@pytest.fixture
def catalog(service_definition, route_service_definition) -> Catalog:
    return Catalog(services=(service_definition, route_service_definition))


@pytest.fixture
def catalog_service(service_definition) -> MagicMock:
    """CatalogService mock that resolves every service id."""
    service = MagicMock(spec=CatalogService)
    service.get_service_definition.return_value = service_definition
    service.get_catalog.return_value = Catalog(services=(service_definition,))
    return service


@pytest.fixture
def binding_service() -> MagicMock:
    return MagicMock(spec=ServiceInstanceBindingService)


@pytest.fixture
def instance_service() -> MagicMock:
    return MagicMock(spec=ServiceInstanceService)


@pytest.fixture
def client(catalog_service, binding_service, instance_service):
    """TestClient over the real app with mocked collaborators."""
    app = create_app()
    app.dependency_overrides[get_catalog_service] = lambda: catalog_service
    app.dependency_overrides[get_binding_service] = lambda: binding_service
    app.dependency_overrides[get_instance_service] = lambda: instance_service
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def in_memory_client(catalog):
    """TestClient over the real app with the in-memory collaborators."""
    app = create_app()
    state = InMemoryBrokerState()
    app.dependency_overrides[get_broker_state] = lambda: state
    app.dependency_overrides[get_catalog_service] = lambda: ConfiguredCatalogService(catalog)
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()
