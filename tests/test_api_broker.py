"""
Tests for the broker API layer (FastAPI endpoints).

Uses TestClient against the real app with the catalog, binding and
service instance collaborators replaced by mocks.
"""

import base64
import json
from unittest.mock import MagicMock

from servicebroker.domain.broker.entities import (
    Catalog,
    CreateServiceInstanceAppBindingResponse,
    CreateServiceInstanceResponse,
    CreateServiceInstanceRouteBindingResponse,
    DeleteServiceInstanceResponse,
    GetServiceInstanceAppBindingResponse,
    UpdateServiceInstanceResponse,
)
from servicebroker.domain.broker.errors import (
    BindingAlreadyExistsError,
    BindingDoesNotExistError,
    InstanceUpdateNotSupportedError,
    OperationInProgressError,
    ServiceInstanceAlreadyExistsError,
    ServiceInstanceDoesNotExistError,
)

SERVICE_ID = "service-definition-id"
PLAN_ID = "plan-id"
BINDING_URL = "/v2/service_instances/instance-1/service_bindings/binding-1"
INSTANCE_URL = "/v2/service_instances/instance-1"
BIND_BODY = {"service_id": SERVICE_ID, "plan_id": PLAN_ID}
DELETE_QUERY = {"service_id": SERVICE_ID, "plan_id": PLAN_ID}


def _identity_header(platform: str, value: dict) -> str:
    encoded = base64.b64encode(json.dumps(value).encode()).decode()
    return f"{platform} {encoded}"


class TestCatalogEndpoint:
    """Tests for GET /v2/catalog."""

    def test_returns_catalog(self, client, catalog_service: MagicMock) -> None:
        """The catalog is rendered with services, plans and metadata."""
        response = client.get("/v2/catalog")
        assert response.status_code == 200
        services = response.json()["services"]
        assert [s["id"] for s in services] == [SERVICE_ID]
        assert services[0]["plans"][0]["id"] == PLAN_ID
        assert services[0]["metadata"] == {"displayName": "MySQL"}

    def test_empty_catalog(self, client, catalog_service: MagicMock) -> None:
        """An empty catalog renders an empty services list."""
        catalog_service.get_catalog.return_value = Catalog()
        assert client.get("/v2/catalog").json() == {"services": []}


class TestCreateBindingEndpoint:
    """Tests for PUT /v2/service_instances/{id}/service_bindings/{id}."""

    def test_new_binding_returns_201(self, client, binding_service: MagicMock) -> None:
        """A freshly created binding answers 201 with its credentials."""
        binding_service.create_service_instance_binding.return_value = (
            CreateServiceInstanceAppBindingResponse(credentials={"password": "secret"})
        )
        response = client.put(BINDING_URL, json=BIND_BODY)
        assert response.status_code == 201
        assert response.json() == {"credentials": {"password": "secret"}}

    def test_existing_binding_returns_200(self, client, binding_service: MagicMock) -> None:
        """A binding reported as existing answers 200."""
        binding_service.create_service_instance_binding.return_value = (
            CreateServiceInstanceAppBindingResponse(binding_existed=True)
        )
        response = client.put(BINDING_URL, json=BIND_BODY)
        assert response.status_code == 200
        assert "binding_existed" not in response.json()

    def test_absent_response_returns_201_with_empty_object(
        self, client, binding_service: MagicMock
    ) -> None:
        """No collaborator response still answers 201 with a literal {}."""
        binding_service.create_service_instance_binding.return_value = None
        response = client.put(BINDING_URL, json=BIND_BODY)
        assert response.status_code == 201
        assert response.content == b"{}"

    def test_repeated_bind_is_idempotent(self, client, binding_service: MagicMock) -> None:
        """The first bind creates the binding, the identical repeat reports it existed."""
        binding_service.create_service_instance_binding.side_effect = [
            CreateServiceInstanceAppBindingResponse(credentials={"u": "1"}),
            CreateServiceInstanceAppBindingResponse(credentials={"u": "1"}, binding_existed=True),
        ]
        first = client.put(BINDING_URL, json=BIND_BODY)
        second = client.put(BINDING_URL, json=BIND_BODY)
        assert (first.status_code, second.status_code) == (201, 200)
        assert first.json() == second.json()

    def test_route_binding(self, client, binding_service: MagicMock) -> None:
        """Route bindings render only the route service URL."""
        binding_service.create_service_instance_binding.return_value = (
            CreateServiceInstanceRouteBindingResponse(route_service_url="https://route")
        )
        response = client.put(BINDING_URL, json=BIND_BODY)
        assert response.json() == {"route_service_url": "https://route"}

    def test_request_fields_reach_collaborator(
        self, client, binding_service: MagicMock, service_definition
    ) -> None:
        """Path, body and header values all reach the binding collaborator."""
        binding_service.create_service_instance_binding.return_value = None
        body = {
            **BIND_BODY,
            "app_guid": "app-1",
            "bind_resource": {"app_guid": "app-1"},
            "context": {"platform": "cloudfoundry", "space_guid": "space-1"},
            "parameters": {"read_only": True},
        }
        client.put(BINDING_URL, json=body, headers={"X-Api-Info-Location": "api.example.com/v2/info"})

        sent = binding_service.create_service_instance_binding.call_args.args[0]
        assert sent.service_instance_id == "instance-1"
        assert sent.binding_id == "binding-1"
        assert sent.app_guid == "app-1"
        assert sent.parameters == {"read_only": True}
        assert sent.context.platform == "cloudfoundry"
        assert sent.context.properties == {"space_guid": "space-1"}
        assert sent.service_definition == service_definition
        assert sent.info.api_info_location == "api.example.com/v2/info"
        assert sent.info.platform_instance_id is None

    def test_conflict_returns_409(self, client, binding_service: MagicMock) -> None:
        """A binding with different attributes answers 409 naming both ids."""
        binding_service.create_service_instance_binding.side_effect = BindingAlreadyExistsError(
            "instance-1", "binding-1"
        )
        response = client.put(BINDING_URL, json=BIND_BODY)
        assert response.status_code == 409
        message = response.json()["message"]
        assert "serviceInstanceId=instance-1" in message
        assert "bindingId=binding-1" in message

    def test_missing_instance_returns_400(self, client, binding_service: MagicMock) -> None:
        """An unknown service instance answers 400 with a message."""
        binding_service.create_service_instance_binding.side_effect = (
            ServiceInstanceDoesNotExistError("instance-1")
        )
        response = client.put(BINDING_URL, json=BIND_BODY)
        assert response.status_code == 400
        assert "instance-1" in response.json()["message"]

    def test_unknown_service_returns_422(
        self, client, catalog_service: MagicMock, binding_service: MagicMock
    ) -> None:
        """An unknown service id answers 422 before any binding attempt."""
        catalog_service.get_service_definition.return_value = None
        response = client.put(BINDING_URL, json={**BIND_BODY, "service_id": "unknown"})
        assert response.status_code == 422
        assert "unknown" in response.json()["message"]
        binding_service.create_service_instance_binding.assert_not_called()

    def test_missing_plan_id_returns_422(self, client, binding_service: MagicMock) -> None:
        """A body without plan_id fails validation with 422."""
        response = client.put(BINDING_URL, json={"service_id": SERVICE_ID})
        assert response.status_code == 422
        assert "plan_id" in response.json()["message"]
        binding_service.create_service_instance_binding.assert_not_called()

    def test_blank_service_id_returns_422(self, client) -> None:
        response = client.put(BINDING_URL, json={"service_id": "", "plan_id": PLAN_ID})
        assert response.status_code == 422

    def test_operation_in_progress_returns_202(self, client, binding_service: MagicMock) -> None:
        """An operation still running answers 202 with its id."""
        binding_service.create_service_instance_binding.side_effect = OperationInProgressError(
            "task-1"
        )
        response = client.put(BINDING_URL, json=BIND_BODY)
        assert response.status_code == 202
        assert response.json() == {"operation": "task-1"}

    def test_unexpected_error_returns_generic_500(
        self, client, binding_service: MagicMock
    ) -> None:
        """Unexpected failures never leak internal details."""
        binding_service.create_service_instance_binding.side_effect = RuntimeError(
            "connection string with password"
        )
        response = client.put(BINDING_URL, json=BIND_BODY)
        assert response.status_code == 500
        assert response.json() == {"message": "Internal server error"}
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["Cache-Control"] == "no-store"


class TestPlatformRequestInfo:
    """Tests for the platform instance prefix and identity headers."""

    def test_platform_instance_prefix(self, client, binding_service: MagicMock) -> None:
        """The leading path segment becomes the platform instance id."""
        binding_service.create_service_instance_binding.return_value = None
        response = client.put(f"/cf-instance-1{BINDING_URL}", json=BIND_BODY)
        assert response.status_code == 201
        sent = binding_service.create_service_instance_binding.call_args.args[0]
        assert sent.info.platform_instance_id == "cf-instance-1"

    def test_originating_identity_decoded(self, client, binding_service: MagicMock) -> None:
        """The originating identity header is decoded into a platform context."""
        binding_service.create_service_instance_binding.return_value = None
        header = _identity_header("cloudfoundry", {"user_id": "user-1"})
        client.put(
            BINDING_URL,
            json=BIND_BODY,
            headers={"X-Broker-API-Originating-Identity": header},
        )
        identity = binding_service.create_service_instance_binding.call_args.args[0].info.originating_identity
        assert identity.platform == "cloudfoundry"
        assert identity.properties == {"user_id": "user-1"}

    def test_malformed_originating_identity_returns_422(
        self, client, binding_service: MagicMock
    ) -> None:
        """An undecodable originating identity header answers 422."""
        response = client.put(
            BINDING_URL,
            json=BIND_BODY,
            headers={"X-Broker-API-Originating-Identity": "cloudfoundry not-base64!"},
        )
        assert response.status_code == 422
        assert "Originating-Identity" in response.json()["message"]
        binding_service.create_service_instance_binding.assert_not_called()


class TestGetBindingEndpoint:
    """Tests for GET /v2/service_instances/{id}/service_bindings/{id}."""

    def test_returns_binding(self, client, binding_service: MagicMock) -> None:
        """A fetched binding renders credentials and parameters."""
        binding_service.get_service_instance_binding.return_value = (
            GetServiceInstanceAppBindingResponse(parameters={"a": 1}, credentials={"u": "1"})
        )
        response = client.get(BINDING_URL)
        assert response.status_code == 200
        assert response.json() == {"credentials": {"u": "1"}, "parameters": {"a": 1}}

    def test_missing_binding_returns_404(self, client, binding_service: MagicMock) -> None:
        """Fetching an unknown binding answers 404."""
        binding_service.get_service_instance_binding.side_effect = BindingDoesNotExistError(
            "binding-1"
        )
        response = client.get(BINDING_URL)
        assert response.status_code == 404
        assert "binding-1" in response.json()["message"]

    def test_missing_instance_returns_404(self, client, binding_service: MagicMock) -> None:
        """Fetching a binding of an unknown instance answers 404."""
        binding_service.get_service_instance_binding.side_effect = (
            ServiceInstanceDoesNotExistError("instance-1")
        )
        assert client.get(BINDING_URL).status_code == 404


class TestDeleteBindingEndpoint:
    """Tests for DELETE /v2/service_instances/{id}/service_bindings/{id}."""

    def test_delete_returns_200_empty_object(self, client, binding_service: MagicMock) -> None:
        """Unbinding answers 200 with a literal {}."""
        response = client.delete(BINDING_URL, params=DELETE_QUERY)
        assert response.status_code == 200
        assert response.content == b"{}"
        sent = binding_service.delete_service_instance_binding.call_args.args[0]
        assert (sent.service_definition_id, sent.plan_id) == (SERVICE_ID, PLAN_ID)

    def test_missing_binding_returns_410_empty_object(
        self, client, binding_service: MagicMock
    ) -> None:
        """Unbinding an unknown binding answers 410 with a literal {}."""
        binding_service.delete_service_instance_binding.side_effect = BindingDoesNotExistError(
            "binding-1"
        )
        response = client.delete(BINDING_URL, params=DELETE_QUERY)
        assert response.status_code == 410
        assert response.content == b"{}"

    def test_missing_instance_returns_400(self, client, binding_service: MagicMock) -> None:
        """An unknown service instance answers 400 with a message."""
        binding_service.delete_service_instance_binding.side_effect = (
            ServiceInstanceDoesNotExistError("instance-1")
        )
        response = client.delete(BINDING_URL, params=DELETE_QUERY)
        assert response.status_code == 400
        assert "message" in response.json()

    def test_missing_query_parameters_return_422(
        self, client, binding_service: MagicMock
    ) -> None:
        """service_id and plan_id are required on unbind."""
        response = client.delete(BINDING_URL, params={"service_id": SERVICE_ID})
        assert response.status_code == 422
        binding_service.delete_service_instance_binding.assert_not_called()

    def test_delete_skips_catalog_lookup(self, client, catalog_service: MagicMock) -> None:
        """Unbinding never consults the catalog."""
        client.delete(BINDING_URL, params=DELETE_QUERY)
        catalog_service.get_service_definition.assert_not_called()


class TestServiceInstanceEndpoints:
    """Tests for PUT, PATCH and DELETE /v2/service_instances/{id}."""

    def test_provision_returns_201(self, client, instance_service: MagicMock) -> None:
        """A new instance answers 201 with its dashboard URL."""
        instance_service.create_service_instance.return_value = CreateServiceInstanceResponse(
            dashboard_url="https://dashboard/instance-1"
        )
        response = client.put(
            INSTANCE_URL,
            json={**BIND_BODY, "organization_guid": "org-1", "space_guid": "space-1"},
        )
        assert response.status_code == 201
        assert response.json() == {"dashboard_url": "https://dashboard/instance-1"}
        sent = instance_service.create_service_instance.call_args.args[0]
        assert (sent.organization_guid, sent.space_guid) == ("org-1", "space-1")
        assert sent.accepts_incomplete is False

    def test_provision_existing_returns_200(self, client, instance_service: MagicMock) -> None:
        """An identical repeat provision answers 200."""
        instance_service.create_service_instance.return_value = CreateServiceInstanceResponse(
            instance_existed=True
        )
        assert client.put(INSTANCE_URL, json=BIND_BODY).status_code == 200

    def test_async_provision_returns_202(self, client, instance_service: MagicMock) -> None:
        """Asynchronous provisioning answers 202 with the operation."""
        instance_service.create_service_instance.return_value = CreateServiceInstanceResponse(
            is_async=True, operation="provisioning"
        )
        response = client.put(INSTANCE_URL, json=BIND_BODY, params={"accepts_incomplete": "true"})
        assert response.status_code == 202
        assert response.json() == {"operation": "provisioning"}
        assert instance_service.create_service_instance.call_args.args[0].accepts_incomplete

    def test_provision_conflict_returns_409(self, client, instance_service: MagicMock) -> None:
        """A conflicting instance answers 409."""
        instance_service.create_service_instance.side_effect = ServiceInstanceAlreadyExistsError(
            "instance-1", SERVICE_ID
        )
        assert client.put(INSTANCE_URL, json=BIND_BODY).status_code == 409

    def test_update_returns_200(self, client, instance_service: MagicMock) -> None:
        """A synchronous update answers 200 and forwards previous values."""
        instance_service.update_service_instance.return_value = UpdateServiceInstanceResponse()
        response = client.patch(
            INSTANCE_URL,
            json={
                "service_id": SERVICE_ID,
                "plan_id": "other-plan-id",
                "previous_values": {"plan_id": PLAN_ID},
            },
        )
        assert response.status_code == 200
        assert response.json() == {}
        sent = instance_service.update_service_instance.call_args.args[0]
        assert sent.plan_id == "other-plan-id"
        assert sent.previous_values.plan_id == PLAN_ID

    def test_update_not_supported_returns_422(
        self, client, instance_service: MagicMock
    ) -> None:
        """A refused update answers 422 with the reason."""
        instance_service.update_service_instance.side_effect = InstanceUpdateNotSupportedError(
            "plan changes are disabled"
        )
        response = client.patch(INSTANCE_URL, json={"service_id": SERVICE_ID})
        assert response.status_code == 422
        assert "plan changes are disabled" in response.json()["message"]

    def test_deprovision_returns_200(self, client, instance_service: MagicMock) -> None:
        """Deprovisioning answers 200 with a literal {}."""
        instance_service.delete_service_instance.return_value = DeleteServiceInstanceResponse()
        response = client.delete(INSTANCE_URL, params=DELETE_QUERY)
        assert response.status_code == 200
        assert response.content == b"{}"

    def test_deprovision_missing_returns_410(self, client, instance_service: MagicMock) -> None:
        """Deprovisioning an unknown instance answers 410 with a literal {}."""
        instance_service.delete_service_instance.side_effect = ServiceInstanceDoesNotExistError(
            "instance-1"
        )
        response = client.delete(INSTANCE_URL, params=DELETE_QUERY)
        assert response.status_code == 410
        assert response.content == b"{}"
