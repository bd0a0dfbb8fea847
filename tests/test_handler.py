"""Tests for the declarative route handler factory."""

from unittest.mock import MagicMock, patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel, EmailStr

from src.api.handler import AuthOptions, HandlerContext, HandlerOptions, create_api_handler
from src.api.responses import success
from src.errors import NotFoundError, register_exception_handlers
from src.services.session import AuthSession, SessionUser

ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]


class Address(BaseModel):
    city: str


class SignupBody(BaseModel):
    email: EmailStr
    address: Address | None = None


class HandlerSpy:
    """Business handler that records every context it receives."""

    def __init__(self, response=None, error: Exception | None = None):
        self.calls: list[HandlerContext] = []
        self.response = response
        self.error = error
        self.__name__ = "spy"
        self.__doc__ = None

    async def __call__(self, ctx: HandlerContext):
        self.calls.append(ctx)
        if self.error is not None:
            raise self.error
        return self.response or success(ok=True)


def build_client(options: HandlerOptions, spy: HandlerSpy, path: str = "/things") -> TestClient:
    """Mount the endpoint for every method so the factory's own method check runs."""
    app = FastAPI()
    register_exception_handlers(app)
    app.add_api_route(path, create_api_handler(options, spy), methods=ALL_METHODS)
    return TestClient(app)


def session_for(role: str | None = "user") -> AuthSession:
    return AuthSession(SessionUser(id=7, email="owner@example.com", role=role))


class TestMethodCheck:
    """Tests for the HTTP method filter."""

    def test_disallowed_method_returns_405(self):
        spy = HandlerSpy()
        client = build_client(HandlerOptions(method="GET"), spy)

        response = client.post("/things", json={})

        assert response.status_code == 405
        assert response.json() == {"error": "Method POST Not Allowed"}
        assert spy.calls == []

    @pytest.mark.parametrize("method", ["PUT", "PATCH", "DELETE"])
    def test_method_outside_set_is_rejected(self, method):
        spy = HandlerSpy()
        client = build_client(HandlerOptions(method=["GET", "POST"]), spy)

        response = client.request(method, "/things")

        assert response.status_code == 405
        assert response.json() == {"error": f"Method {method} Not Allowed"}
        assert spy.calls == []

    @pytest.mark.parametrize("method", ["GET", "POST"])
    def test_method_inside_set_reaches_handler(self, method):
        spy = HandlerSpy()
        client = build_client(HandlerOptions(method=["get", "post"]), spy)

        response = client.request(method, "/things")

        assert response.status_code == 200
        assert len(spy.calls) == 1


class TestValidation:
    """Tests for request body validation."""

    def test_missing_field_returns_422_with_field_errors(self):
        spy = HandlerSpy()
        client = build_client(HandlerOptions(method="POST", schema=SignupBody), spy)

        response = client.post("/things", json={})

        assert response.status_code == 422
        body = response.json()
        assert body["success"] is False
        assert body["code"] == "VALIDATION_ERROR"
        assert body["message"] == "Validation failed"
        assert list(body["errors"]) == ["email"]
        assert body["errors"]["email"]
        assert spy.calls == []

    def test_nested_field_paths_are_dotted(self):
        spy = HandlerSpy()
        client = build_client(HandlerOptions(method="PUT", schema=SignupBody), spy)

        response = client.put("/things", json={"email": "a@example.com", "address": {}})

        assert response.status_code == 422
        assert "address.city" in response.json()["errors"]
        assert spy.calls == []

    def test_non_object_body_is_reported_under_unknown(self):
        spy = HandlerSpy()
        client = build_client(HandlerOptions(method="POST", schema=SignupBody), spy)

        response = client.post("/things", json=["not", "an", "object"])

        assert response.status_code == 422
        assert "unknown" in response.json()["errors"]

    def test_invalid_json_returns_400(self):
        spy = HandlerSpy()
        client = build_client(HandlerOptions(method="PATCH", schema=SignupBody), spy)

        response = client.patch(
            "/things", content="{not json", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json()["code"] == "BAD_REQUEST"
        assert response.json()["message"] == "Invalid request data"
        assert spy.calls == []

    def test_valid_body_is_parsed_into_context(self):
        spy = HandlerSpy()
        client = build_client(HandlerOptions(method="POST", schema=SignupBody), spy)

        response = client.post("/things", json={"email": "a@example.com"})

        assert response.status_code == 200
        assert isinstance(spy.calls[0].data, SignupBody)
        assert spy.calls[0].data.email == "a@example.com"

    def test_body_is_ignored_for_get(self):
        spy = HandlerSpy()
        client = build_client(HandlerOptions(method="GET", schema=SignupBody), spy)

        response = client.get("/things")

        assert response.status_code == 200
        assert spy.calls[0].data is None


class TestAuthentication:
    """Tests for the authentication step."""

    def test_no_session_returns_401(self):
        spy = HandlerSpy()
        client = build_client(HandlerOptions(method="GET", auth=AuthOptions(required=True)), spy)

        with patch("src.api.handler.get_session", return_value=None):
            response = client.get("/things")

        assert response.status_code == 401
        assert response.json() == {
            "success": False,
            "message": "Authentication required",
            "code": "UNAUTHORIZED",
        }
        assert spy.calls == []

    def test_wrong_role_returns_403(self):
        spy = HandlerSpy()
        options = HandlerOptions(method="GET", auth=AuthOptions(required=True, roles=["admin"]))
        client = build_client(options, spy)

        with patch("src.api.handler.get_session", return_value=session_for("user")):
            response = client.get("/things")

        assert response.status_code == 403
        assert response.json()["message"] == "Insufficient permissions"
        assert response.json()["code"] == "FORBIDDEN"
        assert spy.calls == []

    def test_matching_role_reaches_handler_with_user(self):
        spy = HandlerSpy()
        options = HandlerOptions(method="GET", auth=AuthOptions(required=True, roles=["admin"]))
        client = build_client(options, spy)

        with patch("src.api.handler.get_session", return_value=session_for("admin")):
            response = client.get("/things")

        assert response.status_code == 200
        assert spy.calls[0].user.role == "admin"
        assert spy.calls[0].user.id == 7

    def test_missing_role_defaults_to_user(self):
        spy = HandlerSpy()
        options = HandlerOptions(method="GET", auth=AuthOptions(required=True, roles=["user"]))
        client = build_client(options, spy)

        with patch("src.api.handler.get_session", return_value=session_for(None)):
            response = client.get("/things")

        assert response.status_code == 200

    def test_session_provider_failure_is_normalized_to_401(self, caplog):
        spy = HandlerSpy()
        client = build_client(HandlerOptions(method="GET", auth=AuthOptions(required=True)), spy)

        with patch("src.api.handler.get_session", side_effect=ConnectionError("auth backend down")):
            response = client.get("/things")

        assert response.status_code == 401
        assert response.json()["message"] == "Authentication failed"
        assert "auth backend down" not in response.text
        assert "Authentication error" in caplog.text
        assert spy.calls == []

    def test_auth_not_requested_skips_session_lookup(self):
        spy = HandlerSpy()
        client = build_client(HandlerOptions(method="GET", auth=AuthOptions(required=False)), spy)

        with patch("src.api.handler.get_session") as mock_session:
            response = client.get("/things")

        assert response.status_code == 200
        mock_session.assert_not_called()
        assert spy.calls[0].user is None

    def test_auth_runs_before_validation(self):
        spy = HandlerSpy()
        options = HandlerOptions(method="POST", schema=SignupBody, auth=AuthOptions(required=True))
        client = build_client(options, spy)

        with patch("src.api.handler.get_session", return_value=None):
            response = client.post("/things", json={})

        assert response.status_code == 401

    def test_method_check_runs_before_auth(self):
        spy = HandlerSpy()
        options = HandlerOptions(method="GET", auth=AuthOptions(required=True))
        client = build_client(options, spy)

        with patch("src.api.handler.get_session") as mock_session:
            response = client.delete("/things")

        assert response.status_code == 405
        mock_session.assert_not_called()


class TestHandlerInvocation:
    """Tests for context building and error mapping around the handler."""

    def test_context_carries_params_and_query(self):
        spy = HandlerSpy()
        client = build_client(HandlerOptions(method="GET"), spy, path="/things/{thing_id}")

        client.get("/things/abc?limit=5&page=2")

        ctx = spy.calls[0]
        assert ctx.params == {"thing_id": "abc"}
        assert ctx.search_params.get("limit") == "5"
        assert ctx.search_params.get("page") == "2"
        assert ctx.request.method == "GET"

    def test_successful_response_is_returned_unchanged(self):
        spy = HandlerSpy(response=success(201, created=True))
        client = build_client(HandlerOptions(method="POST"), spy)

        response = client.post("/things")

        assert response.status_code == 201
        assert response.json() == {"success": True, "created": True}

    def test_app_error_from_handler_is_mapped(self):
        spy = HandlerSpy(error=NotFoundError("Thing not found"))
        client = build_client(HandlerOptions(method="GET"), spy)

        response = client.get("/things")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Thing not found", "code": "NOT_FOUND"}

    def test_unexpected_error_passes_message_outside_production(self):
        spy = HandlerSpy(error=RuntimeError("boom"))
        client = build_client(HandlerOptions(method="GET"), spy)

        response = client.get("/things")

        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "boom", "code": "INTERNAL_ERROR"}

    def test_unexpected_error_is_redacted_in_production(self):
        spy = HandlerSpy(error=RuntimeError("password=hunter2"))
        client = build_client(HandlerOptions(method="GET"), spy)

        with patch("src.errors.get_settings", return_value=MagicMock(is_production=True)):
            response = client.get("/things")

        assert response.status_code == 500
        assert response.json()["message"] == "An unexpected error occurred"
        assert "hunter2" not in response.text

    def test_endpoint_takes_handler_name(self):
        async def list_things(ctx):
            """List things."""

        endpoint = create_api_handler(HandlerOptions(method="GET"), list_things)

        assert endpoint.__name__ == "list_things"
        assert endpoint.__doc__ == "List things."
