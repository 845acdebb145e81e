"""Tests for the service-error to HTTP status mapping."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from resourcehub.api.routers.router_utils import handle_service_errors
from resourcehub.core.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    StorageError,
    ValidationError,
)


def _client_raising(error: Exception) -> TestClient:
    app = FastAPI()

    @app.get("/boom")
    @handle_service_errors
    async def boom(flag: int = 0):
        raise error

    return TestClient(app)


@pytest.mark.parametrize(
    "error, status_code",
    [
        (NotFoundError("resource", "r1"), 404),
        (ValidationError("bad input", field="price"), 400),
        (ConflictError("already there"), 409),
        (AuthenticationError("bad token"), 401),
        (PermissionDeniedError("not yours"), 403),
        (StorageError("s3 down"), 502),
        (RuntimeError("kaboom"), 500),
    ],
)
def test_service_errors_map_to_status(error, status_code):
    response = _client_raising(error).get("/boom")
    assert response.status_code == status_code


def test_domain_message_is_returned_as_detail():
    response = _client_raising(ConflictError("Resource already purchased")).get("/boom")
    assert response.json() == {"detail": "Resource already purchased"}


def test_authentication_error_sets_bearer_challenge():
    response = _client_raising(AuthenticationError("bad token")).get("/boom")
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_wrapped_endpoint_keeps_query_parameters():
    response = _client_raising(ConflictError("x")).get("/boom?flag=abc")
    assert response.status_code == 422
