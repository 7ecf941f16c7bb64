"""
Tests for the error kinds and their JSON error responses.
"""

import pytest
from flask import Flask

from safetynet_alerts.errors import (
    ERROR_RESPONSES, ErrorKind, InvalidRequest, ServiceError, register_error_handlers,
)


@pytest.fixture
def client():
    app = Flask(__name__)
    register_error_handlers(app)

    @app.route("/fail/<kind>")
    def fail(kind):
        raise ServiceError(ErrorKind[kind], "refused")

    @app.route("/invalid")
    def invalid():
        raise InvalidRequest("must not be blank", parameter="address", constraint="NotBlank")

    @app.route("/crash")
    def crash():
        raise RuntimeError("boom")

    with app.test_client() as c:
        yield c


def test_every_kind_has_a_response():
    assert set(ERROR_RESPONSES) == set(ErrorKind)


@pytest.mark.parametrize("kind, status", [
    (ErrorKind.NOT_FOUND, 404),
    (ErrorKind.PERSON_NOT_FOUND, 404),
    (ErrorKind.ALREADY_EXISTS, 409),
    (ErrorKind.INTERFERING_NAMES, 409),
    (ErrorKind.INTERFERING_ADDRESS, 409),
    (ErrorKind.IMMUTABLE_NAMES, 400),
    (ErrorKind.IMMUTABLE_ADDRESS, 400),
])
def test_service_error_status(client, kind, status):
    resp = client.get(f"/fail/{kind.name}")

    assert resp.status_code == status
    data = resp.get_json()
    assert data["status"] == status
    assert data["code"] == ERROR_RESPONSES[kind][2]
    assert data["message"] == "refused"


def test_service_error_default_message():
    assert ServiceError(ErrorKind.NOT_FOUND).message == "NOT_FOUND"


def test_invalid_request(client):
    resp = client.get("/invalid")

    assert resp.status_code == 400
    assert resp.get_json() == {
        "type": "CLIENT",
        "status": 400,
        "code": "VALIDATION_FAILED",
        "message": "Validation failed: address must not be blank",
        "metadata": {"parameter": "address", "constraint": "NotBlank"},
    }


def test_unknown_route(client):
    resp = client.get("/nowhere")

    assert resp.status_code == 404
    assert resp.get_json()["code"] == "BAD_REQUEST"


def test_unexpected_error(client):
    resp = client.get("/crash")

    assert resp.status_code == 500
    data = resp.get_json()
    assert data["type"] == "UNKNOWN"
    assert data["code"] == "SERVER_EXCEPTION"
