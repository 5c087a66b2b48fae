from unittest.mock import call, patch

import pytest
from flask import Blueprint, Flask

from payment_service.controllers import build_controllers
from payment_service.payment import PaymentStatus
from payment_service.ports import PaymentNotFoundError
from payment_service.server import (
    ALLOWED_ORIGINS,
    SECURITY_HEADERS,
    Server,
    create_app,
    register_routes,
)

BASE = "http://localhost:8080"
ORIGIN = ALLOWED_ORIGINS[0]


class InMemoryRepository:
    def __init__(self):
        self.payments = {}

    def create(self, payment):
        payment.id = len(self.payments) + 1
        self.payments[payment.id] = payment

    def get_by_id(self, payment_id):
        try:
            return self.payments[payment_id]
        except KeyError:
            raise PaymentNotFoundError(str(payment_id)) from None

    def update(self, payment_id, status, processed_at):
        payment = self.get_by_id(payment_id)
        payment.status = PaymentStatus(status)
        payment.processed_at = processed_at
        return payment


class FixedGenerator:
    def generate_uuid(self):
        return "txn-1"


@pytest.fixture
def repo():
    return InMemoryRepository()


@pytest.fixture
def client(repo):
    return create_app("localhost", "8080", repo, FixedGenerator()).test_client()


def test_ping_returns_pong_with_security_headers(client):
    reply = client.get("/ping", base_url=BASE)
    assert reply.status_code == 200
    assert reply.get_json() == {"message": "pong!"}
    for name, value in SECURITY_HEADERS.items():
        assert reply.headers[name] == value


def test_wrong_host_is_rejected(client):
    reply = client.get("/ping", base_url="http://other.example.com")
    assert reply.status_code == 400
    assert reply.get_json() == {"error": "Invalid host header"}
    assert "X-Frame-Options" not in reply.headers


def test_preflight_from_allowed_origin(client):
    reply = client.options(
        "/v1/payment/",
        base_url=BASE,
        headers={"Origin": ORIGIN, "Access-Control-Request-Method": "POST"},
    )
    assert reply.status_code == 204
    assert reply.headers["Access-Control-Allow-Origin"] == ORIGIN
    assert reply.headers["Access-Control-Allow-Credentials"] == "true"
    assert "PATCH" in reply.headers["Access-Control-Allow-Methods"].split(",")
    assert reply.headers["Access-Control-Max-Age"] == "43200"


def test_disallowed_origin_is_forbidden(client):
    reply = client.get("/ping", base_url=BASE, headers={"Origin": "http://evil.example.com"})
    assert reply.status_code == 403


def test_simple_request_from_allowed_origin(client):
    reply = client.get("/ping", base_url=BASE, headers={"Origin": ORIGIN})
    assert reply.status_code == 200
    assert reply.headers["Access-Control-Allow-Origin"] == ORIGIN


def test_same_origin_request_passes_without_cors_headers(client):
    reply = client.get("/ping", base_url=BASE, headers={"Origin": BASE})
    assert reply.status_code == 200
    assert "Access-Control-Allow-Origin" not in reply.headers


def test_create_and_fetch_through_routes(client, repo):
    created = client.post(
        "/v1/payment/",
        base_url=BASE,
        json={
            "amount": 20.0,
            "currency": "EUR",
            "booking_id": 1,
            "user_id": 2,
            "payment_method": "PAYPAL",
        },
    )
    assert created.status_code == 201
    fetched = client.get("/v1/payment/1", base_url=BASE)
    assert fetched.status_code == 200
    assert fetched.get_json()["data"]["Currency"] == "EUR"


def test_process_route(client, repo):
    client.post(
        "/v1/payment/",
        base_url=BASE,
        json={"amount": 1.0, "currency": "EUR", "booking_id": 1, "user_id": 2,
              "payment_method": "CARD"},
    )
    reply = client.post("/v1/payment/process/1", base_url=BASE)
    assert reply.status_code == 200
    assert repo.get_by_id(1).status is PaymentStatus.SUCCESS


def test_missing_trailing_slash_redirects(client):
    reply = client.post("/v1/payment", base_url=BASE, json={})
    assert reply.status_code in (301, 308)
    assert reply.headers["Location"].endswith("/v1/payment/")


def test_register_routes_adds_all_endpoints(repo):
    app = Flask(__name__)
    blueprint = Blueprint("payments", __name__, url_prefix="/p")
    register_routes(blueprint, build_controllers(repo, FixedGenerator()))
    app.register_blueprint(blueprint)
    endpoints = {rule.endpoint for rule in app.url_map.iter_rules()}
    assert {
        "payments.process",
        "payments.create",
        "payments.get_by_id",
        "payments.update",
    } <= endpoints


def test_server_builds_app_for_address(repo):
    server = Server("localhost", "8080", repo, FixedGenerator())
    assert server.http_addr == "localhost:8080"
    reply = server.app.test_client().get("/ping", base_url=BASE)
    assert reply.get_json() == {"message": "pong!"}


def test_server_run_listens_on_host_and_port_and_propagates_failure(repo):
    server = Server("localhost", "8080", repo, FixedGenerator())
    with patch.object(Flask, "run", side_effect=OSError("address in use")) as run:
        with pytest.raises(OSError, match="address in use"):
            server.run()
    assert run.call_args == call(host="localhost", port=8080)