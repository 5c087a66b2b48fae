"""The HTTP application: host check, security headers, CORS and routes."""

from __future__ import annotations

import argparse
import logging
import os
from datetime import timedelta

from flask import Blueprint, Flask, g, jsonify, request

from payment_service.controllers import Controllers, build_controllers
from payment_service.mysql_repository import MySQLPaymentRepository
from payment_service.ports import PaymentRepository, RandomUUIDGenerator, UUIDGenerator

logger = logging.getLogger(__name__)

ALLOWED_ORIGINS = ("http://localhost:5173",)
ALLOWED_METHODS = ("GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH")
ALLOWED_HEADERS = ("Content-Type", "Authorization")
CORS_MAX_AGE = timedelta(hours=12)

SECURITY_HEADERS = {
    "X-Frame-Options": "DENY",
    "Content-Security-Policy": (
        "default-src 'self'; connect-src *; font-src *; "
        "script-src-elem * 'unsafe-inline'; img-src * data:; "
        "style-src * 'unsafe-inline';"
    ),
    "X-XSS-Protection": "1; mode=block",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains; preload",
    "Referrer-Policy": "strict-origin",
    "X-Content-Type-Options": "nosniff",
    "Permissions-Policy": (
        "geolocation=(),midi=(),sync-xhr=(),microphone=(),camera=(),"
        "magnetometer=(),gyroscope=(),fullscreen=(self),payment=()"
    ),
}


def _preflight_headers(origin: str) -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": origin,
        "Access-Control-Allow-Credentials": "true",
        "Access-Control-Allow-Methods": ",".join(m.upper() for m in ALLOWED_METHODS),
        "Access-Control-Allow-Headers": ",".join(h.lower() for h in ALLOWED_HEADERS),
        "Access-Control-Max-Age": str(int(CORS_MAX_AGE.total_seconds())),
        "Vary": "Origin",
    }


def _simple_headers(origin: str) -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": origin,
        "Access-Control-Allow-Credentials": "true",
        "Vary": "Origin",
    }


def _apply_cors():
    origin = request.headers.get("Origin")
    if not origin:
        return None
    if origin in (f"http://{request.host}", f"https://{request.host}"):
        return None
    if origin not in ALLOWED_ORIGINS:
        return "", 403
    if request.method == "OPTIONS":
        g.cors_headers = _preflight_headers(origin)
        return "", 204
    g.cors_headers = _simple_headers(origin)
    return None


def register_routes(blueprint: Blueprint, controllers: Controllers) -> None:
    """Attach the payment endpoints to ``blueprint``."""
    blueprint.add_url_rule(
        "/process/<payment_id>", "process", controllers.process.run, methods=["POST"]
    )
    blueprint.add_url_rule("/", "create", controllers.create.run, methods=["POST"])
    blueprint.add_url_rule(
        "/<payment_id>", "get_by_id", controllers.get_by_id.run, methods=["GET"]
    )
    blueprint.add_url_rule(
        "/<payment_id>", "update", controllers.update.run, methods=["PATCH"]
    )


def create_app(
    host: str,
    port: str,
    repository: PaymentRepository | None = None,
    uuid_generator: UUIDGenerator | None = None,
) -> Flask:
    """Build the application, accepting only requests addressed to host:port."""
    if repository is None:
        repository = MySQLPaymentRepository()
    if uuid_generator is None:
        uuid_generator = RandomUUIDGenerator()

    http_addr = f"{host}:{port}"
    app = Flask(__name__)

    @app.before_request
    def _check_host():
        if request.host != http_addr:
            g.host_rejected = True
            return jsonify(error="Invalid host header"), 400
        return None

    @app.before_request
    def _cors():
        return _apply_cors()

    @app.after_request
    def _add_headers(response):
        if g.get("host_rejected"):
            return response
        response.headers.update(SECURITY_HEADERS)
        for name, value in g.get("cors_headers", {}).items():
            response.headers[name] = value
        return response

    @app.route("/ping", methods=["GET"])
    def ping():
        return jsonify(message="pong!"), 200

    blueprint = Blueprint("payment", __name__, url_prefix="/v1/payment")
    register_routes(blueprint, build_controllers(repository, uuid_generator))
    app.register_blueprint(blueprint)
    return app


class Server:
    """The payment HTTP server bound to one host and port."""

    def __init__(
        self,
        host: str,
        port: str,
        repository: PaymentRepository | None = None,
        uuid_generator: UUIDGenerator | None = None,
    ) -> None:
        self.host = host
        self.port = port
        self.http_addr = f"{host}:{port}"
        self.app = create_app(host, port, repository, uuid_generator)

    def run(self) -> None:
        """Serve requests until interrupted."""
        logger.info("Starting server on %s", self.http_addr)
        self.app.run(host=self.host or "0.0.0.0", port=int(self.port) if self.port else 0)


def main(argv: list[str] | None = None) -> int:
    """Start the server on HOST_SERVER:PORT_SERVER unless overridden."""
    parser = argparse.ArgumentParser(description="Run the payment HTTP server.")
    parser.add_argument("--host", default=os.environ.get("HOST_SERVER", ""))
    parser.add_argument("--port", default=os.environ.get("PORT_SERVER", ""))
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    Server(args.host, args.port).run()
    return 0