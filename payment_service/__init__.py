"""Payment service: payment domain model, use cases, MySQL storage and a Flask HTTP API."""

__version__ = "0.1.0"