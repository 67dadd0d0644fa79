from __future__ import annotations
from typing import Any, Optional
from pathlib import Path
import json

from flask import Blueprint, Flask, current_app, jsonify, request
from werkzeug.exceptions import HTTPException

from swift_registry.config import get_server_config, get_store_config
from swift_registry.errors import RegistryError, ValidationError
from swift_registry.query import CodeQueryService
from swift_registry.store import create_store
from swift_registry.utils.logging import configure_logging, get_logger
from swift_registry.validation import ascii_upper, is_valid_country_iso2

logger = get_logger(__name__)

OPENAPI_PATH = Path(__file__).with_name("openapi.json")

codes = Blueprint("codes", __name__, url_prefix="/v1/codes")


def _service() -> CodeQueryService:
    return current_app.config["CODE_SERVICE"]


def _require_code(code: str) -> Optional[Any]:
    if not code or not code.strip():
        return jsonify({"error": "SWIFT code parameter is required."}), 400
    return None


@codes.get("/<code>")
def get_code(code: str):
    missing = _require_code(code)
    if missing is not None:
        return missing
    resolved = _service().get_by_code(code)
    return jsonify(resolved.to_dict())


@codes.get("/country/<iso2>")
def get_country(iso2: str):
    if not is_valid_country_iso2(ascii_upper(iso2)):
        return jsonify({"error": "Invalid Country ISO2 code format. Must be 2 letters."}), 400
    listing = _service().list_by_country(iso2)
    return jsonify(listing.to_dict())


@codes.post("")
def post_code():
    payload = request.get_json(force=True, silent=True)
    if not isinstance(payload, dict):
        raise ValidationError(
            "Invalid input data.",
            details=[{"field": "body", "message": "Expected a JSON object"}],
        )
    created = _service().create(payload)
    return jsonify({"message": f"SWIFT code {created.code} created successfully."}), 201


@codes.delete("/<code>")
def delete_code(code: str):
    missing = _require_code(code)
    if missing is not None:
        return missing
    deleted = _service().delete(code)
    return jsonify({"message": f"SWIFT code {deleted.code} deleted successfully."})


def _registry_error(e: RegistryError):
    if e.status >= 500:
        logger.error("internal_error", path=request.path, error=e.message, exc_info=e)
        return jsonify({"error": "Internal server error."}), e.status
    body: dict[str, Any] = {"error": e.message}
    if isinstance(e, ValidationError):
        body["details"] = e.details
    return jsonify(body), e.status


def _unexpected_error(e: Exception):
    if isinstance(e, HTTPException):
        return e
    logger.error("internal_error", path=request.path, error=str(e), exc_info=e)
    return jsonify({"error": "Internal server error."}), 500


def create_app(service: Optional[CodeQueryService] = None) -> Flask:
    """Build the Flask app around an injected query service.

    Without a service, one is built over the store named by DATABASE_URL.
    """
    if service is None:
        service = CodeQueryService(create_store(get_store_config().database_url))

    configure_logging()
    app = Flask(__name__)
    app.config["CODE_SERVICE"] = service
    app.register_blueprint(codes)
    app.register_error_handler(RegistryError, _registry_error)
    app.register_error_handler(Exception, _unexpected_error)

    @app.get("/")
    def health():
        return "SWIFT Code Service is running!"

    @app.get("/openapi.json")
    def get_openapi():
        try:
            spec = json.loads(OPENAPI_PATH.read_text())
        except FileNotFoundError:
            return jsonify({"error": "openapi_not_found"}), 404
        return jsonify(spec)

    return app


def main():
    configure_logging()
    cfg = get_server_config()
    app = create_app()
    logger.info("server_starting", host=cfg.host, port=cfg.port)
    app.run(host=cfg.host, port=cfg.port)


if __name__ == "__main__":
    main()
