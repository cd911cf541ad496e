from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify, request

from ..core.exceptions import ConcurrencyError, ConfigurationError, DomainError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (NotFoundError, 404),
    (ConcurrencyError, 409),
    (ValidationError, 400),
    (ConfigurationError, 400),
)


def current_tenant() -> str:
    tenant_id = (request.headers.get("X-Tenant-Id") or "").strip()
    if not tenant_id:
        raise ValidationError("X-Tenant-Id header is required")
    return tenant_id


def json_body() -> dict:
    return request.get_json(silent=True) or {}


def api_errors(view):
    """Translate domain errors into JSON error responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            status = next((code for cls, code in _STATUS_BY_ERROR if isinstance(e, cls)), 400)
            return jsonify({"success": False, "message": str(e)}), status
        except Exception:
            logger.exception("unhandled error in %s", request.path)
            return jsonify({"success": False, "message": "Internal server error"}), 500

    return wrapper
