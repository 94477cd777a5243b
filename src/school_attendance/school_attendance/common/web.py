"""Shared helpers for the JSON controllers."""
from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify, session

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def json_ok(status_code: int = 200, **payload):
    return jsonify({"success": True, **payload}), status_code


def json_error(message: str, status_code: int):
    return jsonify({"success": False, "message": message}), status_code


def current_user_id() -> int:
    return int(session["user_id"])


def current_role() -> Role:
    try:
        return Role(session.get("role"))
    except ValueError:
        raise AuthorizationError("Access denied: unknown role")


def login_required(view):
    """Identity comes from the session filled in by the auth service."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return json_error("Not authenticated", 401)
        return view(*args, **kwargs)

    return wrapper


def domain_errors(view):
    """Translate service exceptions into JSON responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except ValidationError as e:
            return json_error(str(e), 400)
        except AuthorizationError as e:
            return json_error(str(e), 403)
        except NotFoundError as e:
            return json_error(str(e), 404)
        except Exception:
            logger.exception("unhandled error in %s", view.__name__)
            return json_error("Server error", 500)

    return wrapper
