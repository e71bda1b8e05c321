from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify

from ..core.exceptions import NotFoundError, RecordLockedError, ValidationError

logger = logging.getLogger(__name__)


def ok(data, status: int = 200):
    return jsonify({"success": True, "data": data}), status


def error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def json_errors(view):
    """Map domain exceptions raised by a view to JSON error responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except ValidationError as e:
            return error(str(e), 400)
        except NotFoundError as e:
            return error(str(e), 404)
        except RecordLockedError as e:
            return error(str(e), 409)
        except Exception:
            logger.exception("Unhandled error in %s", view.__name__)
            return error("Internal server error", 500)

    return wrapper
