from functools import wraps
from flask import jsonify
from flask_jwt_extended import get_jwt, get_jwt_identity, verify_jwt_in_request


def role_required(*roles):
    """Admit the request only when the JWT ``role`` claim is one of ``roles``.

    Runs ``verify_jwt_in_request`` itself, so routes need no separate
    ``@jwt_required()``.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            verify_jwt_in_request()
            role = (get_jwt() or {}).get("role")
            if role not in roles:
                return jsonify({"success": False, "code": "forbidden", "message": "Forbidden"}), 403
            return fn(*args, **kwargs)
        return wrapper
    return decorator


def current_identity():
    """(user_id, role) of the caller; only valid inside a verified request."""
    return get_jwt_identity(), (get_jwt() or {}).get("role")
