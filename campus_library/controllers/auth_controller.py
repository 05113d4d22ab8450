from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required, get_jwt_identity, get_jwt

from campus_library.controllers.responses import body, library_error, required
from campus_library.errors import LibraryError
from campus_library.library import Library

auth_bp = Blueprint("auth", __name__)


@auth_bp.post("/login", endpoint="auth_login")
def login():
    data = body()
    try:
        (user_id,) = required(data, "id")
        token, identity = Library.current().auth.login(user_id, data.get("password") or "")
        return jsonify({
            "success": True,
            "access_token": token,
            "user": identity._asdict(),
        })
    except LibraryError as e:
        return library_error(e)


@auth_bp.get("/me", endpoint="auth_me")
@jwt_required()
def me():
    claims = get_jwt()
    return jsonify({
        "success": True,
        "user": {
            "user_id": get_jwt_identity(),
            "name": claims.get("name"),
            "role": claims.get("role"),
            "category": claims.get("category"),
        }
    })
