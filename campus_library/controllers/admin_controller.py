# campus_library/controllers/admin_controller.py

from flask import Blueprint, jsonify

from campus_library.controllers.responses import body, library_error, required
from campus_library.errors import LibraryError
from campus_library.library import Library
from campus_library.utils.decorators import role_required

admin_bp = Blueprint("admin", __name__)


@admin_bp.get("/books")
@role_required("admin")
def list_books():
    books = Library.current().catalog.list_books()
    return jsonify({"success": True, "data": [b.to_dict() for b in books]})


@admin_bp.post("/books")
@role_required("admin")
def add_book():
    try:
        book = Library.current().catalog.add_book(body())
        return jsonify({"success": True, "data": book.to_dict()}), 201
    except LibraryError as e:
        return library_error(e)


@admin_bp.put("/books/<book_id>")
@role_required("admin")
def update_book(book_id: str):
    try:
        book = Library.current().catalog.update_book(book_id, body())
        return jsonify({"success": True, "data": book.to_dict()})
    except LibraryError as e:
        return library_error(e)


@admin_bp.delete("/books/<book_id>")
@role_required("admin")
def remove_book(book_id: str):
    try:
        cancelled = Library.current().circulation.withdraw_book(book_id)
        return jsonify({"success": True, "cancelled_reservations": cancelled})
    except LibraryError as e:
        return library_error(e)


@admin_bp.post("/staff")
@role_required("admin")
def add_staff():
    data = body()
    try:
        staff_id, name = required(data, "id", "name")
        user = Library.current().auth.register(
            staff_id, name, data.get("password") or "", role="staff", email=data.get("email")
        )
        return jsonify({"success": True, "data": user.to_dict()}), 201
    except LibraryError as e:
        return library_error(e)


@admin_bp.get("/users")
@role_required("admin")
def list_users():
    users = Library.current().membership.list_users()
    return jsonify({"success": True, "data": [u.to_dict() for u in users]})
