# campus_library/controllers/staff_controller.py

from flask import Blueprint, jsonify

from campus_library.controllers.responses import body, library_error, now, required
from campus_library.errors import LibraryError
from campus_library.library import Library
from campus_library.utils.decorators import role_required

staff_bp = Blueprint("staff", __name__)


@staff_bp.post("/members")
@role_required("staff")
def add_member():
    data = body()
    try:
        member_id, name, category = required(data, "id", "name", "category")
        user = Library.current().auth.register(
            member_id, name, data.get("password") or "",
            role="member", category=category, email=data.get("email"),
        )
        return jsonify({"success": True, "data": user.to_dict()}), 201
    except LibraryError as e:
        return library_error(e)


@staff_bp.get("/members")
@role_required("staff")
def list_members():
    members = Library.current().membership.list_members()
    return jsonify({"success": True, "data": [m.to_dict() for m in members]})


@staff_bp.post("/issue")
@role_required("staff")
def issue_book():
    try:
        member_id, book_id = required(body(), "member_id", "book_id")
        outcome = Library.current().circulation.issue_book(member_id, book_id, now())
        return jsonify({"success": True, "data": outcome.to_dict()}), 201
    except LibraryError as e:
        return library_error(e)


@staff_bp.post("/return/<txn_id>")
@role_required("staff")
def return_book(txn_id: str):
    try:
        outcome = Library.current().circulation.return_book(txn_id, now())
        return jsonify({"success": True, "data": outcome.to_dict()})
    except LibraryError as e:
        return library_error(e)


@staff_bp.post("/reserve")
@role_required("staff")
def reserve_book():
    try:
        member_id, book_id = required(body(), "member_id", "book_id")
        reservation = Library.current().circulation.reserve_book(member_id, book_id, now())
        return jsonify({"success": True, "data": reservation.to_dict()}), 201
    except LibraryError as e:
        return library_error(e)


@staff_bp.get("/borrowed")
@role_required("staff")
def borrowed_list():
    loans = Library.current().reports.borrowed()
    return jsonify({"success": True, "data": [l.to_dict() for l in loans]})


@staff_bp.get("/books/<book_id>/queue")
@role_required("staff")
def reservation_queue(book_id: str):
    try:
        library = Library.current()
        library.catalog.find(book_id)
        queue = library.reservations.waiting_for_book(book_id)
        return jsonify({"success": True, "data": [r.to_dict() for r in queue]})
    except LibraryError as e:
        return library_error(e)
