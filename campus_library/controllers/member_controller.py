# campus_library/controllers/member_controller.py

from flask import Blueprint, jsonify, request

from campus_library.controllers.responses import body, library_error, now, required
from campus_library.errors import LibraryError
from campus_library.library import Library
from campus_library.utils.decorators import current_identity, role_required

member_bp = Blueprint("member", __name__)


@member_bp.get("/books")
@role_required("member")
def search_books():
    books = Library.current().catalog.search(request.args.get("q", ""))
    return jsonify({"success": True, "data": [
        {
            "id": b.id,
            "isbn": b.isbn,
            "title": b.title,
            "author": b.author,
            "available_copies": b.available_copies,
        } for b in books
    ]})


@member_bp.get("/transactions")
@role_required("member")
def my_transactions():
    member_id, _role = current_identity()
    loans = Library.current().reports.member_transactions(member_id)
    return jsonify({"success": True, "data": [l.to_dict() for l in loans]})


@member_bp.post("/return/<txn_id>")
@role_required("member")
def return_book(txn_id: str):
    member_id, _role = current_identity()
    try:
        outcome = Library.current().circulation.return_book(txn_id, now(), member_id=member_id)
        return jsonify({"success": True, "data": outcome.to_dict()})
    except LibraryError as e:
        return library_error(e)


@member_bp.post("/reserve")
@role_required("member")
def reserve_book():
    member_id, _role = current_identity()
    try:
        (book_id,) = required(body(), "book_id")
        reservation = Library.current().circulation.reserve_book(member_id, book_id, now())
        return jsonify({"success": True, "data": reservation.to_dict()}), 201
    except LibraryError as e:
        return library_error(e)


@member_bp.get("/reservations")
@role_required("member")
def my_reservations():
    member_id, _role = current_identity()
    rows = Library.current().reservations.for_member(member_id)
    return jsonify({"success": True, "data": [r.to_dict() for r in rows]})


@member_bp.post("/reservations/<int:res_id>/cancel")
@role_required("member")
def cancel_reservation(res_id: int):
    member_id, _role = current_identity()
    try:
        reservation = Library.current().circulation.cancel_reservation(res_id, member_id=member_id)
        return jsonify({"success": True, "data": reservation.to_dict()})
    except LibraryError as e:
        return library_error(e)
