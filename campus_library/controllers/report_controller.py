from flask import Blueprint, jsonify, request

from campus_library.controllers.responses import now
from campus_library.library import Library
from campus_library.utils.decorators import role_required

report_bp = Blueprint("reports", __name__)


@report_bp.get("/overdue")
@role_required("admin", "staff")
def overdue():
    rows = Library.current().reports.overdue(now())
    return jsonify({"success": True, "data": [r.to_dict() for r in rows]})


@report_bp.get("/top")
@role_required("admin", "staff")
def top_borrowed():
    limit = request.args.get("limit", 10, type=int)
    books = Library.current().reports.top_borrowed(max(1, min(limit, 100)))
    return jsonify({"success": True, "data": [
        {"id": b.id, "title": b.title, "borrowed_count": b.borrowed_count} for b in books
    ]})
