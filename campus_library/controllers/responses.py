from flask import jsonify, request

from campus_library.clock import get_clock
from campus_library.errors import InvalidInput, LibraryError


def library_error(e: LibraryError):
    return jsonify(e.to_dict()), e.http_status


def body():
    return request.get_json(silent=True) or {}


def required(data: dict, *keys):
    values = []
    for key in keys:
        value = data.get(key)
        if isinstance(value, str):
            value = value.strip()
        if value in (None, ""):
            raise InvalidInput(f"{'/'.join(keys)} required")
        values.append(str(value))
    return values


def now():
    return get_clock().now()
