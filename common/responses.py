"""Standardized JSON response helpers."""

from __future__ import annotations

from typing import Any, Mapping

from flask import Response, jsonify

from .errors import AppError


def ok(data: Any, *, status: int = 200) -> Response:
    """Return a success envelope: ``{"success": true, "data": ...}``."""

    response = jsonify({"success": True, "data": data})
    response.status_code = status
    return response


def fail(error: AppError | Mapping[str, Any], *, status: int | None = None) -> Response:
    """Return a failure envelope: ``{"success": false, "error": {...}}``."""

    if isinstance(error, AppError):
        body = error.to_dict()
        default_status = error.status_code
    else:
        body = dict(error)
        default_status = 400
    response = jsonify({"success": False, "error": body})
    response.status_code = status or default_status
    return response


__all__ = ["ok", "fail"]
