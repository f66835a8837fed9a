"""Measures converter API with standardized responses."""

from __future__ import annotations

from flask import Blueprint, Response, request
from pydantic import StrictFloat, StrictInt, StrictStr

from common.errors import ValidationAppError
from common.logging import get_logger
from common.responses import fail, ok
from common.validation import SchemaModel, ValidationError, parse_model

from ..core import (
    InputValidationError,
    InvalidUnitError,
    InvalidValueError,
    UnknownCategoryError,
    convert_text,
    default_units,
    list_categories,
    list_units,
    swap,
    validate_input,
)

logger = get_logger("measures_converter")


class ValuePayload(SchemaModel):
    value: StrictStr | StrictFloat | StrictInt | None = None


class ConvertPayload(ValuePayload):
    category: str
    from_unit: str
    to_unit: str


class SwapPayload(SchemaModel):
    from_unit: str
    to_unit: str


api_bp = Blueprint(
    "measures_converter_api", __name__, url_prefix="/api/measures_converter"
)


def _invalid_request(exc: ValidationError) -> Response:
    return fail(
        ValidationAppError(
            message=str(exc),
            code="measures.invalid_request",
            details=getattr(exc, "details", None),
        )
    )


def _invalid_input(exc: InputValidationError) -> Response:
    logger.info("rejected input %r: %s", exc.raw, exc.code)
    return fail(
        ValidationAppError(
            message=exc.message,
            code=f"measures.{exc.code}",
            details={"field": "value"},
        )
    )


@api_bp.get("/categories")
def categories() -> Response:
    return ok({"categories": list_categories()})


@api_bp.get("/units/<category>")
def units_endpoint(category: str) -> Response:
    try:
        units = list_units(category)
        from_unit, to_unit = default_units(category)
    except UnknownCategoryError as exc:
        return fail(ValidationAppError(message=str(exc), code="measures.invalid_category"))
    return ok(
        {
            "category": category.strip().lower(),
            "units": units,
            "defaults": {"from_unit": from_unit, "to_unit": to_unit},
        }
    )


@api_bp.post("/convert")
def convert_endpoint() -> Response:
    raw_payload = request.get_json(silent=True) or {}
    try:
        payload = parse_model(ConvertPayload, raw_payload)
    except ValidationError as exc:
        return _invalid_request(exc)
    try:
        result = convert_text(
            payload.category, payload.from_unit, payload.to_unit, payload.value
        )
    except InputValidationError as exc:
        return _invalid_input(exc)
    except UnknownCategoryError as exc:
        return fail(ValidationAppError(message=str(exc), code="measures.invalid_category"))
    except InvalidUnitError as exc:
        logger.warning("unit outside category %s: %s", payload.category, exc)
        return fail(ValidationAppError(message=str(exc), code="measures.invalid_unit"))
    except InvalidValueError as exc:
        return fail(ValidationAppError(message=str(exc), code="measures.invalid_value"))
    return ok(result)


@api_bp.post("/validate")
def validate_endpoint() -> Response:
    raw_payload = request.get_json(silent=True) or {}
    try:
        payload = parse_model(ValuePayload, raw_payload)
    except ValidationError as exc:
        return _invalid_request(exc)
    try:
        value = validate_input(payload.value)
    except InputValidationError as exc:
        return _invalid_input(exc)
    return ok({"value": value})


@api_bp.post("/swap")
def swap_endpoint() -> Response:
    raw_payload = request.get_json(silent=True) or {}
    try:
        payload = parse_model(SwapPayload, raw_payload)
    except ValidationError as exc:
        return _invalid_request(exc)
    from_unit, to_unit = swap(payload.from_unit, payload.to_unit)
    return ok({"from_unit": from_unit, "to_unit": to_unit})


blueprints = [api_bp]


__all__ = [
    "blueprints",
    "categories",
    "units_endpoint",
    "convert_endpoint",
    "validate_endpoint",
    "swap_endpoint",
]
