"""Facade for the measures converter core utilities."""

from __future__ import annotations

from functools import lru_cache
from typing import Dict, List, Tuple

from .converter import (
    DEFAULT_DECIMALS,
    ConversionEngine,
    ConversionRequest,
    ConversionResult,
    EmptyInputError,
    InputValidationError,
    InvalidUnitError,
    InvalidValueError,
    NegativeValueError,
    NotANumberError,
    RawInput,
)
from .units import (
    UNIT_TABLE,
    Category,
    ConversionError,
    UnitDefinition,
    UnitTableError,
    UnknownCategoryError,
    build_unit_table,
)


@lru_cache(maxsize=1)
def _engine() -> ConversionEngine:
    return ConversionEngine()


def list_categories() -> List[Dict[str, object]]:
    """Return every category with its units and default selection."""

    engine = _engine()
    payload: List[Dict[str, object]] = []
    for category in engine.list_categories():
        from_unit, to_unit = engine.default_units(category)
        payload.append(
            {
                "key": category.key,
                "label": category.label,
                "base_unit": category.base_symbol,
                "units": engine.units_for(category),
                "defaults": {"from_unit": from_unit, "to_unit": to_unit},
            }
        )
    return payload


def units_for(category: Category | str) -> List[str]:
    """Return unit names for ``category`` in display order."""

    return _engine().units_for(category)


def list_units(category: Category | str) -> List[Dict[str, object]]:
    return _engine().list_units(category)


def default_units(category: Category | str) -> Tuple[str, str]:
    return _engine().default_units(category)


def convert(
    category: Category | str, from_unit: str, to_unit: str, value: float
) -> float:
    return _engine().convert(category, from_unit, to_unit, value)


def convert_text(
    category: Category | str, from_unit: str, to_unit: str, raw_text: RawInput
) -> Dict[str, object]:
    """Validate raw input, convert it, and return a display-ready payload."""

    return _engine().convert_text(category, from_unit, to_unit, raw_text).to_dict()


def validate_input(raw_text: RawInput) -> float:
    return _engine().validate_input(raw_text)


def format_result(value: float, decimals: int = DEFAULT_DECIMALS) -> str:
    return _engine().format_result(value, decimals)


def swap(from_unit: str, to_unit: str) -> Tuple[str, str]:
    return _engine().swap(from_unit, to_unit)


__all__ = [
    "Category",
    "ConversionEngine",
    "ConversionError",
    "ConversionRequest",
    "ConversionResult",
    "EmptyInputError",
    "InputValidationError",
    "InvalidUnitError",
    "InvalidValueError",
    "NegativeValueError",
    "NotANumberError",
    "UNIT_TABLE",
    "UnitDefinition",
    "UnitTableError",
    "UnknownCategoryError",
    "build_unit_table",
    "convert",
    "convert_text",
    "default_units",
    "format_result",
    "list_categories",
    "list_units",
    "swap",
    "units_for",
    "validate_input",
]
