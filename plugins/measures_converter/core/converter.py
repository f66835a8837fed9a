"""Base-unit conversion, input validation, and result formatting."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Dict, List, Mapping, Optional, Tuple, Union

from .units import (
    UNIT_TABLE,
    Category,
    ConversionError,
    UnitDefinition,
    UnitTable,
)

DEFAULT_DECIMALS = 6


class InvalidUnitError(ConversionError):
    """Raised when a unit is not registered under the requested category."""


class InvalidValueError(ConversionError):
    """Raised when a value handed to the engine is not a finite real number."""


class InputValidationError(ConversionError):
    """Raised when raw user input cannot be accepted for conversion."""

    code = "invalid_input"

    def __init__(self, message: str, *, raw: Optional[object] = None) -> None:
        super().__init__(message)
        self.message = message
        self.raw = raw


class EmptyInputError(InputValidationError):
    code = "empty_input"


class NotANumberError(InputValidationError):
    code = "not_a_number"


class NegativeValueError(InputValidationError):
    code = "negative_value"


# Plain decimal grammar: optional sign, digits, at most one decimal point.
_DECIMAL_PATTERN = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)$", re.ASCII)

RawInput = Union[str, int, float, None]


def _input_text(raw: RawInput) -> str:
    """Return ``raw`` as stripped text; numbers are written out without exponents."""

    if raw is None:
        return ""
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        if isinstance(raw, int) or not math.isfinite(raw):
            return str(raw)
        return f"{Decimal(repr(raw)):f}"
    return str(raw).strip()


@dataclass(frozen=True, slots=True)
class ConversionRequest:
    category: Category
    from_unit: str
    to_unit: str
    value: float


@dataclass(frozen=True, slots=True)
class ConversionResult:
    """Outcome of a single conversion, ready for display."""

    request: ConversionRequest
    value: float
    formatted: str
    input_text: str

    @property
    def summary(self) -> str:
        return (
            f"{self.input_text} {self.request.from_unit} = "
            f"{self.formatted} {self.request.to_unit}"
        )

    def to_dict(self) -> Dict[str, object]:
        return {
            "category": self.request.category.key,
            "from_unit": self.request.from_unit,
            "to_unit": self.request.to_unit,
            "input": self.request.value,
            "value": self.value,
            "formatted": self.formatted,
            "summary": self.summary,
        }


class ConversionEngine:
    """Converts values through each category's base unit."""

    def __init__(self, table: UnitTable = UNIT_TABLE) -> None:
        self.table = table

    # ---- Listing helpers -------------------------------------------------
    def list_categories(self) -> List[Category]:
        return list(self.table.keys())

    def units_for(self, category: Category | str) -> List[str]:
        return list(self._units(category).keys())

    def list_units(self, category: Category | str) -> List[Dict[str, object]]:
        return [
            {
                "name": unit.name,
                "symbol": unit.symbol,
                "system": unit.system,
                "factor_to_base": unit.factor_to_base,
            }
            for unit in self._units(category).values()
        ]

    def default_units(self, category: Category | str) -> Tuple[str, str]:
        names = self.units_for(category)
        return names[0], names[1]

    # ---- Conversion ------------------------------------------------------
    def convert(
        self,
        category: Category | str,
        from_unit: str,
        to_unit: str,
        value: float,
    ) -> float:
        numeric = self._coerce_value(value)
        units = self._units(category)
        source = self._lookup(units, from_unit, category)
        target = self._lookup(units, to_unit, category)
        if source is target:
            return numeric
        base_value = numeric * source.factor_to_base
        return base_value / target.factor_to_base

    def run(
        self, request: ConversionRequest, *, input_text: Optional[str] = None
    ) -> ConversionResult:
        converted = self.convert(
            request.category, request.from_unit, request.to_unit, request.value
        )
        return ConversionResult(
            request=request,
            value=converted,
            formatted=self.format_result(converted),
            input_text=input_text if input_text is not None else _input_text(request.value),
        )

    def convert_text(
        self,
        category: Category | str,
        from_unit: str,
        to_unit: str,
        raw_text: RawInput,
    ) -> ConversionResult:
        """Validate ``raw_text`` and convert it; raises without a partial result."""

        value = self.validate_input(raw_text)
        request = ConversionRequest(
            category=Category.parse(category),
            from_unit=from_unit,
            to_unit=to_unit,
            value=value,
        )
        return self.run(request, input_text=_input_text(raw_text))

    # ---- Input and output ------------------------------------------------
    @staticmethod
    def validate_input(raw_text: RawInput) -> float:
        text = _input_text(raw_text)
        if not text:
            raise EmptyInputError("Please enter a value", raw=raw_text)
        if not _DECIMAL_PATTERN.match(text):
            raise NotANumberError("Enter a valid number", raw=raw_text)
        value = float(text)
        if not math.isfinite(value):
            raise NotANumberError("Enter a valid number", raw=raw_text)
        if value < 0:
            raise NegativeValueError("Value cannot be negative", raw=raw_text)
        # Collapse -0.0.
        return value + 0.0

    @staticmethod
    def format_result(value: float, decimals: int = DEFAULT_DECIMALS) -> str:
        numeric = ConversionEngine._coerce_value(value)
        if decimals < 0:
            raise InvalidValueError("Decimal precision must be non-negative.")
        with localcontext() as ctx:
            ctx.prec = 400
            quantum = Decimal(1).scaleb(-decimals)
            rounded = Decimal(repr(numeric)).quantize(quantum, rounding=ROUND_HALF_UP)
        if rounded.is_zero():
            return "0"
        text = f"{rounded:f}"
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        return text

    @staticmethod
    def swap(from_unit: str, to_unit: str) -> Tuple[str, str]:
        return to_unit, from_unit

    # ---- Internal utilities ----------------------------------------------
    def _units(self, category: Category | str) -> Mapping[str, UnitDefinition]:
        return self.table[Category.parse(category)]

    @staticmethod
    def _lookup(
        units: Mapping[str, UnitDefinition], name: str, category: Category | str
    ) -> UnitDefinition:
        unit = units.get(name) if isinstance(name, str) else None
        if unit is None:
            key = Category.parse(category).key
            raise InvalidUnitError(f"Unit '{name}' is not a {key} unit.")
        return unit

    @staticmethod
    def _coerce_value(value: float) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidValueError("Value must be a number.")
        try:
            numeric = float(value)
        except OverflowError as exc:
            raise InvalidValueError("Value must be a finite number.") from exc
        if not math.isfinite(numeric):
            raise InvalidValueError("Value must be a finite number.")
        return numeric


__all__ = [
    "ConversionEngine",
    "ConversionRequest",
    "ConversionResult",
    "DEFAULT_DECIMALS",
    "EmptyInputError",
    "InputValidationError",
    "InvalidUnitError",
    "InvalidValueError",
    "NegativeValueError",
    "NotANumberError",
    "RawInput",
]
