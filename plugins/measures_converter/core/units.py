"""Unit table for the measures converter."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping


class ConversionError(Exception):
    """Base exception for conversion failures."""


class UnknownCategoryError(ConversionError):
    """Raised when a category name does not match a supported category."""


class UnitTableError(ValueError):
    """Raised when a unit table violates its structural invariants."""


class Category(Enum):
    LENGTH = ("length", "Length (Metric ↔ Imperial)", "m")
    WEIGHT = ("weight", "Weight (Metric ↔ Imperial)", "kg")

    def __init__(self, key: str, label: str, base_symbol: str) -> None:
        self.key = key
        self.label = label
        self.base_symbol = base_symbol

    @classmethod
    def parse(cls, value: "Category | str") -> "Category":
        """Return the category matching ``value`` (a member or its key)."""

        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            text = value.strip().lower()
            for member in cls:
                if member.key == text:
                    return member
        raise UnknownCategoryError(f"Unknown category '{value}'.")


_SYMBOL_PATTERN = re.compile(r"\(([^()]+)\)\s*$")


@dataclass(frozen=True, slots=True)
class UnitDefinition:
    """A unit and the multiplier that takes it to its category's base unit."""

    name: str
    factor_to_base: float
    system: str = "metric"

    @property
    def symbol(self) -> str:
        match = _SYMBOL_PATTERN.search(self.name)
        return match.group(1) if match else self.name


UnitTable = Mapping[Category, Mapping[str, UnitDefinition]]


def build_unit_table(
    entries: Mapping[Category, Iterable[UnitDefinition]],
) -> UnitTable:
    """Validate ``entries`` and freeze them into a read-only table.

    Definition order is preserved; it drives default selections and display
    order downstream.
    """

    table: dict[Category, Mapping[str, UnitDefinition]] = {}
    for category in Category:
        units: dict[str, UnitDefinition] = {}
        for unit in entries.get(category, ()):
            if unit.name in units:
                raise UnitTableError(
                    f"Duplicate unit '{unit.name}' in category '{category.key}'."
                )
            factor = unit.factor_to_base
            if (
                isinstance(factor, bool)
                or not isinstance(factor, (int, float))
                or not math.isfinite(factor)
                or factor <= 0
            ):
                raise UnitTableError(
                    f"Unit '{unit.name}' needs a positive finite factor, got {factor!r}."
                )
            units[unit.name] = unit
        if len(units) < 2:
            raise UnitTableError(
                f"Category '{category.key}' must define at least two units."
            )
        table[category] = MappingProxyType(units)
    return MappingProxyType(table)


UNIT_TABLE: UnitTable = build_unit_table(
    {
        Category.LENGTH: (
            UnitDefinition("millimeters (mm)", 0.001),
            UnitDefinition("centimeters (cm)", 0.01),
            UnitDefinition("meters (m)", 1.0),
            UnitDefinition("kilometers (km)", 1000.0),
            UnitDefinition("inches (in)", 0.0254, "imperial"),
            UnitDefinition("feet (ft)", 0.3048, "imperial"),
            UnitDefinition("yards (yd)", 0.9144, "imperial"),
            UnitDefinition("miles (mi)", 1609.344, "imperial"),
        ),
        Category.WEIGHT: (
            UnitDefinition("grams (g)", 0.001),
            UnitDefinition("kilograms (kg)", 1.0),
            UnitDefinition("metric tons (t)", 1000.0),
            UnitDefinition("ounces (oz)", 0.028349523125, "imperial"),
            UnitDefinition("pounds (lb)", 0.45359237, "imperial"),
            UnitDefinition("stones (st)", 6.35029318, "imperial"),
        ),
    }
)


__all__ = [
    "Category",
    "ConversionError",
    "UnitDefinition",
    "UnitTable",
    "UnitTableError",
    "UnknownCategoryError",
    "UNIT_TABLE",
    "build_unit_table",
]
