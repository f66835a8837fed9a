"""Command line interface for the Measures Converter plugin."""

from __future__ import annotations

import argparse
import json
from typing import Any

from .core import (
    ConversionError,
    convert_text,
    default_units,
    list_categories,
    list_units,
    swap,
)


def _print(payload: dict[str, Any]) -> None:
    print(json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False))


def command_categories(args: argparse.Namespace) -> None:
    _print({"categories": list_categories()})


def command_units(args: argparse.Namespace) -> None:
    from_unit, to_unit = default_units(args.category)
    _print(
        {
            "category": args.category,
            "units": list_units(args.category),
            "defaults": {"from_unit": from_unit, "to_unit": to_unit},
        }
    )


def command_convert(args: argparse.Namespace) -> None:
    from_unit, to_unit = args.from_unit, args.to_unit
    if args.swap:
        from_unit, to_unit = swap(from_unit, to_unit)
    _print(convert_text(args.category, from_unit, to_unit, args.value))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Measures Converter CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    categories_parser = subparsers.add_parser("categories", help="List categories")
    categories_parser.set_defaults(func=command_categories)

    units_parser = subparsers.add_parser("units", help="List the units of a category")
    units_parser.add_argument("category", help="Category key (length or weight)")
    units_parser.set_defaults(func=command_units)

    convert_parser = subparsers.add_parser("convert", help="Convert a value")
    convert_parser.add_argument("--category", required=True, help="Category key")
    convert_parser.add_argument("--from", dest="from_unit", required=True, help="Source unit name")
    convert_parser.add_argument("--to", dest="to_unit", required=True, help="Target unit name")
    convert_parser.add_argument("--value", required=True, help="Value to convert, e.g. 3.5")
    convert_parser.add_argument("--swap", action="store_true", help="Exchange the source and target units first")
    convert_parser.set_defaults(func=command_convert)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        args.func(args)
    except ConversionError as exc:
        raise SystemExit(f"error: {exc}") from exc


if __name__ == "__main__":
    main()
