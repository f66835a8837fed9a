"""Smoke tests for the Measures Converter CLI."""

from __future__ import annotations

import json
from contextlib import redirect_stdout
from io import StringIO

import pytest

from plugins.measures_converter import cli


def _run_cli(args: list[str]) -> dict[str, object]:
    buffer = StringIO()
    with redirect_stdout(buffer):
        cli.main(args)
    return json.loads(buffer.getvalue().strip())


def test_cli_lists_units():
    listing = _run_cli(["units", "weight"])
    assert listing["defaults"]["from_unit"] == "grams (g)"
    assert [unit["symbol"] for unit in listing["units"]][-1] == "st"


def test_cli_converts_and_swaps():
    result = _run_cli(
        ["convert", "--category", "length", "--from", "feet (ft)", "--to", "meters (m)", "--value", "1", "--swap"]
    )
    assert result["from_unit"] == "meters (m)"
    assert result["formatted"] == "3.28084"


def test_cli_exits_on_invalid_input():
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["convert", "--category", "length", "--from", "meters (m)", "--to", "feet (ft)", "--value", "-1"])
    assert "negative" in str(excinfo.value.code)
