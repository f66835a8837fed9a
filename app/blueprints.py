"""Blueprint registration helpers."""

from __future__ import annotations

import importlib
import pkgutil
from pathlib import Path

from flask import Blueprint, Flask

from common.logging import get_logger

logger = get_logger("blueprints")


def _iter_blueprints(package: str = "plugins") -> list[Blueprint]:
    """Collect the ``blueprints`` exported by each plugin's ``api`` module."""

    module_path = Path(__file__).resolve().parent.parent / package
    if not module_path.exists():
        return []
    found: list[Blueprint] = []
    for module_info in pkgutil.iter_modules([str(module_path)]):
        if not module_info.ispkg:
            continue
        module = importlib.import_module(f"{package}.{module_info.name}.api")
        found.extend(getattr(module, "blueprints", None) or [])
    return found


def register_plugin_blueprints(app: Flask) -> None:
    for bp in _iter_blueprints():
        app.register_blueprint(bp)
        logger.debug("registered blueprint %s at %s", bp.name, bp.url_prefix)


__all__ = ["register_plugin_blueprints"]
