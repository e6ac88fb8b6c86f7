"""Inspection file — loads the checks to run from YAML.

Format::

    apis:
      - name: billing
        url: http://billing.internal/health
    functions:
      - name: database
        fn: myapp.checks:database_alive

``fn`` is an import path (``module:attr`` or ``module.attr``) to a
zero-argument callable. A category left out of the file is reported as
absent; an empty list is reported as an empty, healthy category.
"""

from __future__ import annotations

import importlib
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

import yaml

from .checks import FunctionCheck, HttpCheck, InspectionSet

logger = logging.getLogger(__name__)


class InspectionError(ValueError):
    """Raised when the inspection file can't be turned into checks."""


def load_inspection_set(path: Path | str) -> InspectionSet:
    """Parse an inspection file. A missing file means nothing to check."""
    path = Path(path)
    if not path.exists():
        logger.warning("Inspection file not found: %s — only host metrics will be reported", path)
        return InspectionSet()

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InspectionError(f"Failed to read {path}: {e}") from e

    try:
        raw = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise InspectionError(f"Failed to parse {path}: {e}") from e

    if not isinstance(raw, dict):
        raise InspectionError(f"{path}: expected a mapping at top level")

    inspection = parse_inspection_set(raw)
    logger.info(
        "Loaded inspection set from %s: %d apis, %d functions",
        path,
        len(inspection.apis or []),
        len(inspection.functions or []),
    )
    return inspection


def parse_inspection_set(raw: dict[str, Any]) -> InspectionSet:
    apis = None
    if "apis" in raw:
        apis = tuple(_parse_api(entry) for entry in _entries(raw, "apis"))

    functions = None
    if "functions" in raw:
        functions = tuple(_parse_function(entry) for entry in _entries(raw, "functions"))

    return InspectionSet(apis=apis, functions=functions)


# ── Parsers ──────────────────────────────────────────────────────────────────


def _entries(raw: dict[str, Any], key: str) -> list[Any]:
    value = raw[key]
    if value is None:
        return []
    if not isinstance(value, list):
        raise InspectionError(f"'{key}' must be a list, got {type(value).__name__}")
    return value


def _require(entry: Any, key: str, kind: str) -> str:
    if not isinstance(entry, dict):
        raise InspectionError(f"{kind} entry must be a mapping, got {entry!r}")
    value = entry.get(key)
    if not value or not isinstance(value, str):
        raise InspectionError(f"{kind} entry is missing '{key}': {entry!r}")
    return value


def _parse_api(entry: Any) -> HttpCheck:
    name = _require(entry, "name", "api")
    return HttpCheck(name=name, url=_require(entry, "url", "api"))


def _parse_function(entry: Any) -> FunctionCheck:
    name = _require(entry, "name", "function")
    return FunctionCheck(name=name, fn=resolve_callable(_require(entry, "fn", "function")))


def resolve_callable(target: str) -> Callable[[], Any]:
    """Import ``module:attr`` (or ``module.attr``) and return the callable."""
    if ":" in target:
        module_name, _, attr_path = target.partition(":")
    else:
        module_name, _, attr_path = target.rpartition(".")
    if not module_name or not attr_path:
        raise InspectionError(f"Not an import path: {target!r}")

    try:
        obj: Any = importlib.import_module(module_name)
        for attr in attr_path.split("."):
            obj = getattr(obj, attr)
    except (ImportError, AttributeError) as e:
        raise InspectionError(f"Cannot resolve {target!r}: {e}") from e

    if not callable(obj):
        raise InspectionError(f"{target!r} is not callable")
    return obj
