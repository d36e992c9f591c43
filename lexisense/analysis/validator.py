"""Parses raw model output and validates it against the analysis schema.

Validation is strict: any deviation rejects the whole chunk. Values are never
coerced, defaulted or trimmed.
"""

import json
import re
from collections.abc import Callable
from datetime import date
from typing import Any, TypeVar

from lexisense.analysis.exceptions import SchemaValidationError
from lexisense.analysis.models import RISK_SEVERITIES, KeyDate, PartialAnalysis, Party, Risk

_REQUIRED_FIELDS = ("summary", "parties", "dates", "risks")
_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

T = TypeVar("T")


def validate(raw: str) -> PartialAnalysis:
    """Parse *raw* as JSON and build a PartialAnalysis.

    Raises:
        SchemaValidationError: on any parse or validation failure.
    """
    data = _parse_json(raw)
    _require_top_level_fields(data)
    summary = data["summary"]
    if not isinstance(summary, str):
        raise SchemaValidationError("'summary' must be a string")
    return PartialAnalysis(
        summary=summary,
        parties=_build_list(data["parties"], "parties", _build_party),
        dates=_build_list(data["dates"], "dates", _build_date),
        risks=_build_list(data["risks"], "risks", _build_risk),
    )


def _parse_json(raw: str) -> dict[str, Any]:
    if not isinstance(raw, str):
        raise SchemaValidationError("Response must be a string")
    cleaned = raw.strip()
    if cleaned.startswith("```"):
        lines = cleaned.splitlines()
        if lines and lines[0].startswith("```"):
            lines = lines[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        cleaned = "\n".join(lines)

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise SchemaValidationError(f"Invalid JSON response: {exc}") from exc

    if not isinstance(parsed, dict):
        raise SchemaValidationError("JSON response must be an object")
    return parsed


def _require_top_level_fields(data: dict[str, Any]) -> None:
    for field in _REQUIRED_FIELDS:
        if field not in data:
            raise SchemaValidationError(f"Missing required top-level field: {field}")


def _build_list(raw: Any, name: str, build: Callable[[Any, int], T]) -> list[T]:
    if not isinstance(raw, list):
        raise SchemaValidationError(f"'{name}' must be a list")
    return [build(item, i) for i, item in enumerate(raw)]


def _require_object(raw: Any, kind: str, index: int) -> dict[str, Any]:
    if not isinstance(raw, dict):
        raise SchemaValidationError(f"{kind} at index {index} must be an object")
    return raw


def _require_string(raw: dict[str, Any], key: str, kind: str, index: int) -> str:
    if key not in raw:
        raise SchemaValidationError(f"{kind} at index {index}: missing '{key}'")
    value = raw[key]
    if not isinstance(value, str):
        raise SchemaValidationError(f"{kind} at index {index}: '{key}' must be a string")
    return value


def _build_party(raw: Any, index: int) -> Party:
    item = _require_object(raw, "Party", index)
    return Party(
        name=_require_string(item, "name", "Party", index),
        role=_require_string(item, "role", "Party", index),
    )


def _build_date(raw: Any, index: int) -> KeyDate:
    item = _require_object(raw, "Date", index)
    label = _require_string(item, "label", "Date", index)
    value = _require_string(item, "date", "Date", index)
    if not _ISO_DATE_RE.match(value):
        raise SchemaValidationError(
            f"Date at index {index}: 'date' must match YYYY-MM-DD"
        )
    try:
        date.fromisoformat(value)
    except ValueError as exc:
        raise SchemaValidationError(
            f"Date at index {index}: 'date' is not a calendar date"
        ) from exc
    return KeyDate(label=label, date=value)


def _build_risk(raw: Any, index: int) -> Risk:
    item = _require_object(raw, "Risk", index)
    severity = _require_string(item, "severity", "Risk", index)
    if severity not in RISK_SEVERITIES:
        raise SchemaValidationError(
            f"Risk at index {index}: 'severity' must be one of "
            f"{sorted(RISK_SEVERITIES)}"
        )
    return Risk(
        severity=severity,
        description=_require_string(item, "description", "Risk", index),
    )
