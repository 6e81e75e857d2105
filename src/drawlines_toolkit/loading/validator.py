"""
Question Definition Validation

Validates question-definition dictionaries before they are turned into
QuestionDefinition objects. A question that fails here is unusable: it is
rejected at load time, before any interactive session starts.

Two levels:
- Basic checks (always): required fields, grade method, line numbering,
  line types and parseable zones
- Strict (optional): full JSON Schema validation with jsonschema against
  the bundled question.schema.json
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema

from drawlines_toolkit.core.models import Coordinate, GradeMethod, LineType, ParseError


_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema bundled next to this module."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(Exception):
    """Raised when a question definition is invalid."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def validate_question(data: dict[str, Any], *, strict: bool = False) -> None:
    """
    Validate a question definition.

    Args:
        data: Question dictionary (stored field names)
        strict: Also validate against the JSON Schema

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError(f"Question definition must be an object, got {type(data).__name__}")

    missing = [f for f in ("id", "lines") if f not in data]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            path="",
            errors=[f"Missing field: {f}" for f in missing]
        )

    method = data.get("grademethod", GradeMethod.PARTIAL.value)
    if method not in {m.value for m in GradeMethod}:
        raise ValidationError(f"Invalid grademethod: {method!r}", path="grademethod")

    lines = data["lines"]
    if not isinstance(lines, list) or not lines:
        raise ValidationError("lines must be a non-empty list", path="lines")

    for i, line in enumerate(lines):
        _validate_line(line, f"lines[{i}]", expected_number=i + 1)

    if strict:
        try:
            jsonschema.validate(data, _load_schema("question"))
        except jsonschema.ValidationError as e:
            raise ValidationError(
                f"Schema validation failed: {e.message}",
                path=".".join(str(p) for p in e.absolute_path),
                errors=[e.message]
            )


def _validate_line(data: Any, path: str, *, expected_number: int) -> None:
    """Validate one line record."""
    if not isinstance(data, dict):
        raise ValidationError("line must be an object", path=path)

    required = ["number", "type", "zonestart", "zoneend"]
    missing = [f for f in required if f not in data or data[f] in (None, "")]
    if missing:
        raise ValidationError(
            f"Line missing required fields: {missing}",
            path=path,
            errors=[f"Missing field: {f}" for f in missing]
        )

    number = data["number"]
    if not isinstance(number, int) or number != expected_number:
        raise ValidationError(
            f"Invalid line number: {number!r} (expected {expected_number})",
            path=f"{path}.number"
        )

    line_type = data["type"]
    if line_type not in {t.value for t in LineType}:
        raise ValidationError(f"Invalid line type: {line_type!r}", path=f"{path}.type")

    for key in ("zonestart", "zoneend"):
        try:
            Coordinate.parse(data[key])
        except ParseError as e:
            raise ValidationError(f"Invalid zone: {e}", path=f"{path}.{key}")
