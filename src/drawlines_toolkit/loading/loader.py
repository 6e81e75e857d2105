"""
Module: loading.loader

Purpose:
    Build QuestionDefinition objects from stored question data (a dict or
    a JSON file using the stored field names). All problems surface here
    as LoaderError so a broken definition is caught before rendering.

Key Functions:
    - question_from_dict(): Validate and convert one definition
    - question_to_dict(): Inverse, for writing definitions back out
    - load_question(): Read and convert a JSON file

Key Classes:
    - LoaderError: Exception for loading failures

Dependencies:
    - json, pathlib (std)
    - core.models: QuestionDefinition, LineDefinition
    - loading.validator: validate_question

Used By:
    - Presentation shell and grading integration (external)
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from drawlines_toolkit.core.models import (
    Coordinate,
    GradeMethod,
    LineDefinition,
    LineType,
    QuestionDefinition,
)

from .validator import ValidationError, validate_question

logger = logging.getLogger(__name__)


class LoaderError(Exception):
    """Error loading a question definition."""
    pass


def _flag(value: Any) -> bool:
    """Stored flags may be booleans or 0/1 integers."""
    return bool(int(value)) if isinstance(value, (int, str)) else bool(value)


def question_from_dict(
    data: Dict[str, Any],
    *,
    validate: bool = True,
    strict: bool = False,
    base_path: Optional[Path] = None,
) -> QuestionDefinition:
    """
    Convert stored question data into a QuestionDefinition.

    Args:
        data: Question dictionary
        validate: Run validate_question first
        strict: Also validate against the JSON Schema
        base_path: If provided, bgimage is resolved relative to this

    Returns:
        QuestionDefinition

    Raises:
        LoaderError: If the data is invalid
    """
    try:
        if validate:
            validate_question(data, strict=strict)

        lines = tuple(
            LineDefinition(
                number=int(line["number"]),
                type=LineType(line["type"]),
                zone_start=Coordinate.parse(line["zonestart"]),
                zone_end=Coordinate.parse(line["zoneend"]),
                label_start=line.get("labelstart", "") or "",
                label_middle=line.get("labelmiddle", "") or "",
                label_end=line.get("labelend", "") or "",
            )
            for line in data["lines"]
        )

        background = Path(data["bgimage"]) if data.get("bgimage") else None
        if background is not None and base_path is not None:
            background = base_path / background

        question = QuestionDefinition(
            id=str(data["id"]),
            lines=lines,
            grade_method=GradeMethod(data.get("grademethod", GradeMethod.PARTIAL.value)),
            show_num_correct=_flag(data.get("shownumcorrect", False)),
            show_misplaced=_flag(data.get("showmisplaced", False)),
            background=background,
        )
    except ValidationError as e:
        where = f" at {e.path}" if e.path else ""
        raise LoaderError(f"Invalid question definition{where}: {e}") from e
    except (KeyError, TypeError, ValueError) as e:
        raise LoaderError(f"Invalid question definition: {e}") from e

    logger.debug(
        f"Loaded question {question.id!r}: {question.line_count} lines, "
        f"{question.grade_method.value} grading"
    )
    return question


def question_to_dict(question: QuestionDefinition) -> Dict[str, Any]:
    """Serialize a QuestionDefinition using the stored field names."""
    return question.to_dict()


def load_question(path: Path, *, strict: bool = True) -> QuestionDefinition:
    """
    Load a question definition from a JSON file.

    The background image path, if any, is resolved relative to the file.

    Raises:
        LoaderError: If the file cannot be read or holds an invalid definition
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise LoaderError(f"Question file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise LoaderError(f"Question file is not valid JSON: {path}: {e}") from e
    except OSError as e:
        raise LoaderError(f"Failed to read question file {path}: {e}") from e

    question = question_from_dict(data, strict=strict, base_path=path.parent)
    logger.info(f"Loaded question {question.id!r} from {path}")
    return question
