"""
Module: grading.engine

Purpose:
    Grade stored responses against a question definition. Each line's
    response value "x1,y1 x2,y2" is split into its two graded points and
    each point is matched against the corresponding target zone.

    Scoring:
        partial  - numerator = points in zone, denominator = 2 * lines
        allnone  - numerator = lines with both points in zone, denominator = lines

    Malformed values never raise out of this module: a line whose value
    cannot be parsed simply scores nothing.

Key Classes:
    - GradingEngine: All response-level operations for one question
    - GradeResult: (fraction, state) pair from grade_response()
    - ClassifiedResponse: Per-line classification for response analysis

Dependencies:
    - core.models: QuestionDefinition, LineDefinition, parse_response_points
    - grading.zone_matcher: in_zone predicate
    - grading.states: default graded-state classifier

Used By:
    - Question-engine integration (external)
    - tests.grading
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Mapping, NamedTuple, Optional, Tuple

from drawlines_toolkit.core.models import (
    GradeMethod,
    LineDefinition,
    ParseError,
    QuestionDefinition,
    parse_response_points,
)

from .states import graded_state_for_fraction
from .zone_matcher import is_point_text_in_zone

logger = logging.getLogger(__name__)

Response = Mapping[str, str]

# Localization key for the "drag the lines" validation message.
VALIDATION_MESSAGE_KEY = "pleasedragalllines"


class GradeResult(NamedTuple):
    """Result of grading one response."""

    fraction: float
    state: Any


@dataclass(frozen=True)
class ClassifiedResponse:
    """
    Classification of one line's response for response analysis.

    Attributes:
        response_class_id: "right", "partial" or "wrong"; None for no response
        summary: The graded points as "x1,y1 x2,y2"
        fraction: Share of the question's credit this line earned
    """

    response_class_id: Optional[str]
    summary: str
    fraction: float

    @classmethod
    def no_response(cls) -> ClassifiedResponse:
        return cls(None, "", 0.0)


class GradingEngine:
    """
    Response grading for one QuestionDefinition.

    Example:
        >>> engine = GradingEngine(question)
        >>> engine.grade_response({"c0": "10,10 300,10", "c1": "10,200 300,123"}).fraction
        0.75
    """

    def __init__(
        self,
        question: QuestionDefinition,
        *,
        classifier: Callable[[float], Any] = graded_state_for_fraction,
    ) -> None:
        self.question = question
        self.classifier = classifier

    @staticmethod
    def choice(index: int) -> str:
        """Response key for the zero-based line index."""
        return f"c{index}"

    def get_expected_data(self) -> Tuple[str, ...]:
        """Response keys this question reads, one per line."""
        return tuple(self.choice(index) for index in range(self.question.line_count))

    # ─────────────────────────────────────────────────────────────────────────
    # Response Access
    # ─────────────────────────────────────────────────────────────────────────

    def _entry(self, response: Response, index: int) -> str:
        """Response value for a line, "" when absent."""
        value = response.get(self.choice(index))
        if not isinstance(value, str):
            return ""
        return value.strip()

    def _attempted(self, response: Response) -> Iterable[Tuple[int, LineDefinition, str]]:
        """Yield (index, line, value) for every line with a non-empty value."""
        for index, line in enumerate(self.question.lines):
            value = self._entry(response, index)
            if value:
                yield index, line, value

    def _graded_points(self, line: LineDefinition, value: str) -> Optional[Tuple[str, str]]:
        try:
            return parse_response_points(value, line.type)
        except ParseError as e:
            logger.warning(f"Line {line.number}: treating malformed response as incorrect: {e}")
            return None

    def _line_hits(self, line: LineDefinition, value: str) -> Tuple[bool, bool]:
        """Which of the line's two graded points are inside their zones."""
        points = self._graded_points(line, value)
        if points is None:
            return False, False
        start, end = points
        return (
            is_point_text_in_zone(start, line.zone_start),
            is_point_text_in_zone(end, line.zone_end),
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Completeness
    # ─────────────────────────────────────────────────────────────────────────

    def is_complete_response(self, response: Response) -> bool:
        """
        True if at least one line has a response.

        Not "every line answered": a single placed line is enough.
        """
        return any(True for _ in self._attempted(response))

    def is_gradable_response(self, response: Response) -> bool:
        return self.is_complete_response(response)

    def get_validation_error(
        self,
        response: Response,
        translate: Optional[Callable[[str], str]] = None,
    ) -> str:
        """
        Validation message, or "" when the response is complete.

        The text is owned by the caller's localization layer; without a
        translate callable the message key is returned.
        """
        if self.is_complete_response(response):
            return ""
        if translate is None:
            return VALIDATION_MESSAGE_KEY
        return translate(VALIDATION_MESSAGE_KEY)

    # ─────────────────────────────────────────────────────────────────────────
    # Scoring
    # ─────────────────────────────────────────────────────────────────────────

    def get_correct_response(self) -> Dict[str, str]:
        """Zone centres of every line, as a response."""
        return {
            self.choice(index): f"{line.zone_start.xy} {line.zone_end.xy}"
            for index, line in enumerate(self.question.lines)
        }

    def count_parts_right(self, response: Response) -> Tuple[int, int]:
        """
        Count graded points inside their zones.

        Returns:
            (points right, 2 * number of lines)
        """
        right = 0
        for _, line, value in self._attempted(response):
            right += sum(self._line_hits(line, value))
        return right, 2 * self.question.line_count

    def count_parts_right_all_or_none(self, response: Response) -> Tuple[int, int]:
        """
        Count lines with both graded points inside their zones.

        Returns:
            (lines fully right, number of lines)
        """
        right = 0
        for _, line, value in self._attempted(response):
            if all(self._line_hits(line, value)):
                right += 1
        return right, self.question.line_count

    def get_num_parts_right(self, response: Response) -> Tuple[int, int]:
        """Counts for the question's grade method."""
        if self.question.grade_method is GradeMethod.ALL_OR_NONE:
            return self.count_parts_right_all_or_none(response)
        return self.count_parts_right(response)

    def grade_response(self, response: Response) -> GradeResult:
        """
        Grade a response.

        The raw fraction is handed to the classifier unrounded.
        """
        right, total = self.get_num_parts_right(response)
        fraction = right / total
        logger.debug(
            f"Graded question {self.question.id!r} ({self.question.grade_method.value}): "
            f"{right}/{total}"
        )
        return GradeResult(fraction, self.classifier(fraction))

    def compute_final_grade(self, responses: Iterable[Response], total_tries: int) -> float:
        """
        Sum of the fractions of every response in the attempt history.

        The sum is not normalized by total_tries; that is left to the caller.
        """
        responses = list(responses)
        logger.debug(f"Computing final grade over {len(responses)} responses ({total_tries} tries)")
        return sum(self.grade_response(response).fraction for response in responses)

    def get_random_guess_score(self) -> None:
        """A random guess has no meaningful expected score for this question type."""
        return None

    # ─────────────────────────────────────────────────────────────────────────
    # Comparison and Summaries
    # ─────────────────────────────────────────────────────────────────────────

    def _comparable(self, line: LineDefinition, value: str) -> Tuple[str, ...]:
        if not value:
            return ()
        try:
            return parse_response_points(value, line.type)
        except ParseError:
            return (value,)

    def is_same_response(self, prev: Response, new: Response) -> bool:
        """
        True if every line has identical graded points in both responses.

        Each line is compared under the same key in both responses. A line
        missing from both counts as the same.
        """
        for index, line in enumerate(self.question.lines):
            before = self._comparable(line, self._entry(prev, index))
            after = self._comparable(line, self._entry(new, index))
            if before != after:
                return False
        return True

    def summarise_response(self, response: Response) -> str:
        """
        "Line 1: x1,y1 x2,y2, Line 2: ..." for the attempted lines only.
        """
        answers: List[str] = []
        for _, line, value in self._attempted(response):
            answers.append(f"Line {line.number}: {' '.join(self._comparable(line, value))}")
        return ", ".join(answers)

    def classify_response(self, response: Response) -> Dict[int, ClassifiedResponse]:
        """Classify each line's response, keyed by line number."""
        share = 1 / self.question.line_count
        all_or_none = self.question.grade_method is GradeMethod.ALL_OR_NONE
        classified = {line.number: ClassifiedResponse.no_response() for line in self.question.lines}

        for _, line, value in self._attempted(response):
            hits = sum(self._line_hits(line, value))
            if all_or_none:
                fraction = share if hits == 2 else 0.0
            else:
                fraction = share * hits / 2
            class_id = {2: "right", 1: "partial", 0: "wrong"}[hits]
            classified[line.number] = ClassifiedResponse(
                class_id, " ".join(self._comparable(line, value)), fraction
            )
        return classified

    # ─────────────────────────────────────────────────────────────────────────
    # Feedback
    # ─────────────────────────────────────────────────────────────────────────

    def num_parts_correct_feedback(self, response: Response) -> Optional[Tuple[int, int]]:
        """Counts to report in feedback, or None when the question hides them."""
        if not self.question.show_num_correct:
            return None
        return self.get_num_parts_right(response)

    def get_misplaced_lines(self, response: Response) -> Tuple[int, ...]:
        """
        Numbers of attempted lines with a point outside its zone.

        Empty when the question does not show misplaced lines.
        """
        if not self.question.show_misplaced:
            return ()
        return tuple(
            line.number
            for _, line, value in self._attempted(response)
            if not all(self._line_hits(line, value))
        )
