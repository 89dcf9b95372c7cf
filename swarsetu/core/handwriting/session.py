# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Stroke capture and multi-prompt drawing sessions.

A screening session walks a student through several drawing prompts. Each
prompt's strokes are captured with a StrokeRecorder and stored as a
DrawingResult; when the session ends all drawings are analyzed together
and turned into the report payload consumed by the report and persistence
layers.

Usage:
    session = DrawingSession("Asha", "Grade 4", language="en")
    for prompt in session.prompts[:3]:
        recorder = StrokeRecorder()
        ...  # feed pointer events
        session.record(DrawingResult(prompt, recorder.strokes, 300, 300, 4200))

    result = session.analyze()
    payload = session.build_report(result)
"""

import re
from dataclasses import dataclass, field
from typing import Any

from swarsetu.core.handwriting.engine import HandwritingService
from swarsetu.core.handwriting.models import DysgraphiaAnalysisResult, Stroke, StrokePoint
from swarsetu.core.handwriting.prompts import DysgraphiaPrompt, get_dysgraphia_prompts

DEFAULT_STROKE_WIDTH = 3.0
DEFAULT_PROMPT_TYPE = "letter"


class StrokeRecorder:
    """Turns pointer events into committed strokes.

    A stroke opens on ``pointer_down``, grows on ``pointer_move`` and is
    committed on ``pointer_up`` only when it holds more than one point, so
    single taps never reach the analyzers.
    """

    def __init__(self, width: float = DEFAULT_STROKE_WIDTH) -> None:
        self._width = width
        self._strokes: list[Stroke] = []
        self._current: list[StrokePoint] | None = None

    @property
    def strokes(self) -> tuple[Stroke, ...]:
        """Committed strokes in capture order."""
        return tuple(self._strokes)

    @property
    def is_drawing(self) -> bool:
        """Check if a stroke is open."""
        return self._current is not None

    def pointer_down(self, x: float, y: float, time: float) -> None:
        """Open a new stroke at the given sample."""
        self._current = [StrokePoint(x, y, time)]

    def pointer_move(self, x: float, y: float, time: float) -> None:
        """Append a sample to the open stroke. Ignored when none is open."""
        if self._current is not None:
            self._current.append(StrokePoint(x, y, time))

    def pointer_up(self) -> Stroke | None:
        """Close the open stroke.

        Returns:
            The committed stroke, or None when nothing was committed.
        """
        points, self._current = self._current, None
        if points is None or len(points) <= 1:
            return None
        stroke = Stroke(points=tuple(points), width=self._width)
        self._strokes.append(stroke)
        return stroke

    def clear(self) -> None:
        """Discard all strokes, including an open one."""
        self._strokes.clear()
        self._current = None


@dataclass(frozen=True)
class DrawingResult:
    """Strokes captured for one prompt.

    Attributes:
        prompt: The prompt the student answered.
        strokes: Committed strokes.
        canvas_width: Canvas width in pixels, 0 when unknown.
        canvas_height: Canvas height in pixels, 0 when unknown.
        total_time_ms: Time spent on the prompt.
    """

    prompt: DysgraphiaPrompt
    strokes: tuple[Stroke, ...] = field(default_factory=tuple)
    canvas_width: float = 0.0
    canvas_height: float = 0.0
    total_time_ms: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "strokes", tuple(self.strokes))


def parse_grade(label: str, default: int = 3) -> int:
    """Extract the numeric grade from a label such as "Grade 5".

    All digits in the label are joined, so "Class 10" gives 10. Labels
    without digits give ``default``.
    """
    digits = re.sub(r"\D", "", label or "")
    return int(digits) if digits and int(digits) else default


class DrawingSession:
    """Collects drawings across prompts and analyzes them as one capture."""

    def __init__(
        self,
        student_name: str,
        student_grade: str = "",
        language: str | None = None,
        service: HandwritingService | None = None,
    ) -> None:
        """Initialize a session.

        Args:
            student_name: Name used in the summary.
            student_grade: Grade label; digits are extracted.
            language: Prompt and recommendation language.
            service: Analysis service, created from settings when omitted.
        """
        from swarsetu.core.config import get_settings

        settings = get_settings().handwriting
        self.student_name = student_name
        self.student_grade = student_grade
        self.language = language or settings.default_language
        self.grade_num = parse_grade(student_grade, settings.default_grade)
        self._default_canvas = (settings.default_canvas_width, settings.default_canvas_height)
        self._service = service or HandwritingService()
        self._drawings: list[DrawingResult] = []

    @property
    def prompts(self) -> list[DysgraphiaPrompt]:
        """Prompts for the student's language and grade."""
        return get_dysgraphia_prompts(self.language, self.grade_num)

    @property
    def drawings(self) -> tuple[DrawingResult, ...]:
        """Recorded drawings in order."""
        return tuple(self._drawings)

    def record(self, result: DrawingResult) -> None:
        """Append one prompt's drawing."""
        self._drawings.append(result)

    def analyze(self) -> DysgraphiaAnalysisResult:
        """Analyze all recorded drawings as one capture.

        Strokes are flattened in drawing order and times summed. The canvas
        and prompt type come from the last drawing.

        Raises:
            CaptureValidationError: Validation is enabled and a drawing
                holds invalid data.
        """
        strokes = [stroke for drawing in self._drawings for stroke in drawing.strokes]
        total_time_ms = sum(drawing.total_time_ms for drawing in self._drawings)

        last = self._drawings[-1] if self._drawings else None
        default_width, default_height = self._default_canvas
        canvas_width = (last.canvas_width if last else 0) or default_width
        canvas_height = (last.canvas_height if last else 0) or default_height
        prompt_type = last.prompt.type if last else DEFAULT_PROMPT_TYPE

        return self._service.analyze(
            strokes,
            total_time_ms,
            canvas_width,
            canvas_height,
            prompt_type=prompt_type,
            student_name=self.student_name,
            grade_num=self.grade_num,
            lang=self.language,
        )

    def build_report(self, result: DysgraphiaAnalysisResult) -> dict[str, Any]:
        """Build the report and persistence payload for a session result."""
        domains = result.domain_scores
        metrics = result.metrics

        subtest_hesitations = {
            "motorControl": metrics.micro_tremor_count,
            "writingFluency": metrics.hesitation_count,
        }
        subtest_scores = [
            {
                "id": domain_id,
                "accuracy": score,
                "avgResponseTime": 0,
                "errorCount": 0,
                "hesitationCount": subtest_hesitations.get(domain_id, 0),
            }
            for domain_id, score in domains.to_dict().items()
        ]

        answered_questions = [
            {
                "question": drawing.prompt.prompt,
                "answer": f"Drawing {i} ({len(drawing.strokes)} strokes)",
                "correct": True,
                "subtest": drawing.prompt.type,
                "responseTime": drawing.total_time_ms / 1000,
            }
            for i, drawing in enumerate(self._drawings, start=1)
        ]

        return {
            "testType": "dysgraphia",
            **result.to_dict(),
            "subtestScores": subtest_scores,
            "answeredQuestions": answered_questions,
            "disclaimer": self._service.config.get_disclaimer(self.language),
        }
