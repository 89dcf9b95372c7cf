# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for stroke capture and drawing sessions."""

import pytest

from swarsetu.core.handwriting.models import RiskLevel, Stroke
from swarsetu.core.handwriting.prompts import DysgraphiaPrompt
from swarsetu.core.handwriting.session import (
    DrawingResult,
    DrawingSession,
    StrokeRecorder,
    parse_grade,
)
from swarsetu.core.handwriting.validation import NonMonotonicTimeError


@pytest.fixture
def prompt() -> DysgraphiaPrompt:
    """Provide a simple word prompt."""
    return DysgraphiaPrompt("word", "Write the word 'cat'", "cat", 1, "1-2", "spelling")


class TestStrokeRecorder:
    """Tests for StrokeRecorder."""

    def test_commits_multi_point_stroke(self) -> None:
        """Test a drag becomes one stroke."""
        recorder = StrokeRecorder(width=4.0)

        recorder.pointer_down(0, 0, 0)
        recorder.pointer_move(5, 0, 10)
        recorder.pointer_move(10, 0, 20)
        assert recorder.is_drawing

        stroke = recorder.pointer_up()

        assert stroke is not None
        assert len(stroke) == 3
        assert stroke.width == 4.0
        assert recorder.strokes == (stroke,)
        assert not recorder.is_drawing

    def test_single_tap_is_dropped(self) -> None:
        """Test a stroke with one point is not committed."""
        recorder = StrokeRecorder()

        recorder.pointer_down(0, 0, 0)

        assert recorder.pointer_up() is None
        assert recorder.strokes == ()

    def test_move_without_down_is_ignored(self) -> None:
        """Test stray move and up events do nothing."""
        recorder = StrokeRecorder()

        recorder.pointer_move(5, 5, 5)

        assert recorder.pointer_up() is None
        assert recorder.strokes == ()

    def test_clear(self) -> None:
        """Test clear drops committed and open strokes."""
        recorder = StrokeRecorder()
        recorder.pointer_down(0, 0, 0)
        recorder.pointer_move(1, 1, 5)
        recorder.pointer_up()
        recorder.pointer_down(2, 2, 10)

        recorder.clear()

        assert recorder.strokes == ()
        assert not recorder.is_drawing


class TestParseGrade:
    """Tests for parse_grade."""

    @pytest.mark.parametrize(
        ("label", "expected"),
        [("Grade 5", 5), ("Class 10", 10), ("3", 3), ("KG", 3), ("", 3), ("Grade 0", 3)],
    )
    def test_labels(self, label: str, expected: int) -> None:
        """Test digits are extracted with a default of 3."""
        assert parse_grade(label) == expected

    def test_custom_default(self) -> None:
        """Test the default can be changed."""
        assert parse_grade("Nursery", default=1) == 1


class TestDrawingSession:
    """Tests for DrawingSession."""

    def test_defaults_from_settings(self) -> None:
        """Test language and grade fall back to settings."""
        session = DrawingSession("Asha", "KG")

        assert session.language == "en"
        assert session.grade_num == 3
        assert session.drawings == ()

    def test_prompts_follow_grade_and_language(self) -> None:
        """Test prompts are chosen for the student."""
        session = DrawingSession("Ravi", "Grade 5", language="hi")

        assert [p.grade_level for p in session.prompts] == ["5-6", "3-4", "3-4"]

    def test_empty_session_is_neutral(self) -> None:
        """Test analyzing with no drawings gives the neutral result."""
        result = DrawingSession("Asha", "Grade 3").analyze()

        assert result.metrics.stroke_count == 0
        assert result.overall_score == 66
        assert result.risk_level is RiskLevel.LOW

    def test_analyze_flattens_drawings(
        self, prompt: DysgraphiaPrompt, three_lines: list[Stroke]
    ) -> None:
        """Test drawings are analyzed as one capture on the default canvas."""
        session = DrawingSession("Asha", "Grade 3")
        for stroke in three_lines:
            session.record(DrawingResult(prompt, (stroke,), total_time_ms=500))

        result = session.analyze()

        assert result.metrics.stroke_count == 3
        assert result.metrics.total_time == 1500
        assert result.risk_level is RiskLevel.LOW
        assert result.summary.startswith("Asha demonstrated adequate")

    def test_invalid_drawing_raises(self, prompt: DysgraphiaPrompt, make_stroke) -> None:
        """Test validation errors propagate from analyze."""
        session = DrawingSession("Asha", "Grade 3")
        session.record(DrawingResult(prompt, (make_stroke([(0, 0, 10), (5, 0, 0)]),)))

        with pytest.raises(NonMonotonicTimeError):
            session.analyze()

    def test_build_report(self, prompt: DysgraphiaPrompt, three_lines: list[Stroke]) -> None:
        """Test the report payload shape."""
        session = DrawingSession("Asha", "Grade 3")
        session.record(DrawingResult(prompt, tuple(three_lines), 300, 300, 1500))
        result = session.analyze()

        report = session.build_report(result)

        assert report["testType"] == "dysgraphia"
        assert report["overallScore"] == result.overall_score
        assert report["riskLevel"] == "low"
        assert [s["id"] for s in report["subtestScores"]] == [
            "motorControl",
            "writingFluency",
            "spatialAwareness",
            "consistency",
        ]
        assert report["answeredQuestions"] == [
            {
                "question": "Write the word 'cat'",
                "answer": "Drawing 1 (3 strokes)",
                "correct": True,
                "subtest": "word",
                "responseTime": 1.5,
            }
        ]
        assert "not a" in report["disclaimer"]
