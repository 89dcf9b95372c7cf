# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Capture validation at the boundary between capture and analysis.

The analyzers are total and never inspect their input for garbage: NaN
coordinates or backwards timestamps would silently produce meaningless
scores. ``validate_capture`` rejects such input up front with a typed error
so callers can report which stroke and point were bad.

Equal consecutive timestamps are accepted, since pointer events can share
a millisecond.
"""

import math
from collections.abc import Sequence

from swarsetu.core.handwriting.models import Stroke


class CaptureValidationError(ValueError):
    """Raised when capture data cannot be analyzed meaningfully.

    Attributes:
        reason: Human readable description.
        stroke_index: Offending stroke, if any.
        point_index: Offending point within the stroke, if any.
    """

    def __init__(
        self,
        reason: str,
        stroke_index: int | None = None,
        point_index: int | None = None,
    ) -> None:
        self.reason = reason
        self.stroke_index = stroke_index
        self.point_index = point_index
        location = ""
        if stroke_index is not None:
            location = f" (stroke {stroke_index}"
            if point_index is not None:
                location += f", point {point_index}"
            location += ")"
        super().__init__(f"{reason}{location}")

    def to_dict(self) -> dict[str, str | int | None]:
        """Convert error to the API error detail shape."""
        return {
            "error": self.reason,
            "stroke_index": self.stroke_index,
            "point_index": self.point_index,
        }


class EmptyStrokeError(CaptureValidationError):
    """A stroke has no points."""


class NonFiniteValueError(CaptureValidationError):
    """A coordinate, timestamp or total time is NaN or infinite."""


class NonMonotonicTimeError(CaptureValidationError):
    """A timestamp is negative or earlier than the previous one."""


class InvalidCanvasError(CaptureValidationError):
    """Canvas dimensions are negative or not finite."""


def _validate_stroke(stroke: Stroke, stroke_index: int) -> None:
    if not stroke.points:
        raise EmptyStrokeError("Stroke has no points", stroke_index)

    previous_time: float | None = None
    for point_index, point in enumerate(stroke.points):
        if not all(math.isfinite(v) for v in (point.x, point.y, point.time)):
            raise NonFiniteValueError(
                "Point has a non-finite coordinate or timestamp",
                stroke_index,
                point_index,
            )
        if point.time < 0:
            raise NonMonotonicTimeError("Timestamp is negative", stroke_index, point_index)
        if previous_time is not None and point.time < previous_time:
            raise NonMonotonicTimeError(
                "Timestamp is earlier than the previous point",
                stroke_index,
                point_index,
            )
        previous_time = point.time


def validate_capture(
    strokes: Sequence[Stroke],
    canvas_width: float,
    canvas_height: float,
    total_time_ms: float = 0.0,
) -> None:
    """Validate capture data before analysis.

    A zero canvas dimension is allowed: spatial organization then reports
    its neutral score.

    Args:
        strokes: Captured strokes.
        canvas_width: Canvas width in pixels.
        canvas_height: Canvas height in pixels.
        total_time_ms: Reported capture duration.

    Raises:
        InvalidCanvasError: Canvas dimension is negative or not finite.
        NonFiniteValueError: A value is NaN or infinite.
        EmptyStrokeError: A stroke has no points.
        NonMonotonicTimeError: Timestamps go backwards or below zero.
    """
    for label, value in (("width", canvas_width), ("height", canvas_height)):
        if not math.isfinite(value) or value < 0:
            raise InvalidCanvasError(f"Canvas {label} must be a finite, non-negative number")

    if not math.isfinite(total_time_ms) or total_time_ms < 0:
        raise NonFiniteValueError("Total time must be a finite, non-negative number")

    for stroke_index, stroke in enumerate(strokes):
        _validate_stroke(stroke, stroke_index)
