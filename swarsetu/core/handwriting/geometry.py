# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Geometry and statistics primitives for stroke analysis.

All functions are pure. Degenerate input (coincident points, empty
sequences) yields zero rather than raising, so analyzers can stay total.
"""

import math
from collections.abc import Sequence

from swarsetu.core.handwriting.models import StrokePoint


def angle_between(p1: StrokePoint, p2: StrokePoint, p3: StrokePoint) -> float:
    """Signed turning angle between vectors p1->p2 and p2->p3.

    Returns:
        Angle in radians in (-pi, pi]. Positive is a counter-clockwise turn
        in a y-up frame. Coincident points give 0.
    """
    v1x = p2.x - p1.x
    v1y = p2.y - p1.y
    v2x = p3.x - p2.x
    v2y = p3.y - p2.y
    dot = v1x * v2x + v1y * v2y
    cross = v1x * v2y - v1y * v2x
    return math.atan2(cross, dot)


def distance(a: StrokePoint, b: StrokePoint) -> float:
    """Euclidean distance between two points."""
    return math.hypot(b.x - a.x, b.y - a.y)


def path_length(points: Sequence[StrokePoint]) -> float:
    """Total traced distance along consecutive points."""
    return sum(distance(points[i - 1], points[i]) for i in range(1, len(points)))


def chord_length(points: Sequence[StrokePoint]) -> float:
    """Straight-line distance between first and last point."""
    if len(points) < 2:
        return 0.0
    return distance(points[0], points[-1])


def bounding_box(points: Sequence[StrokePoint]) -> tuple[float, float, float, float]:
    """Axis-aligned bounds of a non-empty point sequence.

    Returns:
        Tuple of (min_x, min_y, max_x, max_y).
    """
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return min(xs), min(ys), max(xs), max(ys)


def segment_speeds(points: Sequence[StrokePoint]) -> list[float]:
    """Instantaneous speeds (px/ms) of consecutive segments with dt > 0."""
    speeds: list[float] = []
    for i in range(1, len(points)):
        dt = points[i].time - points[i - 1].time
        if dt <= 0:
            continue
        speeds.append(distance(points[i - 1], points[i]) / dt)
    return speeds


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean, 0.0 for an empty sequence."""
    if not values:
        return 0.0
    return sum(values) / len(values)


def coefficient_of_variation(values: Sequence[float]) -> float | None:
    """Population standard deviation divided by the mean.

    Returns:
        The CV, or None when fewer than two values are given or the mean is 0.
    """
    if len(values) < 2:
        return None

    avg = mean(values)
    if avg == 0:
        return None

    variance = sum((v - avg) ** 2 for v in values) / len(values)
    return math.sqrt(variance) / avg


def clamp(
    value: float,
    low: float = 0.0,
    high: float = 100.0,
    *,
    neutral: float = 50.0,
) -> float:
    """Bound a value to [low, high]. NaN and infinities map to ``neutral``."""
    if not math.isfinite(value):
        return neutral
    return max(low, min(high, value))


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with halves going toward +infinity.

    Python's round() uses banker's rounding; report scores are rounded the
    way browsers round them (2.5 -> 3, -2.5 -> -2). NaN and infinities are
    returned unchanged.
    """
    if not math.isfinite(value):
        return value
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor
