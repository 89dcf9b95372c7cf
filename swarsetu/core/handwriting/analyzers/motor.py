# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Motor control analyzers: smoothness, precision and micro-tremor.

Smooth, intentional strokes turn gradually and travel close to their net
displacement. Jitter shows up as large local angle swings; wobble as a
traced path much longer than the chord; tremor as rapid sharp reversals
at consecutive joints.
"""

import math

from swarsetu.core.handwriting.analyzers.base import BaseAnalyzer, CaptureData
from swarsetu.core.handwriting.geometry import (
    angle_between,
    chord_length,
    clamp,
    path_length,
)


class SmoothnessAnalyzer(BaseAnalyzer):
    """Scores the mean absolute turning angle at interior stroke points.

    ``100 - (mean|angle| / pi) * 120``, clamped to 0-100. Strokes with
    fewer than three points have no interior point and are skipped.
    """

    @property
    def name(self) -> str:
        return "stroke_smoothness"

    def analyze(self, data: CaptureData) -> float:
        if not data.strokes:
            return self.neutral_score

        total_angle = 0.0
        joints = 0
        for stroke in data.strokes:
            points = stroke.points
            if len(points) < 3:
                continue
            for i in range(1, len(points) - 1):
                total_angle += abs(angle_between(points[i - 1], points[i], points[i + 1]))
                joints += 1

        if joints == 0:
            return self.neutral_score

        mean_angle = total_angle / joints
        return clamp(
            100 - (mean_angle / math.pi) * self.config.smoothness_angle_scale,
            neutral=self.neutral_score,
        )


class PrecisionAnalyzer(BaseAnalyzer):
    """Scores the mean chord/path ratio of strokes.

    Strokes whose chord is at most ``precision_min_chord_px`` are noise
    (taps, dots) rather than stroke attempts and are skipped.
    """

    @property
    def name(self) -> str:
        return "stroke_precision"

    def analyze(self, data: CaptureData) -> float:
        total_ratio = 0.0
        eligible = 0

        for stroke in data.strokes:
            if len(stroke) < 2:
                continue
            traced = path_length(stroke.points)
            chord = chord_length(stroke.points)
            if traced > 0 and chord > self.config.precision_min_chord_px:
                total_ratio += chord / traced
                eligible += 1

        if eligible == 0:
            return self.neutral_score

        return clamp((total_ratio / eligible) * 100, neutral=self.neutral_score)


class MicroTremorCounter(BaseAnalyzer):
    """Counts rapid sharp direction reversals at consecutive joints.

    For every window of four samples ``i-2 .. i+1`` the turning angles at
    ``i-1`` and ``i`` must both exceed ``tremor_min_angle_rad`` in
    magnitude, have opposite signs, and the window must span less than
    ``tremor_window_ms``. The result is a raw count across all strokes.
    """

    @property
    def name(self) -> str:
        return "micro_tremor_count"

    def analyze(self, data: CaptureData) -> int:
        min_angle = self.config.tremor_min_angle_rad
        window_ms = self.config.tremor_window_ms
        tremors = 0

        for stroke in data.strokes:
            points = stroke.points
            if len(points) < 4:
                continue
            for i in range(2, len(points) - 1):
                first = angle_between(points[i - 2], points[i - 1], points[i])
                second = angle_between(points[i - 1], points[i], points[i + 1])
                span = points[i + 1].time - points[i - 2].time

                if (
                    span < window_ms
                    and abs(first) > min_angle
                    and abs(second) > min_angle
                    and (first > 0) != (second > 0)
                ):
                    tremors += 1

        return tremors
