# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Writing fluency analyzers: speed consistency and hesitations.

Sampling cadence differs between devices, so everything here is derived
from timestamps rather than point indices.
"""

from dataclasses import dataclass

from swarsetu.core.handwriting.analyzers.base import BaseAnalyzer, CaptureData
from swarsetu.core.handwriting.geometry import (
    clamp,
    coefficient_of_variation,
    mean,
    segment_speeds,
)


def collect_speeds(data: CaptureData) -> list[float]:
    """Segment speeds (px/ms) of every stroke, in capture order."""
    speeds: list[float] = []
    for stroke in data.strokes:
        speeds.extend(segment_speeds(stroke.points))
    return speeds


def average_stroke_speed(data: CaptureData) -> float:
    """Mean segment speed in px/ms, 0 when no segment has dt > 0."""
    return mean(collect_speeds(data))


class SpeedConsistencyAnalyzer(BaseAnalyzer):
    """Scores pacing uniformity as ``100 - CV(speeds) * 40``.

    Fewer than two speed samples, or a zero mean speed, give the neutral
    score.
    """

    @property
    def name(self) -> str:
        return "speed_consistency"

    def analyze(self, data: CaptureData) -> float:
        cv = coefficient_of_variation(collect_speeds(data))
        if cv is None:
            return self.neutral_score
        return clamp(100 - cv * self.config.speed_cv_scale, neutral=self.neutral_score)


@dataclass(frozen=True)
class HesitationStats:
    """Hesitation count and mean inter-stroke pause.

    Attributes:
        count: Long inter-stroke gaps plus long intra-stroke gaps.
        avg_pause: Mean of all positive inter-stroke gaps in ms.
    """

    count: int = 0
    avg_pause: float = 0.0


class HesitationAnalyzer(BaseAnalyzer):
    """Counts pauses between and within strokes.

    A gap between strokes counts when it exceeds ``pause_threshold_ms``
    (strictly); every positive gap feeds the average pause. A gap between
    consecutive samples of one stroke counts when it exceeds
    ``pause_threshold_ms * intra_stroke_pause_factor``.
    """

    @property
    def name(self) -> str:
        return "hesitation"

    def analyze(self, data: CaptureData) -> HesitationStats:
        threshold = self.config.pause_threshold_ms
        hesitations = 0
        total_pause = 0.0
        gaps = 0

        for prev, nxt in zip(data.strokes, data.strokes[1:]):
            if prev.end is None or nxt.start is None:
                continue
            pause = nxt.start.time - prev.end.time
            if pause > 0:
                total_pause += pause
                gaps += 1
                if pause > threshold:
                    hesitations += 1

        intra_threshold = self.config.intra_stroke_pause_ms
        for stroke in data.strokes:
            points = stroke.points
            for i in range(1, len(points)):
                if points[i].time - points[i - 1].time > intra_threshold:
                    hesitations += 1

        return HesitationStats(
            count=hesitations,
            avg_pause=total_pause / gaps if gaps else 0.0,
        )
