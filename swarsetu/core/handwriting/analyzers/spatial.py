# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Spatial analyzers: canvas organization and letter-size consistency."""

import math

from swarsetu.core.handwriting.analyzers.base import BaseAnalyzer, CaptureData
from swarsetu.core.handwriting.geometry import (
    bounding_box,
    clamp,
    coefficient_of_variation,
    round_half_up,
)


class SpatialOrganizationAnalyzer(BaseAnalyzer):
    """Scores canvas usage and centering of the whole drawing.

    Width and height usage ratios each map through a step function that
    penalizes both cramped drawings and drawings sprawling to the edges.
    The centering score drops linearly with the distance between the
    drawing's center and the canvas center. The result is the rounded mean
    of the three scores.
    """

    @property
    def name(self) -> str:
        return "spatial_organization"

    def usage_score(self, ratio: float) -> float:
        """Map a width or height usage ratio to its step score."""
        for limit, score in self.config.spatial_bands:
            if ratio < limit:
                return score
        return self.config.spatial_overflow_score

    def analyze(self, data: CaptureData) -> float:
        if not data.strokes or not data.has_canvas:
            return self.neutral_score

        points = data.all_points
        if not points:
            return self.neutral_score

        min_x, min_y, max_x, max_y = bounding_box(points)
        width_score = self.usage_score((max_x - min_x) / data.canvas_width)
        height_score = self.usage_score((max_y - min_y) / data.canvas_height)

        half_w = data.canvas_width / 2
        half_h = data.canvas_height / 2
        offset = math.hypot((min_x + max_x) / 2 - half_w, (min_y + max_y) / 2 - half_h)
        eccentricity = offset / math.hypot(half_w, half_h)
        center_score = max(0.0, 100 - eccentricity * self.config.centering_scale)

        return clamp(
            round_half_up((width_score + height_score + center_score) / 3),
            neutral=self.neutral_score,
        )


class LetterSizeConsistencyAnalyzer(BaseAnalyzer):
    """Scores uniformity of stroke extents as ``100 - CV(sizes) * 60``.

    Each stroke stands in for one letter-sized unit; its size is the larger
    side of its bounding box. Multi-stroke glyphs are therefore counted as
    several units, and the thresholds downstream were tuned with that in
    mind.

    A single stroke cannot be inconsistent, so insufficient data returns
    the more lenient ``letter_size_neutral_score``.
    """

    @property
    def name(self) -> str:
        return "letter_size_consistency"

    @property
    def neutral_score(self) -> float:
        return self.config.letter_size_neutral_score

    def analyze(self, data: CaptureData) -> float:
        sizes: list[float] = []
        for stroke in data.strokes:
            if len(stroke) < 2:
                continue
            min_x, min_y, max_x, max_y = bounding_box(stroke.points)
            sizes.append(max(max_x - min_x, max_y - min_y))

        cv = coefficient_of_variation(sizes)
        if cv is None:
            return self.neutral_score
        return clamp(100 - cv * self.config.letter_size_cv_scale, neutral=self.neutral_score)
