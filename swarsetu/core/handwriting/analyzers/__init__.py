# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Per-metric stroke analyzers.

Available Analyzers:
    - SmoothnessAnalyzer: Mean turning angle at interior points
    - SpeedConsistencyAnalyzer: Coefficient of variation of segment speeds
    - SpatialOrganizationAnalyzer: Canvas usage and centering
    - PrecisionAnalyzer: Chord to path length ratio
    - MicroTremorCounter: Rapid sharp direction reversals
    - LetterSizeConsistencyAnalyzer: Variation of stroke extents
    - HesitationAnalyzer: Long pauses between and within strokes

``run_analyzers`` executes all of them over one capture and returns their
unrounded outputs for the aggregator.
"""

from dataclasses import dataclass

from swarsetu.core.handwriting.analyzers.base import BaseAnalyzer, CaptureData
from swarsetu.core.handwriting.analyzers.fluency import (
    HesitationAnalyzer,
    HesitationStats,
    SpeedConsistencyAnalyzer,
    average_stroke_speed,
)
from swarsetu.core.handwriting.analyzers.motor import (
    MicroTremorCounter,
    PrecisionAnalyzer,
    SmoothnessAnalyzer,
)
from swarsetu.core.handwriting.analyzers.spatial import (
    LetterSizeConsistencyAnalyzer,
    SpatialOrganizationAnalyzer,
)
from swarsetu.core.handwriting.config import AnalyzerConfig


@dataclass(frozen=True)
class AnalyzerOutputs:
    """Unrounded outputs of every analyzer for one capture."""

    stroke_smoothness: float
    speed_consistency: float
    spatial_organization: float
    stroke_precision: float
    micro_tremor_count: int
    letter_size_consistency: float
    hesitation: HesitationStats
    avg_stroke_speed: float


def run_analyzers(data: CaptureData, config: AnalyzerConfig | None = None) -> AnalyzerOutputs:
    """Run all analyzers over one capture.

    Args:
        data: Strokes and canvas to analyze.
        config: Analyzer constants shared by every analyzer.

    Returns:
        AnalyzerOutputs with raw values.
    """
    config = config or AnalyzerConfig()
    return AnalyzerOutputs(
        stroke_smoothness=SmoothnessAnalyzer(config).analyze(data),
        speed_consistency=SpeedConsistencyAnalyzer(config).analyze(data),
        spatial_organization=SpatialOrganizationAnalyzer(config).analyze(data),
        stroke_precision=PrecisionAnalyzer(config).analyze(data),
        micro_tremor_count=MicroTremorCounter(config).analyze(data),
        letter_size_consistency=LetterSizeConsistencyAnalyzer(config).analyze(data),
        hesitation=HesitationAnalyzer(config).analyze(data),
        avg_stroke_speed=average_stroke_speed(data),
    )


__all__ = [
    # Base
    "AnalyzerOutputs",
    "BaseAnalyzer",
    "CaptureData",
    "HesitationStats",
    "run_analyzers",
    "average_stroke_speed",
    # Analyzer implementations
    "HesitationAnalyzer",
    "LetterSizeConsistencyAnalyzer",
    "MicroTremorCounter",
    "PrecisionAnalyzer",
    "SmoothnessAnalyzer",
    "SpatialOrganizationAnalyzer",
    "SpeedConsistencyAnalyzer",
]
