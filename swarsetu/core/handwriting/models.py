# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Data structures for handwriting stroke analysis.

Inputs are strokes captured from a drawing surface; the output is a single
DysgraphiaAnalysisResult whose ``to_dict()`` field names are consumed
verbatim by the report and persistence layers.

IMPORTANT: Results are screening indicators only, not diagnoses.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class RiskLevel(str, Enum):
    """Screening risk levels, ordered low < moderate < high."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"

    @property
    def rank(self) -> int:
        """Position of the level in the escalation order."""
        return _RISK_ORDER.index(self)

    def escalate(self, other: "RiskLevel") -> "RiskLevel":
        """Return the more severe of this level and ``other``."""
        return other if other.rank > self.rank else self


_RISK_ORDER = (RiskLevel.LOW, RiskLevel.MODERATE, RiskLevel.HIGH)


@dataclass(frozen=True)
class StrokePoint:
    """A pen/touch sample.

    Attributes:
        x: Horizontal canvas position in pixels.
        y: Vertical canvas position in pixels.
        time: Capture timestamp in milliseconds.
    """

    x: float
    y: float
    time: float

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StrokePoint":
        """Build a point from a ``{"x", "y", "time"}`` mapping."""
        return cls(x=float(data["x"]), y=float(data["y"]), time=float(data["time"]))

    def to_dict(self) -> dict[str, float]:
        """Convert point to dictionary."""
        return {"x": self.x, "y": self.y, "time": self.time}


@dataclass(frozen=True)
class Stroke:
    """One continuous contact-down to contact-up gesture.

    Attributes:
        points: Samples in capture order (capture order is time order).
        width: Rendered line width in pixels.
    """

    points: tuple[StrokePoint, ...]
    width: float = 3.0

    def __post_init__(self) -> None:
        # Accept any iterable of points but store an immutable tuple.
        object.__setattr__(self, "points", tuple(self.points))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Stroke":
        """Build a stroke from a ``{"points": [...], "width": w}`` mapping."""
        return cls(
            points=tuple(StrokePoint.from_dict(p) for p in data.get("points", [])),
            width=float(data.get("width", 3.0)),
        )

    @property
    def start(self) -> StrokePoint | None:
        """First sample, or None for an empty stroke."""
        return self.points[0] if self.points else None

    @property
    def end(self) -> StrokePoint | None:
        """Last sample, or None for an empty stroke."""
        return self.points[-1] if self.points else None

    def __len__(self) -> int:
        return len(self.points)

    def to_dict(self) -> dict[str, Any]:
        """Convert stroke to dictionary."""
        return {"points": [p.to_dict() for p in self.points], "width": self.width}


@dataclass(frozen=True)
class DysgraphiaMetrics:
    """Raw and derived handwriting metrics for one analysis call.

    Attributes:
        stroke_count: Number of strokes analyzed.
        total_time: Total capture time in milliseconds, as reported by the caller.
        hesitation_count: Inter-stroke plus intra-stroke hesitations.
        avg_stroke_speed: Mean segment speed in px/ms.
        stroke_smoothness: 0-100, absence of jitter.
        speed_consistency: 0-100, uniformity of pacing.
        spatial_organization: 0-100, canvas usage and centering.
        stroke_precision: 0-100, chord/path ratio.
        micro_tremor_count: Rapid sharp direction reversals.
        avg_pause_duration: Mean positive gap between strokes in milliseconds.
        writing_pressure_variance: Fixed placeholder, pressure is not sensed.
        letter_size_consistency: 0-100, uniformity of stroke extents.
    """

    stroke_count: int
    total_time: float
    hesitation_count: int
    avg_stroke_speed: float
    stroke_smoothness: int
    speed_consistency: int
    spatial_organization: int
    stroke_precision: int
    micro_tremor_count: int
    avg_pause_duration: int
    writing_pressure_variance: int
    letter_size_consistency: int

    def to_dict(self) -> dict[str, Any]:
        """Convert metrics to the camelCase report shape."""
        return {
            "strokeCount": self.stroke_count,
            "totalTime": self.total_time,
            "hesitationCount": self.hesitation_count,
            "avgStrokeSpeed": self.avg_stroke_speed,
            "strokeSmoothness": self.stroke_smoothness,
            "speedConsistency": self.speed_consistency,
            "spatialOrganization": self.spatial_organization,
            "strokePrecision": self.stroke_precision,
            "microTremorCount": self.micro_tremor_count,
            "avgPauseDuration": self.avg_pause_duration,
            "writingPressureVariance": self.writing_pressure_variance,
            "letterSizeConsistency": self.letter_size_consistency,
        }


@dataclass(frozen=True)
class DomainScores:
    """Composite 0-100 scores for the four handwriting domains."""

    motor_control: int
    writing_fluency: int
    spatial_awareness: int
    consistency: int

    def to_dict(self) -> dict[str, int]:
        """Convert domain scores to the camelCase report shape."""
        return {
            "motorControl": self.motor_control,
            "writingFluency": self.writing_fluency,
            "spatialAwareness": self.spatial_awareness,
            "consistency": self.consistency,
        }


@dataclass(frozen=True)
class DysgraphiaAnalysisResult:
    """Complete output of one handwriting analysis.

    Attributes:
        overall_score: Weighted 0-100 score across domains.
        risk_level: Screening risk level.
        metrics: Per-metric values.
        domain_scores: Domain composites.
        flagged_conditions: Names of the risk rules that fired, in rule order.
        summary: Narrative summary for teachers and parents.
        recommendations: Ordered practice recommendations.
    """

    overall_score: int
    risk_level: RiskLevel
    metrics: DysgraphiaMetrics
    domain_scores: DomainScores
    flagged_conditions: tuple[str, ...] = field(default_factory=tuple)
    summary: str = ""
    recommendations: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_flagged(self) -> bool:
        """Check if any risk rule fired."""
        return bool(self.flagged_conditions)

    def to_dict(self) -> dict[str, Any]:
        """Convert result to the camelCase report shape."""
        return {
            "overallScore": self.overall_score,
            "riskLevel": self.risk_level.value,
            "metrics": self.metrics.to_dict(),
            "domainScores": self.domain_scores.to_dict(),
            "flaggedConditions": list(self.flagged_conditions),
            "summary": self.summary,
            "recommendations": list(self.recommendations),
        }
