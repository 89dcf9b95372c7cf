# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Base classes for per-metric stroke analyzers.

Each analyzer reads the full stroke set of one analysis call and produces
either a bounded 0-100 score or a raw count. Analyzers are total: when the
input carries no usable signal they return a neutral sentinel instead of
raising, so absence of data never reads as good or bad handwriting.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from swarsetu.core.handwriting.config import AnalyzerConfig
from swarsetu.core.handwriting.models import Stroke, StrokePoint


@dataclass(frozen=True)
class CaptureData:
    """Strokes and canvas of one analysis call.

    Attributes:
        strokes: Strokes in capture order, flattened across prompts.
        canvas_width: Drawing surface width in pixels.
        canvas_height: Drawing surface height in pixels.
    """

    strokes: tuple[Stroke, ...] = field(default_factory=tuple)
    canvas_width: float = 0.0
    canvas_height: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "strokes", tuple(self.strokes))

    @classmethod
    def of(
        cls,
        strokes: Sequence[Stroke],
        canvas_width: float = 0.0,
        canvas_height: float = 0.0,
    ) -> "CaptureData":
        """Build capture data from any stroke sequence."""
        return cls(tuple(strokes), float(canvas_width), float(canvas_height))

    @property
    def all_points(self) -> list[StrokePoint]:
        """Every sample of every stroke, in capture order."""
        return [p for stroke in self.strokes for p in stroke.points]

    @property
    def has_canvas(self) -> bool:
        """Check if both canvas dimensions are non-zero."""
        return self.canvas_width != 0 and self.canvas_height != 0


class BaseAnalyzer(ABC):
    """Abstract base class for stroke metric analyzers.

    Subclasses implement ``analyze`` and read their constants from
    ``self.config`` so thresholds stay out of analyzer logic.
    """

    def __init__(self, config: AnalyzerConfig | None = None) -> None:
        """Initialize the analyzer.

        Args:
            config: Analyzer constants. Defaults are used when omitted.
        """
        self.config = config or AnalyzerConfig()

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the metric name this analyzer produces."""
        pass

    @abstractmethod
    def analyze(self, data: CaptureData) -> Any:
        """Compute the metric for one capture.

        Args:
            data: Strokes and canvas for the analysis call.

        Returns:
            The metric value.
        """
        pass

    @property
    def neutral_score(self) -> float:
        """Score used when the input carries no usable signal."""
        return self.config.neutral_score
