# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Handwriting analysis engine.

``analyze_dysgraphia`` is the pure entry point: strokes in, one
DysgraphiaAnalysisResult out. It performs no I/O, keeps no state between
calls and is safe to call concurrently. The pipeline is:

    analyzers -> domain aggregator -> risk classifier -> narrative

``HandwritingService`` wraps it with application settings: it validates
capture data at the boundary and selects the loaded configuration.

IMPORTANT: Results identify INDICATORS only, not diagnoses.
"""

import math
from collections.abc import Sequence

from swarsetu.core.handwriting.aggregator import compute_domain_scores, compute_overall_score
from swarsetu.core.handwriting.analyzers import AnalyzerOutputs, CaptureData, run_analyzers
from swarsetu.core.handwriting.classifier import RiskSignals, build_risk_rules, classify_risk
from swarsetu.core.handwriting.config import (
    AnalyzerConfig,
    HandwritingConfig,
    get_handwriting_config,
    load_handwriting_config,
)
from swarsetu.core.handwriting.geometry import round_half_up
from swarsetu.core.handwriting.models import (
    DysgraphiaAnalysisResult,
    DysgraphiaMetrics,
    Stroke,
)
from swarsetu.core.handwriting.narrative import generate_recommendations, generate_summary
from swarsetu.core.handwriting.validation import validate_capture
from swarsetu.utils.logging import get_logger

logger = get_logger(__name__)


def _report_value(value: float, fallback: float, digits: int = 0) -> float:
    """Round a metric for the report; non-finite values become ``fallback``."""
    rounded = round_half_up(value, digits)
    return rounded if math.isfinite(rounded) else fallback


def build_metrics(
    outputs: AnalyzerOutputs,
    stroke_count: int,
    total_time_ms: float,
    config: AnalyzerConfig,
) -> DysgraphiaMetrics:
    """Round analyzer outputs into the reported metrics.

    Percentages and the average pause are rounded half-up to integers,
    the average speed to two decimals. Non-finite outputs report the
    analyzer's neutral score, or 0 for speed and pause.
    """
    neutral = config.neutral_score
    return DysgraphiaMetrics(
        stroke_count=stroke_count,
        total_time=total_time_ms,
        hesitation_count=outputs.hesitation.count,
        avg_stroke_speed=_report_value(outputs.avg_stroke_speed, 0.0, 2),
        stroke_smoothness=int(_report_value(outputs.stroke_smoothness, neutral)),
        speed_consistency=int(_report_value(outputs.speed_consistency, neutral)),
        spatial_organization=int(_report_value(outputs.spatial_organization, neutral)),
        stroke_precision=int(_report_value(outputs.stroke_precision, neutral)),
        micro_tremor_count=outputs.micro_tremor_count,
        avg_pause_duration=int(_report_value(outputs.hesitation.avg_pause, 0.0)),
        writing_pressure_variance=config.writing_pressure_placeholder,
        letter_size_consistency=int(
            _report_value(outputs.letter_size_consistency, config.letter_size_neutral_score)
        ),
    )


def analyze_dysgraphia(
    strokes: Sequence[Stroke],
    total_time_ms: float,
    canvas_width: float,
    canvas_height: float,
    prompt_type: str = "letter",
    student_name: str = "Student",
    grade_num: int = 3,
    *,
    config: HandwritingConfig | None = None,
    lang: str = "en",
) -> DysgraphiaAnalysisResult:
    """Analyze captured strokes for handwriting difficulty indicators.

    Never raises on well-typed input: analyzers without usable signal
    report neutral scores instead.

    Args:
        strokes: Strokes in capture order.
        total_time_ms: Capture duration reported by the caller.
        canvas_width: Canvas width in pixels.
        canvas_height: Canvas height in pixels.
        prompt_type: Prompt kind the strokes answer (letter, word, shape,
            figure). Recorded in logs only.
        student_name: Name used in the summary.
        grade_num: Numeric grade used in the summary.
        config: Analysis configuration. Packaged defaults when omitted.
        lang: Language of the recommendation text.

    Returns:
        DysgraphiaAnalysisResult.
    """
    config = config or load_handwriting_config()

    data = CaptureData.of(strokes, canvas_width, canvas_height)
    outputs = run_analyzers(data, config.analyzers)
    metrics = build_metrics(outputs, len(data.strokes), total_time_ms, config.analyzers)

    domain_scores = compute_domain_scores(outputs, config.weights)
    overall_score = compute_overall_score(domain_scores, config.weights)

    assessment = classify_risk(
        RiskSignals.from_scores(domain_scores, outputs),
        build_risk_rules(config.risk),
    )

    summary = generate_summary(
        assessment.risk_level,
        student_name,
        grade_num,
        overall_score,
        metrics,
        domain_scores,
        assessment.flagged_conditions,
    )
    recommendations = generate_recommendations(assessment.fired_rules, config, lang)

    logger.debug(
        "Handwriting analysis complete",
        prompt_type=prompt_type,
        stroke_count=metrics.stroke_count,
        risk_level=assessment.risk_level.value,
        overall_score=overall_score,
        flag_count=len(assessment.flagged_conditions),
    )

    return DysgraphiaAnalysisResult(
        overall_score=overall_score,
        risk_level=assessment.risk_level,
        metrics=metrics,
        domain_scores=domain_scores,
        flagged_conditions=assessment.flagged_conditions,
        summary=summary,
        recommendations=tuple(recommendations),
    )


class HandwritingService:
    """Application-level handwriting analysis.

    Usage:
        service = HandwritingService()
        result = service.analyze(
            strokes=strokes,
            total_time_ms=1500,
            canvas_width=300,
            canvas_height=300,
            student_name="Asha",
            grade_num=3,
        )
    """

    def __init__(
        self,
        config: HandwritingConfig | None = None,
        validate_input: bool | None = None,
        default_language: str | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            config: Analysis configuration. Loaded from settings when omitted.
            validate_input: Override ``settings.handwriting.validate_input``.
            default_language: Override ``settings.handwriting.default_language``.
        """
        from swarsetu.core.config import get_settings

        settings = get_settings().handwriting
        self._config = config or get_handwriting_config()
        self._validate_input = (
            settings.validate_input if validate_input is None else validate_input
        )
        self._default_language = default_language or settings.default_language

    @property
    def config(self) -> HandwritingConfig:
        """Configuration used by this service."""
        return self._config

    @property
    def default_language(self) -> str:
        """Language used when a call does not pass one."""
        return self._default_language

    def analyze(
        self,
        strokes: Sequence[Stroke],
        total_time_ms: float,
        canvas_width: float,
        canvas_height: float,
        prompt_type: str = "letter",
        student_name: str = "Student",
        grade_num: int = 3,
        lang: str | None = None,
    ) -> DysgraphiaAnalysisResult:
        """Validate (when enabled) and analyze one capture.

        Raises:
            CaptureValidationError: Input validation is enabled and the
                capture data is invalid.
        """
        if self._validate_input:
            validate_capture(strokes, canvas_width, canvas_height, total_time_ms)

        return analyze_dysgraphia(
            strokes,
            total_time_ms,
            canvas_width,
            canvas_height,
            prompt_type,
            student_name,
            grade_num,
            config=self._config,
            lang=lang or self._default_language,
        )


_service_instance: HandwritingService | None = None


def get_handwriting_service() -> HandwritingService:
    """Get the handwriting service singleton.

    Returns:
        HandwritingService instance.
    """
    global _service_instance
    if _service_instance is None:
        _service_instance = HandwritingService()
    return _service_instance


def reset_handwriting_service() -> None:
    """Drop the service singleton so the next call rebuilds it from settings."""
    global _service_instance
    _service_instance = None
