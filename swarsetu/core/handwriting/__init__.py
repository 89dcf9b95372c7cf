# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Stroke-level handwriting analysis for dysgraphia screening.

Architecture:
    1. Analyzers: One class per metric, total over their input
    2. Aggregator: Fixed linear domain and overall scores
    3. Classifier: Ordered fold of risk rules over the scores
    4. Narrative: Summary and recommendation text
    5. HandwritingService: Validation at the boundary plus configuration

Quick Start:
    from swarsetu.core.handwriting import Stroke, StrokePoint, analyze_dysgraphia

    stroke = Stroke(points=[StrokePoint(10, 10, 0), StrokePoint(110, 10, 500)])
    result = analyze_dysgraphia([stroke], 500, 300, 300, "letter", "Asha", 3)
    print(result.risk_level, result.overall_score)

IMPORTANT: This package identifies INDICATORS only, not diagnoses.
Professional evaluation by a qualified occupational therapist or special
educator is required for diagnosis.
"""

from swarsetu.core.handwriting.models import (
    DomainScores,
    DysgraphiaAnalysisResult,
    DysgraphiaMetrics,
    RiskLevel,
    Stroke,
    StrokePoint,
)
from swarsetu.core.handwriting.config import (
    AnalyzerConfig,
    DomainWeights,
    HandwritingConfig,
    RiskThresholds,
    get_handwriting_config,
    load_handwriting_config,
    reload_handwriting_config,
)
from swarsetu.core.handwriting.analyzers import (
    AnalyzerOutputs,
    BaseAnalyzer,
    CaptureData,
    run_analyzers,
)
from swarsetu.core.handwriting.aggregator import compute_domain_scores, compute_overall_score
from swarsetu.core.handwriting.classifier import (
    RiskAssessment,
    RiskRule,
    RiskSignals,
    build_risk_rules,
    classify_risk,
)
from swarsetu.core.handwriting.narrative import generate_recommendations, generate_summary
from swarsetu.core.handwriting.validation import (
    CaptureValidationError,
    EmptyStrokeError,
    InvalidCanvasError,
    NonFiniteValueError,
    NonMonotonicTimeError,
    validate_capture,
)
from swarsetu.core.handwriting.engine import (
    HandwritingService,
    analyze_dysgraphia,
    get_handwriting_service,
)
from swarsetu.core.handwriting.prompts import (
    DysgraphiaPrompt,
    get_dysgraphia_prompts,
    grade_band,
)
from swarsetu.core.handwriting.session import (
    DrawingResult,
    DrawingSession,
    StrokeRecorder,
    parse_grade,
)

__all__ = [
    # Engine
    "analyze_dysgraphia",
    "HandwritingService",
    "get_handwriting_service",
    # Models
    "DomainScores",
    "DysgraphiaAnalysisResult",
    "DysgraphiaMetrics",
    "RiskLevel",
    "Stroke",
    "StrokePoint",
    # Config
    "AnalyzerConfig",
    "DomainWeights",
    "HandwritingConfig",
    "RiskThresholds",
    "get_handwriting_config",
    "load_handwriting_config",
    "reload_handwriting_config",
    # Pipeline stages
    "AnalyzerOutputs",
    "BaseAnalyzer",
    "CaptureData",
    "run_analyzers",
    "compute_domain_scores",
    "compute_overall_score",
    "RiskAssessment",
    "RiskRule",
    "RiskSignals",
    "build_risk_rules",
    "classify_risk",
    "generate_recommendations",
    "generate_summary",
    # Validation
    "CaptureValidationError",
    "EmptyStrokeError",
    "InvalidCanvasError",
    "NonFiniteValueError",
    "NonMonotonicTimeError",
    "validate_capture",
    # Prompts and sessions
    "DysgraphiaPrompt",
    "get_dysgraphia_prompts",
    "grade_band",
    "DrawingResult",
    "DrawingSession",
    "StrokeRecorder",
    "parse_grade",
]
