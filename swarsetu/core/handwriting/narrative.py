# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Summary and recommendation text for handwriting results.

Pure templating: the summary is chosen by risk level, the recommendations
by the risk rules that fired. Both are deterministic for the same inputs.
"""

from collections.abc import Sequence

from swarsetu.core.handwriting.config import HandwritingConfig
from swarsetu.core.handwriting.models import DomainScores, DysgraphiaMetrics, RiskLevel

LOW_RISK_SUMMARY = (
    "{name} demonstrated adequate writing motor skills with {overall}% overall "
    "fluency. Stroke smoothness ({smoothness}%), speed consistency "
    "({speed}%), and spatial organization ({spatial}%) are within expected "
    "range for Grade {grade}."
)

MODERATE_RISK_SUMMARY = (
    "{name} showed some difficulties in writing tasks ({overall}% fluency). "
    "{conditions} were noted. Motor control scored {motor}% and writing "
    "fluency {fluency}%. Additional fine motor practice is recommended."
)

HIGH_RISK_SUMMARY = (
    "{name} displayed significant challenges in writing ({overall}% fluency). "
    "Multiple indicators were flagged: {conditions}. Motor control "
    "({motor}%), fluency ({fluency}%), and spatial awareness ({awareness}%) "
    "suggest further evaluation by an occupational therapist is recommended."
)


def generate_summary(
    risk_level: RiskLevel,
    student_name: str,
    grade_num: int,
    overall_score: int,
    metrics: DysgraphiaMetrics,
    domain_scores: DomainScores,
    flagged_conditions: Sequence[str],
) -> str:
    """Render the narrative summary for a result.

    The moderate template names the first two flagged conditions; the high
    template names all of them.

    Args:
        risk_level: Classified risk level.
        student_name: Name used in the sentence subject.
        grade_num: Numeric grade, quoted in the low-risk summary.
        overall_score: Overall 0-100 score.
        metrics: Rounded metrics.
        domain_scores: Domain composites.
        flagged_conditions: Fired flags in rule order.

    Returns:
        Summary paragraph.
    """
    if risk_level is RiskLevel.LOW:
        return LOW_RISK_SUMMARY.format(
            name=student_name,
            overall=overall_score,
            smoothness=metrics.stroke_smoothness,
            speed=metrics.speed_consistency,
            spatial=metrics.spatial_organization,
            grade=grade_num,
        )

    if risk_level is RiskLevel.MODERATE:
        return MODERATE_RISK_SUMMARY.format(
            name=student_name,
            overall=overall_score,
            conditions=" and ".join(flagged_conditions[:2]),
            motor=domain_scores.motor_control,
            fluency=domain_scores.writing_fluency,
        )

    return HIGH_RISK_SUMMARY.format(
        name=student_name,
        overall=overall_score,
        conditions=", ".join(flagged_conditions),
        motor=domain_scores.motor_control,
        fluency=domain_scores.writing_fluency,
        awareness=domain_scores.spatial_awareness,
    )


def generate_recommendations(
    fired_rules: Sequence[str],
    config: HandwritingConfig,
    lang: str = "en",
) -> list[str]:
    """Collect recommendations for the fired rules, in rule order.

    Falls back to the general recommendations when nothing fired (or when
    the fired rules have no configured text).
    """
    recommendations: list[str] = []
    for rule_id in fired_rules:
        recommendations.extend(config.get_recommendations(rule_id, lang))

    if not recommendations:
        recommendations = config.get_general_recommendations(lang)
    return recommendations
