# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Domain and overall score aggregation.

Fixed linear combinations of analyzer outputs::

    motor_control     = .40 smoothness + .30 precision + .30 (100 - min(tremor*8, 100))
    writing_fluency   = .40 speed + .35 (100 - min(hesitation*10, 100))
                        + .25 (100 - min(avg_pause/20, 100))
    spatial_awareness = .60 spatial_organization + .40 letter_size
    consistency       = .30 speed + .40 letter_size + .30 smoothness
    overall           = .30 motor + .25 fluency + .20 spatial + .25 consistency

Every penalty sub-term is capped at 100 before it is subtracted, and each
composite is rounded half-up and clamped to 0-100.
"""

from swarsetu.core.handwriting.analyzers import AnalyzerOutputs
from swarsetu.core.handwriting.config import DomainWeights
from swarsetu.core.handwriting.geometry import clamp, round_half_up
from swarsetu.core.handwriting.models import DomainScores


def _penalty_term(raw: float) -> float:
    return 100 - min(raw, 100)


def _score(value: float) -> int:
    return int(clamp(round_half_up(value)))


def compute_domain_scores(
    outputs: AnalyzerOutputs,
    weights: DomainWeights | None = None,
) -> DomainScores:
    """Combine analyzer outputs into the four domain scores.

    Args:
        outputs: Unrounded analyzer outputs.
        weights: Weight table, defaults when omitted.

    Returns:
        DomainScores with integer 0-100 values.
    """
    w = weights or DomainWeights()

    tremor_term = _penalty_term(outputs.micro_tremor_count * w.tremor_penalty)
    hesitation_term = _penalty_term(outputs.hesitation.count * w.hesitation_penalty)
    pause_term = _penalty_term(outputs.hesitation.avg_pause / w.pause_divisor)

    motor_control = (
        outputs.stroke_smoothness * w.motor_smoothness
        + outputs.stroke_precision * w.motor_precision
        + tremor_term * w.motor_tremor
    )
    writing_fluency = (
        outputs.speed_consistency * w.fluency_speed
        + hesitation_term * w.fluency_hesitation
        + pause_term * w.fluency_pause
    )
    spatial_awareness = (
        outputs.spatial_organization * w.spatial_organization
        + outputs.letter_size_consistency * w.spatial_letter_size
    )
    consistency = (
        outputs.speed_consistency * w.consistency_speed
        + outputs.letter_size_consistency * w.consistency_letter_size
        + outputs.stroke_smoothness * w.consistency_smoothness
    )

    return DomainScores(
        motor_control=_score(motor_control),
        writing_fluency=_score(writing_fluency),
        spatial_awareness=_score(spatial_awareness),
        consistency=_score(consistency),
    )


def compute_overall_score(
    domain_scores: DomainScores,
    weights: DomainWeights | None = None,
) -> int:
    """Weighted mean of the (rounded) domain scores, 0-100."""
    w = weights or DomainWeights()
    return _score(
        domain_scores.motor_control * w.overall_motor_control
        + domain_scores.writing_fluency * w.overall_writing_fluency
        + domain_scores.spatial_awareness * w.overall_spatial_awareness
        + domain_scores.consistency * w.overall_consistency
    )
