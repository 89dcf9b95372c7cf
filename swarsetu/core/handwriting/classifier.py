# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Rule-ordered risk classification.

The classifier is a fold over an ordered tuple of RiskRule entries starting
from RiskLevel.LOW. Each rule that fires appends its flag and escalates the
accumulated level. Order matters: a compounding rule pushes to HIGH only
when an earlier rule already raised the level, so the rule order below is
part of the screening behaviour and must not be rearranged.

Rules, in evaluation order:
    1. motor_control < 50         Fine Motor Control Deficit         at least moderate
    2. micro_tremor_count > 8     Micro-Tremor Pattern Detected      compounding
    3. writing_fluency < 45       Writing Fluency Difficulty         compounding
    4. hesitation_count > 6       Excessive Hesitations/Pauses       at least moderate
    5. spatial_awareness < 40     Spatial Organization Difficulty    at least moderate
    6. consistency < 40           Inconsistent Letter/Stroke Formation  at least moderate
    7. stroke_precision < 35      Poor Stroke Precision              at least moderate

IMPORTANT: A risk level is a screening indicator, not a diagnosis.
"""

from collections.abc import Callable
from dataclasses import dataclass

from swarsetu.core.handwriting.analyzers import AnalyzerOutputs
from swarsetu.core.handwriting.config import RiskThresholds
from swarsetu.core.handwriting.models import DomainScores, RiskLevel

FINE_MOTOR_CONTROL_DEFICIT = "Fine Motor Control Deficit"
MICRO_TREMOR_PATTERN = "Micro-Tremor Pattern Detected"
WRITING_FLUENCY_DIFFICULTY = "Writing Fluency Difficulty"
EXCESSIVE_HESITATIONS = "Excessive Hesitations/Pauses"
SPATIAL_ORGANIZATION_DIFFICULTY = "Spatial Organization Difficulty"
INCONSISTENT_FORMATION = "Inconsistent Letter/Stroke Formation"
POOR_STROKE_PRECISION = "Poor Stroke Precision"


@dataclass(frozen=True)
class RiskSignals:
    """Values inspected by the risk rules.

    Domain scores are the rounded composites; counts are raw; stroke
    precision is the unrounded analyzer score.
    """

    motor_control: float
    writing_fluency: float
    spatial_awareness: float
    consistency: float
    micro_tremor_count: int
    hesitation_count: int
    stroke_precision: float

    @classmethod
    def from_scores(cls, domain_scores: DomainScores, outputs: AnalyzerOutputs) -> "RiskSignals":
        """Collect signals from the aggregator and analyzer outputs."""
        return cls(
            motor_control=domain_scores.motor_control,
            writing_fluency=domain_scores.writing_fluency,
            spatial_awareness=domain_scores.spatial_awareness,
            consistency=domain_scores.consistency,
            micro_tremor_count=outputs.micro_tremor_count,
            hesitation_count=outputs.hesitation.count,
            stroke_precision=outputs.stroke_precision,
        )


Escalation = Callable[[RiskLevel], RiskLevel]


def at_least_moderate(level: RiskLevel) -> RiskLevel:
    """Raise LOW to MODERATE, keep anything higher."""
    return level.escalate(RiskLevel.MODERATE)


def compounding(level: RiskLevel) -> RiskLevel:
    """Raise LOW to MODERATE, and an already raised level to HIGH."""
    return RiskLevel.MODERATE if level is RiskLevel.LOW else RiskLevel.HIGH


@dataclass(frozen=True)
class RiskRule:
    """One ordered classification rule.

    Attributes:
        rule_id: Stable identifier, also the recommendations key.
        flag: Condition name reported when the rule fires.
        predicate: Returns True when the rule fires.
        escalation: Maps the accumulated level to the level after firing.
    """

    rule_id: str
    flag: str
    predicate: Callable[[RiskSignals], bool]
    escalation: Escalation

    def apply(self, level: RiskLevel, signals: RiskSignals) -> tuple[RiskLevel, bool]:
        """Evaluate the rule against an accumulated level.

        Returns:
            Tuple of (new level, fired). The new level is never lower than
            ``level``.
        """
        if not self.predicate(signals):
            return level, False
        return level.escalate(self.escalation(level)), True


@dataclass(frozen=True)
class RiskAssessment:
    """Outcome of the rule fold.

    Attributes:
        risk_level: Final accumulated level.
        flagged_conditions: Flags of fired rules in rule order.
        fired_rules: Identifiers of fired rules in rule order.
    """

    risk_level: RiskLevel
    flagged_conditions: tuple[str, ...]
    fired_rules: tuple[str, ...]


def build_risk_rules(thresholds: RiskThresholds | None = None) -> tuple[RiskRule, ...]:
    """Build the ordered rule table for the given thresholds."""
    t = thresholds or RiskThresholds()
    return (
        RiskRule(
            "fine_motor_control",
            FINE_MOTOR_CONTROL_DEFICIT,
            lambda s: s.motor_control < t.motor_control,
            at_least_moderate,
        ),
        RiskRule(
            "micro_tremor",
            MICRO_TREMOR_PATTERN,
            lambda s: s.micro_tremor_count > t.micro_tremor_count,
            compounding,
        ),
        RiskRule(
            "writing_fluency",
            WRITING_FLUENCY_DIFFICULTY,
            lambda s: s.writing_fluency < t.writing_fluency,
            compounding,
        ),
        RiskRule(
            "hesitations",
            EXCESSIVE_HESITATIONS,
            lambda s: s.hesitation_count > t.hesitation_count,
            at_least_moderate,
        ),
        RiskRule(
            "spatial_organization",
            SPATIAL_ORGANIZATION_DIFFICULTY,
            lambda s: s.spatial_awareness < t.spatial_awareness,
            at_least_moderate,
        ),
        RiskRule(
            "inconsistent_formation",
            INCONSISTENT_FORMATION,
            lambda s: s.consistency < t.consistency,
            at_least_moderate,
        ),
        RiskRule(
            "stroke_precision",
            POOR_STROKE_PRECISION,
            lambda s: s.stroke_precision < t.stroke_precision,
            at_least_moderate,
        ),
    )


def classify_risk(
    signals: RiskSignals,
    rules: tuple[RiskRule, ...] | None = None,
) -> RiskAssessment:
    """Fold the rule table over the signals, starting from LOW.

    Args:
        signals: Scores and counts to inspect.
        rules: Ordered rule table, the default table when omitted.

    Returns:
        RiskAssessment with the final level and fired flags.
    """
    level = RiskLevel.LOW
    flags: list[str] = []
    fired: list[str] = []

    for rule in rules if rules is not None else build_risk_rules():
        level, hit = rule.apply(level, signals)
        if hit:
            flags.append(rule.flag)
            fired.append(rule.rule_id)

    return RiskAssessment(
        risk_level=level,
        flagged_conditions=tuple(flags),
        fired_rules=tuple(fired),
    )
