# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the rule-ordered risk classifier."""

from dataclasses import replace

import pytest

from swarsetu.core.handwriting.classifier import (
    EXCESSIVE_HESITATIONS,
    FINE_MOTOR_CONTROL_DEFICIT,
    INCONSISTENT_FORMATION,
    MICRO_TREMOR_PATTERN,
    POOR_STROKE_PRECISION,
    SPATIAL_ORGANIZATION_DIFFICULTY,
    WRITING_FLUENCY_DIFFICULTY,
    RiskRule,
    RiskSignals,
    at_least_moderate,
    build_risk_rules,
    classify_risk,
    compounding,
)
from swarsetu.core.handwriting.config import RiskThresholds
from swarsetu.core.handwriting.models import RiskLevel


@pytest.fixture
def healthy() -> RiskSignals:
    """Provide signals that fire no rule."""
    return RiskSignals(
        motor_control=90,
        writing_fluency=90,
        spatial_awareness=90,
        consistency=90,
        micro_tremor_count=0,
        hesitation_count=0,
        stroke_precision=95.0,
    )


class TestRiskLevel:
    """Tests for RiskLevel ordering."""

    def test_escalate_keeps_the_more_severe(self) -> None:
        """Test escalation is a max over low < moderate < high."""
        assert RiskLevel.LOW.escalate(RiskLevel.MODERATE) is RiskLevel.MODERATE
        assert RiskLevel.HIGH.escalate(RiskLevel.MODERATE) is RiskLevel.HIGH
        assert RiskLevel.MODERATE.escalate(RiskLevel.LOW) is RiskLevel.MODERATE

    def test_values(self) -> None:
        """Test serialized values."""
        assert [level.value for level in RiskLevel] == ["low", "moderate", "high"]


class TestEscalations:
    """Tests for the escalation functions."""

    @pytest.mark.parametrize(
        ("level", "expected"),
        [
            (RiskLevel.LOW, RiskLevel.MODERATE),
            (RiskLevel.MODERATE, RiskLevel.MODERATE),
            (RiskLevel.HIGH, RiskLevel.HIGH),
        ],
    )
    def test_at_least_moderate(self, level: RiskLevel, expected: RiskLevel) -> None:
        """Test at_least_moderate never lowers a level."""
        assert at_least_moderate(level) is expected

    @pytest.mark.parametrize(
        ("level", "expected"),
        [
            (RiskLevel.LOW, RiskLevel.MODERATE),
            (RiskLevel.MODERATE, RiskLevel.HIGH),
            (RiskLevel.HIGH, RiskLevel.HIGH),
        ],
    )
    def test_compounding(self, level: RiskLevel, expected: RiskLevel) -> None:
        """Test compounding pushes an already raised level to high."""
        assert compounding(level) is expected


class TestRiskRule:
    """Tests for a single rule."""

    def test_rule_never_de_escalates(self, healthy: RiskSignals) -> None:
        """Test a rule whose escalation returns LOW keeps HIGH."""
        rule = RiskRule("test", "Test", lambda s: True, lambda level: RiskLevel.LOW)

        assert rule.apply(RiskLevel.HIGH, healthy) == (RiskLevel.HIGH, True)

    def test_rule_not_firing(self, healthy: RiskSignals) -> None:
        """Test a rule that does not fire keeps the level."""
        rule = RiskRule("test", "Test", lambda s: False, compounding)

        assert rule.apply(RiskLevel.MODERATE, healthy) == (RiskLevel.MODERATE, False)

    def test_rule_table_order(self) -> None:
        """Test the rules are evaluated in their documented order."""
        assert [rule.rule_id for rule in build_risk_rules()] == [
            "fine_motor_control",
            "micro_tremor",
            "writing_fluency",
            "hesitations",
            "spatial_organization",
            "inconsistent_formation",
            "stroke_precision",
        ]


class TestClassifyRisk:
    """Tests for classify_risk."""

    def test_no_rule_fires(self, healthy: RiskSignals) -> None:
        """Test healthy signals stay low with no flags."""
        assessment = classify_risk(healthy)

        assert assessment.risk_level is RiskLevel.LOW
        assert assessment.flagged_conditions == ()
        assert assessment.fired_rules == ()

    @pytest.mark.parametrize(
        ("changes", "flag"),
        [
            ({"motor_control": 49}, FINE_MOTOR_CONTROL_DEFICIT),
            ({"micro_tremor_count": 9}, MICRO_TREMOR_PATTERN),
            ({"writing_fluency": 44}, WRITING_FLUENCY_DIFFICULTY),
            ({"hesitation_count": 7}, EXCESSIVE_HESITATIONS),
            ({"spatial_awareness": 39}, SPATIAL_ORGANIZATION_DIFFICULTY),
            ({"consistency": 39}, INCONSISTENT_FORMATION),
            ({"stroke_precision": 34.6}, POOR_STROKE_PRECISION),
        ],
    )
    def test_single_rule_is_moderate(
        self, healthy: RiskSignals, changes: dict, flag: str
    ) -> None:
        """Test any single rule alone gives moderate."""
        assessment = classify_risk(replace(healthy, **changes))

        assert assessment.risk_level is RiskLevel.MODERATE
        assert assessment.flagged_conditions == (flag,)

    @pytest.mark.parametrize(
        "changes",
        [
            {"motor_control": 50},
            {"micro_tremor_count": 8},
            {"writing_fluency": 45},
            {"hesitation_count": 6},
            {"spatial_awareness": 40},
            {"consistency": 40},
            {"stroke_precision": 35.0},
        ],
    )
    def test_thresholds_are_strict(self, healthy: RiskSignals, changes: dict) -> None:
        """Test values at the threshold do not fire."""
        assert classify_risk(replace(healthy, **changes)).risk_level is RiskLevel.LOW

    def test_tremor_after_motor_is_high(self, healthy: RiskSignals) -> None:
        """Test the tremor rule compounds an earlier motor flag."""
        assessment = classify_risk(replace(healthy, motor_control=40, micro_tremor_count=12))

        assert assessment.risk_level is RiskLevel.HIGH
        assert assessment.flagged_conditions == (
            FINE_MOTOR_CONTROL_DEFICIT,
            MICRO_TREMOR_PATTERN,
        )

    def test_fluency_after_tremor_is_high(self, healthy: RiskSignals) -> None:
        """Test the fluency rule compounds an earlier tremor flag."""
        signals = replace(healthy, micro_tremor_count=9, writing_fluency=30)

        assert classify_risk(signals).risk_level is RiskLevel.HIGH

    def test_order_matters(self, healthy: RiskSignals) -> None:
        """Test non-compounding rules after moderate stay moderate."""
        signals = replace(
            healthy,
            motor_control=40,
            hesitation_count=10,
            spatial_awareness=20,
            consistency=20,
            stroke_precision=10.0,
        )

        assessment = classify_risk(signals)

        assert assessment.risk_level is RiskLevel.MODERATE
        assert len(assessment.flagged_conditions) == 5

    def test_high_is_never_lowered(self, healthy: RiskSignals) -> None:
        """Test later at-least-moderate rules keep a high level."""
        signals = replace(
            healthy,
            motor_control=40,
            micro_tremor_count=20,
            consistency=10,
        )

        assessment = classify_risk(signals)

        assert assessment.risk_level is RiskLevel.HIGH
        assert assessment.fired_rules == (
            "fine_motor_control",
            "micro_tremor",
            "inconsistent_formation",
        )

    def test_all_rules_fire(self) -> None:
        """Test every flag is listed in rule order."""
        signals = RiskSignals(
            motor_control=10,
            writing_fluency=10,
            spatial_awareness=10,
            consistency=10,
            micro_tremor_count=30,
            hesitation_count=30,
            stroke_precision=10.0,
        )

        assessment = classify_risk(signals)

        assert assessment.risk_level is RiskLevel.HIGH
        assert assessment.flagged_conditions == (
            FINE_MOTOR_CONTROL_DEFICIT,
            MICRO_TREMOR_PATTERN,
            WRITING_FLUENCY_DIFFICULTY,
            EXCESSIVE_HESITATIONS,
            SPATIAL_ORGANIZATION_DIFFICULTY,
            INCONSISTENT_FORMATION,
            POOR_STROKE_PRECISION,
        )

    def test_custom_thresholds(self, healthy: RiskSignals) -> None:
        """Test rule thresholds come from config."""
        rules = build_risk_rules(RiskThresholds(motor_control=95))

        assessment = classify_risk(healthy, rules)

        assert assessment.flagged_conditions == (FINE_MOTOR_CONTROL_DEFICIT,)
