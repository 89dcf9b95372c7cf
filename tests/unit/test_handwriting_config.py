# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for handwriting analysis configuration loading."""

from pathlib import Path

import pytest

from swarsetu.core.handwriting.config import (
    AnalyzerConfig,
    DomainWeights,
    HandwritingConfig,
    RiskThresholds,
    get_handwriting_config,
    load_handwriting_config,
    reload_handwriting_config,
)


class TestDefaults:
    """Tests for dataclass defaults."""

    def test_analyzer_defaults(self) -> None:
        """Test analyzer constants."""
        config = AnalyzerConfig()

        assert config.neutral_score == 50.0
        assert config.letter_size_neutral_score == 70.0
        assert config.pause_threshold_ms == 400.0
        assert config.intra_stroke_pause_ms == 600.0
        assert config.spatial_bands == ((0.1, 20.0), (0.3, 60.0), (0.8, 100.0))

    def test_overall_weights_sum_to_one(self) -> None:
        """Test the overall weights form a weighted mean."""
        w = DomainWeights()
        total = (
            w.overall_motor_control
            + w.overall_writing_fluency
            + w.overall_spatial_awareness
            + w.overall_consistency
        )

        assert total == pytest.approx(1.0)

    def test_empty_config_has_no_text(self) -> None:
        """Test a bare config carries no recommendations."""
        config = HandwritingConfig()

        assert config.get_recommendations("fine_motor_control") == []
        assert config.get_general_recommendations() == []
        assert config.get_disclaimer() == ""


class TestLoadHandwritingConfig:
    """Tests for load_handwriting_config."""

    def test_packaged_values_match_defaults(self, handwriting_config: HandwritingConfig) -> None:
        """Test the packaged YAML restates the dataclass defaults."""
        assert handwriting_config.analyzers == AnalyzerConfig()
        assert handwriting_config.weights == DomainWeights()
        assert handwriting_config.risk == RiskThresholds()

    def test_packaged_recommendations(self, handwriting_config: HandwritingConfig) -> None:
        """Test every rule has recommendations and a disclaimer exists."""
        assert set(handwriting_config.recommendations) == {
            "fine_motor_control",
            "micro_tremor",
            "writing_fluency",
            "hesitations",
            "spatial_organization",
            "inconsistent_formation",
            "stroke_precision",
        }
        assert "not a" in handwriting_config.get_disclaimer("en")
        assert handwriting_config.get_disclaimer("hi") != handwriting_config.get_disclaimer("en")
        assert handwriting_config.get_disclaimer("fr") == handwriting_config.get_disclaimer("en")

    def test_override_directory(self, tmp_path: Path) -> None:
        """Test override files are merged key by key."""
        (tmp_path / "thresholds.yaml").write_text(
            "handwriting:\n"
            "  risk_thresholds:\n"
            "    motor_control: 60\n"
            "  analyzers:\n"
            "    pause_threshold_ms: 500\n"
        )
        (tmp_path / "recommendations.yaml").write_text(
            "recommendations:\n"
            "  conditions:\n"
            "    hesitations:\n"
            "      - en: Take short breaks\n"
        )

        config = load_handwriting_config(str(tmp_path))

        assert config.risk.motor_control == 60.0
        assert config.risk.writing_fluency == 45.0
        assert config.analyzers.pause_threshold_ms == 500.0
        assert config.analyzers.neutral_score == 50.0
        assert config.get_recommendations("hesitations") == ["Take short breaks"]
        assert len(config.get_recommendations("micro_tremor")) == 2

    def test_invalid_override_is_ignored(self, tmp_path: Path) -> None:
        """Test a broken override file falls back to packaged values."""
        (tmp_path / "thresholds.yaml").write_text("handwriting: [unclosed\n")

        config = load_handwriting_config(str(tmp_path))

        assert config.risk == RiskThresholds()

    def test_missing_override_files(self, tmp_path: Path) -> None:
        """Test an empty override directory changes nothing."""
        config = load_handwriting_config(str(tmp_path))

        assert config.analyzers == AnalyzerConfig()
        assert config.recommendations

    def test_cached(self) -> None:
        """Test loading is cached per directory."""
        assert load_handwriting_config() is load_handwriting_config()

    def test_settings_config_dir(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test get_handwriting_config reads HANDWRITING_CONFIG_DIR."""
        (tmp_path / "thresholds.yaml").write_text(
            "handwriting:\n  risk_thresholds:\n    hesitation_count: 9\n"
        )
        monkeypatch.setenv("HANDWRITING_CONFIG_DIR", str(tmp_path))

        assert get_handwriting_config().risk.hesitation_count == 9.0

    def test_reload(self) -> None:
        """Test reload returns a fresh instance."""
        first = get_handwriting_config()

        assert reload_handwriting_config() is not first
