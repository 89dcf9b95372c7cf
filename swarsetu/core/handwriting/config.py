# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Handwriting analysis configuration.

Every constant used by the analyzers, the domain aggregator and the risk
classifier lives here as a dataclass default. Packaged YAML files under
``data/`` restate these values and carry the recommendation tables; a
deployment may place files with the same names in
``HANDWRITING_CONFIG_DIR`` to override individual keys.

Usage:
    from swarsetu.core.handwriting.config import get_handwriting_config

    config = get_handwriting_config()
    print(config.risk.motor_control)                       # 50.0
    recs = config.get_recommendations("fine_motor_control", "en")
"""

from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any

from swarsetu.core.config.yaml_loader import YAMLLoadError, deep_merge, load_yaml
from swarsetu.utils.logging import get_logger

logger = get_logger(__name__)

DATA_DIR = Path(__file__).parent / "data"

THRESHOLDS_FILE = "thresholds.yaml"
RECOMMENDATIONS_FILE = "recommendations.yaml"


@dataclass(frozen=True)
class AnalyzerConfig:
    """Constants used by the per-metric analyzers.

    Attributes:
        neutral_score: Score returned when an analyzer has no usable signal.
        letter_size_neutral_score: Neutral score for letter-size consistency.
        smoothness_angle_scale: Points lost per unit of mean |angle| / pi.
        speed_cv_scale: Points lost per unit of speed CV.
        letter_size_cv_scale: Points lost per unit of size CV.
        spatial_bands: (upper ratio, score) steps for canvas usage.
        spatial_overflow_score: Score for ratios at or above the last band.
        centering_scale: Points lost at maximum center eccentricity.
        precision_min_chord_px: Shortest chord counted as a real stroke.
        tremor_window_ms: Time span a reversal must fit in.
        tremor_min_angle_rad: Minimum |angle| at both joints of a reversal.
        pause_threshold_ms: Inter-stroke gap counted as a hesitation.
        intra_stroke_pause_factor: Multiplier on pause_threshold_ms for
            gaps inside a stroke.
        writing_pressure_placeholder: Reported pressure variance.
    """

    neutral_score: float = 50.0
    letter_size_neutral_score: float = 70.0
    smoothness_angle_scale: float = 120.0
    speed_cv_scale: float = 40.0
    letter_size_cv_scale: float = 60.0
    spatial_bands: tuple[tuple[float, float], ...] = (
        (0.1, 20.0),
        (0.3, 60.0),
        (0.8, 100.0),
    )
    spatial_overflow_score: float = 80.0
    centering_scale: float = 80.0
    precision_min_chord_px: float = 5.0
    tremor_window_ms: float = 200.0
    tremor_min_angle_rad: float = 1.2
    pause_threshold_ms: float = 400.0
    intra_stroke_pause_factor: float = 1.5
    writing_pressure_placeholder: int = 70

    @property
    def intra_stroke_pause_ms(self) -> float:
        """Gap inside a stroke counted as a hesitation."""
        return self.pause_threshold_ms * self.intra_stroke_pause_factor


@dataclass(frozen=True)
class DomainWeights:
    """Fixed linear weights for domain and overall scores.

    The penalty attributes turn raw counts into 0-100 sub-terms:
    ``100 - min(count * penalty, 100)`` and ``100 - min(pause / divisor, 100)``.
    """

    motor_smoothness: float = 0.40
    motor_precision: float = 0.30
    motor_tremor: float = 0.30
    fluency_speed: float = 0.40
    fluency_hesitation: float = 0.35
    fluency_pause: float = 0.25
    spatial_organization: float = 0.60
    spatial_letter_size: float = 0.40
    consistency_speed: float = 0.30
    consistency_letter_size: float = 0.40
    consistency_smoothness: float = 0.30
    tremor_penalty: float = 8.0
    hesitation_penalty: float = 10.0
    pause_divisor: float = 20.0
    overall_motor_control: float = 0.30
    overall_writing_fluency: float = 0.25
    overall_spatial_awareness: float = 0.20
    overall_consistency: float = 0.25


@dataclass(frozen=True)
class RiskThresholds:
    """Trigger values for the ordered risk rules.

    Score thresholds fire below the value; count thresholds fire above it.
    """

    motor_control: float = 50.0
    micro_tremor_count: float = 8.0
    writing_fluency: float = 45.0
    hesitation_count: float = 6.0
    spatial_awareness: float = 40.0
    consistency: float = 40.0
    stroke_precision: float = 35.0


@dataclass
class HandwritingConfig:
    """Complete handwriting analysis configuration.

    Attributes:
        analyzers: Per-metric analyzer constants.
        weights: Domain and overall weights.
        risk: Risk rule thresholds.
        recommendations: Localized recommendations keyed by rule id.
        general_recommendations: Localized recommendations used when no
            rule fired.
        disclaimer: Localized screening disclaimer.
    """

    analyzers: AnalyzerConfig = field(default_factory=AnalyzerConfig)
    weights: DomainWeights = field(default_factory=DomainWeights)
    risk: RiskThresholds = field(default_factory=RiskThresholds)
    recommendations: dict[str, list[dict[str, str]]] = field(default_factory=dict)
    general_recommendations: list[dict[str, str]] = field(default_factory=list)
    disclaimer: dict[str, str] = field(default_factory=dict)

    def get_recommendations(self, rule_id: str, lang: str = "en") -> list[str]:
        """Get localized recommendations for a fired rule.

        Args:
            rule_id: Risk rule identifier (e.g., "fine_motor_control").
            lang: Language code, English is the fallback.

        Returns:
            List of recommendation strings, empty if none are configured.
        """
        return _localize(self.recommendations.get(rule_id, []), lang)

    def get_general_recommendations(self, lang: str = "en") -> list[str]:
        """Get localized recommendations for a session with no flags."""
        return _localize(self.general_recommendations, lang)

    def get_disclaimer(self, lang: str = "en") -> str:
        """Get localized screening disclaimer."""
        return self.disclaimer.get(lang, self.disclaimer.get("en", ""))


def _localize(entries: list[Any], lang: str) -> list[str]:
    return [
        entry.get(lang, entry.get("en", ""))
        for entry in entries
        if isinstance(entry, dict)
    ]


def _parse_analyzer_config(data: dict[str, Any]) -> AnalyzerConfig:
    """Parse analyzer constants, falling back to defaults per key."""
    defaults = AnalyzerConfig()

    bands = data.get("spatial_bands")
    if bands:
        spatial_bands = tuple((float(limit), float(score)) for limit, score in bands)
    else:
        spatial_bands = defaults.spatial_bands

    return AnalyzerConfig(
        neutral_score=float(data.get("neutral_score", defaults.neutral_score)),
        letter_size_neutral_score=float(
            data.get("letter_size_neutral_score", defaults.letter_size_neutral_score)
        ),
        smoothness_angle_scale=float(
            data.get("smoothness_angle_scale", defaults.smoothness_angle_scale)
        ),
        speed_cv_scale=float(data.get("speed_cv_scale", defaults.speed_cv_scale)),
        letter_size_cv_scale=float(
            data.get("letter_size_cv_scale", defaults.letter_size_cv_scale)
        ),
        spatial_bands=spatial_bands,
        spatial_overflow_score=float(
            data.get("spatial_overflow_score", defaults.spatial_overflow_score)
        ),
        centering_scale=float(data.get("centering_scale", defaults.centering_scale)),
        precision_min_chord_px=float(
            data.get("precision_min_chord_px", defaults.precision_min_chord_px)
        ),
        tremor_window_ms=float(data.get("tremor_window_ms", defaults.tremor_window_ms)),
        tremor_min_angle_rad=float(
            data.get("tremor_min_angle_rad", defaults.tremor_min_angle_rad)
        ),
        pause_threshold_ms=float(
            data.get("pause_threshold_ms", defaults.pause_threshold_ms)
        ),
        intra_stroke_pause_factor=float(
            data.get("intra_stroke_pause_factor", defaults.intra_stroke_pause_factor)
        ),
        writing_pressure_placeholder=int(
            data.get("writing_pressure_placeholder", defaults.writing_pressure_placeholder)
        ),
    )


def _parse_domain_weights(data: dict[str, Any]) -> DomainWeights:
    """Parse domain weights from the nested YAML layout."""
    d = DomainWeights()
    motor = data.get("motor_control", {})
    fluency = data.get("writing_fluency", {})
    spatial = data.get("spatial_awareness", {})
    consistency = data.get("consistency", {})
    penalties = data.get("penalties", {})
    overall = data.get("overall", {})

    return DomainWeights(
        motor_smoothness=float(motor.get("smoothness", d.motor_smoothness)),
        motor_precision=float(motor.get("precision", d.motor_precision)),
        motor_tremor=float(motor.get("tremor", d.motor_tremor)),
        fluency_speed=float(fluency.get("speed_consistency", d.fluency_speed)),
        fluency_hesitation=float(fluency.get("hesitation", d.fluency_hesitation)),
        fluency_pause=float(fluency.get("pause", d.fluency_pause)),
        spatial_organization=float(
            spatial.get("spatial_organization", d.spatial_organization)
        ),
        spatial_letter_size=float(spatial.get("letter_size", d.spatial_letter_size)),
        consistency_speed=float(
            consistency.get("speed_consistency", d.consistency_speed)
        ),
        consistency_letter_size=float(
            consistency.get("letter_size", d.consistency_letter_size)
        ),
        consistency_smoothness=float(
            consistency.get("smoothness", d.consistency_smoothness)
        ),
        tremor_penalty=float(penalties.get("tremor", d.tremor_penalty)),
        hesitation_penalty=float(penalties.get("hesitation", d.hesitation_penalty)),
        pause_divisor=float(penalties.get("pause_divisor", d.pause_divisor)),
        overall_motor_control=float(
            overall.get("motor_control", d.overall_motor_control)
        ),
        overall_writing_fluency=float(
            overall.get("writing_fluency", d.overall_writing_fluency)
        ),
        overall_spatial_awareness=float(
            overall.get("spatial_awareness", d.overall_spatial_awareness)
        ),
        overall_consistency=float(overall.get("consistency", d.overall_consistency)),
    )


def _parse_risk_thresholds(data: dict[str, Any]) -> RiskThresholds:
    """Parse risk rule thresholds, falling back to defaults per key."""
    d = RiskThresholds()
    return RiskThresholds(
        motor_control=float(data.get("motor_control", d.motor_control)),
        micro_tremor_count=float(data.get("micro_tremor_count", d.micro_tremor_count)),
        writing_fluency=float(data.get("writing_fluency", d.writing_fluency)),
        hesitation_count=float(data.get("hesitation_count", d.hesitation_count)),
        spatial_awareness=float(data.get("spatial_awareness", d.spatial_awareness)),
        consistency=float(data.get("consistency", d.consistency)),
        stroke_precision=float(data.get("stroke_precision", d.stroke_precision)),
    )


def load_layered_yaml(filename: str, override_dir: Path | None) -> dict[str, Any]:
    """Load a packaged YAML file and deep-merge an override copy over it."""
    try:
        data = load_yaml(DATA_DIR / filename)
    except YAMLLoadError as e:
        logger.warning(
            "Failed to load packaged handwriting config",
            path=str(e.path),
            reason=e.reason,
        )
        data = {}

    if override_dir is not None:
        override_path = override_dir / filename
        if override_path.exists():
            try:
                data = deep_merge(data, load_yaml(override_path))
            except YAMLLoadError as e:
                logger.warning(
                    "Ignoring invalid handwriting config override",
                    path=str(e.path),
                    reason=e.reason,
                )

    return data


@lru_cache(maxsize=4)
def load_handwriting_config(config_dir: str | None = None) -> HandwritingConfig:
    """Load handwriting configuration from YAML files.

    Cached per override directory. Call ``reload_handwriting_config()``
    to drop the cache.

    Args:
        config_dir: Optional directory with override files.

    Returns:
        HandwritingConfig instance.
    """
    override_dir = Path(config_dir) if config_dir else None
    logger.debug("Loading handwriting config", override_dir=str(override_dir))

    thresholds = load_layered_yaml(THRESHOLDS_FILE, override_dir).get("handwriting", {})
    recs = load_layered_yaml(RECOMMENDATIONS_FILE, override_dir).get("recommendations", {})

    disclaimer = recs.get("disclaimer", {})
    if isinstance(disclaimer, str):
        disclaimer = {"en": disclaimer}

    config = HandwritingConfig(
        analyzers=_parse_analyzer_config(thresholds.get("analyzers", {})),
        weights=_parse_domain_weights(thresholds.get("domain_weights", {})),
        risk=_parse_risk_thresholds(thresholds.get("risk_thresholds", {})),
        recommendations=dict(recs.get("conditions", {})),
        general_recommendations=list(recs.get("general", [])),
        disclaimer=disclaimer,
    )

    logger.info(
        "Loaded handwriting config",
        conditions=len(config.recommendations),
        override_dir=str(override_dir) if override_dir else None,
    )
    return config


def get_handwriting_config() -> HandwritingConfig:
    """Get the cached configuration for the configured override directory."""
    from swarsetu.core.config import get_settings

    return load_handwriting_config(get_settings().handwriting.config_dir)


def reload_handwriting_config() -> HandwritingConfig:
    """Clear the cache and load fresh configuration."""
    load_handwriting_config.cache_clear()
    return get_handwriting_config()
