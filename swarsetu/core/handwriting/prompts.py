# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Grade-adaptive drawing prompt bank.

Prompts live in ``data/prompts.yaml`` per language. Selection narrows the
bank to the student's grade band and tops it up from an easier band when
the band alone has fewer than three prompts.

Usage:
    from swarsetu.core.handwriting.prompts import get_dysgraphia_prompts

    prompts = get_dysgraphia_prompts("hi", grade_num=4)
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

from swarsetu.core.handwriting.config import load_layered_yaml
from swarsetu.utils.logging import get_logger

logger = get_logger(__name__)

PROMPTS_FILE = "prompts.yaml"
DEFAULT_LANGUAGE = "en"
MIN_PROMPTS_PER_BAND = 3

# Band topped up from when a band has too few prompts.
FALLBACK_BANDS = {
    "1-2": "1-2",
    "3-4": "3-4",
    "5-6": "3-4",
    "7-8": "5-6",
    "9-10": "7-8",
}


@dataclass(frozen=True)
class DysgraphiaPrompt:
    """One drawing task.

    Attributes:
        type: letter, word, shape or figure.
        prompt: Instruction shown to the student.
        reference: Model answer shown for tracing or comparison.
        difficulty: 1 (easy) to 3 (hard).
        grade_level: Grade band, e.g. "3-4".
        dsm5_domain: Skill area the task exercises.
    """

    type: str
    prompt: str
    reference: str
    difficulty: int
    grade_level: str
    dsm5_domain: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DysgraphiaPrompt":
        """Build a prompt from a YAML/JSON mapping."""
        return cls(
            type=str(data.get("type", "letter")),
            prompt=str(data.get("prompt", "")),
            reference=str(data.get("reference", "")),
            difficulty=int(data.get("difficulty", 1)),
            grade_level=str(data.get("grade_level", "1-2")),
            dsm5_domain=str(data.get("dsm5_domain", "")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert prompt to the camelCase report shape."""
        return {
            "type": self.type,
            "prompt": self.prompt,
            "reference": self.reference,
            "difficulty": self.difficulty,
            "gradeLevel": self.grade_level,
            "dsm5Domain": self.dsm5_domain,
        }


def grade_band(grade_num: int) -> str:
    """Map a numeric grade to its prompt band."""
    if grade_num <= 2:
        return "1-2"
    if grade_num <= 4:
        return "3-4"
    if grade_num <= 6:
        return "5-6"
    if grade_num <= 8:
        return "7-8"
    return "9-10"


@lru_cache(maxsize=4)
def load_prompt_bank(config_dir: str | None = None) -> dict[str, tuple[DysgraphiaPrompt, ...]]:
    """Load prompt banks for every language.

    Args:
        config_dir: Optional directory holding a prompts.yaml override.

    Returns:
        Mapping of language code to prompts in file order.
    """
    override_dir = Path(config_dir) if config_dir else None
    raw = load_layered_yaml(PROMPTS_FILE, override_dir).get("prompts", {})

    bank = {
        lang: tuple(DysgraphiaPrompt.from_dict(p) for p in entries if isinstance(p, dict))
        for lang, entries in raw.items()
        if isinstance(entries, list)
    }
    logger.debug("Loaded prompt bank", languages=sorted(bank))
    return bank


def get_dysgraphia_prompts(
    language: str = DEFAULT_LANGUAGE,
    grade_num: int | None = None,
    config_dir: str | None = None,
) -> list[DysgraphiaPrompt]:
    """Select prompts for a language and grade.

    Args:
        language: Language code; unknown languages use English.
        grade_num: Numeric grade. The full bank is returned when omitted.
        config_dir: Optional override directory.

    Returns:
        Prompts in bank order, band prompts first, then fallback prompts.
    """
    bank = load_prompt_bank(config_dir)
    prompts = bank.get(language) or bank.get(DEFAULT_LANGUAGE, ())

    if grade_num is None:
        return list(prompts)

    band = grade_band(grade_num)
    selected = [p for p in prompts if p.grade_level == band]

    if len(selected) < MIN_PROMPTS_PER_BAND:
        fallback = FALLBACK_BANDS[band]
        extra = [p for p in prompts if p.grade_level == fallback and p not in selected]
        selected.extend(extra)

    return selected
