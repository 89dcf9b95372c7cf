# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Reading and layering of the handwriting YAML data files.

Thresholds, recommendation tables and the prompt bank ship inside the
package; a deployment may drop same-named files into an override
directory. ``load_yaml`` reads one file, ``deep_merge`` lays an override
over the packaged mapping.

Example:
    >>> packaged = load_yaml(DATA_DIR / "thresholds.yaml")
    >>> local = load_yaml(Path("/etc/swarsetu/thresholds.yaml"))
    >>> deep_merge(packaged, local)["handwriting"]["risk_thresholds"]["motor_control"]
    60
"""

from pathlib import Path
from typing import Any

import yaml


class YAMLLoadError(Exception):
    """A data file is missing, unreadable, malformed or not a mapping.

    Attributes:
        path: File that was being read.
        reason: Short description shown in logs.
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load YAML file '{path}': {reason}")


def _read_text(path: Path) -> str:
    if not path.exists():
        raise YAMLLoadError(path, "File does not exist")
    if not path.is_file():
        raise YAMLLoadError(path, "Path is not a file")
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise YAMLLoadError(path, f"Cannot read file: {e}") from e


def load_yaml(path: Path) -> dict[str, Any]:
    """Parse a data file whose root is a mapping.

    A file holding only comments loads as ``{}`` so an override directory
    can keep placeholder files.

    Raises:
        YAMLLoadError: The file cannot be read or parsed, or its root is a
            list or scalar.
    """
    text = _read_text(path)

    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise YAMLLoadError(path, f"Invalid YAML syntax: {e}") from e

    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise YAMLLoadError(path, f"YAML root must be a mapping, got {type(parsed).__name__}")
    return parsed


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return ``base`` with ``override`` laid over it; inputs stay untouched.

    Mappings present on both sides merge key by key. Anything else in
    ``override`` wins outright, so a recommendation list in an override
    file replaces the packaged list instead of extending it.

    Example:
        >>> deep_merge({"risk": {"motor_control": 50, "hesitation": 6}},
        ...            {"risk": {"hesitation": 8}})
        {'risk': {'motor_control': 50, 'hesitation': 8}}
    """
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged
