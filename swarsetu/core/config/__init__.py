# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Configuration package for SWARSETU.

- Settings: Pydantic-based settings loaded from environment variables
- YAML loader: Utilities for loading and merging YAML configuration files

Example:
    >>> from swarsetu.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.environment)
    'development'
"""

from swarsetu.core.config.settings import (
    APISettings,
    CORSSettings,
    HandwritingSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from swarsetu.core.config.yaml_loader import (
    YAMLLoadError,
    deep_merge,
    load_yaml,
)

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    "clear_settings_cache",
    # Subsettings
    "APISettings",
    "CORSSettings",
    "HandwritingSettings",
    # YAML utilities
    "load_yaml",
    "deep_merge",
    "YAMLLoadError",
]
