# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Utility functions and helpers for SWARSETU.

- logging: Structured logging with structlog
"""

from swarsetu.utils.logging import (
    bind_context,
    clear_context,
    get_logger,
    log_context,
    setup_logging,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "bind_context",
    "clear_context",
    "log_context",
]
