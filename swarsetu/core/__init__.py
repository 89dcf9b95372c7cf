# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Core package for SWARSETU.

This package contains the core business logic:
- config: Application settings and YAML loading
- handwriting: Stroke analysis engine for dysgraphia screening
"""
