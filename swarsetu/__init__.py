"""SWARSETU handwriting screening backend.

Stroke-level handwriting analysis used to screen children for
dysgraphia indicators during drawing and writing prompts.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
