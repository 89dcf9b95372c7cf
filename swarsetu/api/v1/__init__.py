# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API v1 routes package.

Modules:
    handwriting: Handwriting analysis, prompt bank and session reports.
"""

from fastapi import APIRouter

from swarsetu.api.v1 import handwriting

# Create the main v1 router
router = APIRouter(prefix="/api/v1")

router.include_router(handwriting.router, prefix="/handwriting", tags=["Handwriting"])

__all__ = ["router"]
