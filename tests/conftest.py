# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- Unit tests
- Integration tests
"""

from collections.abc import Generator

import pytest

from swarsetu.core.config import clear_settings_cache
from swarsetu.core.handwriting.config import HandwritingConfig, load_handwriting_config
from swarsetu.core.handwriting.engine import reset_handwriting_service
from swarsetu.core.handwriting.models import Stroke, StrokePoint


# =============================================================================
# Stroke Builders
# =============================================================================


def _make_stroke(samples: list[tuple[float, float, float]], width: float = 3.0) -> Stroke:
    """Build a stroke from (x, y, time) tuples."""
    return Stroke(points=tuple(StrokePoint(x, y, t) for x, y, t in samples), width=width)


def _horizontal_line(
    x0: float,
    y: float,
    length: float = 100.0,
    duration_ms: float = 500.0,
    t0: float = 0.0,
    segments: int = 10,
) -> Stroke:
    """Straight horizontal stroke sampled at equal time steps."""
    step = length / segments
    dt = duration_ms / segments
    return _make_stroke([(x0 + i * step, y, t0 + i * dt) for i in range(segments + 1)])


def _zigzag(points: int, t0: float = 0.0, dt: float = 10.0, amplitude: float = 10.0) -> Stroke:
    """Zig-zag stroke turning +-90 degrees at every interior point."""
    return _make_stroke(
        [(i * 10.0, amplitude if i % 2 else 0.0, t0 + i * dt) for i in range(points)]
    )


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_caches() -> Generator[None, None, None]:
    """Reset cached settings and the service singleton around each test."""
    clear_settings_cache()
    reset_handwriting_service()
    yield
    clear_settings_cache()
    reset_handwriting_service()


@pytest.fixture
def handwriting_config() -> HandwritingConfig:
    """Provide the packaged handwriting configuration."""
    return load_handwriting_config()


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (FastAPI test client)"
    )


# =============================================================================
# Stroke Fixtures
# =============================================================================


@pytest.fixture
def straight_stroke() -> Stroke:
    """Provide a 100 px horizontal line drawn in 500 ms."""
    return _horizontal_line(100.0, 150.0)


@pytest.fixture
def three_lines() -> list[Stroke]:
    """Provide three stacked 100 px lines, 500 ms each, no pauses.

    The drawing spans x 100..200 and y 100..200, centered on a 300x300
    canvas.
    """
    return [
        _horizontal_line(100.0, 100.0, t0=0.0),
        _horizontal_line(100.0, 150.0, t0=500.0),
        _horizontal_line(100.0, 200.0, t0=1000.0),
    ]


@pytest.fixture
def tremor_stroke() -> Stroke:
    """Provide a 15-point zig-zag with 10 ms sampling."""
    return _zigzag(15)


@pytest.fixture
def make_stroke():
    """Provide a builder for strokes from (x, y, time) tuples."""
    return _make_stroke


@pytest.fixture
def horizontal_line():
    """Provide a builder for straight horizontal strokes."""
    return _horizontal_line


@pytest.fixture
def zigzag():
    """Provide a builder for zig-zag tremor strokes."""
    return _zigzag
