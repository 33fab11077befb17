"""Shared test fixtures."""

from __future__ import annotations

import pytest

from pathedit.engine.config import EditorConfig
from pathedit.engine.host import InMemoryHost
from pathedit.engine.root import Root


# Sample descriptors

SQUARE_D = "M 0 0 L 10 0 L 10 10 L 0 10 Z"

SQUARE_CANONICAL = "M 0 0 L 10 0 L 10 10 L 0 10 L 0 0 Z"

TRIANGLE_D = "M 0 0 L 10 0 L 0 10 Z"

# Cubic from (0,0) to (10,0) bulging down, closed by a straight line
CURVE_D = "M 0 0 C 0 5 10 5 10 0 L 0 0 Z"

ARC_D = "M 0 0 A 5 5 0 0 1 10 0 Z"

TWO_SUBPATHS_D = "M 0 0 L 10 0 L 10 10 M 20 20 L 30 20 L 30 30"

# Lucide "home" outline: relative commands, arcs with compact flags
HOME_D = (
    "M3 10a2 2 0 0 1 .709-1.528l7-5.999a2 2 0 0 1 2.582 0l7 5.999A2 2 0 0 1 21 10v9"
    "a2 2 0 0 1-2 2H5a2 2 0 0 1-2-2z"
)

SMILE_D = "M8 14s1.5 2 4 2 4-2 4-2"

QUADRATIC_D = "M 0 0 Q 5 5 10 0 T 20 0"

SAMPLES = [SQUARE_D, TRIANGLE_D, CURVE_D, ARC_D, TWO_SUBPATHS_D, HOME_D, SMILE_D, QUADRATIC_D]


@pytest.fixture
def host() -> InMemoryHost:
    return InMemoryHost()


@pytest.fixture
def root(host) -> Root:
    return Root(100, 100, host=host, config=EditorConfig())


@pytest.fixture
def events(root) -> list:
    recorded: list = []
    root.on(recorded.append)
    return recorded


@pytest.fixture
def square(root):
    return root.insert(SQUARE_D)
