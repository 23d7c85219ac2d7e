"""Shared fixtures for markrun tests."""

from __future__ import annotations

import pytest

from markrun.fonts import Font
from markrun.style import RenderStyle


class FixedWidthMetrics:
    """Every character is ``char_width`` points wide, whatever the font."""

    def __init__(self, char_width: float = 10) -> None:
        self.char_width = char_width
        self.calls = 0

    def width(self, text: str, font: Font) -> float:
        self.calls += 1
        return len(text) * self.char_width


@pytest.fixture
def metrics() -> FixedWidthMetrics:
    return FixedWidthMetrics()


@pytest.fixture
def style(metrics: FixedWidthMetrics) -> RenderStyle:
    """Default style with exact, font-independent text widths."""
    return RenderStyle(metrics=metrics)
