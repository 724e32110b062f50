"""Shared test fixtures for the table_layout test suite.

WHY: Line-breaking and sizing tests need exact, hand-checkable numbers.
Real font metrics make every expected width a table lookup, so most tests
run against a fixed-width fake where every character is half an em wide.

HOW: FixedWidthMetrics implements the FontMetrics protocol with constant
values. Fixtures provide a FontContext over it, the standard Helvetica
family (its names only matter to reportlab-backed tests), and a factory
for paragraphs at size 10.

RULES:
- At size 10 with the fake metrics: every character (including space)
  is 5pt wide, ascent 8pt, descent -2pt, line height 10pt
- Each test gets a fresh FontContext (no shared cache state)
"""

from __future__ import annotations

from typing import Optional

import pytest

from table_layout.core.paragraph import Paragraph
from table_layout.core.styles import HorizontalAlignment
from table_layout.fonts import Font, FontContext, FontFamily


class FixedWidthMetrics:
    """Every glyph has the same advance; counts string_width calls."""

    def __init__(self, char_width: float = 500.0, ascent: float = 800.0, descent: float = -200.0):
        self.char_width = char_width
        self._ascent = ascent
        self._descent = descent
        self.width_calls = 0

    def string_width(self, font: Font, text: str) -> float:
        self.width_calls += 1
        return self.char_width * len(text)

    def ascent(self, font: Font) -> float:
        return self._ascent

    def descent(self, font: Font) -> float:
        return self._descent

    def line_height(self, font: Font) -> float:
        return self._ascent - self._descent

    def space_width(self, font: Font) -> float:
        return self.char_width

    def average_char_width(self, font: Font) -> float:
        return self.char_width


@pytest.fixture
def metrics():
    return FixedWidthMetrics()


@pytest.fixture
def context(metrics):
    return FontContext(metrics)


@pytest.fixture
def family():
    return FontFamily.standard("Helvetica")


@pytest.fixture
def make_paragraph(context, family):
    """Factory: paragraph at size 10 over the fixed-width metrics."""

    def _make(
        text: Optional[str],
        width: float = 1000.0,
        align: HorizontalAlignment = HorizontalAlignment.LEFT,
        line_spacing: float = 1.0,
    ) -> Paragraph:
        return Paragraph(
            text,
            family,
            font_size=10,
            width=width,
            align=align,
            line_spacing=line_spacing,
            context=context,
        )

    return _make
