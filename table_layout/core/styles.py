"""Alignment enums and border line styles.

WHY: Paragraphs, cells, and rows share the same small vocabulary of
alignment values and border descriptions. Callers often configure them
from loose strings ("center", "Bottom"), so lookups are lenient.

HOW: Two ``str`` enums with a ``get()`` classmethod that falls back to
the default member, and a frozen ``LineStyle`` value type whose colors
are reportlab ``Color`` objects.

RULES:
- Unknown alignment names resolve to LEFT / TOP, never raise
- LineStyle is immutable; a cell border of None means "no border"
- Border widths are in points
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from reportlab.lib import colors
from reportlab.lib.colors import Color

from table_layout.config import DEFAULT_BORDER_WIDTH


class HorizontalAlignment(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"

    @classmethod
    def get(cls, key: Optional[str]) -> "HorizontalAlignment":
        """Lenient lookup by name; unknown or missing keys give LEFT."""
        if key is None:
            return cls.LEFT
        try:
            return cls(key.strip().lower())
        except ValueError:
            return cls.LEFT


class VerticalAlignment(str, Enum):
    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"

    @classmethod
    def get(cls, key: Optional[str]) -> "VerticalAlignment":
        """Lenient lookup by name; unknown or missing keys give TOP."""
        if key is None:
            return cls.TOP
        try:
            return cls(key.strip().lower())
        except ValueError:
            return cls.TOP


@dataclass(frozen=True)
class LineStyle:
    """Stroke description for one cell border.

    RULES:
    - dash_array of None means a solid line
    """

    color: Color = field(default_factory=lambda: colors.black)
    width: float = DEFAULT_BORDER_WIDTH
    dash_array: Optional[Tuple[float, ...]] = None
    dash_phase: float = 0.0

    @classmethod
    def produce_dotted(cls, color: Color, width: float) -> "LineStyle":
        return cls(color=color, width=width, dash_array=(1.0,), dash_phase=0.0)

    @classmethod
    def produce_dashed(
        cls,
        color: Color,
        width: float,
        dash_array: Tuple[float, ...] = (5.0,),
        phase: float = 0.0,
    ) -> "LineStyle":
        return cls(color=color, width=width, dash_array=dash_array, dash_phase=phase)
