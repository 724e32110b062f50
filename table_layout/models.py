"""Pydantic request models for table layout jobs.

WHY: The CLI accepts a JSON description of a table (width, rows, cells,
text). Typed models reject malformed input with clear messages before
any layout work starts, and keep the input format documented in one place.

HOW: One model per level of the table (LayoutRequest > RowRequest >
CellRequest). Alignment fields reuse the core enums, so an unknown
value is a validation error here rather than a silent fallback.

RULES:
- All models use Field(description=...) for self-documenting schemas
- font must name one of the standard families in config.STANDARD_FAMILIES
- A cell's font_size and padding default to the config values when omitted
- Python 3.9+ compatible (no PEP 604 unions, use Optional from typing)
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from table_layout.config import (
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_SIZE,
    DEFAULT_LINE_SPACING,
    DEFAULT_PADDING,
    STANDARD_FAMILIES,
)
from table_layout.core.styles import HorizontalAlignment, VerticalAlignment


class CellRequest(BaseModel):
    """One cell of a requested row."""

    text: Optional[str] = Field(
        default=None,
        description="Cell markup: <b> <i> <p> <br> <ul> <ol> <li>.",
    )
    width: float = Field(
        description="Cell width, as a percentage of the row or in points (see percent).",
    )
    percent: bool = Field(
        default=True,
        description="Interpret width as a percentage of the row width.",
    )
    align: HorizontalAlignment = Field(
        default=HorizontalAlignment.LEFT,
        description="Horizontal text alignment.",
    )
    valign: VerticalAlignment = Field(
        default=VerticalAlignment.TOP,
        description="Vertical text alignment.",
    )
    font_size: float = Field(
        default=DEFAULT_FONT_SIZE,
        description="Font size in points.",
    )
    padding: float = Field(
        default=DEFAULT_PADDING,
        description="Padding applied to all four sides, in points.",
    )
    rotated: bool = Field(
        default=False,
        description="Rotate the text 90 degrees (never wrapped).",
    )
    height: Optional[float] = Field(
        default=None,
        description="Explicit cell height in points; overrides the measured height.",
    )


class RowRequest(BaseModel):
    """One requested row."""

    height: float = Field(
        default=0.0,
        description="Minimum row height, or the exact height when fixed_height is set.",
    )
    fixed_height: bool = Field(
        default=False,
        description="Keep the height and shrink cell fonts to fit instead.",
    )
    header: bool = Field(
        default=False,
        description="Header row: cells use the bold face.",
    )
    line_spacing: float = Field(
        default=DEFAULT_LINE_SPACING,
        description="Line spacing multiplier for every cell in the row.",
    )
    cells: List[CellRequest] = Field(
        default_factory=list,
        description="Cells from left to right.",
    )


class LayoutRequest(BaseModel):
    """A whole table to lay out."""

    width: float = Field(
        description="Table width in points.",
    )
    margin: float = Field(
        default=0.0,
        description="Left margin of the table in points.",
    )
    font: str = Field(
        default=DEFAULT_FONT_FAMILY,
        description="Standard font family name (Helvetica, Times-Roman, Courier).",
    )
    rows: List[RowRequest] = Field(
        default_factory=list,
        description="Rows from top to bottom.",
    )

    @field_validator("font")
    @classmethod
    def _known_font(cls, value: str) -> str:
        if value not in STANDARD_FAMILIES:
            raise ValueError(
                "Unknown font family {!r}; expected one of {}".format(
                    value, ", ".join(sorted(STANDARD_FAMILIES))
                )
            )
        return value
