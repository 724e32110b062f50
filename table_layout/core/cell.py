"""Cell: one paragraph plus padding and border geometry.

WHY: The table layer decides pagination from cell and row heights before
anything is drawn. A cell turns its paragraph's line measurements into
the outer size it needs, and can shrink its own font when it sits in a
fixed-height row.

HOW: The cell owns a lazily created Paragraph whose width always tracks
the cell's inner width (or inner height, when the text is rotated 90
degrees). The owning row is seen only through the read-only ``RowView``
protocol: its width resolves percentage widths and bounds the cell, and
its height is the outer height the cell is placed in.

RULES:
- Percentage widths are relative to the row width; the resolved width
  must not exceed it (CellWidthError at construction and on set_width)
- Asking for a font before a family is set raises FontNotSetError
- Header cells measure and draw with the family's bold face
- inner_width / inner_height may go negative; nothing is clamped
- inner_height comes from the explicit height, else the row height
- cell_height never reads inner_height or the row height
- cell_height: explicit height as given, else (unwrapped text width if
  rotated, otherwise paragraph height) + vertical padding + borders
- fit_font_size_to_height never increases the font size
- Free space swaps width and height roles for rotated text
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from reportlab.lib import colors
from reportlab.lib.colors import Color

from table_layout.config import (
    DEFAULT_FONT_SIZE,
    DEFAULT_LINE_SPACING,
    DEFAULT_PADDING,
    FIT_ITERATIONS,
    MIN_FONT_SIZE,
)
from table_layout.core.paragraph import Paragraph
from table_layout.core.styles import HorizontalAlignment, LineStyle, VerticalAlignment
from table_layout.errors import CellWidthError, FontNotSetError
from table_layout.fonts import Font, FontContext, FontFamily
from table_layout.text.tokenizer import WrappingFunction

logger = logging.getLogger(__name__)


class RowView(Protocol):
    """What a cell may read from its row."""

    @property
    def width(self) -> float:
        ...

    @property
    def height(self) -> float:
        ...


def _line_width(style: Optional[LineStyle]) -> float:
    return style.width if style is not None else 0.0


class Cell:
    """A table cell sized from its text content."""

    def __init__(
        self,
        row: RowView,
        width: float,
        text: Optional[str],
        is_percent: bool = True,
        align: HorizontalAlignment = HorizontalAlignment.LEFT,
        valign: VerticalAlignment = VerticalAlignment.TOP,
        font_family: Optional[FontFamily] = None,
        font_size: float = DEFAULT_FONT_SIZE,
        context: Optional[FontContext] = None,
    ) -> None:
        self._row = row
        self._text = text
        self._align = HorizontalAlignment.get(align)
        self.valign = VerticalAlignment.get(valign)
        self._font_family = font_family
        self._font_size = font_size
        self._line_spacing = DEFAULT_LINE_SPACING
        self._wrapping_function: Optional[WrappingFunction] = None
        self._header = False
        self._text_color: Color = colors.black
        self.context = context if context is not None else FontContext()
        self._paragraph: Optional[Paragraph] = None

        self.height: Optional[float] = None
        self.rotated = False
        self.colspan = False
        self.fill_color: Optional[Color] = None
        self.url: Optional[str] = None

        self.left_padding = DEFAULT_PADDING
        self.right_padding = DEFAULT_PADDING
        self.top_padding = DEFAULT_PADDING
        self.bottom_padding = DEFAULT_PADDING

        self.left_border: Optional[LineStyle] = LineStyle()
        self.right_border: Optional[LineStyle] = LineStyle()
        self.top_border: Optional[LineStyle] = LineStyle()
        self.bottom_border: Optional[LineStyle] = LineStyle()

        self._width = 0.0
        self.set_width(width, is_percent)

    # -----------------------------------------------------------------
    # Width
    # -----------------------------------------------------------------

    @property
    def width(self) -> float:
        return self._width

    def set_width(self, width: float, is_percent: bool = True) -> None:
        """Set the cell width, in points or as a percentage of the row.

        Raises:
            CellWidthError: if the resolved width exceeds the row width.
        """
        row_width = self._row.width
        resolved = row_width * width / 100 if is_percent else width
        if resolved > row_width:
            raise CellWidthError(resolved, row_width)
        self._width = resolved

    # -----------------------------------------------------------------
    # Text and font
    # -----------------------------------------------------------------

    @property
    def font_family(self) -> Optional[FontFamily]:
        return self._font_family

    @font_family.setter
    def font_family(self, value: Optional[FontFamily]) -> None:
        self._font_family = value
        self._paragraph = None

    def _effective_family(self) -> FontFamily:
        if self._font_family is None:
            raise FontNotSetError()
        return self._font_family.emboldened() if self._header else self._font_family

    @property
    def font(self) -> Font:
        """Face the cell text starts in.

        Raises:
            FontNotSetError: if no font family was set.
        """
        return self._effective_family().regular

    @property
    def font_size(self) -> float:
        return self._font_size

    @font_size.setter
    def font_size(self, value: float) -> None:
        self._font_size = value
        if self._paragraph is not None:
            self._paragraph.font_size = value

    @property
    def text(self) -> Optional[str]:
        return self._text

    @text.setter
    def text(self, value: Optional[str]) -> None:
        self._text = value
        if self._paragraph is not None:
            self._paragraph.text = value

    @property
    def align(self) -> HorizontalAlignment:
        return self._align

    @align.setter
    def align(self, value: HorizontalAlignment) -> None:
        self._align = HorizontalAlignment.get(value)
        if self._paragraph is not None:
            self._paragraph.align = self._align

    @property
    def line_spacing(self) -> float:
        return self._line_spacing

    @line_spacing.setter
    def line_spacing(self, value: float) -> None:
        self._line_spacing = value
        if self._paragraph is not None:
            self._paragraph.line_spacing = value

    @property
    def wrapping_function(self) -> Optional[WrappingFunction]:
        return self._wrapping_function

    @wrapping_function.setter
    def wrapping_function(self, value: Optional[WrappingFunction]) -> None:
        self._wrapping_function = value
        if self._paragraph is not None:
            self._paragraph.wrapping_function = value

    @property
    def text_color(self) -> Color:
        return self._text_color

    @text_color.setter
    def text_color(self, value: Color) -> None:
        self._text_color = value
        if self._paragraph is not None:
            self._paragraph.color = value

    @property
    def header(self) -> bool:
        return self._header

    @header.setter
    def header(self, value: bool) -> None:
        self._header = value
        self._paragraph = None

    # -----------------------------------------------------------------
    # Paragraph
    # -----------------------------------------------------------------

    def _get_paragraph(self) -> Paragraph:
        if self._paragraph is None:
            self._paragraph = Paragraph(
                self._text,
                self._effective_family(),
                font_size=self._font_size,
                align=self._align,
                line_spacing=self._line_spacing,
                color=self._text_color,
                wrapping_function=self._wrapping_function,
                context=self.context,
            )
        return self._paragraph

    @property
    def paragraph(self) -> Paragraph:
        """The cell's paragraph, laid out at the current inner size.

        Raises:
            FontNotSetError: if no font family was set.
        """
        paragraph = self._get_paragraph()
        paragraph.width = self.inner_height if self.rotated else self.inner_width
        return paragraph

    # -----------------------------------------------------------------
    # Geometry
    # -----------------------------------------------------------------

    @property
    def horizontal_frame(self) -> float:
        """Left and right padding plus border widths."""
        return (
            self.left_padding
            + self.right_padding
            + _line_width(self.left_border)
            + _line_width(self.right_border)
        )

    @property
    def vertical_frame(self) -> float:
        """Top and bottom padding plus border widths."""
        return (
            self.top_padding
            + self.bottom_padding
            + _line_width(self.top_border)
            + _line_width(self.bottom_border)
        )

    @property
    def inner_width(self) -> float:
        return self._width - self.horizontal_frame

    @property
    def inner_height(self) -> float:
        """Height available to the text inside the row the cell sits in."""
        outer = self.height if self.height is not None else self._row.height
        return outer - self.vertical_frame

    @property
    def cell_height(self) -> float:
        if self.height is not None:
            return self.height
        if self.rotated:
            return self._get_paragraph().unwrapped_width + self.vertical_frame
        return self.text_height + self.vertical_frame

    @property
    def text_height(self) -> float:
        return self.paragraph.height

    @property
    def text_width(self) -> float:
        return self.paragraph.max_line_width

    @property
    def horizontal_free_space(self) -> float:
        if self.rotated:
            return self.inner_width - self.text_height
        return self.inner_width - self.text_width

    @property
    def vertical_free_space(self) -> float:
        if self.rotated:
            return self.inner_height - self.text_width
        return self.inner_height - self.text_height

    # -----------------------------------------------------------------
    # Font fitting
    # -----------------------------------------------------------------

    def _required_height(self) -> float:
        paragraph = self.paragraph
        descent = self.context.descent(paragraph.font, self._font_size)
        return paragraph.height + abs(descent)

    def fit_font_size_to_height(self, row_height: float) -> None:
        """Shrink the font until the text fits ``row_height``.

        HOW: Binary search over [MIN_FONT_SIZE, font_size] for
        FIT_ITERATIONS steps, keeping the largest size that fits. When no
        probed size fits, MIN_FONT_SIZE is used.

        RULES:
        - Rotated cells and cells without text are left alone
        - A row with no room inside the padding and borders changes nothing
        - A cell that already fits keeps its font size
        """
        if self.rotated or not self._text:
            return
        available = row_height - self.vertical_frame
        if available <= 0:
            return
        if self._required_height() <= available:
            return
        original = self._font_size
        low, high = MIN_FONT_SIZE, original
        best: Optional[float] = None
        for _ in range(FIT_ITERATIONS):
            candidate = (low + high) / 2
            self.font_size = candidate
            if self._required_height() <= available:
                best = candidate
                low = candidate
            else:
                high = candidate
        self.font_size = best if best is not None else MIN_FONT_SIZE
        logger.debug(
            "Fitted font size %.3f -> %.3f for available height %.2f",
            original, self._font_size, available,
        )

    # -----------------------------------------------------------------
    # Borders, padding, and style
    # -----------------------------------------------------------------

    def set_border_style(self, style: Optional[LineStyle]) -> None:
        """Apply one style (or None) to all four borders."""
        self.left_border = style
        self.right_border = style
        self.top_border = style
        self.bottom_border = style

    def set_padding(self, left: float, right: float, top: float, bottom: float) -> None:
        self.left_padding = left
        self.right_padding = right
        self.top_padding = top
        self.bottom_padding = bottom

    def _style(self) -> tuple:
        return (
            self._font_family,
            self._font_size,
            self._text_color,
            self.fill_color,
            self.left_border,
            self.right_border,
            self.top_border,
            self.bottom_border,
            self.left_padding,
            self.right_padding,
            self.top_padding,
            self.bottom_padding,
            self._align,
            self.valign,
            self.rotated,
        )

    def copy_cell_style(self, source: "Cell") -> None:
        """Take font, colors, borders, padding, alignment, and rotation from ``source``."""
        self.font_family = source.font_family
        self.font_size = source.font_size
        self.text_color = source.text_color
        self.fill_color = source.fill_color
        self.left_border = source.left_border
        self.right_border = source.right_border
        self.top_border = source.top_border
        self.bottom_border = source.bottom_border
        self.set_padding(
            source.left_padding,
            source.right_padding,
            source.top_padding,
            source.bottom_padding,
        )
        self.align = source.align
        self.valign = source.valign
        self.rotated = source.rotated

    def has_same_style(self, other: "Cell") -> bool:
        return self._style() == other._style()
