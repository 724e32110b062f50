"""Row: a horizontal run of cells and the height they need together.

WHY: Pagination asks each row for its height before committing it to a
page. Normally the row grows to its tallest cell; a fixed-height row
keeps its configured height and makes its cells shrink their fonts
instead.

HOW: Cells are created through ``create_cell`` so the row can apply its
own settings to them (header flag, line spacing, left-border removal).
``height`` is recomputed on every query from the cells' current state.

RULES:
- Normal mode: height = max(configured height, every cell's cell_height)
- Fixed mode: height is the configured height exactly; each query first
  runs fit_text_to_height()
- Querying height never changes the configured height
- Every cell except the first has its left border cleared on creation
- Cells of a header row are header cells
"""

from __future__ import annotations

from typing import List, Optional

from table_layout.config import DEFAULT_LINE_SPACING
from table_layout.core.cell import Cell
from table_layout.core.styles import HorizontalAlignment, VerticalAlignment
from table_layout.fonts import FontContext, FontFamily


class Row:
    """A table row that sizes itself from its cells."""

    def __init__(
        self,
        width: float,
        height: float = 0.0,
        margin: float = 0.0,
        font_family: Optional[FontFamily] = None,
        context: Optional[FontContext] = None,
        header: bool = False,
        fixed_height: bool = False,
        line_spacing: float = DEFAULT_LINE_SPACING,
    ) -> None:
        self._width = width
        self.configured_height = height
        self.margin = margin
        self.font_family = font_family
        self.context = context if context is not None else FontContext()
        self.header = header
        self.fixed_height = fixed_height
        self._line_spacing = line_spacing
        self.cells: List[Cell] = []

    @property
    def width(self) -> float:
        return self._width

    @property
    def line_spacing(self) -> float:
        return self._line_spacing

    @line_spacing.setter
    def line_spacing(self, value: float) -> None:
        self._line_spacing = value
        for cell in self.cells:
            cell.line_spacing = value

    def create_cell(
        self,
        width: float,
        text: Optional[str],
        align: HorizontalAlignment = HorizontalAlignment.LEFT,
        valign: VerticalAlignment = VerticalAlignment.TOP,
        is_percent: bool = True,
    ) -> Cell:
        """Create a cell, append it, and return it.

        Raises:
            CellWidthError: if the cell is wider than the row.
        """
        cell = Cell(
            self,
            width,
            text,
            is_percent=is_percent,
            align=align,
            valign=valign,
            font_family=self.font_family,
            context=self.context,
        )
        cell.line_spacing = self._line_spacing
        if self.header:
            cell.header = True
        if self.cells:
            cell.left_border = None
        self.cells.append(cell)
        return cell

    @property
    def height(self) -> float:
        if self.fixed_height:
            self.fit_text_to_height()
            return self.configured_height
        return max(
            [self.configured_height] + [cell.cell_height for cell in self.cells]
        )

    def fit_text_to_height(self) -> None:
        """Shrink cell fonts so their text fits the configured height."""
        for cell in self.cells:
            cell.fit_font_size_to_height(self.configured_height)

    def remove_top_borders(self) -> None:
        for cell in self.cells:
            cell.top_border = None

    def remove_all_borders(self) -> None:
        for cell in self.cells:
            cell.set_border_style(None)

    @property
    def col_count(self) -> int:
        return len(self.cells)

    @property
    def x_end(self) -> float:
        return self.margin + self._width

    @property
    def last_cell_extra_width(self) -> float:
        """Row width not covered by the cells (negative when they overflow)."""
        return self._width - sum(cell.width for cell in self.cells)
