"""Table: rows sharing a width, margin, font family, and font context."""

from __future__ import annotations

from typing import List, Optional

from table_layout.core.row import Row
from table_layout.fonts import FontContext, FontFamily


class Table:
    """Creates rows with the table's shared settings and sums their heights.

    RULES:
    - All rows share one FontContext, so metrics are cached once per table
    - Header rows are kept in creation order in ``header_rows`` too
    """

    def __init__(
        self,
        width: float,
        margin: float = 0.0,
        font_family: Optional[FontFamily] = None,
        context: Optional[FontContext] = None,
    ) -> None:
        self.width = width
        self.margin = margin
        self.font_family = font_family if font_family is not None else FontFamily.standard()
        self.context = context if context is not None else FontContext()
        self.rows: List[Row] = []
        self.header_rows: List[Row] = []

    def create_row(self, height: float = 0.0, header: bool = False, fixed_height: bool = False) -> Row:
        row = Row(
            self.width,
            height=height,
            margin=self.margin,
            font_family=self.font_family,
            context=self.context,
            header=header,
            fixed_height=fixed_height,
        )
        self.rows.append(row)
        if header:
            self.header_rows.append(row)
        return row

    @property
    def height(self) -> float:
        return sum(row.height for row in self.rows)
