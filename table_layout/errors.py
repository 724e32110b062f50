"""Exceptions raised by the layout engine.

WHY: Callers building tables need to tell configuration mistakes (a cell
wider than its row, a cell with no font) apart from ordinary input such
as empty or malformed markup, which the engine accepts silently.

HOW: Both errors subclass ValueError so existing ``except ValueError``
handlers keep working, while the concrete classes let callers and tests
catch each failure on its own.

RULES:
- CellWidthError is raised at cell creation, never later during sizing
- FontNotSetError carries the fixed message "Font not set."
- Empty text is NOT an error: it produces zero lines and zero height
"""

from __future__ import annotations


class CellWidthError(ValueError):
    """A cell's resolved width exceeds the width of its row.

    WHY: A single cell wider than the row can never be laid out, so it is
    rejected up front. The cumulative width of several cells is not
    checked; overflowing rows are the caller's business.
    """

    def __init__(self, cell_width: float, row_width: float) -> None:
        self.cell_width = cell_width
        self.row_width = row_width
        super().__init__(
            "Cell width {:.2f} can't be bigger than row width {:.2f}".format(
                cell_width, row_width
            )
        )


class FontNotSetError(ValueError):
    """A font was requested from a cell whose font family was never set."""

    def __init__(self) -> None:
        super().__init__("Font not set.")
