"""Table Text Layout: markup line breaking and table cell sizing.

WHY: Rendering tables into paginated documents needs every row's height
before anything is drawn, and that height depends on how each cell's
styled text wraps at the cell's width. This package does that
measurement and nothing else; drawing and pagination stay with the caller.

HOW: Three layers, leaves first: text (tokenizer, line accumulator,
list numbering), fonts (metrics behind an injectable FontContext), and
core (Paragraph line breaker, Cell, Row, Table). Each layer is
independently testable.

RULES:
- The core performs no I/O and holds no process-wide mutable state
- All measurements are in points
"""

__version__ = "0.1.0"
