"""Configuration constants, layout defaults, and .env loading.

WHY: Cell padding, border width, default font size, and the list
indentation constants are used by the paragraph, cell, and row modules
alike. Keeping them in one place makes the layout defaults easy to find
and to override per deployment without touching layout code.

HOW: python-dotenv loads the .env file on import. Tunable defaults are
read with os.getenv and converted to their numeric types; fixed
constants of the line-breaking algorithm are plain module-level values.

RULES:
- Every TABLE_LAYOUT_* environment variable has a default here
- List indentation constants are measured in multiples of a space width
- FIT_ITERATIONS and MIN_FONT_SIZE drive Cell.fit_font_size_to_height
- Standard font family names must be reportlab standard-14 base names
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Cell and row defaults
# ---------------------------------------------------------------------------

DEFAULT_FONT_FAMILY = os.getenv("TABLE_LAYOUT_FONT", "Helvetica")
DEFAULT_FONT_SIZE = float(os.getenv("TABLE_LAYOUT_FONT_SIZE", "8"))
DEFAULT_PADDING = float(os.getenv("TABLE_LAYOUT_PADDING", "5"))
DEFAULT_BORDER_WIDTH = float(os.getenv("TABLE_LAYOUT_BORDER_WIDTH", "1"))
DEFAULT_LINE_SPACING = float(os.getenv("TABLE_LAYOUT_LINE_SPACING", "1"))
LOG_LEVEL = os.getenv("TABLE_LAYOUT_LOG_LEVEL", "WARNING").upper()

# ---------------------------------------------------------------------------
# Font size fitting
# ---------------------------------------------------------------------------

FIT_ITERATIONS = 10
"""Binary-search steps used when shrinking a font to fit a fixed row."""

MIN_FONT_SIZE = 1.0
"""Lower bound of the font size search; also the fallback when nothing fits."""

# ---------------------------------------------------------------------------
# List indentation (in space widths)
# ---------------------------------------------------------------------------

DEFAULT_TAB = 4
DEFAULT_TAB_AND_BULLET = 6
BULLET_SPACE = 2

# ---------------------------------------------------------------------------
# Standard font families
# ---------------------------------------------------------------------------

STANDARD_FAMILIES: dict[str, tuple[str, str, str, str]] = {
    "Helvetica": (
        "Helvetica",
        "Helvetica-Bold",
        "Helvetica-Oblique",
        "Helvetica-BoldOblique",
    ),
    "Times-Roman": (
        "Times-Roman",
        "Times-Bold",
        "Times-Italic",
        "Times-BoldItalic",
    ),
    "Courier": (
        "Courier",
        "Courier-Bold",
        "Courier-Oblique",
        "Courier-BoldOblique",
    ),
}
"""Family name -> (regular, bold, italic, bold italic) reportlab font names."""
