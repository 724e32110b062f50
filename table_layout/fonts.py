"""Font handles, families, and the font-metrics capability.

WHY: Line breaking and cell sizing need only a few facts about a font:
string advance widths, ascent and descent, line height, and the widths
of a space and of an average character. Measuring these through a
small protocol keeps the layout engine independent of any particular
font backend, and lets the tests use a deterministic fake with round
numbers.

HOW: ``Font`` is an opaque handle naming a reportlab font. ``FontFamily``
maps the (bold, italic) style flags to a concrete face. ``FontMetrics`` is
the protocol a backend implements in 1000ths of an em; ``ReportLabMetrics``
implements it with ``reportlab.pdfbase.pdfmetrics``. ``FontContext``
wraps a backend, converts to points for a given size, and caches
per-font results.

RULES:
- Font compares and hashes by identity: caches are keyed by the handle
  object, so two handles naming the same face are cached separately
- All FontMetrics values are in 1000ths of an em; FontContext values are
  in points (value * size / 1000)
- descent is zero or negative; line height is ascent - descent
- A FontContext holds all cached metrics; there is no module-level cache
- Unknown font names fail inside reportlab and are not swallowed
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Protocol, Tuple

from reportlab.pdfbase import pdfmetrics

from table_layout.config import DEFAULT_FONT_FAMILY, STANDARD_FAMILIES

_AVERAGE_SAMPLE = "".join(chr(code) for code in range(32, 127))


@dataclass(eq=False, frozen=True)
class Font:
    """Opaque handle for one concrete font face.

    RULES:
    - ``name`` is the reportlab font name (e.g. "Helvetica-Bold")
    - Equality is identity (eq=False); see the module RULES
    """

    name: str

    def __repr__(self) -> str:
        return "Font({!r})".format(self.name)


@dataclass(frozen=True)
class FontFamily:
    """Regular, bold, italic, and bold-italic faces of one typeface.

    WHY: Inline ``<b>`` and ``<i>`` markup switch faces mid-paragraph, and
    header cells render in bold. The paragraph only tracks two flags and
    asks the family for the face to use.

    RULES:
    - Missing variants fall back to the regular face
    - bold and italic together pick bold_italic, then bold, then italic
    """

    regular: Font
    bold: Optional[Font] = None
    italic: Optional[Font] = None
    bold_italic: Optional[Font] = None

    def select(self, bold: bool = False, italic: bool = False) -> Font:
        """Return the face for the given style flags."""
        if bold and italic:
            return self.bold_italic or self.bold or self.italic or self.regular
        if bold:
            return self.bold or self.regular
        if italic:
            return self.italic or self.regular
        return self.regular

    def emboldened(self) -> "FontFamily":
        """Family whose regular face is this family's bold face."""
        bold = self.select(bold=True)
        bold_italic = self.select(bold=True, italic=True)
        return FontFamily(regular=bold, bold=bold, italic=bold_italic, bold_italic=bold_italic)

    @classmethod
    def standard(cls, name: str = DEFAULT_FONT_FAMILY) -> "FontFamily":
        """Build a family from one of the reportlab standard-14 typefaces.

        Raises:
            KeyError: if ``name`` is not in STANDARD_FAMILIES.
        """
        regular, bold, italic, bold_italic = STANDARD_FAMILIES[name]
        return cls(
            regular=Font(regular),
            bold=Font(bold),
            italic=Font(italic),
            bold_italic=Font(bold_italic),
        )


class FontMetrics(Protocol):
    """Font metrics in 1000ths of an em."""

    def string_width(self, font: Font, text: str) -> float:
        ...

    def ascent(self, font: Font) -> float:
        ...

    def descent(self, font: Font) -> float:
        ...

    def line_height(self, font: Font) -> float:
        ...

    def space_width(self, font: Font) -> float:
        ...

    def average_char_width(self, font: Font) -> float:
        ...


class ReportLabMetrics:
    """FontMetrics backed by reportlab's AFM tables.

    HOW: ``pdfmetrics.stringWidth`` at size 1000 yields widths in 1000ths
    of an em directly; ``getAscentDescent`` without a size returns the
    raw face values in the same unit.
    """

    def string_width(self, font: Font, text: str) -> float:
        return pdfmetrics.stringWidth(text, font.name, 1000)

    def ascent(self, font: Font) -> float:
        return pdfmetrics.getAscentDescent(font.name)[0]

    def descent(self, font: Font) -> float:
        return pdfmetrics.getAscentDescent(font.name)[1]

    def line_height(self, font: Font) -> float:
        ascent, descent = pdfmetrics.getAscentDescent(font.name)
        return ascent - descent

    def space_width(self, font: Font) -> float:
        return pdfmetrics.stringWidth(" ", font.name, 1000)

    def average_char_width(self, font: Font) -> float:
        """Mean advance over the printable ASCII range (32-126)."""
        return pdfmetrics.stringWidth(_AVERAGE_SAMPLE, font.name, 1000) / len(_AVERAGE_SAMPLE)


@dataclass
class _FaceMetrics:
    ascent: float
    descent: float
    line_height: float
    space_width: float
    average_char_width: float


@dataclass
class FontContext:
    """Point-size font measurements with per-font caches.

    WHY: The line breaker measures every token and, for oversized words,
    every character. Font metrics never change for a face, so results are
    cached here once per font handle and character.

    HOW: ``metrics`` answers in 1000ths of an em; every public method takes
    a size and scales by size / 1000. Character widths and face-level
    metrics are memoized in dicts keyed by the Font handle.

    RULES:
    - string_width(text) is the sum of its cached character widths
    - Callers may share one context across paragraphs, or use one each
    """

    metrics: FontMetrics = field(default_factory=ReportLabMetrics)
    _char_widths: Dict[Tuple[Font, str], float] = field(default_factory=dict, repr=False)
    _faces: Dict[Font, _FaceMetrics] = field(default_factory=dict, repr=False)

    def _face(self, font: Font) -> _FaceMetrics:
        face = self._faces.get(font)
        if face is None:
            face = _FaceMetrics(
                ascent=self.metrics.ascent(font),
                descent=self.metrics.descent(font),
                line_height=self.metrics.line_height(font),
                space_width=self.metrics.space_width(font),
                average_char_width=self.metrics.average_char_width(font),
            )
            self._faces[font] = face
        return face

    def char_width_units(self, font: Font, char: str) -> float:
        """Width of a single character in 1000ths of an em."""
        key = (font, char)
        width = self._char_widths.get(key)
        if width is None:
            width = self.metrics.string_width(font, char)
            self._char_widths[key] = width
        return width

    def string_width_units(self, font: Font, text: str) -> float:
        """Width of ``text`` in 1000ths of an em."""
        return sum(self.char_width_units(font, char) for char in text)

    def string_width(self, font: Font, size: float, text: str) -> float:
        return self.string_width_units(font, text) * size / 1000

    def char_width(self, font: Font, size: float, char: str) -> float:
        return self.char_width_units(font, char) * size / 1000

    def ascent(self, font: Font, size: float) -> float:
        return self._face(font).ascent * size / 1000

    def descent(self, font: Font, size: float) -> float:
        return self._face(font).descent * size / 1000

    def line_height(self, font: Font, size: float) -> float:
        return self._face(font).line_height * size / 1000

    def space_width(self, font: Font, size: float) -> float:
        return self._face(font).space_width * size / 1000

    def average_char_width(self, font: Font, size: float) -> float:
        return self._face(font).average_char_width * size / 1000
