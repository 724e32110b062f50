"""Token types produced by the tokenizer and consumed by the line breaker.

WHY: The line breaker never looks at raw markup. It walks a flat stream of
typed tokens (text runs, break opportunities, style and list tags) plus a
few synthetic tokens it creates itself for indentation and list markers.

HOW: ``Token`` is a frozen dataclass of (kind, data). Equality and hashing
use only those two fields. Each token also carries a one-slot width memo
holding the last (font, width) pair it was measured with.

RULES:
- kind and data never change after construction
- PADDING tokens carry a numeric width in points, not text
- BULLET and ORDERING tokens carry the marker text to measure
- The width memo is a cache only: it never affects equality or hashing
- A memo hit requires the very same Font handle (identity match)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional, Tuple

if TYPE_CHECKING:
    from table_layout.fonts import Font, FontContext


class TokenType(str, Enum):
    """Kinds of token in a tokenized paragraph."""

    TEXT = "TEXT"
    POSSIBLE_WRAP_POINT = "POSSIBLE_WRAP_POINT"
    WRAP_POINT = "WRAP_POINT"
    OPEN_TAG = "OPEN_TAG"
    CLOSE_TAG = "CLOSE_TAG"
    PADDING = "PADDING"
    BULLET = "BULLET"
    ORDERING = "ORDERING"


@dataclass(frozen=True)
class Token:
    """One element of a token stream.

    RULES:
    - ``data`` is the text for TEXT, the tag name for tags and wrap
      points ("b", "li", "br", ...), and the marker text for BULLET/ORDERING
    - ``value`` is set only by Token.padding() and is not compared
    """

    kind: TokenType
    data: str = ""
    value: Optional[float] = field(default=None, compare=False, repr=False)
    _memo: Optional[Tuple["Font", float]] = field(
        default=None, init=False, compare=False, repr=False
    )

    @classmethod
    def text(cls, data: str) -> "Token":
        return cls(TokenType.TEXT, data)

    @classmethod
    def padding(cls, value: float) -> "Token":
        """PADDING token of ``value`` points."""
        return cls(TokenType.PADDING, str(value), value=value)

    @property
    def padding_value(self) -> float:
        """Numeric width of a PADDING token, in points.

        Raises:
            ValueError: if the token was built by hand with non-numeric data.
        """
        if self.value is not None:
            return self.value
        return float(self.data)

    def width_units(self, context: "FontContext", font: "Font") -> float:
        """Width of ``data`` in 1000ths of an em, memoized per font."""
        memo = self._memo
        if memo is not None and memo[0] is font:
            return memo[1]
        width = context.string_width_units(font, self.data)
        object.__setattr__(self, "_memo", (font, width))
        return width

    def width(self, context: "FontContext", font: "Font", size: float) -> float:
        """Width of ``data`` in points at ``size``."""
        return self.width_units(context, font) * size / 1000

    def __str__(self) -> str:
        return "{}/{}".format(self.kind.value, self.data)


POSSIBLE_WRAP_POINT = Token(TokenType.POSSIBLE_WRAP_POINT)
"""Shared instance; tokens are immutable, so reuse is safe."""
