"""Paragraph: markup text wrapped into measured lines.

WHY: A table cell needs to know how many lines its text takes at a given
width and font, how wide the widest line is, and where style changes and
list markers fall within each line so a drawing layer can render them.
This module is the line-breaking core that answers all of that.

HOW: The markup is tokenized once. ``_LineBreaker`` then walks the token
stream with two LineAccumulators: ``current`` (the line being built) and
``pending`` (everything read since the last break opportunity). At each
break opportunity the pending segment is merged into the current line,
after flushing the current line first if the merge would overflow the
paragraph width. List tags drive a ListNumbering stack that produces
indentation padding and bullet / ordinal markers. Words wider than the
whole paragraph are split character by character.

RULES:
- Overflow test: current.width() + pending.trimmed_width() > width
- A line is flushed on overflow only when it already carries text
- <br> always ends the line, even an empty one
- <p> is a permitted break; </p> ends the line and adds one blank spacer
  line when its block produced content
- </li> inside a list always ends the item line, even an empty one left
  after a nested list closes
- </ul> / </ol> add one blank spacer line when the outermost list closes
- <li> starts a fresh line: left-aligned text gets a nesting-dependent
  indent plus a bullet or ordinal marker, and continuation lines hang
  under the item text; other alignments get a flat tab and no marker
- Words are split by code point; a character that cannot fit even on an
  empty line is placed alone, so splitting always terminates
- height = (n - 1) * line_spacing * font_height + font_height, 0 if n == 0
- lines are memoized; every setter that affects wrapping invalidates them
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from reportlab.lib.colors import Color

from table_layout.config import (
    BULLET_SPACE,
    DEFAULT_FONT_SIZE,
    DEFAULT_LINE_SPACING,
    DEFAULT_TAB,
    DEFAULT_TAB_AND_BULLET,
)
from table_layout.core.styles import HorizontalAlignment
from table_layout.fonts import Font, FontContext, FontFamily
from table_layout.text.lists import ListNumbering
from table_layout.text.pipeline import LineAccumulator
from table_layout.text.tokenizer import WrappingFunction, tokenize
from table_layout.text.tokens import Token, TokenType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WrappedLine:
    """One output line.

    RULES:
    - text and width exclude trailing whitespace of the last text token
    - tokens keep style tags and list markers in line order, for drawing
    """

    text: str
    width: float
    tokens: Tuple[Token, ...] = ()


_SPACER = WrappedLine("", 0.0)


class _LineBreaker:
    """Single-use state machine that turns a token stream into lines."""

    def __init__(self, paragraph: "Paragraph") -> None:
        context = paragraph.context
        family = paragraph.font_family
        self.context = context
        self.family = family
        self.size = paragraph.font_size
        self.width = paragraph.width
        self.left_aligned = paragraph.align is HorizontalAlignment.LEFT
        self.current = LineAccumulator(context)
        self.pending = LineAccumulator(context)
        self.lists = ListNumbering()
        self.bold = False
        self.italic = False
        self.font: Font = family.regular
        self.in_item = False
        self.hanging_indent = 0.0
        self.block_start = 0
        self.space_width = context.space_width(family.regular, self.size)
        self.min_split_width = context.average_char_width(family.regular, self.size)
        self.lines: List[WrappedLine] = []

    # -----------------------------------------------------------------
    # Line bookkeeping
    # -----------------------------------------------------------------

    def _flush(self) -> None:
        current = self.current
        self.lines.append(
            WrappedLine(current.trimmed_text(), current.trimmed_width(), tuple(current.tokens()))
        )
        current.reset()

    def _continue_item(self) -> None:
        """Start a continuation line of a list item under its text."""
        if self.in_item and self.hanging_indent:
            self.current.push(Token.padding(self.hanging_indent), self.font, self.size)

    def _overflows(self) -> bool:
        return self.current.width() + self.pending.trimmed_width() > self.width

    def _wrap(self) -> None:
        """Take a break opportunity: flush on overflow, then merge pending."""
        if self._overflows() and self.current.has_text():
            self._flush()
            self._continue_item()
        self.current.merge(self.pending)

    def _end_block(self) -> None:
        """Finish the current line if it shows anything, else drop its blank text."""
        if self.current.has_text() or self.current.has_marker():
            self._flush()
        else:
            self.current.clear_text()

    # -----------------------------------------------------------------
    # Token handlers
    # -----------------------------------------------------------------

    def _style(self, token: Token, enabled: bool) -> None:
        if token.data == "b":
            self.bold = enabled
        else:
            self.italic = enabled
        self.font = self.family.select(self.bold, self.italic)
        self.pending.append(token)

    def _open_list(self, token: Token) -> None:
        self._wrap()
        self._end_block()
        self.in_item = False
        self.lists.open(ordered=token.data == "ol")
        self.current.append(token)

    def _close_list(self, token: Token) -> None:
        self._wrap()
        self._end_block()
        was_open = self.lists.depth > 0
        self.lists.close()
        self.in_item = False
        self.current.append(token)
        if was_open and self.lists.depth == 0:
            self.lines.append(_SPACER)

    def _close_item(self, token: Token) -> None:
        self._wrap()
        self.current.append(token)
        if self.lists.depth > 0:
            self._flush()
        else:
            self._end_block()
        self.in_item = False

    def _close_paragraph(self, token: Token) -> None:
        self._wrap()
        self.current.append(token)
        self._end_block()
        if len(self.lines) > self.block_start:
            self.lines.append(_SPACER)
        self.block_start = len(self.lines)

    def _open_item(self, token: Token) -> None:
        self._wrap()
        self._end_block()
        self.current.append(token)
        self.in_item = True
        if not self.left_aligned:
            self.hanging_indent = self.space_width * DEFAULT_TAB
            self.current.push(Token.padding(self.hanging_indent), self.font, self.size)
            return
        levels_above = max(self.lists.depth - 1, 0)
        indent = self.space_width * (DEFAULT_TAB * levels_above + DEFAULT_TAB)
        self.current.push(Token.padding(indent), self.font, self.size)
        if self.lists.ordered:
            marker = Token(TokenType.ORDERING, self.lists.next_label())
            self.current.push(marker, self.font, self.size)
            self.hanging_indent = indent + marker.width(self.context, self.font, self.size)
        else:
            self.current.push(Token(TokenType.BULLET, " " * BULLET_SPACE), self.font, self.size)
            self.hanging_indent = self.space_width * (
                DEFAULT_TAB * levels_above + DEFAULT_TAB_AND_BULLET
            )

    def _forced_break(self, token: Token) -> None:
        if token.data == "li":
            self._open_item(token)
        elif token.data == "br":
            self._wrap()
            self.current.append(token)
            self._flush()
            self._continue_item()
        else:
            self._wrap()
            self.current.append(token)
            self.block_start = len(self.lines)

    def _text(self, token: Token) -> None:
        token_width = self.context.string_width(self.font, self.size, token.data.rstrip())
        if token_width > self.width and self.width > self.min_split_width:
            self._split(token.data)
        else:
            self.pending.push(token, self.font, self.size)

    def _split(self, word: str) -> None:
        """Break a word wider than the paragraph across forced lines."""
        logger.debug("Splitting oversized word %r at width %.2f", word, self.width)
        context, font, size = self.context, self.font, self.size
        remaining = word
        while remaining:
            available = self.width - (self.current.width() + self.pending.width())
            if context.string_width(font, size, remaining.rstrip()) <= available:
                break
            count = 0
            used = 0.0
            for char in remaining:
                used += context.char_width(font, size, char)
                if used >= available:
                    break
                count += 1
            if count == 0:
                if self.current.has_text() or self.pending.has_text():
                    self.current.merge(self.pending)
                    self._flush()
                    self._continue_item()
                    continue
                count = 1
            self.pending.push(Token.text(remaining[:count]), font, size)
            self.current.merge(self.pending)
            self._flush()
            self._continue_item()
            remaining = remaining[count:]
        if remaining:
            self.pending.push(Token.text(remaining), font, size)

    # -----------------------------------------------------------------
    # Driver
    # -----------------------------------------------------------------

    def run(self, tokens: List[Token]) -> List[WrappedLine]:
        for token in tokens:
            kind = token.kind
            if kind is TokenType.TEXT:
                self._text(token)
            elif kind is TokenType.POSSIBLE_WRAP_POINT:
                self._wrap()
            elif kind is TokenType.WRAP_POINT:
                self._forced_break(token)
            elif kind is TokenType.OPEN_TAG:
                if token.data in ("b", "i"):
                    self._style(token, True)
                else:
                    self._open_list(token)
            elif kind is TokenType.CLOSE_TAG:
                if token.data in ("b", "i"):
                    self._style(token, False)
                elif token.data in ("ul", "ol"):
                    self._close_list(token)
                elif token.data == "li":
                    self._close_item(token)
                else:
                    self._close_paragraph(token)
        self._wrap()
        if self.current.has_text() or self.current.has_marker():
            self._flush()
        return self.lines


class Paragraph:
    """A run of markup text laid out at a fixed width.

    WHY: Cells own one paragraph each and ask it for line count, height,
    and widest line every time a row is measured. Breaking lines is the
    expensive part, so the result is cached until an input changes.

    RULES:
    - text, font_family, font_size, width, align, and wrapping_function
      invalidate the cached tokens and lines when assigned
    - line_spacing only affects height and does not invalidate lines
    - color is carried for the drawing layer and never measured
    """

    def __init__(
        self,
        text: Optional[str],
        font_family: FontFamily,
        font_size: float = DEFAULT_FONT_SIZE,
        width: float = 0.0,
        align: HorizontalAlignment = HorizontalAlignment.LEFT,
        line_spacing: float = DEFAULT_LINE_SPACING,
        color: Optional[Color] = None,
        wrapping_function: Optional[WrappingFunction] = None,
        context: Optional[FontContext] = None,
    ) -> None:
        self._text = text
        self._font_family = font_family
        self._font_size = font_size
        self._width = width
        self._align = HorizontalAlignment.get(align)
        self._wrapping_function = wrapping_function
        self.line_spacing = line_spacing
        self.color = color
        self.context = context if context is not None else FontContext()
        self._tokens: Optional[List[Token]] = None
        self._wrapped: Optional[List[WrappedLine]] = None
        self._lines: Optional[List[str]] = None

    def _invalidate(self) -> None:
        self._tokens = None
        self._wrapped = None
        self._lines = None

    # -----------------------------------------------------------------
    # Inputs
    # -----------------------------------------------------------------

    @property
    def text(self) -> Optional[str]:
        return self._text

    @text.setter
    def text(self, value: Optional[str]) -> None:
        self._text = value
        self._invalidate()

    @property
    def font_family(self) -> FontFamily:
        return self._font_family

    @font_family.setter
    def font_family(self, value: FontFamily) -> None:
        self._font_family = value
        self._invalidate()

    @property
    def font_size(self) -> float:
        return self._font_size

    @font_size.setter
    def font_size(self, value: float) -> None:
        self._font_size = value
        self._invalidate()

    @property
    def width(self) -> float:
        return self._width

    @width.setter
    def width(self, value: float) -> None:
        if value != self._width:
            self._width = value
            self._invalidate()

    @property
    def align(self) -> HorizontalAlignment:
        return self._align

    @align.setter
    def align(self, value: HorizontalAlignment) -> None:
        self._align = HorizontalAlignment.get(value)
        self._invalidate()

    @property
    def wrapping_function(self) -> Optional[WrappingFunction]:
        return self._wrapping_function

    @wrapping_function.setter
    def wrapping_function(self, value: Optional[WrappingFunction]) -> None:
        self._wrapping_function = value
        self._invalidate()

    @property
    def font(self) -> Font:
        """Regular face of the family; used for line height and spacing."""
        return self._font_family.regular

    # -----------------------------------------------------------------
    # Outputs
    # -----------------------------------------------------------------

    @property
    def tokens(self) -> List[Token]:
        if self._tokens is None:
            self._tokens = tokenize(self._text, self._wrapping_function)
        return self._tokens

    def _layout(self) -> None:
        if self._wrapped is None or self._lines is None:
            self._wrapped = _LineBreaker(self).run(self.tokens)
            self._lines = [line.text for line in self._wrapped]

    @property
    def wrapped_lines(self) -> List[WrappedLine]:
        self._layout()
        return self._wrapped

    @property
    def lines(self) -> List[str]:
        """Wrapped line texts; the same list object until an input changes."""
        self._layout()
        return self._lines

    @property
    def line_widths(self) -> List[float]:
        return [line.width for line in self.wrapped_lines]

    @property
    def line_tokens(self) -> List[Tuple[Token, ...]]:
        return [line.tokens for line in self.wrapped_lines]

    def line_width(self, index: int) -> float:
        return self.wrapped_lines[index].width

    @property
    def max_line_width(self) -> float:
        return max(self.line_widths, default=0.0)

    @property
    def font_height(self) -> float:
        return self.context.line_height(self.font, self._font_size)

    @property
    def height(self) -> float:
        count = len(self.lines)
        if count == 0:
            return 0.0
        font_height = self.font_height
        return (count - 1) * self.line_spacing * font_height + font_height

    def horizontal_offset(self, index: int) -> float:
        """Offset of line ``index`` from the left edge for the alignment."""
        free = self._width - self.line_width(index)
        if self._align is HorizontalAlignment.CENTER:
            return free / 2
        if self._align is HorizontalAlignment.RIGHT:
            return free
        return 0.0

    @property
    def unwrapped_width(self) -> float:
        """Width of all text on one line, honoring bold and italic runs."""
        bold = italic = False
        total = 0.0
        for token in self.tokens:
            if token.kind in (TokenType.OPEN_TAG, TokenType.CLOSE_TAG) and token.data in ("b", "i"):
                enabled = token.kind is TokenType.OPEN_TAG
                if token.data == "b":
                    bold = enabled
                else:
                    italic = enabled
            elif token.kind is TokenType.TEXT:
                font = self._font_family.select(bold, italic)
                total += token.width(self.context, font, self._font_size)
        return total
