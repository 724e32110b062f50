"""Line accumulator: the running text and width of a line being built.

WHY: The line breaker keeps two of these at once: the line built so far
and the segment read since the last break opportunity. When the segment
still fits, it is merged into the line; when it does not, the line is
flushed first. Both decisions need the width with and without the
trailing whitespace of the last text token, because a line may end in
spaces that are never drawn.

HOW: Widths are accumulated in points at push time. The last TEXT token
is held as "pending" with both its raw and right-trimmed widths; pushing
another TEXT token commits it.

RULES:
- append() records zero-width tokens (style and list tags) in order
- PADDING adds its numeric value to the width and no text
- BULLET and ORDERING add their marker text and its measured width
- trimmed_width = committed width + trimmed width of the pending token
- merge(other) absorbs the other accumulator's full state, then resets it
- tokens() returns a copy; callers cannot mutate the accumulator through it
- has_text() ignores whitespace-only text tokens
"""

from __future__ import annotations

from typing import List, Optional

from table_layout.fonts import Font, FontContext
from table_layout.text.tokens import Token, TokenType


class LineAccumulator:
    """Accumulates the tokens, text, and width of one line or segment."""

    def __init__(self, context: FontContext) -> None:
        self._context = context
        self.reset()

    def reset(self) -> None:
        self._tokens: List[Token] = []
        self._text: List[str] = []
        self._width = 0.0
        self._pending: Optional[str] = None
        self._pending_width = 0.0
        self._pending_trimmed_width = 0.0

    def _commit_pending(self) -> None:
        if self._pending is not None:
            self._text.append(self._pending)
            self._width += self._pending_width
            self._pending = None
            self._pending_width = 0.0
            self._pending_trimmed_width = 0.0

    def append(self, token: Token) -> None:
        """Record a zero-width token."""
        self._tokens.append(token)

    def push(self, token: Token, font: Font, size: float) -> None:
        """Add a token, measuring it with ``font`` at ``size`` points."""
        if token.kind is TokenType.TEXT:
            self._commit_pending()
            self._pending = token.data
            self._pending_width = token.width(self._context, font, size)
            self._pending_trimmed_width = self._context.string_width(
                font, size, token.data.rstrip()
            )
        elif token.kind is TokenType.PADDING:
            self._commit_pending()
            self._width += token.padding_value
        elif token.kind in (TokenType.BULLET, TokenType.ORDERING):
            self._commit_pending()
            self._text.append(token.data)
            self._width += token.width(self._context, font, size)
        self._tokens.append(token)

    def merge(self, other: "LineAccumulator") -> None:
        """Append everything ``other`` holds, then reset ``other``."""
        if other._pending is not None or other._text or other._width:
            self._commit_pending()
        self._tokens.extend(other._tokens)
        self._text.extend(other._text)
        self._width += other._width
        if other._pending is not None:
            self._pending = other._pending
            self._pending_width = other._pending_width
            self._pending_trimmed_width = other._pending_trimmed_width
        other.reset()

    def width(self) -> float:
        return self._width + self._pending_width

    def trimmed_width(self) -> float:
        return self._width + self._pending_trimmed_width

    def text(self) -> str:
        pending = self._pending if self._pending is not None else ""
        return "".join(self._text) + pending

    def trimmed_text(self) -> str:
        pending = self._pending.rstrip() if self._pending is not None else ""
        return "".join(self._text) + pending

    def tokens(self) -> List[Token]:
        return list(self._tokens)

    def is_empty(self) -> bool:
        return not self._tokens

    def has_text(self) -> bool:
        """True when a TEXT token with non-blank data was pushed since the last reset."""
        return any(token.kind is TokenType.TEXT and token.data.strip() for token in self._tokens)

    def has_marker(self) -> bool:
        return any(token.kind in (TokenType.BULLET, TokenType.ORDERING) for token in self._tokens)

    def clear_text(self) -> None:
        """Drop everything measured but keep zero-width tags in order."""
        kept = [
            token for token in self._tokens
            if token.kind in (TokenType.OPEN_TAG, TokenType.CLOSE_TAG, TokenType.WRAP_POINT)
        ]
        self.reset()
        self._tokens = kept
