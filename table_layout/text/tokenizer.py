"""Markup tokenizer: paragraph text -> flat token stream.

WHY: Cell text is a small markup language (bold, italic, paragraphs,
line breaks, ordered and unordered lists). The line breaker needs that
markup as typed tokens, with every permissible break position marked
explicitly, so it never has to re-scan the raw string.

HOW: A regex finds the recognized tags. Break positions come either from
the default break characters or from a caller-supplied wrapping function
(the cumulative lengths of the pieces it returns). Tags and break
positions are merged in text order. Text between them becomes TEXT
tokens, each break a POSSIBLE_WRAP_POINT.

RULES:
- Recognized tags are exact and case-sensitive: <b> <i> <p> <ul> <ol>
  <li>, their closers, and <br> / <br/> / <br />
- <b> <i> <ul> <ol> -> OPEN_TAG; every recognized closer -> CLOSE_TAG
- <br> -> WRAP_POINT "br", <li> -> WRAP_POINT "li", <p> -> WRAP_POINT "p"
- Anything else, including stray '<' and '>', is literal text
- Default breaks fall right after whitespace and - @ , . : ;
- Break positions inside a tag are discarded
- A POSSIBLE_WRAP_POINT always ends the stream
- None -> []; "" -> [TEXT(""), POSSIBLE_WRAP_POINT]
"""

from __future__ import annotations

import re
from typing import Callable, List, Optional, Sequence, Tuple

from table_layout.text.tokens import POSSIBLE_WRAP_POINT, Token, TokenType

WrappingFunction = Callable[[str], Sequence[str]]
"""Splits a text into pieces; a break may follow every piece."""

WRAP_CHARACTERS = frozenset(" \t\n\r\f\v-@,.:;")

_TAG_PATTERN = re.compile(r"<(/?)(b|i|p|ul|ol|li)>|<br ?/?>")

_OPENING_WRAP_POINTS = {"p", "li"}


def _tag_token(match: "re.Match[str]") -> Token:
    closing, name = match.group(1), match.group(2)
    if name is None:
        return Token(TokenType.WRAP_POINT, "br")
    if closing:
        return Token(TokenType.CLOSE_TAG, name)
    if name in _OPENING_WRAP_POINTS:
        return Token(TokenType.WRAP_POINT, name)
    return Token(TokenType.OPEN_TAG, name)


def default_wrap_points(text: str) -> List[int]:
    """Offsets right after each default break character."""
    return [index + 1 for index, char in enumerate(text) if char in WRAP_CHARACTERS]


def _function_wrap_points(text: str, wrapping_function: WrappingFunction) -> List[int]:
    points = []
    offset = 0
    for piece in wrapping_function(text):
        offset += len(piece)
        points.append(offset)
    return points


def tokenize(
    text: Optional[str],
    wrapping_function: Optional[WrappingFunction] = None,
) -> List[Token]:
    """Tokenize paragraph markup.

    Args:
        text: Markup text, or None.
        wrapping_function: Optional splitter overriding the default
            break characters.

    Returns:
        The token stream; see the module RULES for its shape.
    """
    if text is None:
        return []
    if text == "":
        return [Token.text(""), POSSIBLE_WRAP_POINT]

    tags: List[Tuple[int, int, Token]] = [
        (match.start(), match.end(), _tag_token(match))
        for match in _TAG_PATTERN.finditer(text)
    ]

    if wrapping_function is None:
        candidates = default_wrap_points(text)
    else:
        candidates = _function_wrap_points(text, wrapping_function)

    # tag matches never overlap, so their interiors add up to at most len(text)
    inside_tags = {
        position for start, end, _ in tags for position in range(start + 1, end)
    }

    # (position, order, end, token): a break sorts before a tag at the same offset
    events: List[Tuple[int, int, int, Optional[Token]]] = []
    for position in set(candidates):
        if not 0 < position < len(text) or position in inside_tags:
            continue
        events.append((position, 0, position, None))
    for start, end, token in tags:
        events.append((start, 1, end, token))
    events.sort(key=lambda event: (event[0], event[1]))

    tokens: List[Token] = []
    cursor = 0
    for position, _, end, token in events:
        if position > cursor:
            tokens.append(Token.text(text[cursor:position]))
        if token is None:
            if not tokens or tokens[-1] is not POSSIBLE_WRAP_POINT:
                tokens.append(POSSIBLE_WRAP_POINT)
            cursor = position
        else:
            tokens.append(token)
            cursor = end
    if cursor < len(text):
        tokens.append(Token.text(text[cursor:]))
    if not tokens or tokens[-1] is not POSSIBLE_WRAP_POINT:
        tokens.append(POSSIBLE_WRAP_POINT)
    return tokens
