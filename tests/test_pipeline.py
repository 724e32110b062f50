"""Unit tests for LineAccumulator and ListNumbering.

WHY: The line breaker's overflow decisions are only as good as the
accumulator's width bookkeeping, in particular the trimmed width that
ignores trailing spaces of the last text token. List labels must count
without gaps and carry their parent's label when nested.

HOW: Accumulator tests push tokens at size 10 over the fixed-width fake
(5pt per character) and compare exact widths and texts. Numbering tests
drive the stack directly.

RULES:
- Widths are exact multiples of 5pt at size 10
"""

from __future__ import annotations

import pytest

from table_layout.fonts import Font
from table_layout.text.lists import ListNumbering
from table_layout.text.pipeline import LineAccumulator
from table_layout.text.tokens import Token, TokenType

FONT = Font("Helvetica")


@pytest.fixture
def line(context):
    return LineAccumulator(context)


class TestTextTokens:
    """The last text token is pending and trimmed separately."""

    def test_single_token_widths(self, line):
        line.push(Token.text("abc "), FONT, 10)
        assert line.width() == 20
        assert line.trimmed_width() == 15
        assert line.trimmed_text() == "abc"
        assert line.text() == "abc "

    def test_previous_token_committed_with_spaces(self, line):
        line.push(Token.text("abc "), FONT, 10)
        line.push(Token.text("de "), FONT, 10)
        assert line.width() == 35
        assert line.trimmed_width() == 30
        assert line.trimmed_text() == "abc de"

    def test_whitespace_only_is_not_text(self, line):
        line.push(Token.text("   "), FONT, 10)
        assert not line.has_text()
        assert line.trimmed_width() == 0


class TestMeasuredTokens:
    """Padding, bullets, and ordinals add straight to the committed width."""

    def test_padding_adds_width_not_text(self, line):
        line.push(Token.padding(7.0), FONT, 10)
        assert line.width() == 7.0
        assert line.text() == ""

    def test_ordering_adds_label(self, line):
        line.push(Token(TokenType.ORDERING, "1. "), FONT, 10)
        line.push(Token.text("One"), FONT, 10)
        assert line.trimmed_text() == "1. One"
        assert line.trimmed_width() == 30
        assert line.has_marker()

    def test_tags_have_no_width(self, line):
        line.append(Token(TokenType.OPEN_TAG, "b"))
        assert line.width() == 0
        assert not line.is_empty()


class TestMerge:
    """merge() moves the other accumulator's full state and resets it."""

    def test_merge_keeps_pending_trim(self, context, line):
        other = LineAccumulator(context)
        line.push(Token.text("ab "), FONT, 10)
        other.push(Token.text("cd "), FONT, 10)
        line.merge(other)
        assert line.width() == 30
        assert line.trimmed_width() == 25
        assert line.trimmed_text() == "ab cd"
        assert other.is_empty()
        assert other.width() == 0

    def test_merge_tags_only_keeps_pending(self, context, line):
        other = LineAccumulator(context)
        line.push(Token.text("ab "), FONT, 10)
        other.append(Token(TokenType.CLOSE_TAG, "b"))
        line.merge(other)
        assert line.trimmed_width() == 10
        assert line.tokens()[-1] == Token(TokenType.CLOSE_TAG, "b")


class TestStateAccess:
    """reset(), tokens(), and clear_text()."""

    def test_tokens_returns_copy(self, line):
        line.push(Token.text("a"), FONT, 10)
        line.tokens().clear()
        assert len(line.tokens()) == 1

    def test_reset(self, line):
        line.push(Token.text("a"), FONT, 10)
        line.reset()
        assert line.is_empty()
        assert line.width() == 0
        assert line.text() == ""

    def test_clear_text_keeps_tags(self, line):
        line.append(Token(TokenType.OPEN_TAG, "b"))
        line.push(Token.text("\n"), FONT, 10)
        line.clear_text()
        assert line.tokens() == [Token(TokenType.OPEN_TAG, "b")]
        assert line.width() == 0


class TestListNumbering:
    """Ordinal labels count per level and inherit the parent label."""

    def test_sequential_labels(self):
        numbering = ListNumbering()
        numbering.open(ordered=True)
        assert [numbering.next_label() for _ in range(3)] == ["1. ", "2. ", "3. "]

    def test_nested_label_and_resume(self):
        numbering = ListNumbering()
        numbering.open(ordered=True)
        numbering.next_label()
        numbering.next_label()
        numbering.open(ordered=True)
        assert numbering.next_label() == "2.1. "
        assert numbering.next_label() == "2.2. "
        numbering.close()
        assert numbering.next_label() == "3. "

    def test_unordered_level_passes_prefix_through(self):
        numbering = ListNumbering()
        numbering.open(ordered=True)
        numbering.next_label()
        numbering.open(ordered=False)
        assert not numbering.ordered
        numbering.open(ordered=True)
        assert numbering.next_label() == "1.1. "
        assert numbering.depth == 3

    def test_close_on_empty_stack_is_noop(self):
        numbering = ListNumbering()
        numbering.close()
        assert numbering.depth == 0
        assert numbering.next_label() == ""

    def test_current_label(self):
        numbering = ListNumbering()
        numbering.open(ordered=True)
        assert numbering.current_label() == ""
        numbering.next_label()
        assert numbering.current_label() == "1. "
