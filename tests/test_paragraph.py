"""Unit tests for Paragraph line breaking.

WHY: The line breaker is the algorithmic core: it decides every row
height in a table. Off-by-one overflow decisions, lost list numbers, or
an oversized word that never terminates would all corrupt layouts.

HOW: Tests run at size 10 over the fixed-width fake (5pt per character,
10pt line height) so every expected line and width is hand-checkable:
  - TestBasicWrapping: overflow, trailing spaces, empty input
  - TestForcedBreaks: <br> and <p> blocks
  - TestLists: ordinal labels, bullets, nesting, hanging indents
  - TestAlignment: marker suppression and line offsets
  - TestOversizedWords: character-level splitting and its guard
  - TestMemoization: same-identity caching and invalidation
  - TestHeight: height formula and font height
  - TestProperties: no-overflow and narrower-means-more-lines sweeps
  - TestReportLabMetrics: real Helvetica metrics through reportlab

RULES:
- Paragraph width defaults to 1000pt (no wrapping) unless a test sets it
- Blank spacer lines are the empty string
"""

from __future__ import annotations

import pytest
from reportlab.pdfbase import pdfmetrics

from table_layout.core.paragraph import Paragraph
from table_layout.core.styles import HorizontalAlignment
from table_layout.fonts import FontContext, FontFamily
from table_layout.text.tokens import Token, TokenType

LOREM = (
    "Lorem ipsum dolor sit amet, consectetur adipiscing elit, sed do eiusmod "
    "tempor incididunt ut labore et dolore magna aliqua. Ut enim ad minim veniam, "
    "quis nostrud exercitation ullamco laboris nisi ut aliquip ex ea commodo."
)


class TestBasicWrapping:
    """Pending segments merge until they would overflow the width."""

    def test_single_line(self, make_paragraph):
        paragraph = make_paragraph("hello world")
        assert paragraph.lines == ["hello world"]
        assert paragraph.max_line_width == 55

    def test_wraps_at_break_opportunity(self, make_paragraph):
        paragraph = make_paragraph("aaaa bbbb cccc", width=50)
        assert paragraph.lines == ["aaaa bbbb", "cccc"]
        assert paragraph.line_widths == [45, 20]

    def test_trailing_space_does_not_cause_wrap(self, make_paragraph):
        # "aaaa bbbb" is exactly 45pt; its trailing space would make 50
        paragraph = make_paragraph("aaaa bbbb ", width=45)
        assert paragraph.lines == ["aaaa bbbb"]

    def test_empty_text_has_no_lines(self, make_paragraph):
        assert make_paragraph("").lines == []
        assert make_paragraph(None).lines == []
        assert make_paragraph("   ").lines == []

    def test_style_tokens_kept_in_line(self, make_paragraph):
        paragraph = make_paragraph("<b>bold</b> plain")
        tokens = paragraph.line_tokens[0]
        assert tokens[0] == Token(TokenType.OPEN_TAG, "b")
        assert Token(TokenType.CLOSE_TAG, "b") in tokens
        assert paragraph.lines == ["bold plain"]

    def test_malformed_markup_is_literal(self, make_paragraph):
        assert make_paragraph("a <x> b").lines == ["a <x> b"]


class TestForcedBreaks:
    """<br> always breaks; </p> breaks and adds a spacer line."""

    def test_three_lines(self, make_paragraph):
        assert make_paragraph("Line1<br>Line2<br>Line3").lines == ["Line1", "Line2", "Line3"]

    def test_four_lines(self, make_paragraph):
        assert len(make_paragraph("A<br>B<br>C<br>D").lines) == 4

    def test_consecutive_breaks_keep_empty_line(self, make_paragraph):
        assert make_paragraph("A<br><br>B").lines == ["A", "", "B"]

    def test_paragraph_block_adds_spacer(self, make_paragraph):
        assert make_paragraph("<p>Hello</p>World").lines == ["Hello", "", "World"]

    def test_empty_paragraph_block_adds_nothing(self, make_paragraph):
        assert make_paragraph("<p></p>").lines == []


class TestLists:
    """List items get indentation and bullet or ordinal markers."""

    def test_ordered_labels(self, make_paragraph):
        paragraph = make_paragraph("<ol><li>First</li><li>Second</li><li>Third</li></ol>")
        assert paragraph.lines == ["1. First", "2. Second", "3. Third", ""]

    def test_twenty_item_list_has_no_gaps(self, make_paragraph):
        items = "".join("<li>Item</li>" for _ in range(20))
        lines = make_paragraph("<ol>" + items + "</ol>").lines
        for number in range(1, 21):
            assert lines[number - 1].startswith("{}. ".format(number))

    def test_item_line_width_includes_indent(self, make_paragraph):
        paragraph = make_paragraph("<ol><li>First</li></ol>")
        # 4 spaces indent (20) + "1. " (15) + "First" (25)
        assert paragraph.line_widths[0] == 60

    def test_nested_ordered_labels(self, make_paragraph):
        paragraph = make_paragraph("<ol><li>A<ol><li>B</li></ol></li><li>C</li></ol>")
        # the outer item closes after its nested list, ending an empty line
        assert paragraph.lines == ["1. A", "1.1. B", "", "2. C", ""]
        # nested indent is 8 spaces (40) + "1.1. " (25) + "B" (5)
        assert paragraph.line_widths[1] == 70

    def test_item_close_after_nested_list_counts_in_height(self, make_paragraph):
        paragraph = make_paragraph("<ul><li>A<ul><li>B</li></ul></li></ul>")
        assert paragraph.lines == ["  A", "  B", "", ""]
        assert paragraph.height == 40

    def test_stray_item_close_outside_list_adds_nothing(self, make_paragraph):
        assert make_paragraph("a</li>").lines == ["a"]

    def test_bullet_item(self, make_paragraph):
        paragraph = make_paragraph("<ul><li>One</li></ul>")
        assert paragraph.lines == ["  One", ""]
        assert paragraph.line_widths[0] == 45
        assert Token(TokenType.BULLET, "  ") in paragraph.line_tokens[0]

    def test_continuation_hangs_under_item_text(self, make_paragraph):
        paragraph = make_paragraph("<ul><li>aaaa bbbb</li></ul>", width=60)
        assert paragraph.lines == ["  aaaa", "bbbb", ""]
        # continuation padding is 6 spaces (30), same as indent + bullet
        assert paragraph.line_widths == [50, 50, 0]

    def test_list_starts_on_fresh_line(self, make_paragraph):
        paragraph = make_paragraph("Intro<ul><li>x</li></ul>")
        assert paragraph.lines[0] == "Intro"
        assert paragraph.lines[1] == "  x"

    def test_whitespace_between_items_ignored(self, make_paragraph):
        paragraph = make_paragraph("<ol>\n<li>a</li>\n<li>b</li>\n</ol>")
        assert paragraph.lines == ["1. a", "2. b", ""]

    def test_unbalanced_close_tolerated(self, make_paragraph):
        assert make_paragraph("a</ol></li>b").lines == ["a", "b"]


class TestAlignment:
    """Non-left alignment drops markers; offsets follow the alignment."""

    def test_centered_list_has_no_markers(self, make_paragraph):
        paragraph = make_paragraph(
            "<ol><li>First</li></ol>", width=100, align=HorizontalAlignment.CENTER
        )
        assert paragraph.lines == ["First", ""]
        # flat 4-space tab (20) + "First" (25)
        assert paragraph.line_widths[0] == 45
        assert paragraph.horizontal_offset(0) == pytest.approx(27.5)

    def test_right_offset(self, make_paragraph):
        paragraph = make_paragraph("abc", width=100, align=HorizontalAlignment.RIGHT)
        assert paragraph.horizontal_offset(0) == 85

    def test_left_offset(self, make_paragraph):
        assert make_paragraph("abc", width=100).horizontal_offset(0) == 0

    def test_align_accepts_names(self, make_paragraph):
        paragraph = make_paragraph("abc", width=100, align="center")
        assert paragraph.align is HorizontalAlignment.CENTER


class TestOversizedWords:
    """Words wider than the paragraph are split by character."""

    def test_split_into_fitting_pieces(self, make_paragraph):
        paragraph = make_paragraph("abcdefghij", width=22)
        assert paragraph.lines == ["abcd", "efgh", "ij"]
        assert all(width <= 22 for width in paragraph.line_widths)

    def test_prefix_fills_current_line(self, make_paragraph):
        paragraph = make_paragraph("xx abcdefghij", width=22)
        assert paragraph.lines == ["xx a", "bcde", "fghi", "j"]

    def test_one_character_per_line_terminates(self, make_paragraph):
        paragraph = make_paragraph("abcdefghij", width=5.5)
        assert paragraph.lines == list("abcdefghij")

    def test_width_below_average_character_not_split(self, make_paragraph):
        paragraph = make_paragraph("abcdefghij", width=3)
        assert paragraph.lines == ["abcdefghij"]

    def test_splits_by_code_point(self, make_paragraph):
        paragraph = make_paragraph("éééé\U0001F600\U0001F600", width=12)
        assert paragraph.lines == ["éé", "éé", "\U0001F600\U0001F600"]


class TestMemoization:
    """Lines are computed once per input combination."""

    def test_same_list_object_returned(self, make_paragraph):
        paragraph = make_paragraph(LOREM, width=200)
        assert paragraph.lines is paragraph.lines
        assert paragraph.wrapped_lines is paragraph.wrapped_lines

    def test_repeated_calls_equal(self, make_paragraph):
        first = make_paragraph(LOREM, width=200).lines
        second = make_paragraph(LOREM, width=200).lines
        assert first == second

    def test_width_change_invalidates(self, make_paragraph):
        paragraph = make_paragraph(LOREM, width=200)
        before = paragraph.lines
        paragraph.width = 100
        assert paragraph.lines is not before
        assert len(paragraph.lines) > len(before)

    def test_same_width_keeps_cache(self, make_paragraph):
        paragraph = make_paragraph(LOREM, width=200)
        before = paragraph.lines
        paragraph.width = 200
        assert paragraph.lines is before

    def test_text_change_invalidates(self, make_paragraph):
        paragraph = make_paragraph("old")
        paragraph.lines
        paragraph.text = "new<br>text"
        assert paragraph.lines == ["new", "text"]

    def test_font_size_change_invalidates(self, make_paragraph):
        paragraph = make_paragraph("aaaa bbbb", width=50)
        assert len(paragraph.lines) == 1
        paragraph.font_size = 20
        assert len(paragraph.lines) == 2


class TestHeight:
    """height = (n - 1) * spacing * font height + font height."""

    def test_no_lines_zero_height(self, make_paragraph):
        assert make_paragraph("").height == 0

    def test_single_line(self, make_paragraph):
        assert make_paragraph("abc").height == 10

    def test_line_spacing(self, make_paragraph):
        paragraph = make_paragraph("a<br>b<br>c", line_spacing=1.5)
        assert paragraph.height == pytest.approx(2 * 1.5 * 10 + 10)

    def test_unwrapped_width_skips_tags(self, make_paragraph):
        assert make_paragraph("<b>ab</b> cd").unwrapped_width == 25


class TestProperties:
    """Sweeps over widths for the no-overflow and monotonic properties."""

    @pytest.mark.parametrize("width", [30, 55, 80, 120, 200, 333])
    def test_no_line_overflows(self, make_paragraph, width):
        paragraph = make_paragraph(LOREM, width=width)
        for line_width in paragraph.line_widths:
            assert line_width <= width

    def test_narrower_width_wraps_more(self, make_paragraph):
        narrow = make_paragraph(LOREM, width=100)
        wide = make_paragraph(LOREM, width=400)
        assert len(narrow.lines) >= len(wide.lines)

    def test_zero_font_size_does_not_crash(self, make_paragraph):
        paragraph = make_paragraph(LOREM, width=100)
        paragraph.font_size = 0
        assert paragraph.height == 0


class TestReportLabMetrics:
    """Real Helvetica metrics flow through FontContext unchanged."""

    def test_line_width_matches_pdfmetrics(self):
        paragraph = Paragraph("Hello world", FontFamily.standard(), font_size=10, width=500)
        expected = pdfmetrics.stringWidth("Hello world", "Helvetica", 10)
        assert paragraph.max_line_width == pytest.approx(expected)

    def test_font_height_from_ascent_and_descent(self):
        context = FontContext()
        family = FontFamily.standard()
        ascent, descent = pdfmetrics.getAscentDescent("Helvetica")
        assert context.line_height(family.regular, 10) == pytest.approx((ascent - descent) / 100)

    def test_bold_is_wider(self):
        regular = Paragraph("Bold text", FontFamily.standard(), font_size=10, width=500)
        bold = Paragraph("<b>Bold text</b>", FontFamily.standard(), font_size=10, width=500)
        assert bold.max_line_width > regular.max_line_width
