"""Tests for prefix-preserving word wrapping."""

from __future__ import annotations

from htmlterm.core.wrap import wrap_line, wrap_text


class TestWrapLine:
    def test_short_line_untouched(self) -> None:
        assert wrap_line("fits   as is", 20) == ["fits   as is"]

    def test_greedy_fill(self) -> None:
        assert wrap_line("aaa bbb ccc ddd", 7) == ["aaa bbb", "ccc ddd"]

    def test_quote_prefix_repeated(self) -> None:
        assert wrap_line("> one two three four", 10) == ["> one two", "> three", "> four"]

    def test_indented_bullet_prefix_repeated(self) -> None:
        lines = wrap_line("  • alpha beta gamma", 12)
        assert lines == ["  • alpha", "  • beta", "  • gamma"]

    def test_overlong_word_on_its_own_line(self) -> None:
        assert wrap_line("a " + "b" * 12 + " c", 5) == ["a", "b" * 12, "c"]

    def test_overlong_word_keeps_prefix(self) -> None:
        assert wrap_line("> " + "b" * 12, 5) == ["> " + "b" * 12]

    def test_plain_indent_repeated(self) -> None:
        assert wrap_line("    aaa bbb ccc", 11) == ["    aaa bbb", "    ccc"]

    def test_nested_ordered_item_indent_repeated(self) -> None:
        assert wrap_line("  1. one two three", 10) == ["  1. one", "  two", "  three"]

    def test_prefix_wider_than_width_leaves_line(self) -> None:
        line = "     >     x y z"
        assert wrap_line(line, 5) == [line]


class TestWrapText:
    def test_blank_lines_pass_through(self) -> None:
        assert wrap_text("one two\n\nthree four", 4) == "one\ntwo\n\nthree\nfour"

    def test_disabled_for_non_positive_width(self) -> None:
        text = "one two three"
        assert wrap_text(text, 0) == text
        assert wrap_text(text, -1) == text

    def test_lines_never_exceed_width_except_long_words(self) -> None:
        text = "lorem ipsum dolor sit amet consectetur adipiscing elit sed do eiusmod"
        for line in wrap_text(text, 12).split("\n"):
            assert len(line) <= 12 or " " not in line
