"""Tests for previews, truncation and text_to_html."""

from __future__ import annotations

import pytest

from htmlterm.core.preview import (
    convert_for_preview,
    extract_text_preview,
    text_to_html,
    truncate,
)


class TestConvertForPreview:
    def test_links_reduced_to_text(self) -> None:
        html = (
            '<p>This is a long email with <a href="https://example.com">links</a> '
            "and <strong>formatting</strong>.</p>"
        )
        result = convert_for_preview(html, 50)
        assert len(result) <= 50
        assert "https://example.com" not in result
        assert "links" in result

    def test_truncated_preview_has_exact_length(self) -> None:
        html = (
            "<p>This is a very long email content that should be truncated when it "
            "exceeds the maximum length specified for the preview.</p>"
        )
        result = convert_for_preview(html, 50)
        assert len(result) == 50
        assert result.endswith("...")
        assert result == "This is a very long email content that should b..."

    def test_short_content_is_untouched(self) -> None:
        result = convert_for_preview("<p>Short email</p>", 50)
        assert result == "Short email"

    def test_exact_fit_has_no_ellipsis(self) -> None:
        assert convert_for_preview("<p>12345</p>", 5) == "12345"

    def test_whitespace_and_blocks_collapse(self) -> None:
        html = "<p>Text   with\n\n   extra    whitespace</p><ul><li>and</li><li>items</li></ul>"
        assert convert_for_preview(html) == "Text with extra whitespace • and • items"

    def test_default_length_is_150(self) -> None:
        result = convert_for_preview("<p>" + "word " * 100 + "</p>")
        assert len(result) == 150

    def test_tiny_limit_never_exceeds_length(self) -> None:
        assert convert_for_preview("<p>abcdef</p>", 2) == "ab"

    def test_empty(self) -> None:
        assert convert_for_preview(None) == ""


class TestTruncate:
    def test_short_text_unchanged(self) -> None:
        assert truncate("short", 10) == "short"

    def test_cuts_at_late_word_boundary(self) -> None:
        text = "The quick brown fox jumps over the lazy dog"
        # last space inside the first 20 chars is at index 19 (> 16)
        assert truncate(text, 20) == "The quick brown fox..."

    def test_hard_cut_when_space_too_early(self) -> None:
        text = "Hi supercalifragilisticexpialidocious"
        assert truncate(text, 20) == "Hi supercalifragilis..."

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty_values(self, value: str | None) -> None:
        assert truncate(value) == ""

    def test_default_limit(self) -> None:
        assert truncate("x" * 150) == "x" * 100 + "..."


def test_extract_text_preview_uses_display_conversion() -> None:
    html = '<p>See <a href="https://example.com">this</a></p>'
    assert extract_text_preview(html) == "See this [https://example.com]"
    assert extract_text_preview("<p>" + "a" * 200 + "</p>", 10) == "a" * 10 + "..."


class TestTextToHtml:
    def test_escapes_and_wraps(self) -> None:
        assert text_to_html("a < b & 'c'") == "<p>a &lt; b &amp; &#39;c&#39;</p>"

    def test_paragraphs_and_line_breaks(self) -> None:
        assert text_to_html("one\ntwo\n\nthree") == "<p>one<br>two</p><p>three</p>"

    def test_empty(self) -> None:
        assert text_to_html("") == ""
