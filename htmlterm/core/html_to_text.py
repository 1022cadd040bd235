"""Utilities for turning HTML email bodies into terminal-ready plain text.

The converter is an ordered pipeline of pattern rewrites. Semantic tags
(emphasis, links, headings, lists, quotes, preformatted blocks) are turned into
typographic markers first; only then are block boundaries mapped to line breaks
and every remaining tag removed. Entities are decoded after tag stripping so an
escaped ``&lt;b&gt;`` can never be mistaken for markup.

Malformed markup is never an error: a tag the rules cannot pair up simply falls
through to the generic tag stripper.
"""

from __future__ import annotations

import re

from htmlterm.core.entities import decode_entities
from htmlterm.core.lists import INDENT_MARK, render_lists
from htmlterm.core.models import (
    DISPLAY_OPTIONS,
    LEGACY_OPTIONS,
    MARKDOWN_OPTIONS,
    ConversionOptions,
    HeadingStyle,
    LinkStyle,
)
from htmlterm.core.wrap import wrap_text

_I = re.IGNORECASE
_IS = re.IGNORECASE | re.DOTALL

# Element bodies stop at the next opener of the same tag, so an unclosed tag
# costs one bounded scan instead of a scan to the end of the input.
# Stage 1: non-content blocks
_SKIP_BLOCK_RE = re.compile(r"<(script|style|head)\b[^>]*>(?:(?!<\1\b).)*?</\1\s*>", _IS)
_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)
_CDATA_RE = re.compile(r"<!\[CDATA\[(.*?)\]\]>", _IS)
_DOCTYPE_RE = re.compile(r"<!DOCTYPE[^>]*>", _I)

# Stage 2: inline emphasis
_EMPHASIS_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"<(strong|b)\b[^>]*>((?:(?!<\1\b).)*?)</\1\s*>", _IS), r"**\2**"),
    (re.compile(r"<(em|i)\b[^>]*>((?:(?!<\1\b).)*?)</\1\s*>", _IS), r"*\2*"),
    (re.compile(r"<(u)\b[^>]*>((?:(?!<\1\b).)*?)</\1\s*>", _IS), r"_\2_"),
    (re.compile(r"<(code)\b[^>]*>((?:(?!<\1\b).)*?)</\1\s*>", _IS), r"`\2`"),
)

# Stage 3: links
_LINK_RE = re.compile(
    r"""<a\b[^>]*?\bhref\s*=\s*["']([^"']+)["'][^>]*>((?:(?!<a\b).)*?)</a\s*>""", _IS
)
_ANCHOR_RE = re.compile(r"<a\b[^>]*>((?:(?!<a\b).)*?)</a\s*>", _IS)
_MAILTO_RE = re.compile(r"^mailto:", _I)

# Stages 4, 6, 7: headings, quotes, preformatted text
_HEADING_RE = re.compile(r"<h([1-6])\b[^>]*>((?:(?!<h[1-6]\b).)*?)</h\1\s*>", _IS)
_INNER_QUOTE_RE = re.compile(
    r"<blockquote\b[^>]*>((?:(?!<blockquote\b).)*?)</blockquote\s*>", _IS
)
_PRE_RE = re.compile(r"<pre\b[^>]*>((?:(?!<pre\b).)*?)</pre\s*>", _IS)

# Stage 8: block boundaries
_BLOCK_BREAK_RE = re.compile(r"</p\s*>|</?div\b[^>]*>|</(?:ul|ol|blockquote|pre)\s*>", _I)
_PARAGRAPH_OPEN_RE = re.compile(r"<p\b[^>]*>", _I)
_LINE_BREAK_RE = re.compile(r"<(?:br|hr)\b[^>]*>|</tr\s*>", _I)
_CELL_END_RE = re.compile(r"</t[dh]\s*>", _I)

# Stage 9 and helpers
_TAG_RE = re.compile(r"<[^>]*>")
_SPACE_RUN_RE = re.compile(r"[ \t\r\n]+")

# Stage 11: whitespace
_BLANK_RUN_RE = re.compile(r"\n[ \t\r]*\n(?:[ \t\r]*\n)+")
_BLANK_LINE_RE = re.compile(r"\n{2,}")
_INLINE_SPACE_RE = re.compile(r"[ \t]+")
_LINE_EDGE_RE = re.compile(r"^[ \t]+|[ \t]+$", re.MULTILINE)
_LEADING_WS_RE = re.compile(r"^[ \t\n\r]+")
_TRAILING_WS_RE = re.compile(r"[ \t\n\r]+$")

# strip_html_tags
_DANGLING_FRAGMENT_RE = re.compile(r"\w+<")
_STRAY_BRACKET_RE = re.compile(r"[<>]")
_WIDE_GAP_RE = re.compile(r"\s{3,}")


def _strip_tags(html: str) -> str:
    return _TAG_RE.sub("", html)


def _clean_inline(html: str) -> str:
    return _SPACE_RUN_RE.sub(" ", _strip_tags(html)).strip()


def _protect_spaces(text: str) -> str:
    return text.replace(" ", INDENT_MARK).replace("\t", INDENT_MARK * 4)


# ── Stages ──────────────────────────────────────────────────────────────────


def _remove_non_content(html: str) -> str:
    text = html.replace(INDENT_MARK, "")
    text = _SKIP_BLOCK_RE.sub("", text)
    text = _COMMENT_RE.sub("", text)
    text = _CDATA_RE.sub(r"\1", text)
    return _DOCTYPE_RE.sub("", text)


def _convert_emphasis(html: str) -> str:
    for pattern, replacement in _EMPHASIS_RULES:
        html = pattern.sub(replacement, html)
    return html


def _convert_links(html: str, style: LinkStyle) -> str:
    opening, closing = ("[", "]") if style == "bracket" else ("(", ")")

    def _render(match: re.Match[str]) -> str:
        href = match.group(1).strip()
        shown = _MAILTO_RE.sub("", href)
        text = _clean_inline(match.group(2))
        if not text:
            return shown
        if text in (href, shown):
            return text
        return f"{text} {opening}{shown}{closing}"

    return _LINK_RE.sub(_render, html)


def _unwrap_anchors(html: str) -> str:
    return _ANCHOR_RE.sub(r"\1", html)


def _convert_headings(html: str, style: HeadingStyle, width: int) -> str:
    def _render(match: re.Match[str]) -> str:
        text = _clean_inline(match.group(2))
        if not text:
            return "\n\n"
        if style == "markdown":
            return f"\n\n{'#' * int(match.group(1))} {text}\n\n"
        underline = "=" * min(len(text), width or 80)
        return f"\n\n{text}\n{underline}\n\n"

    return _HEADING_RE.sub(_render, html)


def _convert_blockquotes(html: str) -> str:
    def _render(match: re.Match[str]) -> str:
        content = _strip_tags(_convert_block_boundaries(match.group(1), break_on_open=False))
        content = _BLANK_RUN_RE.sub("\n\n", content).strip()
        quoted = "\n".join(f"> {line.strip()}" for line in content.split("\n"))
        return f"\n\n{quoted}\n\n"

    # innermost quotes first, so nested quotes stack their prefixes
    while True:
        converted = _INNER_QUOTE_RE.sub(_render, html)
        if converted == html:
            return converted
        html = converted


def _convert_preformatted(html: str, fenced: bool) -> str:
    def _render(match: re.Match[str]) -> str:
        body = _protect_spaces(_strip_tags(match.group(1)).strip("\r\n"))
        if fenced:
            return f"\n\n```\n{body}\n```\n\n"
        return f"\n\n{body}\n\n"

    return _PRE_RE.sub(_render, html)


def _convert_block_boundaries(html: str, break_on_open: bool) -> str:
    if break_on_open:
        html = _PARAGRAPH_OPEN_RE.sub("\n\n", html)
    html = _BLOCK_BREAK_RE.sub("\n\n", html)
    html = _LINE_BREAK_RE.sub("\n", html)
    return _CELL_END_RE.sub(" ", html)


def _normalize_whitespace(text: str, add_spacing: bool) -> str:
    text = _BLANK_RUN_RE.sub("\n\n", text)
    text = _INLINE_SPACE_RE.sub(" ", text)
    text = _LINE_EDGE_RE.sub("", text)
    if not add_spacing:
        text = _BLANK_LINE_RE.sub("\n", text)
    text = _LEADING_WS_RE.sub("", text)
    return _TRAILING_WS_RE.sub("", text)


# ── Public API ──────────────────────────────────────────────────────────────


def convert(html: str | None, options: ConversionOptions | None = None) -> str:
    """
    Convert an HTML fragment or document to plain text.

    Args:
        html: HTML markup; ``None`` and ``""`` yield ``""``.
        options: Conversion settings, defaults to ``DISPLAY_OPTIONS``.

    Returns:
        Plain text with emphasis, links, headings, lists and quotes rendered as
        text markers, whitespace normalized and lines wrapped to
        ``options.max_line_width`` when it is positive.
    """
    if not html:
        return ""
    opts = options or DISPLAY_OPTIONS

    text = _remove_non_content(html)
    text = _convert_emphasis(text)
    if opts.preserve_links:
        text = _convert_links(text, opts.link_style)
    else:
        text = _unwrap_anchors(text)
    text = _convert_headings(text, opts.heading_style, opts.wrap_width)
    text = render_lists(text)
    text = _convert_blockquotes(text)
    text = _convert_preformatted(text, fenced=opts.pre_style == "fence")
    text = _convert_block_boundaries(text, opts.break_on_paragraph_open)
    text = _strip_tags(text)
    text = decode_entities(text, opts.entity_policy)
    text = _normalize_whitespace(text, opts.add_spacing)
    text = text.replace(INDENT_MARK, " ")
    return wrap_text(text, opts.wrap_width)


def convert_for_display(html: str | None) -> str:
    """Render an email body for an 80-column terminal, links kept."""
    return convert(html, DISPLAY_OPTIONS)


def html_to_text(html: str | None) -> str:
    """Markdown-flavoured conversion: ``#`` headings, ``text (url)`` links, no wrapping."""
    return convert(html, LEGACY_OPTIONS)


def preserve_formatting(html: str | None) -> str:
    """Like :func:`html_to_text`, with ``pre`` blocks fenced in triple backticks."""
    return convert(html, MARKDOWN_OPTIONS)


def convert_links(html: str | None) -> str:
    """Rewrite anchors as ``text (url)`` and leave all other markup alone."""
    if not html:
        return ""
    return _convert_links(html, "paren")


def convert_lists(html: str | None) -> str:
    """
    Render only the lists in ``html``.

    Emphasis, inline code and links inside items are converted first, then any
    leftover tags are dropped. Nested lists are indented two spaces per level.
    """
    if not html:
        return ""
    text = _convert_links(_convert_emphasis(html), "paren")
    text = _strip_tags(render_lists(text))
    return text.replace(INDENT_MARK, " ").strip()


def strip_html_tags(html: str | None) -> str:
    """
    Remove markup, including dangling fragments of malformed tags.

    Complete tags go first; a word glued to a stray ``<`` (``weird<``) is
    treated as part of a broken tag and dropped; lone angle brackets become
    spaces. Runs of three or more whitespace characters shrink to two.
    """
    if not html:
        return ""
    text = _strip_tags(html)
    text = _DANGLING_FRAGMENT_RE.sub("", text)
    text = _STRAY_BRACKET_RE.sub(" ", text)
    return _WIDE_GAP_RE.sub("  ", text).strip()
