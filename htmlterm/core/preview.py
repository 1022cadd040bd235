"""Short single-line renderings of email bodies for message lists."""

from __future__ import annotations

import re

from htmlterm.core.entities import escape_html
from htmlterm.core.html_to_text import convert
from htmlterm.core.models import PREVIEW_OPTIONS

ELLIPSIS = "..."

_WHITESPACE_RE = re.compile(r"\s+")


def convert_for_preview(html: str | None, max_length: int = 150) -> str:
    """
    Build a one-line preview of an HTML body.

    Links are reduced to their text and all whitespace, line breaks included,
    collapses to single spaces. A preview longer than ``max_length`` is cut so
    that, with the trailing ``...``, it is exactly ``max_length`` characters.

    Args:
        html: HTML markup.
        max_length: Upper bound on the returned length.

    Returns:
        The preview, never longer than ``max_length``.
    """
    text = _WHITESPACE_RE.sub(" ", convert(html, PREVIEW_OPTIONS)).strip()
    if len(text) <= max_length:
        return text
    if max_length < len(ELLIPSIS):
        return text[: max(max_length, 0)]
    return text[: max_length - len(ELLIPSIS)] + ELLIPSIS


def truncate(text: str | None, max_length: int = 100) -> str:
    """
    Shorten plain text, preferring to cut at a word boundary.

    The cut happens at the last space within the first ``max_length``
    characters when that space lies beyond 80% of ``max_length``; otherwise the
    text is cut hard at ``max_length``. ``...`` is appended in both cases.
    """
    if not text:
        return ""
    if len(text) <= max_length:
        return text
    head = text[:max_length]
    last_space = head.rfind(" ")
    if last_space > max_length * 0.8:
        return head[:last_space] + ELLIPSIS
    return head + ELLIPSIS


def extract_text_preview(html: str | None, max_length: int = 150) -> str:
    """Full display conversion, then :func:`truncate` to ``max_length``."""
    return truncate(convert(html), max_length)


def text_to_html(text: str | None) -> str:
    """Escape plain text and wrap it as HTML paragraphs with ``<br>`` line breaks."""
    if not text:
        return ""
    body = escape_html(text).replace("\n\n", "</p><p>").replace("\n", "<br>")
    return f"<p>{body}</p>"
