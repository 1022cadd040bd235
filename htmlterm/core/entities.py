"""HTML entity decoding and escaping.

Entities are decoded in one left-to-right pass, so ``&amp;lt;`` becomes the
literal text ``&lt;`` and is never decoded twice.
"""

from __future__ import annotations

import re
from html.entities import html5
from types import MappingProxyType

from loguru import logger

from htmlterm.core.models import EntityPolicy

NBSP = "\u00a0"

# Terminal-friendly renderings; names outside this table fall back to the
# HTML5 table. Keys are lowercase, lookups are case-insensitive.
NAMED_ENTITIES: MappingProxyType[str, str] = MappingProxyType(
    {
        "amp": "&",
        "lt": "<",
        "gt": ">",
        "quot": '"',
        "apos": "'",
        "nbsp": NBSP,
        "copy": "©",
        "reg": "®",
        "trade": "™",
        "hellip": "...",
        "mdash": "—",
        "ndash": "–",
        "lsquo": "'",
        "rsquo": "'",
        "ldquo": '"',
        "rdquo": '"',
    }
)

_ENTITY_RE = re.compile(r"&(#[0-9]+|#[xX][0-9a-fA-F]+|[A-Za-z][A-Za-z0-9]*);")

_ESCAPES: MappingProxyType[str, str] = MappingProxyType(
    {"&": "&amp;", "<": "&lt;", ">": "&gt;", '"': "&quot;", "'": "&#39;"}
)
_ESCAPE_RE = re.compile(r"[&<>\"']")


def _decode_codepoint(code: int) -> str:
    if code <= 0 or code > 0x10FFFF or 0xD800 <= code <= 0xDFFF:
        logger.debug("entities: invalid code point {} replaced", code)
        return "\ufffd"
    return chr(code)


def _decode_one(match: re.Match[str]) -> str:
    body = match.group(1)
    if body[0] == "#":
        if body[1] in "xX":
            return _decode_codepoint(int(body[2:], 16))
        return _decode_codepoint(int(body[1:]))
    known = NAMED_ENTITIES.get(body.lower())
    if known is not None:
        return known
    return html5.get(body + ";", match.group(0))


def decode_entities(text: str, policy: EntityPolicy = "preserve") -> str:
    """
    Replace named and numeric character references with their characters.

    Args:
        text: Text that no longer contains markup.
        policy: "plain" renders non-breaking spaces as ordinary spaces,
            "preserve" keeps them as U+00A0.

    Returns:
        Decoded text. Unknown names are left untouched.
    """
    if "&" not in text:
        return text
    if policy == "plain":
        return _ENTITY_RE.sub(lambda m: _decode_one(m).replace(NBSP, " "), text)
    return _ENTITY_RE.sub(_decode_one, text)


def escape_html(text: str) -> str:
    """Escape the five HTML special characters."""
    return _ESCAPE_RE.sub(lambda m: _ESCAPES[m.group(0)], text)
