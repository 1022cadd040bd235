"""Rendering of (possibly nested) HTML lists as bulleted and numbered lines.

Lists are the one construct the converter does not handle with a single
substitution: nested ``<ul>``/``<ol>`` need a stack so each ``<li>`` knows its
depth and each ``<ol>`` keeps its own counter.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

BULLET = "• "

# Indentation is emitted as this placeholder so that per-line whitespace
# trimming in later stages leaves it alone; callers swap it for spaces.
INDENT_MARK = "\x00"
INDENT_UNIT = INDENT_MARK * 2

_LIST_TAG_RE = re.compile(r"<(/?)(ul|ol|li)\b[^>]*>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]*>")
_ITEM_BREAK_RE = re.compile(r"<(?:br|hr|/p|/div)\b[^>]*>", re.IGNORECASE)
_SPACE_RUN_RE = re.compile(r"[ \t\r\n]+")


@dataclass
class _ListFrame:
    ordered: bool
    counter: int = 0

    def next_marker(self) -> str:
        if not self.ordered:
            return BULLET
        self.counter += 1
        return f"{self.counter}. "


def _clean_item(parts: list[str]) -> str:
    text = _TAG_RE.sub("", _ITEM_BREAK_RE.sub(" ", "".join(parts)))
    return _SPACE_RUN_RE.sub(" ", text).strip()


def render_lists(html: str) -> str:
    """
    Replace every list in ``html`` with one line per item.

    Unordered items get ``• ``, ordered items ``1. ``, ``2. `` and so on,
    restarting for each ``<ol>``. Nested lists start on their own line and are
    indented by one ``INDENT_UNIT`` per level. Text outside lists is returned
    unchanged; markup inside an item is stripped.
    """
    if "<" not in html:
        return html

    out: list[str] = []
    stack: list[_ListFrame] = []
    item: list[str] | None = None
    pos = 0

    def flush_item() -> None:
        nonlocal item
        if item is not None:
            out.append(_clean_item(item))
            item = None

    for match in _LIST_TAG_RE.finditer(html):
        chunk = html[pos : match.start()]
        pos = match.end()
        if item is not None:
            item.append(chunk)
        elif not stack:
            out.append(chunk)
        elif chunk.strip():
            out.append("\n" + _clean_item([chunk]))

        closing = match.group(1) == "/"
        tag = match.group(2).lower()
        if tag == "li":
            flush_item()
            if closing:
                continue
            frame = stack[-1] if stack else _ListFrame(ordered=False)
            depth = max(len(stack), 1)
            out.append("\n" + INDENT_UNIT * (depth - 1) + frame.next_marker())
            item = []
        elif not closing:
            flush_item()
            if not stack:
                out.append("\n")
            stack.append(_ListFrame(ordered=tag == "ol"))
        else:
            flush_item()
            if stack:
                stack.pop()
            if not stack:
                out.append("\n\n")

    tail = html[pos:]
    if item is not None:
        item.append(tail)
        flush_item()
    else:
        out.append(tail)
    return "".join(out)
