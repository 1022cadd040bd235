"""Greedy word wrapping that keeps quote and bullet prefixes."""

from __future__ import annotations

import re

_PREFIX_RE = re.compile(r"^(\s*[>•\-*]\s*|[ ]+)")


def wrap_line(line: str, width: int) -> list[str]:
    """
    Wrap a single logical line to ``width`` columns.

    A leading run of quote/bullet markers (``>``, ``•``, ``-``, ``*`` with
    surrounding spaces), or plain leading indentation, is repeated on every
    continuation line. A word that does not fit even on an empty line is
    emitted unsplit on its own line.

    Args:
        line: One line of text without newlines.
        width: Maximum line width, > 0.

    Returns:
        The wrapped lines (just ``[line]`` when no wrapping is needed).
    """
    if len(line) <= width or not line.strip():
        return [line]

    match = _PREFIX_RE.match(line)
    prefix = match.group(1) if match else ""
    if width - len(prefix) <= 0:
        return [line]

    wrapped: list[str] = []
    current = prefix
    for word in line[len(prefix) :].split(" "):
        candidate = prefix + word if current == prefix else f"{current} {word}"
        if len(candidate) <= width:
            current = candidate
        elif current != prefix:
            wrapped.append(current)
            current = prefix + word
        else:
            wrapped.append(candidate)
            current = prefix
    if current != prefix:
        wrapped.append(current)
    return wrapped


def wrap_text(text: str, width: int) -> str:
    """Wrap every line of ``text`` independently; ``width <= 0`` is a no-op."""
    if width <= 0:
        return text
    lines: list[str] = []
    for line in text.split("\n"):
        lines.extend(wrap_line(line, width))
    return "\n".join(lines)
