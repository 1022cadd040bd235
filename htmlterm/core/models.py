"""
Core data models for htmlterm.

These are plain dataclasses with no external dependencies beyond the standard
library. They describe how a single HTML to text conversion should behave.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Literal

HeadingStyle = Literal["underline", "markdown"]
LinkStyle = Literal["bracket", "paren"]
PreStyle = Literal["plain", "fence"]
EntityPolicy = Literal["plain", "preserve"]


@dataclass(frozen=True)
class ConversionOptions:
    """
    Settings for one conversion call.

    Attributes:
        max_line_width: Target column width for word wrapping. 0 disables
            wrapping; negative values behave like 0.
        preserve_links: Render anchor targets next to the link text.
        add_spacing: Keep paragraphs separated by a blank line. When False,
            blank lines collapse to single line breaks.
        heading_style: "underline" draws a row of ``=`` below the heading,
            "markdown" prefixes it with ``#`` per level.
        link_style: "bracket" renders ``text [url]``, "paren" ``text (url)``.
        pre_style: "fence" wraps preformatted blocks in triple backticks.
        entity_policy: "plain" turns ``&nbsp;`` into an ordinary space,
            "preserve" keeps U+00A0.
        break_on_paragraph_open: Also start a new paragraph on an opening
            ``<p>`` tag, not only on ``</p>``.
    """

    max_line_width: int = 80
    preserve_links: bool = True
    add_spacing: bool = True
    heading_style: HeadingStyle = "underline"
    link_style: LinkStyle = "bracket"
    pre_style: PreStyle = "plain"
    entity_policy: EntityPolicy = "plain"
    break_on_paragraph_open: bool = False

    @property
    def wrap_width(self) -> int:
        """Effective wrap width (0 when wrapping is off)."""
        return max(self.max_line_width, 0)

    def with_options(self, **changes: Any) -> ConversionOptions:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)


DISPLAY_OPTIONS = ConversionOptions()

PREVIEW_OPTIONS = ConversionOptions(max_line_width=0, preserve_links=False, add_spacing=False)

LEGACY_OPTIONS = ConversionOptions(
    max_line_width=0,
    heading_style="markdown",
    link_style="paren",
    entity_policy="preserve",
    break_on_paragraph_open=True,
)

MARKDOWN_OPTIONS = LEGACY_OPTIONS.with_options(pre_style="fence")
