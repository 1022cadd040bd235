"""
Configuration schema for htmlterm.

Settings are loaded from a JSON file (default: ~/.htmlterm/config.json).
Every key is optional; missing keys fall back to the terminal defaults.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from htmlterm.core.models import ConversionOptions

DEFAULT_CONFIG_PATH = Path.home() / ".htmlterm" / "config.json"


class RenderConfig(BaseModel):
    """How email bodies are rendered in the message view."""

    max_line_width: int = 80  # 0 = no wrapping
    preserve_links: bool = True
    add_spacing: bool = True
    heading_style: Literal["underline", "markdown"] = "underline"
    link_style: Literal["bracket", "paren"] = "bracket"
    pre_style: Literal["plain", "fence"] = "plain"
    entity_policy: Literal["plain", "preserve"] = "plain"

    @field_validator("max_line_width")
    @classmethod
    def _clamp_width(cls, value: int) -> int:
        """Negative widths mean "no wrapping", same as 0."""
        return max(value, 0)

    def to_options(self) -> ConversionOptions:
        """Build the ConversionOptions the converter core consumes."""
        return ConversionOptions(**self.model_dump())


class PreviewConfig(BaseModel):
    """Lengths used for message-list previews."""

    max_length: int = 150
    truncate_length: int = 100

    @field_validator("max_length", "truncate_length")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("preview lengths must be > 0")
        return value


class Settings(BaseModel):
    """Root configuration object for htmlterm."""

    display: RenderConfig = Field(default_factory=RenderConfig)
    preview: PreviewConfig = Field(default_factory=PreviewConfig)

    @classmethod
    def load(cls, path: Path = DEFAULT_CONFIG_PATH) -> Settings:
        """
        Load settings from a JSON file.

        Missing keys use their default values.
        The file is optional; if it does not exist, all defaults apply.
        """
        if not path.exists():
            return cls()
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls.model_validate(data)

    def save(self, path: Path = DEFAULT_CONFIG_PATH) -> None:
        """Persist settings to a JSON file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            self.model_dump_json(indent=2, exclude_none=False),
            encoding="utf-8",
        )
