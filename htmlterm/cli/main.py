"""
CLI entry point for htmlterm.

Commands:
  htmlterm convert [PATH]     Render an HTML body as terminal text
  htmlterm preview [PATH]     Print a one-line preview of an HTML body
  htmlterm truncate TEXT      Shorten plain text at a word boundary
  htmlterm status             Show the effective configuration

PATH may be omitted (or "-") to read from standard input.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Literal

import cyclopts
from loguru import logger
from pydantic import ValidationError

from htmlterm.config.schema import DEFAULT_CONFIG_PATH, Settings
from htmlterm.core.html_to_text import convert as convert_html
from htmlterm.core.preview import convert_for_preview, truncate as truncate_text

app = cyclopts.App(name="htmlterm", help="Render HTML email bodies as terminal text.")


@app.command
def convert(
    path: Path | None = None,
    width: int | None = None,
    links: bool | None = None,
    style: Literal["underline", "markdown"] | None = None,
    config: Path = DEFAULT_CONFIG_PATH,
    log_level: str = "WARNING",
) -> None:
    """
    Convert an HTML body to plain text.

    Options left unset fall back to the "display" section of the config file.
    """
    _setup_logging(log_level)
    settings = _load_settings(config)
    options = settings.display.to_options()
    if width is not None:
        options = options.with_options(max_line_width=width)
    if links is not None:
        options = options.with_options(preserve_links=links)
    if style is not None:
        options = options.with_options(heading_style=style)

    html = _read_input(path)
    text = convert_html(html, options)
    logger.debug("convert: {} chars in, {} chars out", len(html), len(text))
    print(text)


@app.command
def preview(
    path: Path | None = None,
    max_length: int | None = None,
    config: Path = DEFAULT_CONFIG_PATH,
    log_level: str = "WARNING",
) -> None:
    """Print a single-line preview of an HTML body."""
    _setup_logging(log_level)
    settings = _load_settings(config)
    limit = max_length if max_length is not None else settings.preview.max_length
    print(convert_for_preview(_read_input(path), limit))


@app.command
def truncate(
    text: str,
    max_length: int | None = None,
    config: Path = DEFAULT_CONFIG_PATH,
) -> None:
    """Shorten plain text, cutting at a word boundary where possible."""
    settings = _load_settings(config)
    limit = max_length if max_length is not None else settings.preview.truncate_length
    print(truncate_text(text, limit))


@app.command
def status(config: Path = DEFAULT_CONFIG_PATH) -> None:
    """Show the effective configuration."""
    settings = _load_settings(config)
    display = settings.display
    width = display.max_line_width or "off"
    print(f"Config:    {config}{'' if config.exists() else ' (not found, defaults)'}")
    print(f"Width:     {width}")
    print(f"Links:     {'shown' if display.preserve_links else 'hidden'} ({display.link_style})")
    print(f"Headings:  {display.heading_style}")
    print(f"Entities:  {display.entity_policy}")
    print(f"Preview:   {settings.preview.max_length} chars")


def _read_input(path: Path | None) -> str:
    """Read HTML from ``path``, or from stdin when path is None or "-"."""
    if path is None or str(path) == "-":
        return sys.stdin.read()
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        print(f"error: cannot read '{path}': {e.strerror or e}", file=sys.stderr)
        raise SystemExit(1) from e


def _load_settings(config: Path) -> Settings:
    """Load settings, turning a broken config file into a clean exit."""
    try:
        return Settings.load(config)
    except (json.JSONDecodeError, ValidationError) as e:
        print(f"error: invalid config file '{config}': {e}", file=sys.stderr)
        raise SystemExit(1) from e


_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _setup_logging(level: str) -> None:
    """
    Configure loguru for CLI output.

    Removes the default loguru stderr handler and replaces it with one that
    uses a consistent timestamp+level format.

    Args:
        level: Log level string (case-insensitive), e.g. "INFO", "DEBUG".

    Raises:
        SystemExit: If the level is not a valid log level name.
    """
    normalised = level.upper()
    if normalised not in _VALID_LOG_LEVELS:
        valid = ", ".join(sorted(_VALID_LOG_LEVELS))
        print(f"error: invalid --log-level '{level}'. Valid values: {valid}", file=sys.stderr)
        raise SystemExit(1)

    logger.remove()  # remove loguru's built-in default handler
    logger.add(
        sys.stderr,
        level=normalised,
        format=("<green>{time:YYYY-MM-DD HH:mm:ss}</green> <level>{level:<8}</level> {message}"),
        colorize=True,
    )


def main() -> None:
    app()


if __name__ == "__main__":
    main()
