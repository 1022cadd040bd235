"""Tests for the htmlterm CLI commands."""

from __future__ import annotations

import io
import json
from pathlib import Path
from unittest.mock import patch

import pytest
from _pytest.capture import CaptureFixture

from htmlterm.cli.main import _setup_logging, convert, preview, status, truncate


@pytest.fixture
def email_file(tmp_path: Path) -> Path:
    path = tmp_path / "body.html"
    path.write_text(
        '<h1>Hi</h1><p>See <a href="https://example.com">docs</a>.</p>',
        encoding="utf-8",
    )
    return path


def test_convert_file_with_defaults(
    email_file: Path, tmp_path: Path, capsys: CaptureFixture[str]
) -> None:
    convert(email_file, config=tmp_path / "none.json")
    out = capsys.readouterr().out
    assert out == "Hi\n==\n\nSee docs [https://example.com].\n"


def test_convert_overrides(email_file: Path, tmp_path: Path, capsys: CaptureFixture[str]) -> None:
    convert(email_file, links=False, style="markdown", config=tmp_path / "none.json")
    out = capsys.readouterr().out
    assert out == "# Hi\n\nSee docs.\n"


def test_convert_uses_config_file(
    email_file: Path, tmp_path: Path, capsys: CaptureFixture[str]
) -> None:
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"display": {"link_style": "paren"}}), encoding="utf-8")
    convert(email_file, config=config)
    assert "docs (https://example.com)" in capsys.readouterr().out


def test_convert_reads_stdin(tmp_path: Path, capsys: CaptureFixture[str]) -> None:
    with patch("sys.stdin", io.StringIO("<b>bold</b>")):
        convert(None, config=tmp_path / "none.json")
    assert capsys.readouterr().out == "**bold**\n"


def test_convert_missing_file_exits(tmp_path: Path, capsys: CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        convert(tmp_path / "missing.html", config=tmp_path / "none.json")
    assert exc.value.code == 1
    assert "cannot read" in capsys.readouterr().err


def test_invalid_config_exits(email_file: Path, tmp_path: Path, capsys: CaptureFixture[str]) -> None:
    config = tmp_path / "config.json"
    config.write_text("{not json", encoding="utf-8")
    with pytest.raises(SystemExit) as exc:
        convert(email_file, config=config)
    assert exc.value.code == 1
    assert "invalid config file" in capsys.readouterr().err


def test_preview_command(email_file: Path, tmp_path: Path, capsys: CaptureFixture[str]) -> None:
    preview(email_file, max_length=10, config=tmp_path / "none.json")
    assert capsys.readouterr().out == "Hi == S...\n"


def test_truncate_command(tmp_path: Path, capsys: CaptureFixture[str]) -> None:
    truncate("The quick brown fox jumps", max_length=20, config=tmp_path / "none.json")
    assert capsys.readouterr().out == "The quick brown fox...\n"


def test_status_reports_defaults(tmp_path: Path, capsys: CaptureFixture[str]) -> None:
    status(config=tmp_path / "none.json")
    out = capsys.readouterr().out
    assert "not found, defaults" in out
    assert "Width:     80" in out
    assert "Links:     shown (bracket)" in out


def test_setup_logging_rejects_unknown_level(capsys: CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit):
        _setup_logging("chatty")
    assert "invalid --log-level" in capsys.readouterr().err
