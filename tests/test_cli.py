"""Integration tests for the CLI."""

from __future__ import annotations

import io
import json
from typing import TYPE_CHECKING

import pytest

from chat_markdown.cli import main
from tests.conftest import SAMPLE_ASSISTANT_MESSAGE

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def message_file(tmp_path: Path) -> Path:
    path = tmp_path / "message.md"
    path.write_text(SAMPLE_ASSISTANT_MESSAGE)
    return path


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep the user's real style.toml out of the tests."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))


def test_render_prints_text(message_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(["render", str(message_file)])
    out = capsys.readouterr().out
    assert "Release notes" in out
    assert "Android" in out


def test_render_json(message_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """--json dumps the rendered document with resolved fonts."""
    main(["render", "--json", "--user", str(message_file)])
    data = json.loads(capsys.readouterr().out)
    assert data["is_user_message"] is True
    heading = data["blocks"][0]
    assert heading["level"] == 1
    assert heading["span"]["text"] == "Release notes"
    assert heading["span"]["font"] == {"size": 24, "weight": "bold", "monospaced": False}
    assert heading["span"]["color"] == "bright_white"


def test_render_uses_style_file(
    message_file: Path, style_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    main(["--style", str(style_file), "render", "--json", str(message_file)])
    data = json.loads(capsys.readouterr().out)
    assert data["blocks"][0]["span"]["font"]["size"] == 30


def test_render_reads_stdin(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("## From stdin"))
    main(["render", "--json", "-"])
    data = json.loads(capsys.readouterr().out)
    assert data["blocks"][0]["span"]["text"] == "From stdin"


def test_render_missing_file_exits(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["render", str(tmp_path / "nope.md")])
    assert excinfo.value.code == 1


def test_invalid_style_file_exits(
    message_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    bad = tmp_path / "bad.toml"
    bad.write_text("[fonts]\ndefault_font_size = 'huge'\n")
    with pytest.raises(SystemExit) as excinfo:
        main(["--style", str(bad), "render", str(message_file)])
    assert excinfo.value.code == 1
    assert "must be a number" in capsys.readouterr().err


def test_config_shows_defaults(capsys: pytest.CaptureFixture[str]) -> None:
    main(["config"])
    out = capsys.readouterr().out
    assert "not found, using defaults" in out
    assert "heading1_font_size" in out
    assert "24" in out


def test_config_shows_overrides(style_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(["--style", str(style_file), "config"])
    out = capsys.readouterr().out
    assert str(style_file) in out
    assert "not found" not in out
    assert "30" in out


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    main([])
    assert "usage: chat-markdown" in capsys.readouterr().out
