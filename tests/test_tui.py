"""Integration tests for the preview TUI and the streaming message view."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chat_markdown.document import RenderedHeading, RenderedTable
from chat_markdown.tui.app import PreviewApp
from chat_markdown.tui.widgets.message_view import MessageView
from tests.conftest import SAMPLE_ASSISTANT_MESSAGE

if TYPE_CHECKING:
    from pathlib import Path


async def test_preview_renders_full_message() -> None:
    """Without streaming the whole message is rendered on mount."""
    app = PreviewApp(SAMPLE_ASSISTANT_MESSAGE)
    async with app.run_test():
        view = app.query_one(MessageView)
        assert view.message_text == SAMPLE_ASSISTANT_MESSAGE
        assert view.document is not None
        assert any(isinstance(block, RenderedTable) for block in view.document.blocks)


async def test_streaming_replay_and_skip() -> None:
    """Streaming starts from an empty message; s delivers the rest."""
    app = PreviewApp(SAMPLE_ASSISTANT_MESSAGE, stream=True, chunk_size=1)
    async with app.run_test() as pilot:
        view = app.query_one(MessageView)
        assert app.is_streaming
        assert len(view.message_text) < len(SAMPLE_ASSISTANT_MESSAGE)

        await pilot.press("s")
        await pilot.pause()
        assert not app.is_streaming
        assert view.message_text == SAMPLE_ASSISTANT_MESSAGE
        assert view.document is not None
        assert "Thanks!" in view.document.plain_text()


async def test_append_delta_rerenders_on_flush() -> None:
    app = PreviewApp("# Title")
    async with app.run_test():
        view = app.query_one(MessageView)
        assert view.document is not None
        assert view.document.plain_text() == "Title"

        view.append_delta("\n\nmore **text**")
        view.flush()
        assert view.document.plain_text() == "Title\n\nmore text"

        rendered = view.document
        view.flush()
        assert view.document is rendered  # nothing changed, no re-render


async def test_set_text_replaces_message() -> None:
    app = PreviewApp("first")
    async with app.run_test():
        view = app.query_one(MessageView)
        view.set_text("second")
        view.flush()
        assert view.document is not None
        assert view.document.plain_text() == "second"


async def test_reload_style_applies_new_sizes(style_file: Path) -> None:
    """Pressing r re-reads style.toml and re-renders with it."""
    app = PreviewApp("# Title", style_path=style_file)
    async with app.run_test() as pilot:
        view = app.query_one(MessageView)
        assert view.document is not None
        heading = view.document.blocks[0]
        assert isinstance(heading, RenderedHeading)
        assert heading.span.font.size == 24

        await pilot.press("r")
        await pilot.pause()
        heading = view.document.blocks[0]
        assert isinstance(heading, RenderedHeading)
        assert heading.span.font.size == 30


async def test_reload_style_keeps_old_style_on_error(tmp_path: Path) -> None:
    bad = tmp_path / "style.toml"
    bad.write_text("[fonts\n")
    app = PreviewApp("# Title", style_path=bad)
    async with app.run_test() as pilot:
        view = app.query_one(MessageView)
        await pilot.press("r")
        await pilot.pause()
        assert view.document is not None
        heading = view.document.blocks[0]
        assert isinstance(heading, RenderedHeading)
        assert heading.span.font.size == 24
