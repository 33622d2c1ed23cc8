"""Textual preview app: show a message as it would stream in from a model."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.widgets import Footer, Header

from chat_markdown.config import ConfigError, StyleConfig, load_style_config
from chat_markdown.tui.widgets.message_view import MessageView

if TYPE_CHECKING:
    from pathlib import Path

    from textual.binding import BindingType
    from textual.timer import Timer

STREAM_INTERVAL = 0.03
DEFAULT_CHUNK_SIZE = 4


class PreviewApp(App[None]):
    """Renders one Markdown message, optionally replaying it chunk by chunk."""

    TITLE = "chat-markdown"

    CSS = """
    #messages {
        height: 1fr;
        padding: 1 2;
    }
    """

    BINDINGS: ClassVar[list[BindingType]] = [
        Binding("q", "quit", "Quit", show=True),
        Binding("s", "skip_stream", "Skip", show=True),
        Binding("r", "reload_style", "Reload style", show=True),
    ]

    def __init__(
        self,
        text: str,
        *,
        is_user_message: bool = False,
        stream: bool = False,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        style: StyleConfig | None = None,
        style_path: Path | None = None,
    ) -> None:
        super().__init__()
        self._full_text = text
        self._is_user_message = is_user_message
        self._replay = stream
        self._chunk_size = max(1, chunk_size)
        self._style_config = style if style is not None else StyleConfig()
        self._style_path = style_path
        self._streamed = 0 if stream else len(text)
        self._stream_timer: Timer | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        with VerticalScroll(id="messages"):
            yield MessageView(
                self._full_text[: self._streamed],
                is_user_message=self._is_user_message,
                style=self._style_config,
                id="message",
            )
        yield Footer()

    def on_mount(self) -> None:
        """Start replaying the message when streaming."""
        if self._replay and self._streamed < len(self._full_text):
            self._stream_timer = self.set_interval(STREAM_INTERVAL, self._stream_step)

    @property
    def is_streaming(self) -> bool:
        return self._streamed < len(self._full_text)

    def _message_view(self) -> MessageView:
        return self.query_one("#message", MessageView)

    def _stream_step(self) -> None:
        end = min(self._streamed + self._chunk_size, len(self._full_text))
        self._message_view().append_delta(self._full_text[self._streamed : end])
        self._streamed = end
        if not self.is_streaming:
            self._stop_stream()

    def _stop_stream(self) -> None:
        if self._stream_timer is not None:
            self._stream_timer.stop()
            self._stream_timer = None

    def action_skip_stream(self) -> None:
        """Deliver the rest of the message at once."""
        if not self.is_streaming:
            return
        view = self._message_view()
        view.append_delta(self._full_text[self._streamed :])
        self._streamed = len(self._full_text)
        self._stop_stream()
        view.flush()

    def action_reload_style(self) -> None:
        """Re-read style.toml and re-render with it."""
        if self._style_path is None:
            self.notify("No style file configured.")
            return
        try:
            self._style_config = load_style_config(self._style_path)
        except ConfigError as e:
            self.notify(str(e), severity="error")
            return
        view = self._message_view()
        view.set_style_config(self._style_config)
        view.flush()
        self.notify("Style reloaded.")
