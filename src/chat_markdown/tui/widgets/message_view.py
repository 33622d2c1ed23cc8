"""Message view widget: re-renders a streaming chat message as text arrives."""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.widgets import Static

from chat_markdown.config import StyleConfig
from chat_markdown.console import document_to_renderable
from chat_markdown.renderer import render

if TYPE_CHECKING:
    from chat_markdown.document import RenderedDocument

# Deltas can arrive far faster than this; only the latest text is rendered.
RENDER_INTERVAL = 0.05


class MessageView(Static):
    """Displays one chat message, reparsing the full text on each refresh.

    Deltas update the cumulative text immediately; rendering happens on a
    timer, at most once per RENDER_INTERVAL, and only when the text changed.
    """

    DEFAULT_CSS = """
    MessageView {
        height: auto;
        padding: 1 2;
        margin: 0 0 1 0;
        background: $boost;
    }
    MessageView.-user {
        background: $primary-darken-2;
    }
    """

    def __init__(
        self,
        text: str = "",
        *,
        is_user_message: bool = False,
        style: StyleConfig | None = None,
        id: str | None = None,  # noqa: A002
    ) -> None:
        super().__init__(id=id, classes="-user" if is_user_message else "")
        self._message_text = text
        self._is_user_message = is_user_message
        self._style_config = style if style is not None else StyleConfig()
        self._needs_render = True
        self._rendered: RenderedDocument | None = None

    @property
    def message_text(self) -> str:
        return self._message_text

    @property
    def document(self) -> RenderedDocument | None:
        """The most recently rendered document, None before the first render."""
        return self._rendered

    def on_mount(self) -> None:
        """Render once, then keep up with incoming deltas."""
        self.flush()
        self.set_interval(RENDER_INTERVAL, self.flush)

    def append_delta(self, delta: str) -> None:
        """Append a streamed chunk to the message."""
        if delta:
            self._message_text += delta
            self._needs_render = True

    def set_text(self, text: str) -> None:
        """Replace the whole message text."""
        if text != self._message_text:
            self._message_text = text
            self._needs_render = True

    def set_style_config(self, style: StyleConfig) -> None:
        """Use *style* from the next render on."""
        self._style_config = style
        self._needs_render = True

    def flush(self) -> None:
        """Render now if anything changed since the last render."""
        if not self._needs_render:
            return
        self._needs_render = False
        self._rendered = render(self._message_text, self._is_user_message, self._style_config)
        self.update(document_to_renderable(self._rendered))
