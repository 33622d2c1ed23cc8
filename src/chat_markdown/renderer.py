"""Markdown renderer: the single entry point called on every text update.

Each call reparses the whole cumulative message.  Routing is decided on the
whole message, first match wins:

1. any ``|``: table-aware path (pipe runs are split out before fences are
   considered, so pipes inside fenced code can break the fence apart)
2. any ```` ``` ````: code-block-aware path
3. otherwise: plain classification
"""

from __future__ import annotations

import logging

from chat_markdown.blocks import CodeBlock, ContentBlock, Divider, Heading, Paragraph, Table
from chat_markdown.classifier import MIN_TABLE_LINES, classify_lines, preprocess
from chat_markdown.code_blocks import FENCE, extract_code_segments, guess_language
from chat_markdown.config import StyleConfig
from chat_markdown.document import (
    BOLD,
    MEDIUM,
    REGULAR,
    SEMIBOLD,
    Font,
    RenderedBlock,
    RenderedCodeBlock,
    RenderedDivider,
    RenderedDocument,
    RenderedHeading,
    RenderedParagraph,
    RenderedSpan,
    RenderedTable,
    SpanLine,
)
from chat_markdown.inline import format_spans
from chat_markdown.table import PIPE, TableModel, column_widths, is_table_line, parse_table

logger = logging.getLogger(__name__)

USER_COLOR = "bright_white"
USER_SECONDARY_COLOR = "grey70"
ASSISTANT_COLOR = "default"
ASSISTANT_SECONDARY_COLOR = "grey50"
DIVIDER_COLOR = "grey50"

DIVIDER_GLYPHS = "─" * 35
# Header separator width per column, in rule glyphs.
TABLE_RULE_PER_COLUMN = 6
CODE_LABEL_SIZE_DELTA = 2
BOLD_HEADING_LEVELS = (1, 2, 3)


def render(
    text: str, is_user_message: bool = False, style: StyleConfig | None = None
) -> RenderedDocument:
    """Render *text* into a styled document.

    Never raises: an unexpected failure falls back to one unstyled paragraph
    holding the raw text.
    """
    style = style if style is not None else StyleConfig()
    try:
        blocks = _route_blocks(text)
        painter = _Painter(style, is_user_message=is_user_message)
        rendered = tuple(painter.paint(block) for block in blocks)
    except Exception:
        logger.warning("Markdown rendering failed, showing raw text", exc_info=True)
        return _fallback_document(text, style, is_user_message=is_user_message)
    return RenderedDocument(blocks=rendered, is_user_message=is_user_message)


def _route_blocks(text: str) -> list[ContentBlock]:
    """Preprocess *text* and classify it through the matching path."""
    processed = preprocess(text)
    if PIPE in processed:
        return _table_path(processed)
    if FENCE in processed:
        return _code_block_path(processed)
    return classify_lines(processed.split("\n"))


def _table_path(text: str) -> list[ContentBlock]:
    """Split out runs of pipe lines as tables; classify everything else."""
    blocks: list[ContentBlock] = []
    pending: list[str] = []
    lines = text.split("\n")
    i = 0
    while i < len(lines):
        if not is_table_line(lines[i]):
            pending.append(lines[i])
            i += 1
            continue

        run: list[str] = []
        while i < len(lines) and is_table_line(lines[i]):
            run.append(lines[i])
            i += 1
        if len(run) < MIN_TABLE_LINES:
            pending.extend(run)
            continue

        blocks.extend(classify_lines(pending))
        pending = []
        blocks.append(Table(parse_table(run)))

    blocks.extend(classify_lines(pending))
    return blocks


def _code_block_path(text: str) -> list[ContentBlock]:
    blocks: list[ContentBlock] = []
    for segment in extract_code_segments(text):
        if isinstance(segment, CodeBlock):
            blocks.append(segment)
        else:
            blocks.extend(classify_lines(segment.text.split("\n")))
    return blocks


class _Painter:
    """Resolves fonts and colours for content blocks."""

    def __init__(self, style: StyleConfig, *, is_user_message: bool) -> None:
        self._style = style
        self._color = USER_COLOR if is_user_message else ASSISTANT_COLOR
        self._secondary = USER_SECONDARY_COLOR if is_user_message else ASSISTANT_SECONDARY_COLOR

    def paint(self, block: ContentBlock) -> RenderedBlock:
        match block:
            case Paragraph(lines=lines):
                size = self._style.default_font_size
                return RenderedParagraph(tuple(self._span_line(line, size) for line in lines))
            case Heading(level=level, text=text):
                weight = BOLD if level in BOLD_HEADING_LEVELS else SEMIBOLD
                font = Font(self._style.heading_font_size(level), weight)
                return RenderedHeading(level, RenderedSpan(text, font, self._color))
            case Divider():
                font = Font(self._style.divider_font_size)
                return RenderedDivider(RenderedSpan(DIVIDER_GLYPHS, font, DIVIDER_COLOR))
            case CodeBlock():
                return self._code_block(block)
            case Table(model=model):
                return self._table(model)
        msg = f"Unknown content block: {block!r}"
        raise TypeError(msg)

    def _span_line(self, line: str, size: float, *, force_bold: bool = False) -> SpanLine:
        return tuple(
            RenderedSpan(
                span.text,
                Font(size, BOLD if span.bold or force_bold else REGULAR),
                self._color,
            )
            for span in format_spans(line)
        )

    def _code_block(self, block: CodeBlock) -> RenderedCodeBlock:
        size = self._style.code_font_size
        label_text = block.language or guess_language(block.body)
        label = None
        if label_text:
            label_font = Font(size - CODE_LABEL_SIZE_DELTA, MEDIUM)
            label = RenderedSpan(label_text, label_font, self._secondary)
        body = RenderedSpan(block.body, Font(size, monospaced=True), self._color)
        return RenderedCodeBlock(label=label, body=body)

    def _table(self, model: TableModel) -> RenderedTable:
        size = self._style.table_font_size
        rows = []
        for index, row in enumerate(model.padded_rows()):
            is_header = index == 0 and model.has_header_separator
            rows.append(tuple(self._span_line(cell, size, force_bold=is_header) for cell in row))

        separator = None
        if model.has_header_separator:
            rule = "─" * (model.column_count * TABLE_RULE_PER_COLUMN)
            separator = RenderedSpan(rule, Font(self._style.divider_font_size), self._secondary)
        return RenderedTable(
            rows=tuple(rows),
            has_header=model.has_header_separator,
            column_count=model.column_count,
            column_widths=tuple(column_widths(model)),
            separator=separator,
        )


def _fallback_document(text: str, style: StyleConfig, *, is_user_message: bool) -> RenderedDocument:
    color = USER_COLOR if is_user_message else ASSISTANT_COLOR
    span = RenderedSpan(str(text), Font(style.default_font_size), color)
    return RenderedDocument(
        blocks=(RenderedParagraph(((span,),)),),
        is_user_message=is_user_message,
    )
