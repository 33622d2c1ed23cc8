"""Convert a RenderedDocument into Rich renderables for terminal display.

Terminals have a single font size, so sizes map onto emphasis: level 1-2
headings are underlined, bold weights become ``bold`` and medium becomes
``italic``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich import box
from rich.console import Group
from rich.padding import Padding
from rich.panel import Panel
from rich.rule import Rule
from rich.style import Style
from rich.table import Table
from rich.text import Text

from chat_markdown.document import (
    MEDIUM,
    RenderedCodeBlock,
    RenderedDivider,
    RenderedHeading,
    RenderedParagraph,
    RenderedTable,
)

if TYPE_CHECKING:
    from rich.console import RenderableType

    from chat_markdown.document import RenderedBlock, RenderedDocument, RenderedSpan, SpanLine

UNDERLINED_HEADING_LEVELS = (1, 2)


def span_style(span: RenderedSpan) -> Style:
    """Map a span's font and colour onto a Rich style."""
    return Style(
        color=span.color,
        bold=span.font.is_bold or None,
        italic=(span.font.weight == MEDIUM) or None,
    )


def line_to_text(line: SpanLine) -> Text:
    text = Text()
    for span in line:
        text.append(span.text, style=span_style(span))
    return text


def block_to_renderable(block: RenderedBlock) -> RenderableType:
    match block:
        case RenderedParagraph(lines=lines):
            return Text("\n").join(line_to_text(line) for line in lines)
        case RenderedHeading(level=level, span=span):
            style = span_style(span)
            if level in UNDERLINED_HEADING_LEVELS:
                style += Style(underline=True)
            return Text(span.text, style=style)
        case RenderedDivider(span=span):
            return Rule(style=span.color)
        case RenderedCodeBlock(label=label, body=body):
            title = Text(label.text, style=span_style(label)) if label is not None else None
            return Panel(
                Text(body.text, style=span_style(body), no_wrap=True),
                title=title,
                title_align="left",
                box=box.ROUNDED,
                expand=False,
            )
        case RenderedTable():
            return _table_to_renderable(block)
    msg = f"Unknown rendered block: {block!r}"
    raise TypeError(msg)


def _table_to_renderable(block: RenderedTable) -> Table:
    separator_style = block.separator.color if block.separator is not None else None
    table = Table(
        show_header=block.has_header,
        box=box.SIMPLE_HEAD if block.has_header else box.SIMPLE,
        border_style=separator_style,
    )
    rows = list(block.rows)
    header = rows.pop(0) if block.has_header and rows else ()
    for col, width in enumerate(block.column_widths):
        heading = line_to_text(header[col]) if header else ""
        table.add_column(heading, min_width=width)
    for row in rows:
        table.add_row(*(line_to_text(cell) for cell in row))
    return table


def document_to_renderable(document: RenderedDocument) -> Group:
    """Return every block as one Rich group, blocks separated by a blank line."""
    renderables: list[RenderableType] = []
    for index, block in enumerate(document.blocks):
        renderable = block_to_renderable(block)
        if index:
            renderable = Padding(renderable, (1, 0, 0, 0))
        renderables.append(renderable)
    return Group(*renderables)
