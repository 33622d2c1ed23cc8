"""Rendered document types handed to the presentation layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TypeAlias

# Weights, lightest to heaviest.
REGULAR = "regular"
MEDIUM = "medium"
SEMIBOLD = "semibold"
BOLD = "bold"


@dataclass(frozen=True)
class Font:
    size: float
    weight: str = REGULAR
    monospaced: bool = False

    @property
    def is_bold(self) -> bool:
        return self.weight in (SEMIBOLD, BOLD)


@dataclass(frozen=True)
class RenderedSpan:
    """Text with a resolved font and foreground colour."""

    text: str
    font: Font
    color: str


SpanLine: TypeAlias = tuple[RenderedSpan, ...]


@dataclass(frozen=True)
class RenderedParagraph:
    lines: tuple[SpanLine, ...]


@dataclass(frozen=True)
class RenderedHeading:
    level: int
    span: RenderedSpan


@dataclass(frozen=True)
class RenderedDivider:
    span: RenderedSpan


@dataclass(frozen=True)
class RenderedCodeBlock:
    """Code body in a fixed-width font, with an optional language label."""

    label: RenderedSpan | None
    body: RenderedSpan


@dataclass(frozen=True)
class RenderedTable:
    """Table rows padded to ``column_count``; each cell is a span line.

    When ``has_header`` is set the first row is the header and a separator
    rule is drawn beneath it using ``separator``.
    """

    rows: tuple[tuple[SpanLine, ...], ...]
    has_header: bool
    column_count: int
    column_widths: tuple[int, ...]
    separator: RenderedSpan | None = None


RenderedBlock: TypeAlias = (
    RenderedParagraph | RenderedHeading | RenderedDivider | RenderedCodeBlock | RenderedTable
)


@dataclass(frozen=True)
class RenderedDocument:
    """The styled output of one render call."""

    blocks: tuple[RenderedBlock, ...] = field(default_factory=tuple)
    is_user_message: bool = False

    def plain_text(self) -> str:
        """Return the visible text, one block per paragraph."""
        return "\n\n".join(_block_text(block) for block in self.blocks)


def _line_text(line: SpanLine) -> str:
    return "".join(span.text for span in line)


def _block_text(block: RenderedBlock) -> str:
    match block:
        case RenderedParagraph(lines=lines):
            return "\n".join(_line_text(line) for line in lines)
        case RenderedHeading(span=span) | RenderedDivider(span=span):
            return span.text
        case RenderedCodeBlock(label=label, body=body):
            return f"{label.text}\n{body.text}" if label is not None else body.text
        case RenderedTable(rows=rows):
            return "\n".join(" | ".join(_line_text(cell) for cell in row) for row in rows)
    return ""
