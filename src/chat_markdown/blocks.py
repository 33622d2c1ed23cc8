"""Content block types produced by classification."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TypeAlias

from chat_markdown.table import TableModel


@dataclass(frozen=True)
class Paragraph:
    """One or more consecutive plain lines."""

    lines: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Heading:
    """A heading line with bold markers already stripped."""

    level: int  # 1-6
    text: str


@dataclass(frozen=True)
class Divider:
    """A horizontal rule."""


@dataclass(frozen=True)
class CodeBlock:
    """A fenced code region."""

    language: str
    body: str


@dataclass(frozen=True)
class Table:
    """A run of two or more pipe-delimited lines."""

    model: TableModel


@dataclass(frozen=True)
class TextSegment:
    """Verbatim text between fenced code regions."""

    text: str


ContentBlock: TypeAlias = Paragraph | Heading | Divider | CodeBlock | Table
