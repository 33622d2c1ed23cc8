"""Block classification: turn a message body into ordered content blocks.

The scanner is single-pass and greedy.  It is in exactly one of three states
(normal text, inside a fenced code block, inside a run of table lines) and
keeps one pending accumulator per state, flushed when the state changes or the
input ends.  Unterminated fences and table runs are closed at end of input.
"""

from __future__ import annotations

import enum
import re

from chat_markdown.blocks import CodeBlock, ContentBlock, Divider, Heading, Paragraph, Table
from chat_markdown.inline import strip_bold_markers
from chat_markdown.table import is_table_line, parse_table

DIVIDER_MARKER = "<hr>"
BULLET = "•"
MIN_TABLE_LINES = 2

_DIVIDER_RE = re.compile(r"^-{3,}$|^\*{3,}$|^_{3,}$", re.MULTILINE)
_UNORDERED_ITEM_RE = re.compile(r"^[ \t]*[-*][ \t]+(.+)$", re.MULTILINE)
_ORDERED_ITEM_RE = re.compile(r"^[ \t]*(\d+)\.[ \t]+(.+)$", re.MULTILINE)
_HEADING_RE = re.compile(r"^(#{1,6}) (.*)$")
_FENCE_PREFIX = "```"


class ScanState(enum.Enum):
    NORMAL = "normal"
    IN_FENCE = "in_fence"
    IN_TABLE_RUN = "in_table_run"


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def preprocess(text: str) -> str:
    """Normalize line endings, mark dividers and flatten list items.

    List structure is not kept: ``- item`` becomes ``• item`` and
    ``  3.  item`` becomes ``3. item``.
    """
    text = normalize_newlines(text)
    text = _DIVIDER_RE.sub(DIVIDER_MARKER, text)
    text = _UNORDERED_ITEM_RE.sub(rf"{BULLET} \1", text)
    return _ORDERED_ITEM_RE.sub(r"\1. \2", text)


def classify(text: str) -> list[ContentBlock]:
    """Preprocess *text* and split it into content blocks."""
    return classify_lines(preprocess(text).split("\n"))


def is_fence_line(line: str) -> bool:
    return line.strip().startswith(_FENCE_PREFIX)


class _Scanner:
    """Line-by-line state machine behind ``classify_lines``."""

    def __init__(self) -> None:
        self.blocks: list[ContentBlock] = []
        self.state = ScanState.NORMAL
        self._paragraph: list[str] = []
        self._fence_language = ""
        self._fence_body: list[str] = []
        self._table_run: list[str] = []

    def feed(self, line: str) -> None:
        if self.state is ScanState.IN_FENCE:
            if is_fence_line(line):
                self._flush_fence()
            else:
                self._fence_body.append(line)
            return

        if self.state is ScanState.IN_TABLE_RUN:
            if is_table_line(line) and not is_fence_line(line):
                self._table_run.append(line)
                return
            self._flush_table_run()

        if is_fence_line(line):
            self._flush_paragraph()
            self._fence_language = line.strip()[len(_FENCE_PREFIX) :].strip("`").strip()
            self.state = ScanState.IN_FENCE
        elif is_table_line(line):
            self._table_run = [line]
            self.state = ScanState.IN_TABLE_RUN
        else:
            self._classify_line(line)

    def finish(self) -> list[ContentBlock]:
        if self.state is ScanState.IN_FENCE:
            self._flush_fence()
        elif self.state is ScanState.IN_TABLE_RUN:
            self._flush_table_run()
        self._flush_paragraph()
        return self.blocks

    def _classify_line(self, line: str) -> None:
        if line.strip() == DIVIDER_MARKER:
            self._flush_paragraph()
            self.blocks.append(Divider())
            return

        heading = _HEADING_RE.match(line)
        if heading:
            self._flush_paragraph()
            text = strip_bold_markers(heading.group(2)).strip()
            self.blocks.append(Heading(level=len(heading.group(1)), text=text))
            return

        if not line.strip():
            self._flush_paragraph()
            return

        self._paragraph.append(line)

    def _flush_paragraph(self) -> None:
        if self._paragraph:
            self.blocks.append(Paragraph(tuple(self._paragraph)))
            self._paragraph = []

    def _flush_fence(self) -> None:
        body = "\n".join(self._fence_body)
        self.blocks.append(CodeBlock(language=self._fence_language, body=body))
        self._fence_language = ""
        self._fence_body = []
        self.state = ScanState.NORMAL

    def _flush_table_run(self) -> None:
        run = self._table_run
        self._table_run = []
        self.state = ScanState.NORMAL
        if len(run) >= MIN_TABLE_LINES:
            self._flush_paragraph()
            self.blocks.append(Table(parse_table(run)))
            return
        # A lone pipe line is not a table.
        for line in run:
            self._classify_line(line)


def classify_lines(lines: list[str]) -> list[ContentBlock]:
    """Classify already-preprocessed lines into content blocks."""
    scanner = _Scanner()
    for line in lines:
        scanner.feed(line)
    return scanner.finish()
