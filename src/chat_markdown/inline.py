"""Inline span formatting: split a line on ``**`` into plain and bold runs."""

from __future__ import annotations

from dataclasses import dataclass

BOLD_DELIMITER = "**"


@dataclass(frozen=True)
class StyledSpan:
    """A contiguous run of text sharing one style."""

    text: str
    bold: bool = False


def format_spans(line: str) -> list[StyledSpan]:
    """Split *line* into styled spans.

    Segments at odd positions after splitting on ``**`` are bold.  Bold is
    decided by position alone, so an unbalanced delimiter leaves the trailing
    text bold: ``"a**b"`` gives ``[plain "a", bold "b"]``.  Empty segments are
    dropped.
    """
    spans: list[StyledSpan] = []
    for index, part in enumerate(line.split(BOLD_DELIMITER)):
        if part:
            spans.append(StyledSpan(part, bold=index % 2 == 1))
    return spans


def strip_bold_markers(text: str) -> str:
    """Remove every ``**`` from *text* without styling anything."""
    return text.replace(BOLD_DELIMITER, "")
