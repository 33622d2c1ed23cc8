"""Fenced code extraction for messages that contain ```` ``` ```` markers."""

from __future__ import annotations

import re

from chat_markdown.blocks import CodeBlock, TextSegment

FENCE = "```"

# Opening fence, letters-only language tag, body, closing fence.
_CODE_BLOCK_RE = re.compile(r"```([A-Za-z]*)\s*(.*?)```", re.DOTALL)
# Same, but without a closing fence: runs to the end of the string.
_OPEN_CODE_BLOCK_RE = re.compile(r"```([A-Za-z]*)\s*(.*)\Z", re.DOTALL)

# Checked in order against the lower-cased first line; "javascript" must come
# before "java".
_LANGUAGE_HINTS: list[tuple[tuple[str, ...], str]] = [
    (("swift",), "Swift"),
    (("python",), "Python"),
    (("javascript",), "JavaScript"),
    (("typescript",), "TypeScript"),
    (("java",), "Java"),
    (("cpp", "c++"), "C++"),
    (("csharp", "c#"), "C#"),
]


def extract_code_segments(text: str) -> list[TextSegment | CodeBlock]:
    """Split *text* into alternating plain segments and code blocks.

    Plain text is kept verbatim and in order; empty plain segments are
    omitted.  A fence that is never closed swallows the rest of the string.
    """
    segments: list[TextSegment | CodeBlock] = []
    pos = 0
    for match in _CODE_BLOCK_RE.finditer(text):
        if match.start() > pos:
            segments.append(TextSegment(text[pos : match.start()]))
        segments.append(_code_block(match))
        pos = match.end()

    tail = text[pos:]
    fence_at = tail.find(FENCE)
    if fence_at == -1:
        if tail:
            segments.append(TextSegment(tail))
        return segments

    if fence_at > 0:
        segments.append(TextSegment(tail[:fence_at]))
    match = _OPEN_CODE_BLOCK_RE.match(tail, fence_at)
    if match is not None:
        segments.append(_code_block(match))
    return segments


def _code_block(match: re.Match[str]) -> CodeBlock:
    return CodeBlock(language=match.group(1), body=match.group(2).strip())


def guess_language(body: str) -> str:
    """Guess a display label from the first line of an untagged code body."""
    first_line = body.split("\n", 1)[0].lower()
    for keywords, label in _LANGUAGE_HINTS:
        if any(keyword in first_line for keyword in keywords):
            return label
    return ""
