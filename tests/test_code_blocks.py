"""Tests for fenced code block extraction."""

from __future__ import annotations

import pytest

from chat_markdown.blocks import CodeBlock, TextSegment
from chat_markdown.code_blocks import extract_code_segments, guess_language


def test_inline_fence_between_text() -> None:
    """Text before and after a fence on the same line is kept verbatim."""
    assert extract_code_segments("pre```js\ncode()\n```post") == [
        TextSegment("pre"),
        CodeBlock(language="js", body="code()"),
        TextSegment("post"),
    ]


def test_unterminated_fence_runs_to_end() -> None:
    assert extract_code_segments("```py\nx=1") == [CodeBlock(language="py", body="x=1")]


def test_fence_without_language() -> None:
    assert extract_code_segments("intro\n```\nplain\n```\noutro") == [
        TextSegment("intro\n"),
        CodeBlock(language="", body="plain"),
        TextSegment("\noutro"),
    ]


def test_multiple_fences_keep_order() -> None:
    text = "a\n```sh\nls\n```\nb\n```js\nx()\n```"
    assert extract_code_segments(text) == [
        TextSegment("a\n"),
        CodeBlock(language="sh", body="ls"),
        TextSegment("\nb\n"),
        CodeBlock(language="js", body="x()"),
    ]


def test_unterminated_fence_after_closed_one() -> None:
    """Only the trailing unclosed fence swallows the rest of the text."""
    assert extract_code_segments("```a\n1\n```\nmid\n```b\n2") == [
        CodeBlock(language="a", body="1"),
        TextSegment("\nmid\n"),
        CodeBlock(language="b", body="2"),
    ]


def test_body_is_trimmed() -> None:
    assert extract_code_segments("```\n\n  x = 1  \n\n```") == [CodeBlock(language="", body="x = 1")]


def test_no_fence_is_one_segment() -> None:
    assert extract_code_segments("just text") == [TextSegment("just text")]
    assert extract_code_segments("") == []


@pytest.mark.parametrize(
    ("body", "expected"),
    [
        ("#!/usr/bin/env python\nprint(1)", "Python"),
        ("// javascript helper\nfoo()", "JavaScript"),
        ("// java\nclass A {}", "Java"),
        ("// c++17\nint main() {}", "C++"),
        ("x = 1", ""),
        ("", ""),
    ],
)
def test_guess_language(body: str, expected: str) -> None:
    assert guess_language(body) == expected
