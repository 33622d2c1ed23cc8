"""Shared fixtures: sample chat messages and style configs."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from chat_markdown.config import StyleConfig

if TYPE_CHECKING:
    from pathlib import Path


SAMPLE_ASSISTANT_MESSAGE = """\
# Release notes

Here is what **changed** in this version:

- faster startup
- fewer **crashes**

---

| Platform | Status |
|----------|--------|
| iOS | **done** |
| Android |

```python
def greet(name):
    return f"hi {name}"
```

Thanks!"""

# Wraps a fenced block around two consecutive pipe lines.
PIPES_IN_CODE_MESSAGE = "intro\n```\na | b\nc | d\n```"

ADVERSARIAL_INPUTS = [
    "",
    "   \n\t  \n",
    "```",
    "``````",
    "```py\nx=1",
    "|",
    "||||",
    "| a |\n",
    "**",
    "a**b",
    "**a**b**",
    "####### x",
    "#",
    "|---|",
    "\r\n\r\r\n",
    "- \n* \n1. ",
    "```\n| a |\n| b |",
    "| a |\n```\n| b |",
    "\x00\x01\x02 binary-ish �",
    "<hr>",
    "pre```js\ncode()\n```post```",
]


@pytest.fixture
def style() -> StyleConfig:
    """Default style configuration."""
    return StyleConfig()


@pytest.fixture
def style_file(tmp_path: Path) -> Path:
    """Write a style.toml overriding a couple of sizes."""
    path = tmp_path / "style.toml"
    path.write_text("[fonts]\nheading1_font_size = 30\ncode_font_size = 12\n")
    return path
