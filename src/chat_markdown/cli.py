"""CLI entry point and subcommand definitions."""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path

from rich.console import Console

from chat_markdown.config import ConfigError, StyleConfig, get_config_path, load_style_config
from chat_markdown.console import document_to_renderable
from chat_markdown.renderer import render


def _read_message(source: str) -> str:
    """Read message text from a file path, or stdin for ``-``."""
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.is_file():
        print(f"No such file: {source}", file=sys.stderr)
        sys.exit(1)
    return path.read_text()


def _load_style(args: argparse.Namespace) -> tuple[StyleConfig, Path]:
    """Load the style config, exiting with a message if it is invalid."""
    path: Path = args.style if args.style is not None else get_config_path()
    try:
        return load_style_config(path), path
    except ConfigError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)


def _cmd_render(args: argparse.Namespace) -> None:
    """Render a message to the terminal, or as JSON."""
    text = _read_message(args.file)
    style, _path = _load_style(args)
    document = render(text, args.user, style)
    if args.json:
        print(json.dumps(dataclasses.asdict(document), indent=2, ensure_ascii=False))
        return
    Console().print(document_to_renderable(document))


def _cmd_preview(args: argparse.Namespace) -> None:
    """Open the TUI preview.

    Imports are deferred to avoid loading Textual for CLI-only commands.
    """
    from chat_markdown.tui.app import PreviewApp  # noqa: PLC0415

    text = _read_message(args.file)
    style, path = _load_style(args)
    app = PreviewApp(
        text,
        is_user_message=args.user,
        stream=args.stream,
        chunk_size=args.chunk_size,
        style=style,
        style_path=path,
    )
    app.run()


def _cmd_config(args: argparse.Namespace) -> None:
    """Show the style config path and the effective font sizes."""
    style, path = _load_style(args)
    status = "" if path.exists() else " (not found, using defaults)"
    print(f"Config: {path}{status}")
    for key, value in style.as_dict().items():
        print(f"  {key:<20} {value:g}")


def main(argv: list[str] | None = None) -> None:
    """Parse arguments and dispatch to the appropriate subcommand."""
    parser = argparse.ArgumentParser(
        prog="chat-markdown",
        description="Render streaming chat Markdown as styled text",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--style", type=Path, help="Path to style.toml")
    subparsers = parser.add_subparsers(dest="command")

    # render
    render_parser = subparsers.add_parser("render", help="Render a message file")
    render_parser.add_argument("file", help="Message file, or - for stdin")
    render_parser.add_argument("--user", action="store_true", help="Style as a user message")
    render_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # preview
    preview_parser = subparsers.add_parser("preview", help="Preview a message in the TUI")
    preview_parser.add_argument("file", help="Message file, or - for stdin")
    preview_parser.add_argument("--user", action="store_true", help="Style as a user message")
    preview_parser.add_argument(
        "--stream", action="store_true", help="Replay the message chunk by chunk"
    )
    preview_parser.add_argument(
        "--chunk-size",
        type=int,
        default=4,
        help="Characters per streamed chunk (default: 4)",
    )

    # config
    subparsers.add_parser("config", help="Show style configuration")

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    if args.command is None:
        parser.print_help()
        return

    dispatch = {
        "render": _cmd_render,
        "preview": _cmd_preview,
        "config": _cmd_config,
    }
    dispatch[args.command](args)
