"""Command-line front door for quickswitch.

Parses CLI options, configures logging, and resolves the starting directory.
Then dispatches into the interactive navigator session.
"""

from __future__ import annotations

import argparse
import shutil
import sys
from pathlib import Path

from loguru import logger

from .entries.types import KIND_DIRECTORY, KIND_FILE, KIND_OTHER, KIND_SYMLINK, Entry
from .errors import QuickSwitchError
from .logging_config import configure_logging
from .preview.dispatch import PreviewOptions, build_preview
from .preview.text import DEFAULT_STYLE
from .render.preview import preview_lines
from .render.theme import theme_for
from .runtime import SessionOptions, run_session
from .runtime.handoff import directory_for, write_handoff
from .shell_init import SUPPORTED_SHELLS, init_script


def _entry_for_path(path: Path) -> Entry:
    if path.is_symlink():
        kind = KIND_SYMLINK
    elif path.is_dir():
        kind = KIND_DIRECTORY
    elif path.is_file():
        kind = KIND_FILE
    else:
        kind = KIND_OTHER
    return Entry(name=path.name, path=path, kind=kind)


def render_preview_text(path: Path, style: str, no_color: bool, max_cols: int, max_rows: int = 200) -> str:
    """Render preview-pane rows for ``path`` as plain output lines."""
    payload = build_preview(_entry_for_path(path), PreviewOptions(style=style, colorize=not no_color))
    rows = preview_lines(payload, max_cols, max_rows, colorize=not no_color, theme=theme_for(not no_color))
    out: list[str] = []
    for row in rows:
        out.append(row)
        if "\033" in row:
            out.append("\033[0m")
        out.append("\n")
    return "".join(out)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quickswitch",
        description="Browse, filter, and preview directories, then cd into the chosen one.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Starting directory. Defaults to current directory.")
    parser.add_argument("--output-file", metavar="FILE", help="Write the chosen directory to FILE instead of stdout.")
    parser.add_argument("--history", action="store_true", help="Start in history mode.")
    parser.add_argument("--init", metavar="SHELL", choices=SUPPORTED_SHELLS, help="Print shell integration and exit.")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv, -vvv).")
    parser.add_argument("--log-file", metavar="FILE", help="Append logs to FILE instead of a temp file.")
    parser.add_argument("--style", default=DEFAULT_STYLE, help="Pygments style name for text previews.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--preview", metavar="PATH", help="Print the preview for PATH and exit.")
    return parser


def main(default_path: Path | None = None, argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run the navigator.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used. A file path starts the session in its parent directory.
    """
    args = build_parser().parse_args(argv)

    if args.init is not None:
        sys.stdout.write(init_script(args.init))
        return

    try:
        log_path = configure_logging(args.verbose, Path(args.log_file) if args.log_file else None)
    except OSError as exc:
        raise SystemExit(f"Cannot open log file: {exc}") from exc
    if log_path is not None:
        logger.info("logging to {}", log_path)

    if args.preview is not None:
        if args.path is not None:
            raise SystemExit("Cannot combine positional path with --preview.")
        preview_path = Path(args.preview)
        if not preview_path.exists() and not preview_path.is_symlink():
            raise SystemExit(f"Path not found: {preview_path}")
        max_cols = max(1, shutil.get_terminal_size((80, 24)).columns)
        sys.stdout.write(render_preview_text(preview_path, args.style, args.no_color, max_cols))
        return

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path).expanduser() if args.path else default_path
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    start = directory_for(path)
    output_file = Path(args.output_file) if args.output_file else None

    options = SessionOptions(
        start=start,
        output_file=output_file,
        start_in_history=args.history,
        style=args.style,
        colorize=not args.no_color,
    )
    try:
        if not (sys.stdin.isatty() and sys.stdout.isatty()):
            logger.info("not attached to a terminal; handing off {}", start)
            write_handoff(start, output_file)
            return
        run_session(options)
    except QuickSwitchError as exc:
        raise SystemExit(f"quickswitch: {exc.status_text}") from exc


if __name__ == "__main__":
    main()
