"""
Command line entry point: render a window of a file the way an editor would show it.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .core.document import Document
from .core.errors import DocumentError
from .core.line import Line


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="termtext",
        description="termtext - render a viewport of a text file"
    )
    parser.add_argument("file", type=str, help="File to open")
    parser.add_argument("--width", type=int, default=80, help="Viewport width in columns")
    parser.add_argument("--height", type=int, default=24, help="Viewport height in rows")
    parser.add_argument("--line", type=int, default=1, help="Line to place the cursor on (1-based)")
    parser.add_argument("--column", type=int, default=1, help="Character to place the cursor on (1-based)")
    parser.add_argument("--tab-width", type=int, default=Line.DEFAULT_TAB_WIDTH, help="Columns per tab")
    parser.add_argument("--info", action="store_true", help="Print the detected file format")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the application."""

    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        doc = Document.open((args.width, args.height), args.file, tab_width=args.tab_width)
        doc.set_cursor(args.line - 1, args.column - 1)
    except DocumentError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.info:
        info = doc.info
        indent = "tabs" if info.indent.uses_tabs else f"{info.indent.width} spaces"
        print(f"file: {info.path}")
        print(f"language: {doc.language or 'unknown'}")
        print(f"lines: {len(doc.lines)}")
        print(f"line endings: {info.line_ending.name}")
        print(f"indent: {indent}")

    border = "+" + "-" * doc.size.width + "+"
    print(border)
    for row in doc.visible_lines():
        print(f"|{row}|")
    print(border)

    row, column = doc.cursor_screen_position()
    print(f"cursor: line {doc.cursor.line + 1}, char {doc.cursor.char + 1} (screen {row}, {column})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
