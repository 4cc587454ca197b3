"""
File format detection: line endings and indentation style.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional

DEFAULT_INDENT_WIDTH = 4


class LineEnding(Enum):
    """Line terminator used by a file."""

    UNIX = "\n"
    DOS = "\r\n"

    @property
    def terminator(self) -> str:
        return self.value


@dataclass(frozen=True)
class IndentStyle:
    """Indentation captured from a file: tabs, or a fixed number of spaces."""

    kind: str = "spaces"
    width: int = DEFAULT_INDENT_WIDTH

    TABS = "tabs"
    SPACES = "spaces"

    @classmethod
    def tabs(cls) -> 'IndentStyle':
        return cls(cls.TABS, 1)

    @classmethod
    def spaces(cls, width: int = DEFAULT_INDENT_WIDTH) -> 'IndentStyle':
        return cls(cls.SPACES, width)

    @property
    def uses_tabs(self) -> bool:
        return self.kind == self.TABS

    @property
    def unit(self) -> str:
        """Text inserted for one level of indentation."""

        if self.uses_tabs:
            return '\t'

        return ' ' * self.width


@dataclass
class FileInfo:
    """Format metadata captured when a file is opened and reapplied when it is saved."""

    path: Optional[str] = None
    line_ending: LineEnding = LineEnding.UNIX
    indent: IndentStyle = field(default_factory=IndentStyle)
    tab_width: int = DEFAULT_INDENT_WIDTH


def detect_line_ending(text: str) -> LineEnding:
    """Detect the line ending from the first terminator in the text."""

    position = text.find('\n')
    if position > 0 and text[position - 1] == '\r':
        return LineEnding.DOS

    return LineEnding.UNIX


def split_lines(text: str) -> List[str]:
    """
    Split raw text into lines without their terminators.

    Both ``\\n`` and ``\\r\\n`` end a line. A trailing terminator produces a
    final empty line so that joining the result restores the text.
    """

    pieces = text.split('\n')
    lines = [piece[:-1] if piece.endswith('\r') else piece for piece in pieces[:-1]]
    lines.append(pieces[-1])

    return lines


def detect_indent(lines: Iterable[str]) -> IndentStyle:
    """
    Detect the dominant indentation style of a file.

    Args:
        lines: Lines of the file, without terminators

    Returns:
        Tabs when most indented lines start with a tab, otherwise spaces
        with the smallest indentation found (4 when nothing is indented)
    """

    tab_lines = 0
    space_widths: List[int] = []

    for line in lines:
        stripped = line.lstrip(' \t')
        if not stripped or stripped == line:
            continue

        if line[0] == '\t':
            tab_lines += 1
            continue

        space_widths.append(len(line) - len(line.lstrip(' ')))

    if tab_lines > len(space_widths):
        return IndentStyle.tabs()

    if space_widths:
        return IndentStyle.spaces(min(space_widths))

    return IndentStyle.spaces()
