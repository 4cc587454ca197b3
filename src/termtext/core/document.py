"""
Document module: the lines of a file, a cursor and a scrolling viewport.
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import List, NamedTuple, Optional, Tuple, Union

from .errors import DocumentError, DocumentIOError, OutOfRange
from .fileformat import FileInfo, detect_indent, detect_line_ending, split_lines
from .language import detect_language
from .line import Line

logger = logging.getLogger(__name__)


class Direction(Enum):
    """Direction of a cursor movement."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


def _as_direction(direction: Union[Direction, str]) -> Direction:
    try:
        return Direction(direction)
    except ValueError:
        raise OutOfRange(f"unknown direction {direction!r}") from None


class Status(Enum):
    """Outcome of a single cursor step."""

    NONE = "none"
    START_OF_LINE = "start_of_line"
    END_OF_LINE = "end_of_line"
    START_OF_DOCUMENT = "start_of_document"
    END_OF_DOCUMENT = "end_of_document"


class DocumentState(Enum):
    """Lifecycle of a document."""

    UNINITIALIZED = "uninitialized"
    LOADED = "loaded"
    EDITING = "editing"
    SAVED = "saved"
    CLOSED = "closed"


class Position(NamedTuple):
    """A cursor position as (line index, character index)."""

    line: int = 0
    char: int = 0


@dataclass(frozen=True)
class Size:
    """Size of the viewport in terminal columns and rows."""

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise OutOfRange(f"viewport size must be positive, got {self.width}x{self.height}")


SizeLike = Union[Size, Tuple[int, int]]


def _as_size(size: SizeLike) -> Size:
    if isinstance(size, Size):
        return size

    width, height = size
    return Size(width, height)


@dataclass(frozen=True)
class Insert:
    """Insert a character at a position."""

    position: Position
    char: str


@dataclass(frozen=True)
class Remove:
    """Remove the character at a position. ``char`` is the character being removed."""

    position: Position
    char: str


@dataclass(frozen=True)
class InsertLine:
    """Insert a line of text before a line index."""

    index: int
    text: str = ""


@dataclass(frozen=True)
class RemoveLine:
    """Remove the line at an index. ``text`` is the text being removed."""

    index: int
    text: str = ""


@dataclass(frozen=True)
class SplitDown:
    """Cut a line at a position and move the second half onto a new line below."""

    position: Position


@dataclass(frozen=True)
class SpliceUp:
    """Join the line below a position onto the end of the position's line."""

    position: Position


Event = Union[Insert, Remove, InsertLine, RemoveLine, SplitDown, SpliceUp]


class Document:
    """
    A text buffer with a cursor and a viewport onto it.

    The document always holds at least one line. The cursor is kept within
    the buffer and the viewport is scrolled so the cursor stays visible
    after every operation that moves it.
    """

    LANGUAGE_SAMPLE_LINES = 50

    def __init__(self, size: SizeLike, tab_width: int = Line.DEFAULT_TAB_WIDTH) -> None:
        self.size = _as_size(size)
        self.info = FileInfo(tab_width=tab_width)
        self.lines: List[Line] = [Line("", tab_width)]
        self.cursor = Position()
        self.offset_x = 0
        self.offset_y = 0
        self.modified = False
        self.state = DocumentState.UNINITIALIZED
        self._desired_column: Optional[int] = None

    @classmethod
    def new(cls, size: SizeLike, tab_width: int = Line.DEFAULT_TAB_WIDTH) -> 'Document':
        """Create an empty, unnamed document."""

        document = cls(size, tab_width)
        document.load_text("")
        return document

    @classmethod
    def open(cls, size: SizeLike, path: str, tab_width: int = Line.DEFAULT_TAB_WIDTH) -> 'Document':
        """
        Open a file into a new document.

        Args:
            size: Viewport size as a Size or a (width, height) tuple
            path: Path of the file to read
            tab_width: Number of columns a tab character occupies

        Returns:
            The loaded document, with the cursor at the start of the file

        Raises:
            DocumentIOError: If the file cannot be read or is not valid UTF-8
        """

        try:
            with open(path, 'r', encoding='utf-8', newline='') as f:
                raw = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentIOError(path, str(e)) from e

        document = cls(size, tab_width)
        document.load_text(raw, path)

        logger.debug(
            "Opened %s: %d lines, %s line endings, %s indentation",
            path, len(document.lines), document.info.line_ending.name, document.info.indent.kind
        )
        return document

    def load_text(self, text: str, path: Optional[str] = None) -> None:
        """Replace the contents of the document with raw text and detect its format."""

        if self.state is DocumentState.CLOSED:
            raise DocumentError("document is closed")

        raw_lines = split_lines(text)
        tab_width = self.info.tab_width

        self.info = FileInfo(
            path=path,
            line_ending=detect_line_ending(text),
            indent=detect_indent(raw_lines),
            tab_width=tab_width,
        )
        self.lines = [Line(raw, tab_width) for raw in raw_lines]
        self.cursor = Position()
        self.offset_x = 0
        self.offset_y = 0
        self.modified = False
        self._desired_column = None
        self.state = DocumentState.LOADED

    def save(self, path: Optional[str] = None) -> None:
        """
        Save the document, using the line endings it was loaded with.

        Saving to a new path makes it the document's file name. Use
        save_as to write a copy instead.

        Args:
            path: Optional path to save to. If None, uses the path the
                document was opened from.

        Raises:
            DocumentIOError: If there is no path or the file cannot be written
        """

        self._require_loaded()

        target = path or self.info.path
        if not target:
            raise DocumentIOError(None, "no file name for this document")

        self._write(target)

        self.info.path = target
        self.modified = False
        for line in self.lines:
            line.modified = False

        self.state = DocumentState.SAVED
        logger.debug("Saved %s (%d lines)", target, len(self.lines))

    def save_as(self, path: str) -> None:
        """
        Write a copy of the document to another file.

        The document keeps its own file name and modified flag.

        Raises:
            DocumentIOError: If the file cannot be written
        """

        self._require_loaded()
        self._write(path)
        logger.debug("Saved a copy to %s (%d lines)", path, len(self.lines))

    def close(self) -> None:
        """Close the document. Further edits are rejected."""

        self.state = DocumentState.CLOSED

    def render(self) -> str:
        """Get the whole document as raw text."""

        return self.info.line_ending.terminator.join(line.text for line in self.lines)

    @property
    def language(self) -> Optional[str]:
        """Language name of the document, for display purposes."""

        sample = "\n".join(line.text for line in self.lines[:self.LANGUAGE_SAMPLE_LINES])
        return detect_language(self.info.path, sample)

    @property
    def filename(self) -> Optional[str]:
        if not self.info.path:
            return None

        return os.path.basename(self.info.path)

    def line(self, index: int) -> Line:
        """Get the line at an index."""

        if not 0 <= index < len(self.lines):
            raise OutOfRange(f"line {index} in a document of {len(self.lines)} lines")

        return self.lines[index]

    @property
    def current_line(self) -> Line:
        return self.lines[self.cursor.line]

    @property
    def display_column(self) -> int:
        """Display column of the cursor within its line."""

        return self.current_line.display_column(self.cursor.char)

    @property
    def viewport(self) -> Tuple[int, int, int, int]:
        """The viewport as (offset x, offset y, width, height)."""

        return self.offset_x, self.offset_y, self.size.width, self.size.height

    def cursor_screen_position(self) -> Tuple[int, int]:
        """Get the (row, column) of the cursor relative to the viewport."""

        return self.cursor.line - self.offset_y, self.display_column - self.offset_x

    def resize(self, width: int, height: int) -> None:
        """Change the viewport size, keeping the cursor in view."""

        self.size = Size(width, height)
        self._scroll_to_cursor()

    def visible_lines(self) -> List[str]:
        """
        Render the viewport.

        Returns:
            Exactly ``height`` rows, each exactly ``width`` columns wide.
            Rows past the end of the document are blank.
        """

        width, height = self.size.width, self.size.height
        rows = []

        for row in range(height):
            index = self.offset_y + row
            if index < len(self.lines):
                rows.append(self.lines[index].substring_by_display_columns(self.offset_x, width))
            else:
                rows.append(" " * width)

        return rows

    # Cursor movement

    def set_cursor(self, line: int, char: int) -> None:
        """Move the cursor to a line and character index."""

        self._require_loaded()
        self._check_position(line, char)

        self.cursor = Position(line, char)
        self._desired_column = None
        self._scroll_to_cursor()

    def move_cursor(self, direction: Direction, amount: int = 1) -> None:
        """
        Move the cursor a number of characters or lines.

        Vertical moves keep the display column the cursor started from and
        snap to the nearest character boundary on the target line.

        Raises:
            OutOfRange: If the target position lies outside the document
        """

        self._require_loaded()
        direction = _as_direction(direction)

        if amount < 0:
            raise OutOfRange(f"negative movement {amount}")

        line, char = self.cursor

        if direction is Direction.LEFT:
            self.set_cursor(line, char - amount)
            return

        if direction is Direction.RIGHT:
            self.set_cursor(line, char + amount)
            return

        if direction is Direction.UP:
            target = line - amount
        else:
            target = line + amount

        if not 0 <= target < len(self.lines):
            raise OutOfRange(f"line {target} in a document of {len(self.lines)} lines")

        column = self.display_column if self._desired_column is None else self._desired_column
        self.cursor = Position(target, self.lines[target].char_index_at(column))
        self._desired_column = column
        self._scroll_to_cursor()

    def step(self, direction: Direction) -> Status:
        """Move the cursor by one, reporting the edge of the line or document instead of failing."""

        self._require_loaded()
        direction = _as_direction(direction)
        line, char = self.cursor

        if direction is Direction.LEFT and char == 0:
            return Status.START_OF_LINE

        if direction is Direction.RIGHT and char == len(self.current_line):
            return Status.END_OF_LINE

        if direction is Direction.UP and line == 0:
            return Status.START_OF_DOCUMENT

        if direction is Direction.DOWN and line == len(self.lines) - 1:
            return Status.END_OF_DOCUMENT

        self.move_cursor(direction)
        return Status.NONE

    def move_to_line_start(self) -> None:
        self.set_cursor(self.cursor.line, 0)

    def move_to_line_end(self) -> None:
        self.set_cursor(self.cursor.line, len(self.current_line))

    def move_to_document_start(self) -> None:
        self.set_cursor(0, 0)

    def move_to_document_end(self) -> None:
        last = len(self.lines) - 1
        self.set_cursor(last, len(self.lines[last]))

    def page_up(self) -> None:
        amount = min(self.size.height, self.cursor.line)
        self.move_cursor(Direction.UP, amount)
        self.offset_y = max(0, self.offset_y - amount)
        self._scroll_to_cursor()

    def page_down(self) -> None:
        amount = min(self.size.height, len(self.lines) - 1 - self.cursor.line)
        self.move_cursor(Direction.DOWN, amount)
        self.offset_y = min(max(0, len(self.lines) - self.size.height), self.offset_y + amount)
        self._scroll_to_cursor()

    def move_word_forward(self) -> None:
        """Move to the next word boundary, or to the start of the next line."""

        line, char = self.cursor
        if char >= len(self.current_line) and line + 1 < len(self.lines):
            self.set_cursor(line + 1, 0)
            return

        self.set_cursor(line, self.current_line.next_word_boundary(char))

    def move_word_backward(self) -> None:
        """Move to the previous word boundary, or to the end of the previous line."""

        line, char = self.cursor
        if char == 0 and line > 0:
            self.set_cursor(line - 1, len(self.lines[line - 1]))
            return

        self.set_cursor(line, self.current_line.previous_word_boundary(char))

    # Editing

    def insert_char(self, ch: str) -> None:
        """Insert a character at the cursor. A newline splits the line."""

        self.insert_text(ch)

    def insert_text(self, text: str) -> None:
        """
        Insert text at the cursor and move the cursor past it.

        Carriage returns, alone or before a newline, start a new line.
        """

        self._require_loaded()
        if not text:
            return

        text = text.replace("\r\n", "\n").replace("\r", "\n")
        pieces = split_lines(text)
        line_index, char = self.cursor
        line = self.lines[line_index]

        if len(pieces) == 1:
            line.insert(char, text)
            self.cursor = Position(line_index, char + len(text))
            self._after_edit()
            return

        tail = line.split_off(char)
        line.insert(char, pieces[0])

        new_lines = [self._new_line(piece) for piece in pieces[1:]]
        last = new_lines[-1]
        end_char = len(last)
        last.append(tail)

        self.lines[line_index + 1:line_index + 1] = new_lines
        self.cursor = Position(line_index + len(new_lines), end_char)
        self._after_edit()

    def new_line(self) -> None:
        """Split the line at the cursor, carrying its indentation onto the new line."""

        self._require_loaded()
        indent = self.current_line.leading_whitespace()[:self.cursor.char]
        self.insert_text("\n" + indent)

    def insert_indent(self) -> None:
        """Insert one level of indentation in the style of the file."""

        self.insert_text(self.info.indent.unit)

    def delete_char(self) -> bool:
        """
        Delete the character under the cursor.

        At the end of a line the next line is joined onto it.

        Returns:
            bool: False if the cursor is at the end of the document
        """

        self._require_loaded()
        line_index, char = self.cursor
        line = self.lines[line_index]

        if char < len(line):
            line.remove(range(char, char + 1))
        elif line_index + 1 < len(self.lines):
            self.splice_line(line_index)
        else:
            return False

        self._after_edit()
        return True

    def backspace(self) -> bool:
        """
        Delete the character before the cursor.

        At the start of a line it is joined onto the previous line.

        Returns:
            bool: False if the cursor is at the start of the document
        """

        self._require_loaded()
        line_index, char = self.cursor

        if char > 0:
            self.lines[line_index].remove(range(char - 1, char))
            self.cursor = Position(line_index, char - 1)
        elif line_index > 0:
            self.splice_line(line_index - 1)
        else:
            return False

        self._after_edit()
        return True

    def replace(self, line: int, start: int, end: int, text: str) -> str:
        """
        Replace the characters ``start:end`` of a line with text.

        The cursor is left just after the inserted text.

        Returns:
            str: The replaced text
        """

        self._require_loaded()
        self._check_position(line, end)
        if not 0 <= start <= end:
            raise OutOfRange(f"replace {start}..{end} on line {line}")

        removed = ""
        if end > start:
            removed = self.lines[line].remove(range(start, end))

        self.cursor = Position(line, start)
        if text:
            self.insert_text(text)
        else:
            self._after_edit()

        return removed

    def insert_line(self, index: int, text: str = "") -> None:
        """Insert a new line before ``index``. The cursor stays on its text."""

        self._require_loaded()
        if not 0 <= index <= len(self.lines):
            raise OutOfRange(f"insert line {index} in a document of {len(self.lines)} lines")

        self.lines.insert(index, self._new_line(text))

        if self.cursor.line >= index:
            self.cursor = Position(self.cursor.line + 1, self.cursor.char)

        logger.debug("Inserted line %d", index)
        self._after_edit()

    def remove_line(self, index: int) -> str:
        """
        Remove a line from the document.

        Returns:
            str: The text of the removed line
        """

        self._require_loaded()
        removed = self.line(index)
        del self.lines[index]

        if not self.lines:
            self.lines.append(self._new_line(""))

        line, char = self.cursor
        if line > index:
            line -= 1
        elif line == index:
            line = min(index, len(self.lines) - 1)
            char = min(char, len(self.lines[line]))

        self.cursor = Position(line, char)

        logger.debug("Removed line %d", index)
        self._after_edit()
        return removed.text

    def splice_line(self, index: int) -> None:
        """Join line ``index + 1`` onto the end of line ``index``."""

        self._require_loaded()
        if not 0 <= index < len(self.lines) - 1:
            raise OutOfRange(f"splice line {index} in a document of {len(self.lines)} lines")

        upper = self.lines[index]
        join_at = len(upper)
        upper.append(self.lines.pop(index + 1))

        line, char = self.cursor
        if line == index + 1:
            self.cursor = Position(index, join_at + char)
        elif line > index + 1:
            self.cursor = Position(line - 1, char)

        logger.debug("Spliced line %d into line %d", index + 1, index)
        self._after_edit()

    def split_line(self, index: int, char: int) -> None:
        """Cut a line in two at a character index. The cursor stays on its text."""

        self._require_loaded()
        tail = self.line(index).split_off(char)
        self.lines.insert(index + 1, tail)

        line, cursor_char = self.cursor
        if line == index and cursor_char >= char:
            self.cursor = Position(index + 1, cursor_char - char)
        elif line > index:
            self.cursor = Position(line + 1, cursor_char)

        logger.debug("Split line %d at %d", index, char)
        self._after_edit()

    def execute(self, event: Event) -> Status:
        """
        Apply an edit event to the document.

        The cursor is moved to where the edit happened: past an inserted
        character, onto a removed character, onto an inserted line, to the
        start of a line split down and to the join point of a splice.

        Args:
            event: One of Insert, Remove, InsertLine, RemoveLine, SplitDown or SpliceUp

        Returns:
            Status: The status of the cursor after the edit

        Raises:
            OutOfRange: If the event refers to a position outside the document
        """

        self._require_loaded()

        if isinstance(event, Insert):
            self.set_cursor(*event.position)
            self.insert_char(event.char)
            return Status.NONE

        if isinstance(event, Remove):
            line, char = event.position
            self._check_position(line, char)
            if char == len(self.lines[line]):
                raise OutOfRange(f"no character at {char} on line {line}")

            self.set_cursor(line, char)
            self.delete_char()
            return Status.NONE

        if isinstance(event, InsertLine):
            self.insert_line(event.index, event.text)
            self.set_cursor(event.index, 0)
            return Status.NONE

        if isinstance(event, RemoveLine):
            self.remove_line(event.index)
            return Status.NONE

        if isinstance(event, SplitDown):
            line, char = event.position
            self.split_line(line, char)
            self.set_cursor(line + 1, 0)
            return Status.NONE

        if isinstance(event, SpliceUp):
            line, char = event.position
            self.splice_line(line)
            self.set_cursor(line, char)
            return Status.NONE

        raise TypeError(f"Unknown event {event!r}")

    # Internals

    def _new_line(self, text: str) -> Line:
        line = Line(text, self.info.tab_width)
        line.modified = True
        return line

    def _write(self, target: str) -> None:
        data = self.render()
        try:
            with open(target, 'w', encoding='utf-8', newline='') as f:
                f.write(data)
        except OSError as e:
            raise DocumentIOError(target, str(e)) from e

    def _require_loaded(self) -> None:
        if self.state is DocumentState.UNINITIALIZED:
            raise DocumentError("document has not been loaded")

        if self.state is DocumentState.CLOSED:
            raise DocumentError("document is closed")

    def _check_position(self, line: int, char: int) -> None:
        if not 0 <= line < len(self.lines):
            raise OutOfRange(f"line {line} in a document of {len(self.lines)} lines")

        if not 0 <= char <= len(self.lines[line]):
            raise OutOfRange(f"character {char} on a line of length {len(self.lines[line])}")

    def _after_edit(self) -> None:
        self.modified = True
        self.state = DocumentState.EDITING
        self._desired_column = None
        self._scroll_to_cursor()

    def _scroll_to_cursor(self) -> None:
        """Adjust the viewport offsets so the cursor is visible."""

        line, char = self.cursor
        width, height = self.size.width, self.size.height

        if line < self.offset_y:
            self.offset_y = line
        elif line >= self.offset_y + height:
            self.offset_y = line - height + 1

        current = self.lines[line]
        column = current.display_column(char)
        end = column + (max(1, current.measure(current.text[char])) if char < len(current) else 1)

        if column < self.offset_x:
            self.offset_x = column
        elif end > self.offset_x + width:
            self.offset_x = min(column, end - width)
