"""
Line module holding the text of one logical line and its display-width index.
"""

from itertools import islice
from typing import List, Tuple, Union

from .breakpoints import Boundary, BreakpointIndex
from .chars import classify, is_control
from .errors import InvalidRange, OutOfRange
from .width import char_width

Span = Union[slice, range]


class Line:
    """A single line of a document, without its line terminator."""

    DEFAULT_TAB_WIDTH = 4

    def __init__(self, text: str = "", tab_width: int = DEFAULT_TAB_WIDTH) -> None:
        self._text = text
        self._tab_width = tab_width
        self.modified = False
        self.breakpoints = BreakpointIndex.from_text(text, self.measure)

    @property
    def text(self) -> str:
        return self._text

    @property
    def tab_width(self) -> int:
        return self._tab_width

    @tab_width.setter
    def tab_width(self, value: int) -> None:
        self._tab_width = value
        self.breakpoints.rebuild(self._text, self.measure)

    def measure(self, ch: str) -> int:
        """Get the display width of a character on this line."""

        if ch == '\t':
            return self._tab_width

        return char_width(ch)

    def display_width(self) -> int:
        """Get the number of terminal columns the whole line occupies."""

        return len(self._text) + self.breakpoints.extra_width_up_to(len(self._text), Boundary.INCLUSIVE)

    def display_column(self, char_index: int) -> int:
        """Get the display column a cursor at ``char_index`` sits on."""

        if not 0 <= char_index <= len(self._text):
            raise OutOfRange(f"character {char_index} on a line of length {len(self._text)}")

        return char_index + self.breakpoints.extra_width_up_to(char_index, Boundary.INCLUSIVE)

    def char_index_at(self, column: int) -> int:
        """
        Find the character index for a display column.

        Returns the last cursor position whose column is not past ``column``,
        so a column inside a double-width character snaps back to its start.
        """

        low, high = 0, len(self._text)
        while low < high:
            mid = (low + high + 1) // 2
            if self.display_column(mid) <= column:
                low = mid
            else:
                high = mid - 1

        return low

    def substring_by_display_columns(self, start_column: int, column_count: int) -> str:
        """
        Render a window of the line that is exactly ``column_count`` columns wide.

        Characters cut by either edge of the window are replaced by blanks,
        tabs are expanded to spaces and control characters are dropped.

        Args:
            start_column: First display column of the window
            column_count: Width of the window in columns

        Returns:
            The rendered text of the window
        """

        if start_column < 0:
            raise OutOfRange(f"column {start_column}")

        if column_count <= 0:
            return ""

        if start_column >= self.display_width():
            return " " * column_count

        char_index = self.char_index_at(start_column)
        column = self.display_column(char_index)

        pieces: List[str] = []
        used = 0
        clipped = False

        if column < start_column:
            used = min(column + self.measure(self._text[char_index]) - start_column, column_count)
            pieces.append(" " * used)
            char_index += 1
            clipped = True

        for ch in islice(self._text, char_index, None):
            width = self.measure(ch)
            if not width and (clipped or is_control(ch)):
                continue

            if used + width > column_count:
                break

            clipped = False
            used += width
            pieces.append(" " * width if ch == '\t' else ch)

        pieces.append(" " * (column_count - used))
        return "".join(pieces)

    def render_full(self) -> str:
        """Render the entire line with tabs expanded into spaces."""

        return self._text.replace('\t', " " * self._tab_width)

    def insert(self, char_index: int, text: str) -> None:
        """Insert text before the character at ``char_index``."""

        if not 0 <= char_index <= len(self._text):
            raise OutOfRange(f"insert at {char_index} on a line of length {len(self._text)}")

        if not text:
            return

        self._text = self._text[:char_index] + text + self._text[char_index:]
        self.breakpoints.splice(char_index, 0, text, self.measure)
        self._check_breakpoints()
        self.modified = True

    def remove(self, span: Span, boundary: Boundary = Boundary.EXCLUSIVE) -> str:
        """
        Remove a span of characters.

        Args:
            span: A ``slice`` or ``range`` with step 1 and both ends given
            boundary: EXCLUSIVE if the stop of the span is not removed,
                INCLUSIVE if it is

        Returns:
            The removed text
        """

        start, end = self._resolve_span(span, boundary)

        removed = self._text[start:end]
        self._text = self._text[:start] + self._text[end:]
        self.breakpoints.splice(start, end - start, "", self.measure)
        self._check_breakpoints()
        self.modified = True

        return removed

    def _check_breakpoints(self) -> None:
        last = self.breakpoints.last_index
        assert last is None or (last < len(self._text) and self.measure(self._text[last]) != 1), \
            f"breakpoint index out of step with {self._text!r}: {self.breakpoints!r}"

    def _resolve_span(self, span: Span, boundary: Boundary) -> Tuple[int, int]:
        """Validate a removal span and turn it into a half-open interval."""

        if not isinstance(boundary, Boundary):
            raise InvalidRange(f"unknown boundary {boundary!r}")

        if not isinstance(span, (slice, range)):
            raise InvalidRange(f"expected a slice or range, got {type(span).__name__}")

        if span.step not in (None, 1):
            raise InvalidRange(f"step must be 1, got {span.step}")

        start, stop = span.start, span.stop
        if not isinstance(start, int) or not isinstance(stop, int):
            raise InvalidRange("both ends of the span must be given")

        end = stop + 1 if boundary is Boundary.INCLUSIVE else stop
        if end <= start:
            raise InvalidRange(f"empty or reversed span {start}..{stop}")

        if start < 0 or end > len(self._text):
            raise OutOfRange(f"span {start}..{end} on a line of length {len(self._text)}")

        return start, end

    def split_off(self, char_index: int) -> 'Line':
        """Cut the line at ``char_index`` and return the text after it as a new line."""

        if not 0 <= char_index <= len(self._text):
            raise OutOfRange(f"split at {char_index} on a line of length {len(self._text)}")

        tail = Line(self._text[char_index:], self._tab_width)
        tail.modified = True

        if char_index < len(self._text):
            self.remove(range(char_index, len(self._text)))

        return tail

    def append(self, other: 'Line') -> None:
        """Join another line onto the end of this one."""

        self.insert(len(self._text), other.text)
        self.modified = True

    def leading_whitespace(self) -> str:
        return self._text[:len(self._text) - len(self._text.lstrip(' \t'))]

    def next_word_boundary(self, char_index: int) -> int:
        """Get the index of the next character class transition after ``char_index``."""

        length = len(self._text)
        if char_index >= length:
            return length

        char_index = max(char_index, 0)
        current = classify(self._text[char_index])
        while char_index < length and classify(self._text[char_index]) == current:
            char_index += 1

        return char_index

    def previous_word_boundary(self, char_index: int) -> int:
        """Get the index of the previous character class transition before ``char_index``."""

        if char_index <= 0:
            return 0

        char_index = min(char_index, len(self._text))
        current = classify(self._text[char_index - 1])
        while char_index > 0 and classify(self._text[char_index - 1]) == current:
            char_index -= 1

        return char_index

    def __len__(self) -> int:
        return len(self._text)

    def __str__(self) -> str:
        return self._text

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Line):
            return NotImplemented

        return self._text == other._text and self._tab_width == other._tab_width

    def __repr__(self) -> str:
        return f"Line({self._text!r})"
