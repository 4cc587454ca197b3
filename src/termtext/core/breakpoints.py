"""
Breakpoint index mapping character indices to accumulated extra display width.

A line of text is mostly made of single-column characters, so instead of
storing a column for every character the index only records the characters
whose width differs from one column. Each entry is a pair of
(character index, cumulative extra width up to and including that character),
where the extra width of a character is its display width minus one.
"""

from bisect import bisect_left, bisect_right
from enum import Enum
from typing import Callable, Iterable, Iterator, List, Optional, Tuple

from .width import char_width

Measure = Callable[[str], int]


class Boundary(Enum):
    """How a query index relates to a breakpoint recorded at that index."""

    INCLUSIVE = "inclusive"
    EXCLUSIVE = "exclusive"


class BreakpointIndex:
    """Sparse, ordered table of (char index, cumulative extra width) pairs."""

    def __init__(self, entries: Iterable[Tuple[int, int]] = ()) -> None:
        self._indices: List[int] = []
        self._extras: List[int] = []

        for char_index, extra_width in entries:
            self.add_breakpoint(char_index, extra_width)

    @classmethod
    def from_text(cls, text: str, measure: Measure = char_width) -> 'BreakpointIndex':
        """Build an index for a line of text."""

        index = cls()
        index.rebuild(text, measure)
        return index

    def extra_width_up_to(self, index: int, boundary: Boundary = Boundary.INCLUSIVE) -> int:
        """
        Get the extra display width accumulated before a character index.

        Args:
            index: Character index to query
            boundary: INCLUSIVE only considers breakpoints strictly before
                ``index``, which is the width of the text leading up to a
                cursor at ``index``. EXCLUSIVE also takes a breakpoint
                recorded at ``index`` itself into account.

        Returns:
            The cumulative extra width, or 0 when no breakpoint qualifies
        """

        if boundary is Boundary.INCLUSIVE:
            position = bisect_left(self._indices, index)
        else:
            position = bisect_right(self._indices, index)

        if not position:
            return 0

        return self._extras[position - 1]

    def add_breakpoint(self, char_index: int, extra_width: int) -> None:
        """Insert a breakpoint, overwriting the value at an existing index."""

        position = bisect_left(self._indices, char_index)
        if position < len(self._indices) and self._indices[position] == char_index:
            self._extras[position] = extra_width
            return

        self._indices.insert(position, char_index)
        self._extras.insert(position, extra_width)

    def rebuild(self, text: str, measure: Measure = char_width) -> None:
        """Recompute the whole index from a line of text."""

        self._indices = []
        self._extras = []

        cumulative = 0
        for char_index, ch in enumerate(text):
            extra = measure(ch) - 1
            if not extra:
                continue

            cumulative += extra
            self._indices.append(char_index)
            self._extras.append(cumulative)

    def splice(self, start: int, removed: int, inserted: str, measure: Measure = char_width) -> None:
        """
        Update the index in place for a single edit.

        ``removed`` characters starting at ``start`` are replaced by
        ``inserted``. Only the inserted characters are measured; breakpoints
        after the edit are shifted rather than recomputed.
        """

        low = bisect_left(self._indices, start)
        high = bisect_left(self._indices, start + removed)

        base = self._extras[low - 1] if low else 0
        removed_extra = (self._extras[high - 1] if high else 0) - base

        new_indices: List[int] = []
        new_extras: List[int] = []
        cumulative = base
        for offset, ch in enumerate(inserted):
            extra = measure(ch) - 1
            if not extra:
                continue

            cumulative += extra
            new_indices.append(start + offset)
            new_extras.append(cumulative)

        index_shift = len(inserted) - removed
        extra_shift = (cumulative - base) - removed_extra

        new_indices.extend(i + index_shift for i in self._indices[high:])
        new_extras.extend(e + extra_shift for e in self._extras[high:])

        self._indices[low:] = new_indices
        self._extras[low:] = new_extras

    @property
    def last_index(self) -> Optional[int]:
        """Character index of the last breakpoint, or None for an empty index."""

        return self._indices[-1] if self._indices else None

    @property
    def total_extra_width(self) -> int:
        """Extra width of the whole line."""

        return self._extras[-1] if self._extras else 0

    def entries(self) -> List[Tuple[int, int]]:
        return list(zip(self._indices, self._extras))

    def __iter__(self) -> Iterator[Tuple[int, int]]:
        return iter(zip(self._indices, self._extras))

    def __len__(self) -> int:
        return len(self._indices)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BreakpointIndex):
            return NotImplemented

        return self._indices == other._indices and self._extras == other._extras

    def __repr__(self) -> str:
        return f"BreakpointIndex({self.entries()!r})"
