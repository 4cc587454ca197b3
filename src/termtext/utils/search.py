"""
Search functionality for documents.
"""

import logging
import re
from typing import List, Match, Optional, Pattern, Tuple

from ..core.document import Document, Position

logger = logging.getLogger(__name__)

SEARCH_TYPES = ('text', 'regex', 'wildcard')


class SearchResult:
    """Represents a search result with position and match information."""

    def __init__(self, line: int, char: int, length: int, match: str):
        self.line = line
        self.char = char
        self.length = length
        self.match = match

    @property
    def position(self) -> Position:
        return Position(self.line, self.char)

    def __repr__(self) -> str:
        return f"SearchResult(line={self.line}, char={self.char}, match={self.match!r})"


def wildcard_to_regex(pattern: str) -> str:
    """
    Translate a wildcard pattern into a regular expression.

    ``*`` stands for any number of characters (including zero) and ``?``
    stands for exactly one character.
    """

    regex_pattern = ""
    for c in pattern:
        if c == '*':
            regex_pattern += ".*"
            continue

        if c == '?':
            regex_pattern += "."
            continue

        regex_pattern += re.escape(c)

    return regex_pattern


class SearchEngine:
    """Finds and replaces text within the lines of a document."""

    def __init__(self, document: Document) -> None:
        self.document = document
        self.last_search: Optional[Tuple[str, str, bool]] = None

    def _compile(self, pattern: str, search_type: str, case_sensitive: bool) -> Optional[Pattern]:
        """Compile a search pattern, or return None if it is not a valid regex."""

        if search_type not in SEARCH_TYPES:
            raise ValueError(f"Unknown search type {search_type!r}")

        flags = 0 if case_sensitive else re.IGNORECASE

        if search_type == 'text':
            return re.compile(re.escape(pattern), flags)

        if search_type == 'wildcard':
            return re.compile(wildcard_to_regex(pattern), flags)

        try:
            return re.compile(pattern, flags)
        except re.error as e:
            logger.warning("Invalid regular expression %r: %s", pattern, e)

        return None

    @staticmethod
    def _matches(regex: Pattern, text: str, begin: int = 0) -> List[Match]:
        return [m for m in regex.finditer(text, begin) if m.end() > m.start()]

    def find_next(self, pattern: str, search_type: str = 'text',
                  case_sensitive: bool = False, start: Optional[Position] = None) -> Optional[SearchResult]:
        """
        Find the next occurrence of a pattern.

        Args:
            pattern (str): The pattern to search for
            search_type (str): One of 'text', 'regex', or 'wildcard'
            case_sensitive (bool): Whether to perform case-sensitive search
            start (Position): Position to start searching from (defaults to the cursor)

        Returns:
            Optional[SearchResult]: The search result if found
        """

        if not pattern:
            return None

        self.last_search = (pattern, search_type, case_sensitive)

        regex = self._compile(pattern, search_type, case_sensitive)
        if regex is None:
            return None

        if start is None:
            start = self.document.cursor

        lines = self.document.lines
        for line_index in range(start.line, len(lines)):
            begin = start.char if line_index == start.line else 0
            for match in regex.finditer(lines[line_index].text, begin):
                if match.end() > match.start():
                    return SearchResult(line_index, match.start(), match.end() - match.start(), match.group())

        return None

    def find_previous(self) -> Optional[SearchResult]:
        """Find the previous occurrence of the last search before the cursor."""

        if not self.last_search:
            return None

        pattern, search_type, case_sensitive = self.last_search
        regex = self._compile(pattern, search_type, case_sensitive)
        if regex is None:
            return None

        cursor = self.document.cursor
        for line_index in range(cursor.line, -1, -1):
            text = self.document.lines[line_index].text
            limit = cursor.char if line_index == cursor.line else len(text)

            candidates = [m for m in self._matches(regex, text) if m.start() < limit]
            if candidates:
                match = candidates[-1]
                return SearchResult(line_index, match.start(), match.end() - match.start(), match.group())

        return None

    def find_all(self, pattern: str, search_type: str = 'text',
                 case_sensitive: bool = False) -> List[SearchResult]:
        """
        Find all occurrences of a pattern.

        Args:
            pattern (str): The pattern to search for
            search_type (str): One of 'text', 'regex', or 'wildcard'
            case_sensitive (bool): Whether to perform case-sensitive search

        Returns:
            List[SearchResult]: All search results found
        """

        if not pattern:
            return []

        self.last_search = (pattern, search_type, case_sensitive)

        regex = self._compile(pattern, search_type, case_sensitive)
        if regex is None:
            return []

        results = []
        for line_index, line in enumerate(self.document.lines):
            for match in self._matches(regex, line.text):
                results.append(SearchResult(line_index, match.start(), match.end() - match.start(), match.group()))

        return results

    def replace_next(self, pattern: str, replacement: str,
                     search_type: str = 'text', case_sensitive: bool = False) -> bool:
        """
        Replace the next occurrence of a pattern after the cursor.

        The cursor is left after the replacement, so repeated calls walk
        through the document.

        Returns:
            bool: True if a replacement was made
        """

        result = self.find_next(pattern, search_type, case_sensitive)
        if not result:
            return False

        self.document.replace(result.line, result.char, result.char + result.length, replacement)
        return True

    def replace_all(self, pattern: str, replacement: str,
                    search_type: str = 'text', case_sensitive: bool = False) -> int:
        """
        Replace all occurrences of a pattern in the document.

        Returns:
            int: Number of replacements made
        """

        self.document.move_to_document_start()

        count = 0
        while self.replace_next(pattern, replacement, search_type, case_sensitive):
            count += 1

        return count
