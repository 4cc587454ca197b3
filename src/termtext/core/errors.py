"""
Error types raised by the text buffer.
"""

from typing import Optional


class DocumentError(Exception):
    """Base class for all errors raised by the buffer."""

    message = "Document error"

    def __init__(self, detail: Optional[str] = None) -> None:
        self.detail = detail
        super().__init__(f"{self.message}: {detail}" if detail else self.message)


class OutOfRange(DocumentError, IndexError):
    """A cursor position or index lies outside the buffer."""

    message = "Out of range"


class InvalidRange(DocumentError, ValueError):
    """A removal span is neither a well-formed inclusive nor exclusive span."""

    message = "Invalid range"


class DocumentIOError(DocumentError):
    """Reading or writing a file failed. The cause is chained."""

    message = "File error"

    def __init__(self, path: Optional[str], detail: Optional[str] = None) -> None:
        self.path = path
        if path and detail:
            detail = f"{path}: {detail}"
        super().__init__(detail or path)
