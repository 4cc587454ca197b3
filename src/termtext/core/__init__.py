"""
Core package for the text buffer.

This package implements the data layer of a terminal text editor. It includes
the Document class that owns the lines, cursor and viewport of a file, the
Line class with its display-width BreakpointIndex, and the helpers for
character widths, file format detection and language names.
"""

from .breakpoints import Boundary, BreakpointIndex
from .document import (
    Direction,
    Document,
    DocumentState,
    Event,
    Insert,
    InsertLine,
    Position,
    Remove,
    RemoveLine,
    Size,
    SpliceUp,
    SplitDown,
    Status,
)
from .errors import DocumentError, DocumentIOError, InvalidRange, OutOfRange
from .fileformat import FileInfo, IndentStyle, LineEnding
from .language import detect_language, language_for_extension
from .line import Line
from .width import char_width, text_width

__all__ = [
    'Boundary',
    'BreakpointIndex',
    'Direction',
    'Document',
    'DocumentState',
    'Event',
    'Insert',
    'InsertLine',
    'Remove',
    'RemoveLine',
    'SpliceUp',
    'SplitDown',
    'Position',
    'Size',
    'Status',
    'DocumentError',
    'DocumentIOError',
    'InvalidRange',
    'OutOfRange',
    'FileInfo',
    'IndentStyle',
    'LineEnding',
    'detect_language',
    'language_for_extension',
    'Line',
    'char_width',
    'text_width',
]
