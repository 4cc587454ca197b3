"""
termtext - a viewport-aware, Unicode-width-correct text buffer for terminal editors.
"""

from .core import (
    Boundary,
    Direction,
    Document,
    DocumentError,
    DocumentIOError,
    InvalidRange,
    Line,
    OutOfRange,
    Position,
    Size,
    language_for_extension,
)
from .utils import SearchEngine

__version__ = "0.1.0"

__all__ = [
    'Boundary',
    'Direction',
    'Document',
    'DocumentError',
    'DocumentIOError',
    'InvalidRange',
    'Line',
    'OutOfRange',
    'Position',
    'Size',
    'language_for_extension',
    'SearchEngine',
]
