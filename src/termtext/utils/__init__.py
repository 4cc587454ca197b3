"""
Utility package for document support functions.
"""

from .search import SearchEngine, SearchResult, wildcard_to_regex

__all__ = [
    'SearchEngine',
    'SearchResult',
    'wildcard_to_regex',
]
