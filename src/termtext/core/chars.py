"""
Character classification used for word navigation.
"""

import unicodedata
from enum import Enum


class CharClass(Enum):
    """Coarse character classes a word boundary sits between."""

    WHITESPACE = 0
    WORD = 1
    PUNCTUATION = 2


def classify(ch: str) -> CharClass:
    """Classify a single character as whitespace, word or punctuation."""

    if ch.isspace():
        return CharClass.WHITESPACE

    if ch.isalnum() or ch == '_':
        return CharClass.WORD

    # Combining marks belong to the word they decorate
    if unicodedata.category(ch).startswith('M'):
        return CharClass.WORD

    return CharClass.PUNCTUATION


def is_control(ch: str) -> bool:
    """Check whether a character is a C0/C1 control character."""

    return unicodedata.category(ch) == 'Cc'
