"""
Terminal display width of single characters.
"""

from wcwidth import wcwidth


def char_width(ch: str) -> int:
    """Get the number of terminal columns a character occupies (0, 1 or 2)."""

    width = wcwidth(ch)
    if width < 0:
        return 0

    return min(width, 2)


def text_width(text: str) -> int:
    """Get the display width of a string of characters."""

    return sum(char_width(ch) for ch in text)
