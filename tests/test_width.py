"""Test character display widths."""

from termtext.core.width import char_width, text_width


def test_ascii_is_single_width():
    """Plain ASCII characters occupy one column."""
    assert char_width('a') == 1
    assert char_width(' ') == 1
    assert char_width('~') == 1


def test_east_asian_wide_is_double_width():
    """CJK ideographs occupy two columns."""
    assert char_width('好') == 2
    assert char_width('船') == 2


def test_cuneiform_is_single_width():
    """Wide-looking characters outside the East-Asian wide ranges stay single width."""
    assert char_width('𒌧') == 1


def test_control_and_combining_are_zero_width():
    """Control characters and combining marks take no columns."""
    assert char_width('\t') == 0
    assert char_width('\x1b') == 0
    assert char_width('\x00') == 0
    assert char_width('\u0301') == 0


def test_text_width():
    """Width of a string is the sum of its characters."""
    assert text_width("") == 0
    assert text_width("a") == 1
    assert text_width("好") == 2
    assert text_width("好a好") == 5
