"""Test searching and replacing within a document."""

import logging

import pytest

from termtext.core.breakpoints import BreakpointIndex
from termtext.core.document import Document, Position
from termtext.utils.search import SearchEngine, wildcard_to_regex


def create_engine(text):
    """Create a search engine over a loaded document."""
    doc = Document((20, 5))
    doc.load_text(text)
    return SearchEngine(doc)


def test_find_next_text():
    """Plain text search finds the next match from the cursor."""
    engine = create_engine("foo bar\nbar foo\nBAR")
    result = engine.find_next("bar")
    assert result.position == Position(0, 4)
    assert result.length == 3

    result = engine.find_next("bar", start=Position(0, 5))
    assert result.position == Position(1, 0)


def test_find_next_none():
    """Missing patterns and empty patterns give no result."""
    engine = create_engine("foo")
    assert engine.find_next("xyz") is None
    assert engine.find_next("") is None


def test_find_all_case_sensitivity():
    """Case-insensitive search is the default."""
    engine = create_engine("foo bar\nbar foo\nBAR")
    assert len(engine.find_all("bar")) == 3
    assert len(engine.find_all("bar", case_sensitive=True)) == 2


def test_regex_search():
    """Regular expressions match within lines."""
    engine = create_engine("cat\ncot\ncut")
    results = engine.find_all("c[ou]t", search_type='regex')
    assert [r.line for r in results] == [1, 2]


def test_invalid_regex_logs_warning(caplog):
    """An invalid regular expression is reported and finds nothing."""
    engine = create_engine("(abc)")
    with caplog.at_level(logging.WARNING):
        assert engine.find_next("(", search_type='regex') is None
    assert "Invalid regular expression" in caplog.text


def test_unknown_search_type():
    """Unknown search types are rejected."""
    engine = create_engine("abc")
    with pytest.raises(ValueError):
        engine.find_next("a", search_type='hex')


def test_wildcard_search():
    """Wildcards translate to regular expressions."""
    assert wildcard_to_regex("a?c*") == "a.c.*"
    assert wildcard_to_regex("a.b") == "a\\.b"

    engine = create_engine("foo.txt\nbar.py")
    result = engine.find_next("*.py", search_type='wildcard')
    assert result.position == Position(1, 0)
    assert result.match == "bar.py"


def test_find_previous():
    """Previous search walks back from the cursor."""
    engine = create_engine("bar foo\nbar foo bar")
    assert engine.find_previous() is None

    engine.find_all("bar")
    engine.document.set_cursor(1, 8)
    assert engine.find_previous().position == Position(1, 0)

    engine.document.set_cursor(1, 0)
    assert engine.find_previous().position == Position(0, 0)


def test_replace_next_advances():
    """Each replacement moves the cursor past the new text."""
    engine = create_engine("aa aa")
    assert engine.replace_next("aa", "aaa")
    assert engine.document.lines[0].text == "aaa aa"
    assert engine.document.cursor == Position(0, 3)

    assert engine.replace_next("aa", "b")
    assert engine.document.lines[0].text == "aaa b"
    assert not engine.replace_next("aa", "b")


def test_replace_all_keeps_lines_consistent():
    """Replacing with wide text keeps every line's breakpoints correct."""
    engine = create_engine("foo bar\nbar foo\nBAR")
    assert engine.replace_all("bar", "好") == 3

    doc = engine.document
    assert [line.text for line in doc.lines] == ["foo 好", "好 foo", "好"]
    assert doc.modified
    for line in doc.lines:
        assert line.breakpoints == BreakpointIndex.from_text(line.text, line.measure)
