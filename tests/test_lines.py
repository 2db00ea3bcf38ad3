"""Tests for the cursor, combinators and line primitives."""

import pytest

from herkin.core.combinators import choice, eof, literal, many, many1, optional, regex
from herkin.core.cursor import Cursor, ParseFailure
from herkin.core.lines import blank_lines, eol, line_block, newline, rest_of_line


@pytest.mark.parametrize('offset, line_num, column_num', (
    pytest.param(0, 0, 0, id='start'),
    pytest.param(2, 0, 2, id='before terminator'),
    pytest.param(3, 1, 0, id='next line'),
    pytest.param(4, 1, 1, id='inside line'),
))
def test_cursor_position(offset: int, line_num: int, column_num: int) -> None:
    """Compute zero-based line and column numbers."""
    cursor = Cursor('ab\ncd', offset)

    assert cursor.line_num == line_num
    assert cursor.column_num == column_num


def test_cursor_is_immutable() -> None:
    """Advance into a new cursor sharing the failure tracker."""
    cursor = Cursor('abc')
    moved = cursor.advance(2)

    assert cursor.offset == 0
    assert moved.offset == 2
    assert moved.rest == 'c'
    assert moved.tracker is cursor.tracker


def test_furthest_failure_is_tracked() -> None:
    """Report the furthest expectation after alternatives are exhausted."""
    ab = literal('ab')
    x = literal('x')

    def pair(cursor: Cursor) -> tuple[str, Cursor]:
        first, cursor = literal('a')(cursor)
        second, cursor = literal('b')(cursor)
        return first + second, cursor

    cursor = Cursor('ac')

    with pytest.raises(ParseFailure):
        choice(pair, ab, x)(cursor)

    assert cursor.tracker.offset == 1
    assert cursor.tracker.expected == ["'b'"]


def test_same_offset_expectations_are_merged() -> None:
    """Collect every expectation recorded at the furthest offset."""
    cursor = Cursor('z')

    with pytest.raises(ParseFailure):
        choice(literal('a'), literal('b'), description='a or b')(cursor)

    assert cursor.tracker.offset == 0
    assert cursor.tracker.expected == ["'a'", "'b'", 'a or b']


def test_optional_backtracks() -> None:
    """Resume at the original position when the parser fails."""
    cursor = Cursor('ax')

    value, following = optional(literal('ab'))(cursor)

    assert value is None
    assert following.offset == 0


@pytest.mark.parametrize('text, items, offset', (
    pytest.param('b', [], 0, id='none'),
    pytest.param('aab', ['a', 'a'], 2, id='some'),
    pytest.param('aaa', ['a', 'a', 'a'], 3, id='all'),
))
def test_many(text: str, items: list[str], offset: int) -> None:
    """Repeat a parser until it fails."""
    value, cursor = many(literal('a'))(Cursor(text))

    assert value == items
    assert cursor.offset == offset


def test_many_stops_without_progress() -> None:
    """Stop repetition on a match that consumes nothing."""
    value, cursor = many(optional(literal('a')))(Cursor('aab'))

    assert value == ['a', 'a']
    assert cursor.offset == 2


def test_many1_requires_a_match() -> None:
    """Fail when the first repetition does not match."""
    with pytest.raises(ParseFailure):
        many1(literal('a'))(Cursor('b'))


def test_regex_is_bounded_by_line() -> None:
    """Never match across a line terminator."""
    value, cursor = regex(r'[\s\S]+')(Cursor('ab\ncd'))

    assert value == 'ab'
    assert cursor.offset == 2


def test_regex_failure_description() -> None:
    """Record the description as the expectation."""
    cursor = Cursor('abc')

    with pytest.raises(ParseFailure, match=r'^expected a number at offset 0$'):
        regex(r'\d+', description='a number')(cursor)


def test_eof() -> None:
    """Match only at the end of input."""
    _, cursor = eof(Cursor('a', 1))

    assert cursor.at_end

    with pytest.raises(ParseFailure):
        eof(Cursor('a'))


@pytest.mark.parametrize('text, crlf, offset', (
    pytest.param('\nx', True, 1, id='lf'),
    pytest.param('\r\nx', True, 2, id='crlf'),
    pytest.param('\nx', False, 1, id='lf only'),
))
def test_newline(text: str, crlf: bool, offset: int) -> None:
    """Consume exactly one line terminator."""
    _, cursor = newline(Cursor(text, crlf=crlf))

    assert cursor.offset == offset


def test_newline_rejects_crlf_when_disabled() -> None:
    """Reject a carriage return when CRLF is disabled."""
    with pytest.raises(ParseFailure):
        newline(Cursor('\r\nx', crlf=False))


def test_eol() -> None:
    """Match a terminator or the end of input, nothing else."""
    _, cursor = eol(Cursor('\n'))
    assert cursor.offset == 1

    _, cursor = eol(Cursor(''))
    assert cursor.offset == 0

    with pytest.raises(ParseFailure):
        eol(Cursor('x'))


@pytest.mark.parametrize('text, value, offset', (
    pytest.param('abc\ndef', 'abc', 4, id='terminated'),
    pytest.param('abc\r\ndef', 'abc', 5, id='crlf terminated'),
    pytest.param('abc', 'abc', 3, id='end of input'),
    pytest.param('  x  \n', '  x  ', 6, id='verbatim'),
))
def test_rest_of_line(text: str, value: str, offset: int) -> None:
    """Consume the line and its terminator, returning the characters."""
    line, cursor = rest_of_line(Cursor(text))

    assert line == value
    assert cursor.offset == offset


@pytest.mark.parametrize('text', (
    pytest.param('\nabc', id='empty line'),
    pytest.param('', id='end of input'),
))
def test_rest_of_line_requires_characters(text: str) -> None:
    """Fail on an empty line."""
    with pytest.raises(ParseFailure):
        rest_of_line(Cursor(text))


@pytest.mark.parametrize('crlf', (True, False))
def test_rest_of_line_rejects_lone_carriage_return(crlf: bool) -> None:
    """Stop line content at a carriage return not followed by a line feed."""
    cursor = Cursor('ab\rcd\n', crlf=crlf)

    with pytest.raises(ParseFailure, match=r'^expected end of line at offset 2$'):
        rest_of_line(cursor)


def test_blank_lines() -> None:
    """Consume a run of terminators."""
    _, cursor = blank_lines(Cursor('\n\r\n\nx'))

    assert cursor.offset == 4

    with pytest.raises(ParseFailure):
        blank_lines(Cursor('x'))


@pytest.mark.parametrize('text, value, offset', (
    pytest.param('a\nb\n\nc', 'a\nb', 4, id='blank line'),
    pytest.param('a\nb', 'a\nb', 3, id='end of input'),
    pytest.param('\nc', '', 0, id='empty'),
    pytest.param('a\nScenario: x\n', 'a', 2, id='scenario header'),
    pytest.param('a\nBackground:\n', 'a', 2, id='background header'),
    pytest.param('a Scenario: x\n\n', 'a Scenario: x', 14, id='header inside line'),
))
def test_line_block(text: str, value: str, offset: int) -> None:
    """Capture free-text lines up to a blank line or a header."""
    block, cursor = line_block(Cursor(text))

    assert block == value
    assert cursor.offset == offset
