"""Generic parser combinators.

Combinators build parsers out of parsers. Alternatives backtrack: when
an optional, repeated or chosen parser fails, the input is resumed at
the position before that attempt, whatever the failed parser consumed.
"""

from re import Pattern
from re import compile as regexp
from typing import TYPE_CHECKING

from .cursor import ParseFailure

if TYPE_CHECKING:
    from .cursor import Cursor, Parser


def literal(text: str) -> 'Parser[str]':
    """Match an exact string.

    Args:
        text: Literal to match.

    Returns:
        Parser producing the literal.
    """
    description = repr(text)

    def parse(cursor: 'Cursor') -> tuple[str, 'Cursor']:
        if not cursor.startswith(text):
            cursor.fail(description)
        return text, cursor.advance(len(text))

    return parse


def regex(pattern: str | Pattern[str], *, description: str | None = None) -> 'Parser[str]':
    """Match a regular expression at the position, within the current line.

    Args:
        pattern: Regular expression, compiled or not.
        description: Expectation reported on failure; defaults to the pattern.

    Returns:
        Parser producing the matched text.
    """
    compiled = regexp(pattern) if isinstance(pattern, str) else pattern
    description = description or f'/{compiled.pattern}/'

    def parse(cursor: 'Cursor') -> tuple[str, 'Cursor']:
        match = compiled.match(cursor.text, cursor.offset, cursor.line_end())
        if match is None:
            cursor.fail(description)
        return match.group(0), cursor.move_to(match.end())

    return parse


def eof(cursor: 'Cursor') -> tuple[None, 'Cursor']:
    """Match the end of input."""
    if not cursor.at_end:
        cursor.fail('end of input')
    return None, cursor


def optional[T](parser: 'Parser[T]') -> 'Parser[T | None]':
    """Try a parser, producing `None` when it does not match."""
    def parse(cursor: 'Cursor') -> tuple[T | None, 'Cursor']:
        try:
            return parser(cursor)
        except ParseFailure:
            return None, cursor

    return parse


def many[T](parser: 'Parser[T]') -> 'Parser[list[T]]':
    """Apply a parser zero or more times.

    Repetition stops at the first failure or at the first match that
    consumes no input.
    """
    def parse(cursor: 'Cursor') -> tuple[list[T], 'Cursor']:
        items: list[T] = []
        while True:
            try:
                item, following = parser(cursor)
            except ParseFailure:
                return items, cursor
            if following.offset == cursor.offset:
                return items, cursor
            items.append(item)
            cursor = following

    return parse


def many1[T](parser: 'Parser[T]') -> 'Parser[list[T]]':
    """Apply a parser one or more times."""
    rest = many(parser)

    def parse(cursor: 'Cursor') -> tuple[list[T], 'Cursor']:
        first, cursor = parser(cursor)
        items, cursor = rest(cursor)
        return [first, *items], cursor

    return parse


def choice[T](*parsers: 'Parser[T]', description: str | None = None) -> 'Parser[T]':
    """Try parsers in order and produce the output of the first match.

    Args:
        parsers: Alternatives, tried left to right.
        description: Expectation recorded when no alternative matches.

    Returns:
        Parser producing the first successful alternative.
    """
    def parse(cursor: 'Cursor') -> tuple[T, 'Cursor']:
        for parser in parsers:
            try:
                return parser(cursor)
            except ParseFailure:
                continue
        cursor.fail(description or 'one of the alternatives')

    return parse
