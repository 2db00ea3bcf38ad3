"""Line-oriented lexical rules shared by every grammar rule.

The feature grammar is line based: steps, headers and comment lines each
occupy one line, and runs of empty lines separate scenarios.
"""

from typing import TYPE_CHECKING

from herkin.keywords import HEADER_PREFIXES

from .combinators import many1

if TYPE_CHECKING:
    from .cursor import Cursor


def newline(cursor: 'Cursor') -> tuple[None, 'Cursor']:
    """Match one line terminator."""
    if length := cursor.newline_length():
        return None, cursor.advance(length)
    cursor.fail('line break')


def eol(cursor: 'Cursor') -> tuple[None, 'Cursor']:
    """Match a line terminator or the end of input."""
    if cursor.at_end:
        return None, cursor
    if length := cursor.newline_length():
        return None, cursor.advance(length)
    cursor.fail('end of line')


def rest_of_line(cursor: 'Cursor') -> tuple[str, 'Cursor']:
    """Match the remainder of a non-empty line.

    Consumes one or more characters up to the next line terminator and
    the terminator itself. At the end of input without a terminator the
    remaining characters are consumed. A carriage return never belongs to
    line content, so a lone `"\\r"` inside a line is a parse failure.

    Returns:
        The characters of the line, without the terminator.
    """
    end = cursor.line_end()
    if end == cursor.offset:
        cursor.fail('text')

    value = cursor.text[cursor.offset:end]
    _, cursor = eol(cursor.move_to(end))

    return value, cursor


#: One or more consecutive line terminators.
blank_lines = many1(newline)


def line_block(cursor: 'Cursor') -> tuple[str, 'Cursor']:
    """Match a block of free-text lines.

    The block is made of zero or more consecutive non-blank lines and
    ends at the first blank line, at a `Background:` or `Scenario:`
    header, or at the end of input.

    Returns:
        Lines joined with `"\\n"`, without a trailing terminator.
    """
    lines: list[str] = []
    while not cursor.at_end and not cursor.newline_length():
        if any(cursor.startswith(prefix) for prefix in HEADER_PREFIXES):
            break
        line, cursor = rest_of_line(cursor)
        lines.append(line)

    return '\n'.join(lines), cursor
