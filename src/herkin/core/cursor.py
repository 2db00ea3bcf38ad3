"""Immutable input cursor and parse failure tracking.

A cursor is a position inside the feature text. Parsers receive a cursor
and return their output together with the cursor after the consumed
input; they never mutate a cursor in place, so backtracking is a matter
of reusing an older one.

Every failure is recorded in a tracker shared by all cursors of one
parse. The tracker keeps the furthest failing offset and the
expectations collected there, which is what a grammar error reports
after alternatives have been exhausted.
"""

from collections.abc import Callable
from typing import NoReturn

#: A parser consumes input at a cursor and returns its output
#: together with the cursor after the consumed input.
type Parser[T] = Callable[['Cursor'], tuple[T, 'Cursor']]


class ParseFailure(Exception):
    """Signal that a parser did not match at a cursor.

    Raised by parsers and step producers alike. Combinators catch it to
    try alternatives; the feature parser converts the furthest recorded
    failure into a `GrammarError`.
    """

    def __init__(self, cursor: 'Cursor', expected: str) -> None:
        self.cursor = cursor
        self.expected = expected

        super().__init__(f'expected {expected} at offset {cursor.offset}')


class FailureTracker:
    """Furthest failure seen during one parse."""

    __slots__ = ('expected', 'offset')

    def __init__(self) -> None:
        self.offset = -1
        self.expected: list[str] = []

    def record(self, offset: int, expected: str) -> None:
        """Remember an expectation if it is at least as far as the known ones."""
        if offset > self.offset:
            self.offset = offset
            self.expected = [expected]
        elif offset == self.offset and expected not in self.expected:
            self.expected.append(expected)


class Cursor:
    """Position inside the source text.

    Attributes:
        text: Full source text.
        offset: Character offset of the position.
        tracker: Failure tracker shared by the whole parse.
        crlf: Whether `"\\r\\n"` counts as a line terminator.
    """

    __slots__ = ('crlf', 'offset', 'text', 'tracker')

    def __init__(self, text: str, offset: int = 0, *,
                 tracker: FailureTracker | None = None,
                 crlf: bool = True) -> None:
        self.text = text
        self.offset = offset
        self.tracker = tracker if tracker is not None else FailureTracker()
        self.crlf = crlf

    def __repr__(self) -> str:
        return f'Cursor(offset={self.offset}, line={self.line_num}, column={self.column_num})'

    @property
    def at_end(self) -> bool:
        """Whether the whole input has been consumed."""
        return self.offset >= len(self.text)

    @property
    def rest(self) -> str:
        """Unconsumed input."""
        return self.text[self.offset:]

    @property
    def line_num(self) -> int:
        """Zero-based line number of the position."""
        return self.text.count('\n', 0, self.offset)

    @property
    def column_num(self) -> int:
        """Zero-based column number of the position."""
        return self.offset - (self.text.rfind('\n', 0, self.offset) + 1)

    def advance(self, count: int) -> 'Cursor':
        """Return a cursor moved forward by `count` characters."""
        return self.move_to(self.offset + count)

    def move_to(self, offset: int) -> 'Cursor':
        """Return a cursor at an absolute offset of the same text."""
        return Cursor(self.text, offset, tracker=self.tracker, crlf=self.crlf)

    def startswith(self, prefix: str) -> bool:
        """Whether the unconsumed input starts with `prefix`."""
        return self.text.startswith(prefix, self.offset)

    def line_end(self) -> int:
        """Offset of the next line terminator, or of the end of input.

        The terminator itself is excluded: for `"\\r\\n"` the returned
        offset points at `"\\r"`.
        """
        end = self.offset
        while end < len(self.text) and self.text[end] not in '\r\n':
            end += 1
        return end

    def newline_length(self) -> int:
        """Length of the line terminator at the position, or zero."""
        if self.startswith('\n'):
            return 1
        if self.crlf and self.startswith('\r\n'):
            return 2
        return 0

    def fail(self, expected: str) -> NoReturn:
        """Record an expectation at the position and raise `ParseFailure`.

        Args:
            expected: Human-readable description of the expected input.

        Raises:
            ParseFailure: Always.
        """
        self.tracker.record(self.offset, expected)
        raise ParseFailure(self, expected)
