"""Step block grammar.

A block is one keyword line (`Given`, `When` or `Then`) followed by any
number of `And` continuation lines. Continuations inherit the category
of the keyword line, so they are parsed by the same producer.
"""

from typing import TYPE_CHECKING

from herkin.keywords import AND

from .combinators import literal, many
from .lines import eol

if TYPE_CHECKING:
    from herkin.keywords import StepKeyword
    from herkin.schema import Step

    from .cursor import Cursor, Parser

#: A producer starts right after `"<Keyword> "`, builds a step and stops
#: before the line terminator. It rejects text by raising `ParseFailure`.
type StepProducer[S: Step] = Parser[S]


def step_line[S: 'Step'](prefix: str, producer: 'StepProducer[S]') -> 'Parser[S]':
    """Build a parser for one step line.

    Args:
        prefix: Keyword followed by a space.
        producer: Host producer for the step text.

    Returns:
        Parser producing the step built by the producer.
    """
    keyword = literal(prefix)

    def parse(cursor: 'Cursor') -> tuple[S, 'Cursor']:
        _, cursor = keyword(cursor)
        step, cursor = producer(cursor)
        _, cursor = eol(cursor)
        return step, cursor

    return parse


def step_block[S: 'Step'](keyword: 'StepKeyword', producer: 'StepProducer[S]') -> 'Parser[list[S]]':
    """Build a parser for a keyword line and its `And` continuations.

    The block fails when its first line does not match. Continuation
    lines are consumed until one does not match.

    Args:
        keyword: Category keyword of the first line.
        producer: Host producer for the category.

    Returns:
        Parser producing the steps in source order.
    """
    first_line = step_line(f'{keyword} ', producer)
    and_lines = many(step_line(f'{AND} ', producer))

    def parse(cursor: 'Cursor') -> tuple[list[S], 'Cursor']:
        first, cursor = first_line(cursor)
        continuations, cursor = and_lines(cursor)
        return [first, *continuations], cursor

    return parse
