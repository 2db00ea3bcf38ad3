"""Scenario grammar.

Composes three optional step blocks under a named header. The same
rule parses `Background:` and `Scenario:` sections; only the header
keyword differs.
"""

from typing import TYPE_CHECKING

from herkin.keywords import GIVEN, THEN, WHEN
from herkin.schema import Scenario

from .blocks import step_block
from .combinators import choice, literal, optional
from .lines import eol, rest_of_line

if TYPE_CHECKING:
    from herkin.keywords import HeaderKeyword

    from .blocks import StepProducer
    from .cursor import Cursor, Parser


def _header_name(cursor: 'Cursor') -> tuple[str, 'Cursor']:
    """Match a header name and trim it."""
    name, cursor = rest_of_line(cursor)
    return name.strip(), cursor


def _no_name(cursor: 'Cursor') -> tuple[None, 'Cursor']:
    """Match an immediate line end after a header."""
    return eol(cursor)


def scenario(keyword: 'HeaderKeyword', given: 'StepProducer',
             when: 'StepProducer', then: 'StepProducer') -> 'Parser[Scenario]':
    """Build a parser for a Background or Scenario section.

    The section starts with `"<Keyword>:"`, followed either by a name up
    to the end of the line or by an immediate line end. Then come an
    optional Given block, an optional When block and an optional Then
    block, in that order. Steps are concatenated in category order.

    Args:
        keyword: Header keyword, `Background` or `Scenario`.
        given: Producer for Given steps and their continuations.
        when: Producer for When steps and their continuations.
        then: Producer for Then steps and their continuations.

    Returns:
        Parser producing a `Scenario` node.
    """
    header = literal(f'{keyword}:')
    name_or_nothing = choice(_header_name, _no_name, description='scenario name or line break')
    blocks = (
        optional(step_block(GIVEN, given)),
        optional(step_block(WHEN, when)),
        optional(step_block(THEN, then)),
    )

    def parse(cursor: 'Cursor') -> tuple[Scenario, 'Cursor']:
        line_num = cursor.line_num

        _, cursor = header(cursor)
        name, cursor = name_or_nothing(cursor)

        steps = []
        for block in blocks:
            block_steps, cursor = block(cursor)
            steps.extend(block_steps or ())

        return Scenario(name=name, steps=tuple(steps), line_num=line_num), cursor

    return parse
