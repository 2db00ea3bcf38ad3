"""Declarative step library definition.

This module defines the container hosts use to describe their steps
without writing producers by hand.

A library groups step definitions by category (Given, When and Then).
Each definition is compiled into a step model and a producer; the
producers of one category are tried in declaration order, so the first
matching definition wins.

The library itself holds no global state: it is passed explicitly to
`FeatureParser.from_library`, and two libraries never see each other.
"""

from typing import TYPE_CHECKING
from warnings import warn

from pydantic import Field

from herkin.core.combinators import choice
from herkin.errors import DefinitionError, DefinitionWarning
from herkin.keywords import GIVEN, THEN, WHEN
from herkin.models import SchemaModel

from .definitions import StepDefinition

if TYPE_CHECKING:
    from herkin.core import Cursor, StepProducer
    from herkin.keywords import StepKeyword
    from herkin.schema import BaseStep

__all__ = (
    'StepDefinition',
    'StepLibrary',
)


def _nothing(keyword: 'StepKeyword') -> 'StepProducer[BaseStep]':
    """Build a producer rejecting any step text."""
    expected = f'{keyword} step'

    def produce(cursor: 'Cursor') -> tuple['BaseStep', 'Cursor']:
        cursor.fail(expected)

    return produce


class StepLibrary(SchemaModel):
    """Declarative container for step definitions.

    All categories are optional. A category without definitions rejects
    every step of that category, so a feature using it fails to parse.
    """

    name: str = Field(
        default='steps',
        title='Library name',
        description='Logical name of the library, used in diagnostics.',
    )

    given: list[StepDefinition] = Field(
        default_factory=list,
        title='Given steps',
        description='Definitions available after `Given` and its continuations.',
    )

    when: list[StepDefinition] = Field(
        default_factory=list,
        title='When steps',
        description='Definitions available after `When` and its continuations.',
    )

    then: list[StepDefinition] = Field(
        default_factory=list,
        title='Then steps',
        description='Definitions available after `Then` and its continuations.',
    )

    def definitions(self, keyword: 'StepKeyword') -> list[StepDefinition]:
        """Definitions of one category, in declaration order."""
        return {
            GIVEN: self.given,
            WHEN: self.when,
            THEN: self.then,
        }[keyword]

    def emit_definition_issue(self, message: str, *, strict: bool) -> Exception | None:
        """Emit a definition warning or return the exception.

        Args:
            message: Warning message to emit.
            strict: Whether the issue is an error.

        Returns:
            DefinitionError on strict mode, otherwise `None`
                with producing a DefinitionWarning.
        """
        if strict:
            return DefinitionError(message)

        warn(message, category=DefinitionWarning, stacklevel=3)

        return None

    def producer(self, keyword: 'StepKeyword', *, strict: bool = True) -> 'StepProducer[BaseStep]':
        """Build the producer of one category.

        Args:
            keyword: Step category.
            strict: Whether conflicting definitions raise instead of
                being skipped with a warning.

        Returns:
            Producer trying the category definitions in order.

        Raises:
            DefinitionError: If a definition is invalid, or two definitions
                share a pattern on strict mode.
        """
        seen: set[str] = set()
        producers = []

        for definition in self.definitions(keyword):
            pattern = definition.pattern.pattern
            if pattern in seen:
                if error := self.emit_definition_issue(
                    f'{keyword} step {pattern!r} from {self.name!r} is shadowing an existing',
                    strict=strict,
                ):
                    raise error
                continue

            seen.add(pattern)
            producers.append(definition.producer())

        if not producers:
            return _nothing(keyword)

        return choice(*producers, description=f'{keyword} step')

    def producers(self, *, strict: bool = True) -> tuple['StepProducer[BaseStep]', ...]:
        """Build the Given, When and Then producers.

        Args:
            strict: Whether conflicting definitions raise instead of
                being skipped with a warning.

        Returns:
            Tuple of the three producers in category order.

        Raises:
            DefinitionError: If the library is invalid.
        """
        return (
            self.producer(GIVEN, strict=strict),
            self.producer(WHEN, strict=strict),
            self.producer(THEN, strict=strict),
        )
