"""Declarative step definitions and dynamic step model construction.

A step definition pairs a regular expression with a runner callable.
It is not evaluated directly: it is compiled into a Pydantic model
derived from `BaseStep` whose fields are the named groups of the
expression, and into a producer that builds instances of that model
from step text.

Field values are converted by Pydantic, so a definition declaring an
`int` parameter rejects step text whose group is not a number. Such a
rejection is a grammar error at the position of the step text.
"""

from re import Pattern
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import Field, ValidationError, create_model

from herkin.errors import DefinitionError
from herkin.models import DescribedMixin, SchemaModel
from herkin.schema import BaseStep, StepRunner

if TYPE_CHECKING:
    from herkin.core import Cursor, StepProducer

#: Field names reserved by `BaseStep`, Pydantic models and the runner
#: call, whose first positional argument is the context.
RESERVED_NAMES = frozenset({
    'context',
    'text',
    'runner',
    'arguments',
    'evaluate',
})


class StepDefinition(DescribedMixin, SchemaModel):
    """Declarative step definition.

    The expression must match the whole step text following the keyword,
    up to the end of the line. Its named groups become step fields and
    are passed to the runner as keyword arguments, after the context.
    """

    pattern: Pattern[str] = Field(
        title='Step pattern',
        description=(
            'Regular expression matched against the whole step text.\n'
            'Named groups become fields of the generated step model.'
        ),
    )

    runner: StepRunner = Field(
        title='Step function',
        description=(
            'Callable implementing the step logic. Receives the context '
            'and the captured fields. Returning exactly `False` fails '
            'the step.'
        ),
    )

    name: str | None = Field(
        default=None,
        pattern=r'^[A-Za-z_]\w*$',
        title='Step model name',
        description='Name of the generated model; derived from the runner when omitted.',
    )

    parameters: dict[str, Any] = Field(
        default_factory=dict,
        title='Field types',
        description=(
            'Types of the captured groups, by group name. '
            'Groups without a declared type are plain strings.'
        ),
    )

    @property
    def model_name(self) -> str:
        """Name of the generated step model."""
        base = self.name or getattr(self.runner, '__name__', None) or 'anonymous'
        if not base.isidentifier():
            base = 'anonymous'
        return f'{base}_Step'

    def build_runner(self) -> tuple[Any, StepRunner]:
        """Build runner definition for the generated Pydantic model.

        Returns:
            A tuple containing `ClassVar[StepRunner]` and the runner callable.
        """
        return ClassVar[StepRunner], staticmethod(self.runner)

    def build_fields(self) -> dict[str, Any]:
        """Build field definitions for the generated step model.

        Returns:
            A mapping of field names to Pydantic-compatible definitions.

        Raises:
            DefinitionError: If a group name is reserved or a parameter
                does not name a group.
        """
        groups = set(self.pattern.groupindex)

        if reserved := sorted(groups & RESERVED_NAMES) + sorted(
            group for group in groups if group.startswith(('model_', '_'))
        ):
            raise DefinitionError(
                f'Pattern {self.pattern.pattern!r} uses reserved group names: {', '.join(reserved)}',
            )

        if unknown := sorted(set(self.parameters) - groups):
            raise DefinitionError(
                f'Parameters {', '.join(unknown)} do not name groups of {self.pattern.pattern!r}',
            )

        return {
            'runner': self.build_runner(),
            **{
                group: (self.parameters.get(group, str) | None, None)
                for group in sorted(groups)
            },
        }

    def build(self) -> type[BaseStep]:
        """Build a dynamic Pydantic model representing this step.

        Returns:
            Dynamically created subclass of `BaseStep`.

        Raises:
            DefinitionError: If the definition is invalid.
        """
        return create_model(self.model_name, __base__=BaseStep, **self.build_fields())

    @property
    def expected(self) -> str:
        """Expectation reported when the step text does not match.

        The definition title is used when set, the pattern otherwise.
        """
        if self.title:
            return self.title
        return f'step matching {self.pattern.pattern!r}'

    def producer(self) -> 'StepProducer[BaseStep]':
        """Build a step producer for this definition.

        The step model is built once, when the producer is created.
        Groups that did not participate in the match are left out, so
        their fields keep the `None` default.

        Returns:
            Producer matching the remaining step line against the pattern.

        Raises:
            DefinitionError: If the definition is invalid.
        """
        model = self.build()
        pattern = self.pattern
        expected = self.expected

        def produce(cursor: 'Cursor') -> tuple[BaseStep, 'Cursor']:
            end = cursor.line_end()
            match = pattern.fullmatch(cursor.text, cursor.offset, end)
            if match is None:
                cursor.fail(expected)

            values = {
                group: value
                for group, value in match.groupdict().items()
                if value is not None
            }

            try:
                step = model.model_validate({'text': match.group(0), **values})
            except ValidationError:
                cursor.fail(expected)

            return step, cursor.move_to(end)

        return produce
