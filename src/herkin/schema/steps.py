"""Step contract.

A step is the atomic evaluable unit of a scenario: it receives the
mutable context of the current run and reports whether it passed.
Steps are produced by host parsers (producers) from the text following
a `Given`, `When`, `Then` or `And` keyword; the library only owns and
invokes them.

Hosts may implement the `Step` protocol with any object, subclass
`BaseStep` directly, or generate `BaseStep` models from declarative
step definitions (see `herkin.extensions`).
"""

from collections.abc import Callable
from typing import Any, ClassVar, Protocol, runtime_checkable

from pydantic import Field

from herkin.errors import DefinitionError
from herkin.models import SchemaModel

#: The runner receives the context followed by the step fields as
#: keyword arguments. Returning exactly `False` fails the step; any
#: other value, `None` included, passes it.
type StepRunner = Callable[..., Any]


@runtime_checkable
class Step[C](Protocol):
    """Anything that can be evaluated against a context."""

    def evaluate(self, context: C) -> bool:
        """Evaluate the step, mutating the context in place.

        Args:
            context: Context of the current scenario run.

        Returns:
            True if the step passed, False otherwise.
        """
        ...  # pragma: no cover


class BaseStep(SchemaModel):
    """Base class for Pydantic-backed steps.

    The step fields hold values captured from the step text. Evaluation
    is delegated to a class-level runner callable, unless a subclass
    overrides `evaluate`.
    """

    #: Callable implementing the step logic.
    runner: ClassVar[StepRunner]

    text: str = Field(
        default='',
        title='Step text',
        description='Source text of the step following its keyword.',
    )

    def arguments(self) -> dict[str, Any]:
        """Collect step field values passed to the runner."""
        return {
            name: getattr(self, name)
            for name in type(self).model_fields
            if name != 'text'
        }

    def evaluate(self, context: Any) -> bool:  # noqa: ANN401
        """Evaluate the step by calling its runner.

        Args:
            context: Context of the current scenario run.

        Returns:
            False if the runner returned `False`, True otherwise.

        Raises:
            DefinitionError: If the step class has no runner.
            Any exception raised by the runner.
        """
        runner = getattr(type(self), 'runner', None)
        if runner is None:
            raise DefinitionError(f'Step {type(self).__name__!r} has no runner')

        return runner(context, **self.arguments()) is not False
