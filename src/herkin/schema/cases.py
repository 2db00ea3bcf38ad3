"""Scenario and Background nodes of the feature tree.

A Background and a Scenario share one payload shape, a `Scenario`
node holding an optional name and an ordered step sequence. They only
differ by their `kind` tag, so evaluation is written once on their
common base.
"""

from logging import getLogger
from typing import Annotated, Literal, NamedTuple

from pydantic import Field

from herkin.errors import HerkinError, StepRuntimeError
from herkin.models import SchemaModel

from .steps import Step  # noqa: TC001

logger = getLogger(__name__)


class Scenario(SchemaModel):
    """Named, ordered step sequence.

    Steps are stored as the concatenation of the Given steps, the When
    steps and the Then steps, in that order, whatever the source.
    """

    name: str | None = Field(
        default=None,
        title='Scenario name',
        description='Text following the header keyword, trimmed; `None` when absent.',
    )

    steps: tuple[Step, ...] = Field(
        default=(),
        title='Steps',
        description='Steps in evaluation order.',
    )

    line_num: int | None = Field(
        default=None,
        title='Header line',
        description='Zero-based line of the header in the source text.',
    )


class CaseOutcome[C](NamedTuple):
    """Result of evaluating one step sequence against a context."""

    #: Whether every step passed.
    passed: bool
    #: The context, as mutated by the attempted steps.
    context: C
    #: Zero-based position of the failing step, if any.
    failed_step: int | None = None
    #: Assertion message of the failing step, if any.
    message: str | None = None


class BaseCase(SchemaModel):
    """Common base of Background and Scenario cases."""

    kind: Literal['background', 'scenario']

    scenario: Scenario = Field(
        title='Case payload',
        description='Name and steps of the case.',
    )

    @property
    def name(self) -> str | None:
        """Name of the case, `None` when the header has none."""
        return self.scenario.name

    @property
    def steps(self) -> tuple[Step, ...]:
        """Steps of the case in evaluation order."""
        return self.scenario.steps

    def evaluate[C](self, context: C, *,
                    assertions_as_failures: bool = True) -> CaseOutcome[C]:
        """Evaluate the steps sequentially against a context.

        Evaluation stops at the first failing step; the steps after it
        never run. The context is returned as mutated by every attempted
        step, the failing one included.

        Args:
            context: Context owned by the current run.
            assertions_as_failures: Whether an `AssertionError` raised by
                a step counts as a failed step instead of propagating.

        Returns:
            Outcome carrying the pass flag and the context.

        Raises:
            AssertionError: Raised by a step when assertions do not count
                as failures.
            StepRuntimeError: If a step raises any other exception.
        """
        for step_num, step in enumerate(self.steps):
            try:
                passed = step.evaluate(context)

            except AssertionError as base:
                if not assertions_as_failures:
                    raise
                logger.debug('%s step %d asserted: %s', self.kind, step_num, base)
                return CaseOutcome(False, context, step_num, f'{base}' or None)

            except Exception as base:
                raise StepRuntimeError.from_step(
                    step,
                    message=base.message if isinstance(base, HerkinError) else f'{base!r}',
                    context=context,
                    case_name=self.name or '',
                    step_num=step_num,
                    line_num=self.scenario.line_num,
                    error=base,
                ) from base

            logger.debug('%s step %d %s', self.kind, step_num, 'passed' if passed else 'failed')
            if not passed:
                return CaseOutcome(False, context, step_num)

        return CaseOutcome(True, context)


class BackgroundCase(BaseCase):
    """Steps fused ahead of every Scenario of a Feature."""

    kind: Literal['background'] = 'background'


class ScenarioCase(BaseCase):
    """One independently reported test case."""

    kind: Literal['scenario'] = 'scenario'


#: Tagged union of the case variants over the shared `Scenario` payload.
type TestCase = Annotated[BackgroundCase | ScenarioCase, Field(discriminator='kind')]
