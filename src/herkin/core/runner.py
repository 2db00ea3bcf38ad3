"""Evaluation engine for parsed features.

The runner walks a feature tree and produces exactly one result per
Scenario, in source order. Each Scenario gets a fresh context from the
host factory; the Background, when present, is evaluated on that
context first, so every Scenario makes its own independent Background
attempt.

The context is threaded by hand-over: construction, Background,
Scenario steps and result each receive it and pass it on together with
a pass flag. Nothing is shared between two Scenario runs except the
read-only tree.
"""

from logging import getLogger
from typing import TYPE_CHECKING

from herkin.keywords import BACKGROUND_MARKER
from herkin.schema import TestResult
from herkin.settings import Settings

if TYPE_CHECKING:
    from collections.abc import Iterator

if TYPE_CHECKING:
    from herkin.context import ContextFactory
    from herkin.schema import BackgroundCase, CaseOutcome, Feature, ScenarioCase

logger = getLogger(__name__)


class FeatureRunner[C]:
    """Executable plan of a parsed feature.

    Failures are scoped to one Scenario: a failed step skips the rest of
    its Scenario only, and a failed Background invalidates only the
    Scenario currently attempting it.
    """

    __test__ = False

    def __init__(self, feature: 'Feature', factory: 'ContextFactory[C]', *,
                 settings: Settings | None = None) -> None:
        """Initialize the runner.

        Args:
            feature: Parsed feature to evaluate.
            factory: Zero-argument callable building a fresh context.
            settings: Optional settings; resolved from the environment
                when omitted.
        """
        self.feature = feature
        self.factory = factory
        self.settings = settings if settings is not None else Settings()

    def run_background(self, background: 'BackgroundCase', context: C) -> 'CaseOutcome[C]':
        """Evaluate the Background steps on a Scenario context.

        Args:
            background: Background of the feature.
            context: Fresh context of the Scenario run.

        Returns:
            Outcome of the Background with the context it mutated.
        """
        return background.evaluate(
            context,
            assertions_as_failures=self.settings.assertions_as_failures,
        )

    def run_case(self, case: 'ScenarioCase') -> 'TestResult[C]':
        """Evaluate one Scenario, fused with the feature Background.

        Args:
            case: Scenario to evaluate.

        Returns:
            Result of the Scenario, or a `<Background>` result when the
            Background failed and the Scenario steps were skipped.

        Raises:
            StepRuntimeError: If a step raises an unexpected exception.
        """
        name = case.name or ''
        context = self.factory()

        if (background := self.feature.background) is not None:
            outcome = self.run_background(background, context)
            if not outcome.passed:
                logger.warning(
                    'Background failed at step %d for scenario %r',
                    outcome.failed_step,
                    name,
                )
                return TestResult(
                    name=BACKGROUND_MARKER,
                    passed=False,
                    context=outcome.context,
                    failed_step=outcome.failed_step,
                    message=outcome.message,
                )
            context = outcome.context

        outcome = case.evaluate(
            context,
            assertions_as_failures=self.settings.assertions_as_failures,
        )

        logger.info('Scenario %r %s', name, 'passed' if outcome.passed else 'failed')

        return TestResult(
            name=name,
            passed=outcome.passed,
            context=outcome.context,
            failed_step=outcome.failed_step,
            message=outcome.message,
        )

    def iter_results(self) -> 'Iterator[TestResult[C]]':
        """Evaluate Scenarios lazily, one result at a time, in source order."""
        for case in self.feature.test_cases:
            yield self.run_case(case)

    def run(self) -> 'list[TestResult[C]]':
        """Evaluate every Scenario of the feature.

        Returns:
            One result per Scenario, in source order.
        """
        return list(self.iter_results())
