"""Feature node, the root of a parsed tree."""

from typing import TYPE_CHECKING

from pydantic import Field

from herkin.models import SchemaModel

from .cases import BackgroundCase, ScenarioCase

if TYPE_CHECKING:
    from collections.abc import Iterator

if TYPE_CHECKING:
    from herkin.context import ContextFactory
    from herkin.settings import Settings

    from .cases import TestCase
    from .results import TestResult


class Feature(SchemaModel):
    """Parsed feature: a name, a free-text comment, an optional
    Background and one or more Scenarios.

    A feature is immutable and may be evaluated any number of times.
    """

    name: str = Field(
        title='Feature name',
        description='Text following `Feature: ` on the header line.',
    )

    comment: str = Field(
        default='',
        title='Comment block',
        description='Free-text lines below the header joined with line breaks.',
    )

    background: BackgroundCase | None = Field(
        default=None,
        title='Background',
        description='Steps fused ahead of every scenario.',
    )

    test_cases: tuple[ScenarioCase, ...] = Field(
        default=(),
        title='Scenarios',
        description='Scenario cases in source order.',
    )

    def iter_cases(self) -> 'Iterator[TestCase]':
        """Iterate over the Background, if any, and then the Scenarios."""
        if self.background is not None:
            yield self.background
        yield from self.test_cases

    def evaluate[C](self, factory: 'ContextFactory[C]', *,
                    settings: 'Settings | None' = None) -> 'list[TestResult[C]]':
        """Evaluate every Scenario and collect one result per Scenario.

        Args:
            factory: Zero-argument callable building a fresh context.
            settings: Optional runner settings.

        Returns:
            Results in source order.
        """
        from herkin.core.runner import FeatureRunner  # noqa: PLC0415

        return FeatureRunner(self, factory, settings=settings).run()
