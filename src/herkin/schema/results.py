"""Per-case evaluation results."""

from pydantic import Field

from herkin.models import SchemaModel


class TestResult[C](SchemaModel):
    """Outcome of one Scenario run.

    The context is the very object the steps mutated: results are never
    copies, and the runner does not touch a context after reporting it.
    """

    __test__ = False

    name: str = Field(
        title='Case name',
        description=(
            'Scenario name, an empty string for unnamed scenarios, or '
            '`<Background>` when the Background failed for this scenario.'
        ),
    )

    passed: bool = Field(
        title='Pass flag',
        description='Whether every attempted step passed.',
    )

    context: C = Field(
        title='Final context',
        description='Context as of the last attempted step.',
    )

    failed_step: int | None = Field(
        default=None,
        title='Failed step',
        description='Zero-based position of the failing step within the failing sequence.',
    )

    message: str | None = Field(
        default=None,
        title='Failure message',
        description='Message of the assertion that failed the step, if any.',
    )
