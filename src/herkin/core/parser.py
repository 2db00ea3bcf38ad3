"""Feature grammar and parser entry point.

This module composes the scenario grammar into the feature grammar and
exposes `FeatureParser`, which binds host step producers once and turns
feature text into validated, immutable feature trees.

The grammar, in order:
- an optional run of blank lines;
- the `Feature: ` header and its name;
- a free-text comment block, possibly empty;
- a mandatory run of blank lines;
- an optional Background section with its mandatory trailing blank lines;
- one or more Scenario sections separated by runs of blank lines;
- an optional run of blank lines and the end of input.

Any non-conformance is fatal: no partial feature is ever returned.
"""

from logging import getLogger
from typing import TYPE_CHECKING

from herkin.errors import GrammarError, HerkinError
from herkin.keywords import BACKGROUND, FEATURE, SCENARIO
from herkin.schema import BackgroundCase, Feature, ScenarioCase
from herkin.settings import Settings

from .combinators import eof, literal, many, optional
from .cursor import Cursor, ParseFailure
from .lines import blank_lines, line_block, rest_of_line
from .scenarios import scenario

if TYPE_CHECKING:
    from herkin.extensions import StepLibrary

    from .blocks import StepProducer
    from .cursor import Parser

logger = getLogger(__name__)


def feature(given: 'StepProducer', when: 'StepProducer',
            then: 'StepProducer') -> 'Parser[Feature]':
    """Build a feature grammar around host step producers.

    Args:
        given: Producer for Given steps and their continuations.
        when: Producer for When steps and their continuations.
        then: Producer for Then steps and their continuations.

    Returns:
        Parser producing a `Feature` node and requiring the end of input.
    """
    header = literal(f'{FEATURE}: ')
    background_section = scenario(BACKGROUND, given, when, then)
    scenario_section = scenario(SCENARIO, given, when, then)

    def background_unit(cursor: Cursor) -> tuple[BackgroundCase, Cursor]:
        node, cursor = background_section(cursor)
        _, cursor = blank_lines(cursor)
        return BackgroundCase(scenario=node), cursor

    def scenario_case(cursor: Cursor) -> tuple[ScenarioCase, Cursor]:
        node, cursor = scenario_section(cursor)
        return ScenarioCase(scenario=node), cursor

    def separated_case(cursor: Cursor) -> tuple[ScenarioCase, Cursor]:
        _, cursor = blank_lines(cursor)
        return scenario_case(cursor)

    leading = optional(blank_lines)
    background = optional(background_unit)
    others = many(separated_case)
    trailing = optional(blank_lines)

    def parse(cursor: Cursor) -> tuple[Feature, Cursor]:
        _, cursor = leading(cursor)
        _, cursor = header(cursor)
        name, cursor = rest_of_line(cursor)
        comment, cursor = line_block(cursor)
        _, cursor = blank_lines(cursor)

        background_case, cursor = background(cursor)
        first, cursor = scenario_case(cursor)
        rest, cursor = others(cursor)

        _, cursor = trailing(cursor)
        _, cursor = eof(cursor)

        return Feature(
            name=name,
            comment=comment,
            background=background_case,
            test_cases=(first, *rest),
        ), cursor

    return parse


class FeatureParser:
    """Feature text parser bound to host step producers.

    The parser holds no mutable state between calls: the same instance
    may parse any number of texts, and every returned feature is
    independent of the others.
    """

    def __init__(self, given: 'StepProducer', when: 'StepProducer',
                 then: 'StepProducer', *,
                 settings: Settings | None = None) -> None:
        """Initialize the parser.

        Args:
            given: Producer for Given steps and their continuations.
            when: Producer for When steps and their continuations.
            then: Producer for Then steps and their continuations.
            settings: Optional settings; resolved from the environment
                when omitted.
        """
        self.settings = settings if settings is not None else Settings()
        self.grammar = feature(given, when, then)

    @classmethod
    def from_library(cls, library: 'StepLibrary', *,
                     settings: Settings | None = None) -> 'FeatureParser':
        """Build a parser from a declarative step library.

        Args:
            library: Step definitions grouped by category.
            settings: Optional settings; resolved from the environment
                when omitted.

        Returns:
            Parser using the library producers.

        Raises:
            DefinitionError: If the library is invalid, or has conflicting
                definitions in strict mode.
        """
        settings = settings if settings is not None else Settings()
        given, when, then = library.producers(strict=settings.strict)

        return cls(given, when, then, settings=settings)

    def parse(self, text: str, *, filename: str | None = None) -> Feature:
        """Parse feature text into a feature tree.

        Args:
            text: Feature text.
            filename: Optional source name used in error messages.

        Returns:
            The parsed feature.

        Raises:
            GrammarError: If the text does not conform to the grammar or
                a producer rejects a step.
            HerkinError: Raised as is by a producer.
        """
        cursor = Cursor(text, crlf=self.settings.crlf)

        try:
            result, _ = self.grammar(cursor)

        except ParseFailure as base:
            raise GrammarError.from_position(
                text,
                cursor.tracker.offset,
                expected=cursor.tracker.expected,
                filename=filename,
            ) from base

        except HerkinError:
            raise

        except Exception as base:
            raise GrammarError('Unexpected error') from base

        logger.debug(
            'Parsed feature %r: background=%s, scenarios=%d',
            result.name,
            result.background is not None,
            len(result.test_cases),
        )

        return result
