"""Keyword vocabulary of the feature grammar.

Keywords are fixed English literals. Every grammar rule refers to them
through the constants below.
"""

from typing import Literal

type StepKeyword = Literal['Given', 'When', 'Then']
type HeaderKeyword = Literal['Background', 'Scenario']

FEATURE = 'Feature'
BACKGROUND: HeaderKeyword = 'Background'
SCENARIO: HeaderKeyword = 'Scenario'

GIVEN: StepKeyword = 'Given'
WHEN: StepKeyword = 'When'
THEN: StepKeyword = 'Then'
AND = 'And'

#: Step categories in the order their blocks are concatenated.
STEP_KEYWORDS: tuple[StepKeyword, ...] = (GIVEN, WHEN, THEN)

#: Line prefixes that end a free-text comment block.
HEADER_PREFIXES = (f'{BACKGROUND}:', f'{SCENARIO}:')

#: Case name reported when a Background fails for a Scenario.
BACKGROUND_MARKER = '<Background>'
