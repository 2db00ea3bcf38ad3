"""Feature grammar and evaluation engine.

It provides:
- an immutable cursor with furthest-failure tracking and generic
  parser combinators;
- line primitives, step block, scenario and feature grammars, generic
  over host step producers;
- the runner producing one result per Scenario.

The primary public entry points are `FeatureParser` and `FeatureRunner`.
"""

from .blocks import StepProducer, step_block
from .cursor import Cursor, ParseFailure, Parser
from .parser import FeatureParser, feature
from .runner import FeatureRunner
from .scenarios import scenario

__all__ = (
    'Cursor',
    'FeatureParser',
    'FeatureRunner',
    'ParseFailure',
    'Parser',
    'StepProducer',
    'feature',
    'scenario',
    'step_block',
)
