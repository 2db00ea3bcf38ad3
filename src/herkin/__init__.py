"""Gherkin-like feature grammar and scenario runner.

The `herkin` package parses plain-text features made of a Feature
header, a free-text comment, an optional Background and one or more
Scenarios, and evaluates them against host-defined steps and contexts.

Key features:
- a line-based grammar generic over host step producers;
- immutable, validated feature trees safe to evaluate repeatedly;
- one result per Scenario, each run with a fresh context and its own
  Background attempt;
- declarative step libraries built from regular expressions.

Steps and contexts belong to the host: the library only parses, orders
and invokes them.
"""

from herkin.context import ContextDict
from herkin.core import FeatureParser, FeatureRunner
from herkin.errors import DefinitionError, GrammarError, HerkinError, StepRuntimeError
from herkin.extensions import StepDefinition, StepLibrary
from herkin.schema import BaseStep, Feature, Step, TestResult
from herkin.settings import Settings

__all__ = (
    'BaseStep',
    'ContextDict',
    'DefinitionError',
    'Feature',
    'FeatureParser',
    'FeatureRunner',
    'GrammarError',
    'HerkinError',
    'Settings',
    'Step',
    'StepDefinition',
    'StepLibrary',
    'StepRuntimeError',
    'TestResult',
)
