"""Feature tree and result models.

Defines immutable Pydantic models describing parsed features, their
Background and Scenario cases, the step contract and evaluation results.
"""

from .cases import BackgroundCase, BaseCase, CaseOutcome, Scenario, ScenarioCase, TestCase
from .features import Feature
from .results import TestResult
from .steps import BaseStep, Step, StepRunner

__all__ = (
    'BackgroundCase',
    'BaseCase',
    'BaseStep',
    'CaseOutcome',
    'Feature',
    'Scenario',
    'ScenarioCase',
    'Step',
    'StepRunner',
    'TestCase',
    'TestResult',
)
