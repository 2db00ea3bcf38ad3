"""Tests configurations and fixtures."""

import re
from typing import TYPE_CHECKING, Any, ClassVar

import pytest

from herkin.core import FeatureParser
from herkin.core.combinators import regex
from herkin.extensions import StepDefinition, StepLibrary
from herkin.schema import BaseStep, StepRunner
from herkin.settings import Settings

if TYPE_CHECKING:
    from herkin.core import Cursor, StepProducer


def record(context: dict[str, Any], token: int) -> bool:
    """Append a token to the context; token zero fails the step."""
    context.setdefault('tokens', []).append(token)
    return token != 0


class TokenStep(BaseStep):
    """Step recording its token, parsed from text like `G1`."""

    runner: ClassVar[StepRunner] = staticmethod(record)

    token: int


def token_producer(letter: str) -> 'StepProducer[TokenStep]':
    """Build a producer accepting `<letter><digits>` tokens."""
    token = regex(rf'{letter}\d+', description=f'{letter} token')

    def produce(cursor: 'Cursor') -> tuple[TokenStep, 'Cursor']:
        text, cursor = token(cursor)
        return TokenStep(text=text, token=int(text[1:])), cursor

    return produce


@pytest.fixture
def settings() -> Settings:
    """Provide explicit default settings, independent of the environment."""
    return Settings(strict=True, crlf=True, assertions_as_failures=True)


@pytest.fixture
def producers() -> tuple['StepProducer[TokenStep]', ...]:
    """Provide Given, When and Then token producers.

    Given steps accept `G<n>`, When steps `W<n>` and Then steps `T<n>`.
    Each step appends its number to `context['tokens']` and fails when
    the number is zero.
    """
    return token_producer('G'), token_producer('W'), token_producer('T')


@pytest.fixture
def parser(producers: tuple['StepProducer[TokenStep]', ...], settings: Settings) -> FeatureParser:
    """Provide a feature parser over the token producers."""
    return FeatureParser(*producers, settings=settings)


def push(context: dict[str, Any], value: int) -> None:
    context.setdefault('stack', []).append(value)


def add(context: dict[str, Any]) -> None:
    context['result'] = sum(context.get('stack', []))


def divide(context: dict[str, Any], a: int, b: int) -> None:
    context['result'] = a // b


def check(context: dict[str, Any], expected: int) -> bool:
    return context.get('result') == expected


def ensure(context: dict[str, Any], expected: int) -> None:
    if (result := context.get('result')) != expected:
        raise AssertionError(f'{result} != {expected}')


@pytest.fixture
def calculator() -> StepLibrary:
    """Provide a small calculator step library."""
    return StepLibrary(
        name='calculator',
        given=[
            StepDefinition(
                pattern=re.compile(r'the number (?P<value>-?\d+)'),
                runner=push,
                parameters={'value': int},
            ),
        ],
        when=[
            StepDefinition(
                pattern=re.compile(r'I add them'),
                runner=add,
            ),
            StepDefinition(
                pattern=re.compile(r'I divide (?P<a>\d+) by (?P<b>\d+)'),
                runner=divide,
                parameters={'a': int, 'b': int},
            ),
        ],
        then=[
            StepDefinition(
                pattern=re.compile(r'the result is (?P<expected>-?\d+)'),
                runner=check,
                parameters={'expected': int},
            ),
            StepDefinition(
                pattern=re.compile(r'the result should be (?P<expected>-?\d+)'),
                runner=ensure,
                parameters={'expected': int},
            ),
        ],
    )
