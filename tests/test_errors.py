"""Tests for error formatting."""

import pytest

from herkin.errors import (
    FORMAT_REPLACER,
    ErrorContext,
    ErrorFormatter,
    GrammarError,
    HerkinError,
    StepRuntimeError,
)
from herkin.schema import BaseStep


def test_plain_message() -> None:
    """Keep the message as is without context."""
    assert str(HerkinError('Something failed')) == 'Something failed'


@pytest.mark.parametrize('context, expected', (
    pytest.param(
        ErrorContext(line_num=0, column_num=4),
        '  in "<unicode string>", line 1, column 5\n',
        id='position',
    ),
    pytest.param(
        ErrorContext(filename='a.feature', line_num=2),
        '  in "a.feature", line 3\n',
        id='line only',
    ),
    pytest.param(
        ErrorContext(expected=["'Given '", "'When '"]),
        "  expected 'Given ' or 'When '\n",
        id='expected',
    ),
    pytest.param(
        ErrorContext(case_name='A', step_num=1),
        "  on case 'A', step 2\n",
        id='case',
    ),
    pytest.param(ErrorContext(), '', id='empty'),
))
def test_location_string(context: ErrorContext, expected: str) -> None:
    """Render one-based source and case locations."""
    assert ErrorFormatter.get_location_string(context, indent=2) == expected


@pytest.mark.parametrize('text, offset, line_num, column_num, source_line', (
    pytest.param('abc', 1, 0, 1, 'abc', id='first line'),
    pytest.param('ab\ncd\nef', 4, 1, 1, 'cd', id='middle line'),
    pytest.param('ab\r\ncd', 1, 0, 1, 'ab', id='crlf'),
    pytest.param('ab\n', 3, 1, 0, '', id='end of input'),
))
def test_grammar_error_position(text: str, offset: int, line_num: int,
                                column_num: int, source_line: str) -> None:
    """Locate the failure offset in the source text."""
    error = GrammarError.from_position(text, offset, expected=['x'])

    assert error.line_num == line_num
    assert error.column_num == column_num
    assert error.context['source_line'] == source_line
    assert error.expected == ['x']


def test_snippet_with_caret() -> None:
    """Point at the failing column under the source line."""
    snippet = ErrorFormatter.get_snippet_string(
        ErrorContext(source_line='Given X1', column_num=6),
        indent='  ',
    )

    assert snippet == '  Given X1\n        ^\n'


def test_runtime_error_snapshot() -> None:
    """Dump the step and a sanitized context."""
    class Wait(BaseStep):
        seconds: int

    error = StepRuntimeError.from_step(
        Wait(text='wait 5', seconds=5),
        message='boom',
        context={'values': [1, 'two'], 'handle': object()},
        case_name='Waiting',
        step_num=0,
    )

    message = str(error)

    assert message.startswith('Runtime error\n    boom\n')
    assert "on case 'Waiting', step 1" in message
    assert 'step: Wait' in message
    assert 'seconds: 5' in message
    assert '- two' in message
    assert f'handle: {FORMAT_REPLACER}' in message


def test_runtime_error_location() -> None:
    """Point at the case header line and keep the raised exception."""
    base = KeyError('missing')
    error = StepRuntimeError.from_step(
        object(),
        message=repr(base),
        case_name='Lookup',
        step_num=2,
        line_num=6,
        error=base,
    )

    assert error.context['error'] is base
    assert '    in "<unicode string>", line 7\n' in str(error)
    assert "    on case 'Lookup', step 3\n" in str(error)


def test_runtime_error_for_plain_step() -> None:
    """Replace steps that are not models."""
    error = StepRuntimeError.from_step(object(), case_name='A', step_num=0)

    assert str(error).startswith('Runtime error\n')
    assert error.context['element'] == FORMAT_REPLACER
