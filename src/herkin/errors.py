"""Core exception hierarchy.

This module defines base error and warning types used across the library
to report grammar non-conformance, invalid step definitions and
unexpected step failures in a structured and extensible way.

A step returning false is not an error: it is an ordinary evaluation
outcome reported through test results.
"""

from os import linesep
from typing import TYPE_CHECKING, Any, TypedDict

from pydantic import BaseModel
from yaml import dump

from herkin.context import MAPPINGS, SCALARS, SEQUENCES, context_view

if TYPE_CHECKING:
    from typing import Self

SNIPPET_ELLIPSIS = f' ...{linesep}'
SNIPPET_SEPARATOR = f' ---{linesep}'
SNIPPET_INDENT = 2

FORMAT_REPLACER = '<runtime object>'
FORMAT_FILENAME = '<unicode string>'
FORMAT_INDENT = 4


class ErrorContext(TypedDict, total=False):
    """Container describing contextual information for error formatting.

    All fields are optional; the formatter adapts output based on
    provided values.
    """

    #: Name of the source the feature text was read from.
    filename: str | None

    #: Zero-based line number in the source text.
    line_num: int | None
    #: Zero-based column number in the source text.
    column_num: int | None
    #: Source line where the error occurred, without terminator.
    source_line: str | None
    #: Alternatives the grammar expected at the failure position.
    expected: list[str] | None

    #: Name of the case being evaluated.
    case_name: str | None
    #: Zero-based number of the step being evaluated.
    step_num: int | None

    #: Underlying exception that triggered formatting.
    error: Exception | None

    #: Runtime context at the moment of failure.
    context: Any
    #: Runtime element associated with the error.
    element: Any


class ErrorFormatter:
    """Utility class for formatting library errors.

    This formatter produces human-readable messages with optional source
    location, a caret snippet of the offending line, or a YAML dump of
    the failing step and its context.
    """

    @classmethod
    def format(cls, message: str, context: ErrorContext | None = None) -> str:
        """Format an error message using contextual information.

        Args:
            message: Base human-readable error message.
            context: Optional error context with location and data.

        Returns:
            A fully formatted error message suitable for display.
        """
        if not context:
            return message

        message += linesep
        message += cls.get_location_string(context, indent=FORMAT_INDENT)
        message += cls.get_snippet_string(context, indent=FORMAT_INDENT * 2)

        return message

    @classmethod
    def get_location_string(cls, context: ErrorContext, *,
                            indent: str | int | None = None) -> str:
        """Format source and execution location information.

        Args:
            context: Error context containing location metadata.
            indent: Optional indentation (string or number of spaces).

        Returns:
            A formatted location string including filename, line, column,
            case name and step number when available.
        """
        indent = cls._ensure_indent(indent)

        message = ''

        if (line_num := context.get('line_num')) is not None:
            filename = context.get('filename') or FORMAT_FILENAME
            message += f'{indent}in "{filename}", line {line_num + 1}'
            if (column_num := context.get('column_num')) is not None:
                message += f', column {column_num + 1}'
            message += linesep

        if expected := context.get('expected'):
            message += f'{indent}expected {' or '.join(expected)}{linesep}'

        if (case_name := context.get('case_name')) is not None:
            message += f'{indent}on case {case_name!r}'
            if (step_num := context.get('step_num')) is not None:
                message += f', step {step_num + 1}'
            message += linesep

        return message

    @classmethod
    def get_snippet_string(cls, context: ErrorContext, *,
                           indent: str | int | None = None) -> str:
        """Generate a formatted snippet illustrating the error context.

        Args:
            context: Error context containing source or runtime data.
            indent: Optional indentation (string or number of spaces).

        Returns:
            A formatted multi-line snippet string, or an empty string
            if no snippet data is available.
        """
        indent = cls._ensure_indent(indent)

        if (source_line := context.get('source_line')) is not None:
            column_num = context.get('column_num') or 0
            return (
                f'{indent}{source_line}{linesep}'
                f'{indent}{' ' * column_num}^{linesep}'
            )

        if (element := context.get('element')) is not None:
            return cls._make_snippet(element, context, indent)

        return ''

    @classmethod
    def _make_snippet(cls, element: Any, context: ErrorContext, indent: str) -> str:  # noqa: ANN401
        """Build a YAML-based snippet for an element.

        Args:
            element: Element associated with the error.
            context: Error context containing optional runtime values.
            indent: String indentation prefix.

        Returns:
            A formatted snippet string including context and element data.
        """
        snippet = f'{indent}{SNIPPET_ELLIPSIS}'

        if (values := context.get('context')) is not None:
            snippet += cls._make_yaml({'context': context_view(values)}, indent)
            snippet += linesep
            snippet += f'{indent}{SNIPPET_SEPARATOR}'

        snippet += cls._make_yaml(element, indent)
        snippet += linesep

        return snippet

    @classmethod
    def _filter_unsafe(cls, value: Any) -> Any:  # noqa: ANN401
        """Recursively sanitize values for safe YAML serialization.

        Non-scalar and non-container objects are replaced with
        a placeholder to prevent leaking opaque data.

        Args:
            value: Arbitrary value to sanitize.

        Returns:
            A YAML-safe representation of the value.
        """
        if value is None or isinstance(value, SCALARS):
            return value

        if isinstance(value, MAPPINGS):
            return {
                f'{key}': cls._filter_unsafe(item)
                for key, item in value.items()
            }

        if isinstance(value, SEQUENCES):
            return [
                cls._filter_unsafe(item)
                for item in value
            ]

        return FORMAT_REPLACER

    @classmethod
    def _make_yaml(cls, value: Any, indent: str = '') -> str:  # noqa: ANN401
        """Serialize a value to an indented YAML string."""
        data = dump(
            cls._filter_unsafe(value),
            indent=SNIPPET_INDENT,
            sort_keys=False,
        )

        return cls._make_indent(data, indent)

    @staticmethod
    def _make_indent(value: str, indent: str) -> str:
        """Apply indentation to a multi-line string, dropping blank lines."""
        if not indent:
            return value

        return linesep.join(
            f'{indent}{line}'
            for line in value.splitlines()
            if line.strip()
        )

    @staticmethod
    def _ensure_indent(indent: str | int | None = None) -> str:
        """Normalize indentation given as a string or a number of spaces."""
        if isinstance(indent, int) and indent > 0:
            return ' ' * indent

        if isinstance(indent, str):
            return indent

        return ''


class DefinitionWarning(UserWarning):
    """Warning emitted for non-fatal step definition issues.

    Used when a step library contains conflicting definitions and the
    library is assembled in non-strict mode.
    """


class HerkinError(Exception, ErrorFormatter):
    """Base exception for all herkin errors.

    All custom exceptions raised by the library inherit from this class
    to allow unified error handling by callers.
    """

    def __init__(self, message: str, *,
                 context: ErrorContext | None = None) -> None:
        """Initialize an error.

        Args:
            message: Human-readable error description.
            context: Error context containing optional location data.
        """
        self.message = message
        self.context = context

        super().__init__(message)

    def __str__(self) -> str:
        """String represenatation."""
        return self.format(self.message, self.context)


class DefinitionError(HerkinError):
    """Error raised for invalid step definitions.

    Covers malformed patterns, parameters that do not match pattern
    groups and conflicting definitions in strict mode.
    """


class GrammarError(HerkinError):
    """Error raised when feature text does not conform to the grammar.

    A grammar error is fatal to the parse: no partial feature is
    returned. The error points at the furthest position the grammar
    reached and lists what was expected there.
    """

    @property
    def line_num(self) -> int | None:
        """Zero-based line of the failure."""
        return (self.context or {}).get('line_num')

    @property
    def column_num(self) -> int | None:
        """Zero-based column of the failure."""
        return (self.context or {}).get('column_num')

    @property
    def expected(self) -> list[str]:
        """Alternatives expected at the failure position."""
        return (self.context or {}).get('expected') or []

    @classmethod
    def from_position(cls, text: str, offset: int, *,
                      expected: list[str] | None = None,
                      filename: str | None = None) -> 'Self':
        """Create a grammar error for a position in the source text.

        Args:
            text: Full source text.
            offset: Character offset of the failure.
            expected: Alternatives expected at the offset.
            filename: Optional name of the source.

        Returns:
            GrammarError with line, column and source line attached.
        """
        line_start = text.rfind('\n', 0, offset) + 1
        line_end = text.find('\n', offset)
        if line_end < 0:
            line_end = len(text)

        error_context = ErrorContext(
            filename=filename,
            line_num=text.count('\n', 0, offset),
            column_num=offset - line_start,
            source_line=text[line_start:line_end].rstrip('\r'),
            expected=expected,
        )

        message = 'Unexpected end of input' if offset >= len(text) else 'Unexpected input'

        return cls(message, context=error_context)


class StepRuntimeError(HerkinError):
    """Error raised when a step fails with an unexpected exception.

    Failed steps are reported through results; this error signals that
    a step implementation itself broke while evaluating.
    """

    @classmethod
    def from_step(cls, step: Any, *,  # noqa: ANN401
                  message: str | None = None,
                  context: Any = None,  # noqa: ANN401
                  case_name: str | None = None,
                  step_num: int | None = None,
                  line_num: int | None = None,
                  error: Exception | None = None) -> 'Self':
        """Create a runtime error describing a failing step.

        Args:
            step: Step object that raised.
            message: An optional custom message.
            context: Context the step was evaluated against.
            case_name: Name of the case being evaluated.
            step_num: Position of the step inside its case.
            line_num: Zero-based source line of the case header.
            error: Exception raised by the step.

        Returns:
            StepRuntimeError with a snapshot of the step and its context.
        """
        element: Any = FORMAT_REPLACER
        if isinstance(step, BaseModel):
            element = {
                'step': type(step).__name__,
                **step.model_dump(exclude_none=True),
            }

        error_context = ErrorContext(
            line_num=line_num,
            case_name=case_name,
            step_num=step_num,
            error=error,
            context=context,
            element=element,
        )

        error_message = 'Runtime error'
        if message:
            error_message += f'{linesep}{' ' * FORMAT_INDENT}{message}'

        return cls(error_message, context=error_context)
