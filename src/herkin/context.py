"""Execution context contract and snapshot utilities.

A context is any host-defined mutable object built by a zero-argument
factory. The runner owns one context per scenario run and hands it back
inside the test result. This module also knows how to render a context
into plain data for error reports.
"""

from collections.abc import Callable, Mapping
from dataclasses import asdict, is_dataclass
from datetime import date, datetime, timedelta
from typing import Any

from pydantic import BaseModel

#: Zero-argument factory building a fresh context for one scenario run.
type ContextFactory[C] = Callable[[], C]

MAPPINGS = (dict,)
SCALARS = (date, datetime, timedelta, str, bytes, int, float, bool)
SEQUENCES = (list, tuple, set, frozenset)


class ContextDict(dict[str, Any]):
    """Default mutable context.

    A plain dictionary of named values shared by the steps of one
    scenario run. The class itself is a valid context factory:

        results = feature.evaluate(ContextDict)
    """


def context_view(context: Any) -> Any:  # noqa: ANN401
    """Render a context into plain data.

    Mappings, dataclasses, Pydantic models and objects exposing
    `__dict__` become dictionaries. Anything else is returned as is
    and left to the caller to sanitize.

    Args:
        context: Host context object.

    Returns:
        A mapping view of the context, or the context itself.
    """
    if isinstance(context, Mapping):
        return dict(context)

    if isinstance(context, BaseModel):
        return context.model_dump()

    if is_dataclass(context) and not isinstance(context, type):
        return asdict(context)

    if hasattr(context, '__dict__'):
        return {
            key: value
            for key, value in vars(context).items()
            if not key.startswith('_')
        }

    return context
