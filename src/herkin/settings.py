"""Runtime settings for parsing and evaluation.

Settings are resolved from environment variables prefixed with
`HERKIN_`; explicit instances may be passed to the parser and the
runner instead.
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from herkin.models import SettingsModel


class Settings(SettingsModel):
    """Parser and runner configuration."""

    model_config = SettingsConfigDict(
        env_prefix='HERKIN_',
        frozen=True,
        extra='ignore',
    )

    strict: bool = Field(
        default=True,
        title='Strict definitions',
        description=(
            'Raise on conflicting step definitions instead of '
            'emitting a warning and keeping the first one.'
        ),
    )

    crlf: bool = Field(
        default=True,
        title='Accept CRLF',
        description='Accept "\\r\\n" as a line terminator in addition to "\\n".',
    )

    assertions_as_failures: bool = Field(
        default=True,
        title='Assertions as failures',
        description=(
            'Treat an `AssertionError` raised by a step as a failed step. '
            'When disabled the error propagates to the caller.'
        ),
    )
