"""Base Pydantic models for grammar and runtime elements.

This module defines the foundational model classes used by the feature
tree, step definitions, results and settings. Tree nodes are immutable
and strictly validated so that a parsed feature can be evaluated any
number of times with the same outcome.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SchemaModel(BaseModel):
    """Base immutable model for all feature elements.

    This class serves as the root for all Pydantic models representing
    parsed elements such as scenarios, features, step definitions and
    test results.

    Design principles enforced by this model:
        - Immutability: elements cannot be modified after creation.
          A parsed tree is safe to share between evaluations.
        - Strict schema validation: unknown or extra fields are rejected
          to avoid silent errors caused by typos in definitions.
        - Host types: steps and contexts are opaque host objects, so
          arbitrary types are allowed and checked with `isinstance`.

    All models must inherit from this class.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        frozen=True,
        extra='forbid',
    )


class DescribedMixin(SchemaModel):
    """Mixin providing element self-documentation.

    The fields defined in this model do not affect parsing or evaluation
    semantics and are used purely for descriptive purposes.
    """

    title: str | None = Field(
        default=None,
        title='Title',
        description='Short human-readable title of the element.',
    )

    description: str | None = Field(
        default=None,
        title='Description',
        description='Detailed human-readable description of the element.',
    )


class SettingsModel(BaseSettings):
    """Base immutable model for runtime settings.

    Design principles enforced by this model:
        - Immutability: resolved settings cannot be modified after creation.
        - Tolerant schema handling: unknown or extra fields are ignored.
          This allows the surrounding environment to contain unrelated
          variables without breaking configuration resolution.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        extra='ignore',
    )
