"""Configuration schema and validation for slngen."""

from .schema import (
    CSHARP_PROJECT_TYPE_GUID,
    DEFAULT_CAPABILITIES_TO_REMOVE,
    GenerationOptions,
)

__all__ = [
    "CSHARP_PROJECT_TYPE_GUID",
    "DEFAULT_CAPABILITIES_TO_REMOVE",
    "GenerationOptions",
]
