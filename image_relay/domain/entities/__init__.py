"""Domain entities."""

from .generation_result import (
    Failure,
    FailureKind,
    GeneratedImage,
    GenerationOutcome,
    ImagePayload,
    Success,
    TextOnly,
)

__all__ = [
    "Failure",
    "FailureKind",
    "GeneratedImage",
    "GenerationOutcome",
    "ImagePayload",
    "Success",
    "TextOnly",
]
