"""Generation outcomes returned by image providers and the relay."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class FailureKind(str, Enum):
    """Classification of a failed provider call."""

    NOT_FOUND = "not_found"
    QUOTA_EXCEEDED = "quota_exceeded"
    AUTH_INVALID = "auth_invalid"
    BAD_REQUEST = "bad_request"
    GENERIC = "generic"


@dataclass(frozen=True)
class ImagePayload:
    """Image bytes as base64 text plus their MIME type."""

    mime_type: str
    data: str

    @property
    def data_uri(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"


@dataclass(frozen=True)
class Success:
    """The model returned an image part."""

    image: ImagePayload
    text: str | None = None


@dataclass(frozen=True)
class TextOnly:
    """The model responded, but without any image part."""

    text: str


@dataclass(frozen=True)
class Failure:
    """The provider call failed."""

    kind: FailureKind
    message: str
    status_code: int | None = None
    # Raw error payload from the provider, if any
    details: Any = None
    # Seconds suggested by the provider's RetryInfo, if present
    retry_after: str | None = None

    @property
    def is_quota(self) -> bool:
        return self.kind is FailureKind.QUOTA_EXCEEDED


GenerationOutcome = Success | TextOnly | Failure


@dataclass
class GeneratedImage:
    """Result of a successful relay request."""

    image: ImagePayload
    prompt: str
    model: str
    text_response: str | None = None

    @property
    def data_uri(self) -> str:
        return self.image.data_uri
