"""Gemini API implementation of ImageProvider."""

import base64
import logging
from typing import Any

from google import genai
from google.api_core.exceptions import ResourceExhausted
from google.genai.errors import APIError
from google.genai.types import GenerateContentConfig, GenerateContentResponse, Part

from ...domain.entities.generation_result import (
    Failure,
    FailureKind,
    GenerationOutcome,
    ImagePayload,
    Success,
    TextOnly,
)
from ...domain.errors import ProviderError
from ...domain.interfaces.image_provider import ImageProvider

logger = logging.getLogger(__name__)


def _status_code(exception: BaseException) -> int | None:
    """HTTP status carried by an SDK exception, if any."""
    for attr in ("code", "status"):
        value = getattr(exception, attr, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return int(value)
    return None


def _message(exception: BaseException) -> str:
    message = getattr(exception, "message", None)
    return message if isinstance(message, str) and message else str(exception)


def parse_retry_delay(details: Any) -> str | None:
    """
    Extract the retry delay from a Gemini error payload.

    The payload looks like ``{"error": {"details": [{"@type": "...RetryInfo",
    "retryDelay": "16s"}]}}``. Returns the number of seconds as text
    (``"16"``), or None when no RetryInfo is present.
    """
    if not isinstance(details, dict):
        return None

    error = details.get("error", details)
    if not isinstance(error, dict):
        return None

    for item in error.get("details") or []:
        if isinstance(item, dict) and "RetryInfo" in str(item.get("@type", "")):
            delay = item.get("retryDelay")
            if delay:
                return str(delay).rstrip("s")
    return None


def classify_error(exception: BaseException) -> Failure:
    """
    Map an SDK exception onto a Failure.

    Gemini reports errors as status codes mixed with free-form text, so both
    are checked: quota first, then not-found, then credential problems.
    """
    code = _status_code(exception)
    message = _message(exception)
    lowered = message.lower()
    details = exception.details if isinstance(exception, APIError) else None

    if (
        isinstance(exception, ResourceExhausted)
        or code == 429
        or "quota" in lowered
        or "resource_exhausted" in lowered
    ):
        kind = FailureKind.QUOTA_EXCEEDED
    elif code == 404 or "not found" in lowered:
        kind = FailureKind.NOT_FOUND
    elif code == 401 or "API key" in message:
        kind = FailureKind.AUTH_INVALID
    elif code == 400:
        kind = FailureKind.BAD_REQUEST
    else:
        kind = FailureKind.GENERIC

    return Failure(
        kind=kind,
        message=message,
        status_code=code,
        details=details,
        retry_after=parse_retry_delay(details),
    )


def _encode(data: bytes | str | None) -> str:
    if data is None:
        return ""
    if isinstance(data, str):
        return data
    return base64.b64encode(data).decode("utf-8")


def _text_of(parts: list[Part]) -> str:
    return "".join(part.text for part in parts if getattr(part, "text", None))


def to_outcome(response: GenerateContentResponse) -> GenerationOutcome:
    """Convert a generate_content response into Success, TextOnly or Failure."""
    if not response.candidates:
        return Failure(FailureKind.GENERIC, "No response from Gemini API")

    content = response.candidates[0].content
    parts = list(content.parts or []) if content else []

    for part in parts:
        inline = getattr(part, "inline_data", None)
        if inline and inline.mime_type and inline.mime_type.startswith("image/"):
            return Success(
                image=ImagePayload(mime_type=inline.mime_type, data=_encode(inline.data)),
                text=_text_of(parts) or None,
            )

    return TextOnly(text=_text_of(parts))


class GeminiImageProvider(ImageProvider):
    """
    Image provider backed by the Gemini Developer API.

    Uses the google-genai SDK's async client with an API key. Every SDK error
    is classified into a Failure; retries are left to the caller.
    """

    def __init__(self, api_key: str) -> None:
        """Initialize the Gemini client."""
        self._client = genai.Client(api_key=api_key)
        logger.info("Initialized GeminiImageProvider")

    async def generate(
        self,
        model: str,
        contents: str,
        temperature: float | None = None,
    ) -> GenerationOutcome:
        config = GenerateContentConfig(temperature=temperature) if temperature is not None else None
        try:
            logger.info(f"Calling {model} with: {contents[:100]}")
            response = await self._client.aio.models.generate_content(
                model=model,
                contents=contents,
                config=config,
            )
        except Exception as e:
            failure = classify_error(e)
            logger.info(f"Model {model} failed ({failure.kind.value}): {failure.message[:100]}")
            return failure

        return to_outcome(response)

    async def list_models(self) -> list[dict[str, Any]]:
        try:
            pager = await self._client.aio.models.list()
            return [model.model_dump(mode="json", exclude_none=True) async for model in pager]
        except Exception as e:
            failure = classify_error(e)
            logger.error(f"Listing models failed: {failure.message}")
            raise ProviderError(failure.message, failure.status_code, e)
