"""Model-fallback relay for image generation."""

import logging

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_result,
    stop_after_attempt,
    wait_fixed,
)

from ...config.settings import Settings
from ..entities.generation_result import (
    Failure,
    FailureKind,
    GeneratedImage,
    GenerationOutcome,
    Success,
)
from ..errors import (
    ImageGenerationError,
    ModelFailureError,
    NotConfiguredError,
    PromptValidationError,
    UnsupportedCapabilityError,
)
from ..interfaces.image_provider import ImageProvider

logger = logging.getLogger(__name__)

IMAGE_INSTRUCTION = "Generate an image: {prompt}"
NO_MODEL_MESSAGE = "No available model found. Please check your API key and available models."


def _is_quota_failure(outcome: GenerationOutcome) -> bool:
    """Only quota failures are retried; every other outcome is final for the model."""
    return isinstance(outcome, Failure) and outcome.is_quota


def _last_outcome(retry_state: RetryCallState) -> GenerationOutcome:
    return retry_state.outcome.result()


class ImageRelay:
    """
    Generates an image by trying model candidates in a fixed order.

    Each candidate gets one call. Quota failures retry the same candidate
    after a fixed delay, up to ``max_quota_retries`` extra attempts; any
    other failure moves straight on to the next candidate. The first model
    that responds ends the loop.

    When every candidate fails, the most specific failure is reported: the
    latest non-quota failure if there was one, otherwise the quota failure.
    """

    def __init__(
        self,
        provider: ImageProvider | None,
        candidates: list[str],
        temperature: float = 1.0,
        max_quota_retries: int = 2,
        quota_retry_delay: float = 5.0,
        response_preview_chars: int = 500,
    ) -> None:
        self._provider = provider
        self._candidates = list(candidates)
        self._temperature = temperature
        self._max_quota_retries = max_quota_retries
        self._quota_retry_delay = quota_retry_delay
        self._response_preview_chars = response_preview_chars

    @classmethod
    def from_settings(cls, provider: ImageProvider | None, settings: Settings) -> "ImageRelay":
        return cls(
            provider=provider,
            candidates=settings.image_model_candidates,
            temperature=settings.generation_temperature,
            max_quota_retries=settings.max_quota_retries,
            quota_retry_delay=settings.quota_retry_delay_seconds,
            response_preview_chars=settings.response_preview_chars,
        )

    @property
    def candidates(self) -> list[str]:
        return list(self._candidates)

    async def generate(self, prompt: str | None) -> GeneratedImage:
        """
        Generate an image for a prompt.

        Args:
            prompt: Free-text prompt from the client

        Returns:
            GeneratedImage with the payload and the model that produced it

        Raises:
            PromptValidationError: If the prompt is missing or blank
            NotConfiguredError: If no provider credential is configured
            ModelFailureError: If no candidate produced a response
            UnsupportedCapabilityError: If the model answered with text only
            ImageGenerationError: For anything unexpected
        """
        if not prompt or not prompt.strip():
            raise PromptValidationError()

        if self._provider is None:
            raise NotConfiguredError()

        try:
            model, outcome = await self._first_response(IMAGE_INSTRUCTION.format(prompt=prompt))
        except ImageGenerationError:
            raise
        except Exception as e:
            logger.error(f"Image generation failed: {e}")
            raise ImageGenerationError(str(e), e)

        if not isinstance(outcome, Success):
            raise UnsupportedCapabilityError(
                outcome.text[: self._response_preview_chars], model
            )

        logger.info(f"Model {model} returned an image ({outcome.image.mime_type})")
        return GeneratedImage(
            image=outcome.image,
            prompt=prompt,
            model=model,
            text_response=outcome.text,
        )

    async def _first_response(self, contents: str) -> tuple[str, GenerationOutcome]:
        """Walk the candidates until one responds, or raise the failure to report."""
        last_error: Failure | None = None
        quota_error: Failure | None = None

        for model in self._candidates:
            outcome = await self._attempt(model, contents)

            if not isinstance(outcome, Failure):
                logger.info(f"Successfully used model: {model}")
                return model, outcome

            if outcome.is_quota:
                logger.warning(f"Model {model} quota exceeded after retries, trying next model...")
                quota_error = outcome
                continue

            if outcome.kind not in (FailureKind.NOT_FOUND, FailureKind.BAD_REQUEST):
                logger.warning(f"Error with model {model}: {outcome.message[:100]}")
            last_error = outcome

        failure = last_error or quota_error or Failure(FailureKind.GENERIC, NO_MODEL_MESSAGE)
        raise ModelFailureError(failure)

    async def _attempt(self, model: str, contents: str) -> GenerationOutcome:
        """Call one model, retrying on quota failures with a fixed delay."""

        def log_retry(retry_state: RetryCallState) -> None:
            logger.warning(
                f"Model {model} quota exceeded. Retrying in {self._quota_retry_delay:g} seconds... "
                f"(attempt {retry_state.attempt_number}/{self._max_quota_retries})"
            )

        retrying = AsyncRetrying(
            retry=retry_if_result(_is_quota_failure),
            stop=stop_after_attempt(self._max_quota_retries + 1),  # +1 because first attempt isn't a retry
            wait=wait_fixed(self._quota_retry_delay),
            before_sleep=log_retry,
            retry_error_callback=_last_outcome,
        )
        return await retrying(self._provider.generate, model, contents, self._temperature)
