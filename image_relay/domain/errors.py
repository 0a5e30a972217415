"""Domain exceptions raised by the relay and its providers."""

from .entities.generation_result import Failure


class ImageGenerationError(Exception):
    """Exception raised when image generation fails."""

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.original_error = original_error


class PromptValidationError(ImageGenerationError):
    """The prompt was missing or blank."""

    def __init__(self) -> None:
        super().__init__("Prompt is required")


class NotConfiguredError(ImageGenerationError):
    """No Gemini API key is configured."""

    def __init__(self) -> None:
        super().__init__(
            "Gemini API key not configured. Please set GEMINI_API_KEY environment variable."
        )


class ModelFailureError(ImageGenerationError):
    """No candidate model produced a response; carries the failure to report."""

    def __init__(self, failure: Failure):
        super().__init__(failure.message)
        self.failure = failure


class UnsupportedCapabilityError(ImageGenerationError):
    """The model answered with text instead of an image."""

    def __init__(self, text: str, model: str):
        super().__init__("Model does not support direct image generation")
        self.text = text
        self.model = model


class ProviderError(Exception):
    """Exception raised when a provider call outside generation fails."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.original_error = original_error
