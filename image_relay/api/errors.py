"""Translation of relay errors into JSON error envelopes."""

from fastapi import Request, status
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..config.settings import Settings
from ..domain.entities.generation_result import FailureKind
from ..domain.errors import (
    ImageGenerationError,
    ModelFailureError,
    NotConfiguredError,
    PromptValidationError,
    UnsupportedCapabilityError,
)


def not_configured_response(**extra) -> JSONResponse:
    """500 returned by every /api/* route when no API key is configured."""
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Gemini API key not configured", "keyLoaded": False, **extra},
    )


def _model_failure_response(error: ModelFailureError, settings: Settings) -> JSONResponse:
    failure = error.failure

    if failure.kind is FailureKind.NOT_FOUND:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={
                "error": "Model not found",
                "message": "The requested Gemini model is not available. Tried multiple models but none were found.",
                "suggestion": "Please check your API key permissions and available models. Visit /api/models for debugging info.",
                "details": failure.message,
            },
        )

    if failure.kind is FailureKind.QUOTA_EXCEEDED:
        retry_after = failure.retry_after or str(settings.default_retry_after_seconds)
        return JSONResponse(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            content={
                "error": "API quota exceeded",
                "message": "You have exceeded your current quota. Please wait a moment and try again.",
                "retryAfter": f"{retry_after} seconds",
                "details": failure.message,
            },
        )

    if failure.kind is FailureKind.AUTH_INVALID:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={
                "error": "Invalid API key",
                "message": "Please check your GEMINI_API_KEY environment variable.",
            },
        )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Failed to generate image", "message": failure.message},
    )


def error_response(error: ImageGenerationError, settings: Settings) -> JSONResponse:
    """
    Map a relay error to its HTTP status and JSON envelope.

    400 blank prompt, 500 missing key, 404/429/401/500 by failure kind,
    501 text-only answer, 500 for anything else.
    """
    if isinstance(error, PromptValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": str(error)},
        )

    if isinstance(error, NotConfiguredError):
        return not_configured_response(error=str(error))

    if isinstance(error, ModelFailureError):
        return _model_failure_response(error, settings)

    if isinstance(error, UnsupportedCapabilityError):
        return JSONResponse(
            status_code=status.HTTP_501_NOT_IMPLEMENTED,
            content={
                "error": str(error),
                "message": (
                    f"The model {error.model} returned text instead of an image. "
                    "It may not support image generation, or image output may not be "
                    "available on your current plan."
                ),
                "response": error.text,
                "suggestion": (
                    "Please check that the model has image generation capabilities on your "
                    "API plan, or consider using a dedicated image generation API."
                ),
            },
        )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Failed to generate image", "message": str(error)},
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Render request validation errors on /api/* as the JSON error envelope.

    A missing body or prompt is a 400 "Prompt is required"; a prompt of the
    wrong type is a 500 generation failure. Other paths keep FastAPI's 422.
    """
    if not request.url.path.startswith("/api/"):
        return await request_validation_exception_handler(request, exc)

    errors = exc.errors()
    if any(error.get("type") == "missing" for error in errors):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": str(PromptValidationError())},
        )

    message = "; ".join(str(error.get("msg")) for error in errors) or "Invalid request body"
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Failed to generate image", "message": message},
    )
