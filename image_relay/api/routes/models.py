"""Diagnostic endpoints for the Gemini API key and model catalog."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from ..dependencies import get_image_provider
from ..errors import not_configured_response
from ...config.settings import Settings, get_settings
from ...domain.entities.generation_result import Failure, FailureKind
from ...domain.errors import ProviderError
from ...domain.interfaces.image_provider import ImageProvider

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["models"])

KEY_TEST_PROMPT = "Say hello"


def _error_details(payload: Any) -> Any:
    """The provider's `error.details` list from a Gemini error payload, if any."""
    if isinstance(payload, dict):
        error = payload.get("error", payload)
        if isinstance(error, dict) and error.get("details"):
            return error["details"]
    return "No additional details"


@router.get("/list-models")
async def list_models(
    provider: ImageProvider | None = Depends(get_image_provider),
    settings: Settings = Depends(get_settings),
):
    """List every model the configured API key can see."""
    if provider is None:
        return not_configured_response()

    try:
        models = await provider.list_models()
    except ProviderError as e:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Failed to list models",
                "message": str(e),
                "keyLoaded": settings.key_loaded,
            },
        )

    return {"success": True, "models": models, "totalModels": len(models)}


@router.get("/test-key")
async def check_key(
    provider: ImageProvider | None = Depends(get_image_provider),
    settings: Settings = Depends(get_settings),
):
    """
    Check that the API key works.

    Sends a short text prompt to each test model in turn and reports the
    first one that answers.
    """
    if provider is None:
        return not_configured_response(keyLength=0)

    last_failure: Failure | None = None
    for model in settings.key_test_models:
        outcome = await provider.generate(model, KEY_TEST_PROMPT)
        if isinstance(outcome, Failure):
            last_failure = outcome
            continue

        logger.info(f"API key test succeeded with model: {model}")
        return {
            "success": True,
            "message": "API key is working!",
            "workingModel": model,
            "testResponse": outcome.text or "",
            "keyLoaded": True,
            "keyPreview": settings.key_preview,
        }

    failure = last_failure or Failure(FailureKind.GENERIC, "No working models found")
    logger.warning(f"API key test failed: {failure.message[:100]}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "API key test failed",
            "message": failure.message,
            "status": failure.status_code,
            "details": _error_details(failure.details),
            "keyLoaded": settings.key_loaded,
            "suggestion": "Try visiting /api/list-models to see available models",
        },
    )


@router.get("/models")
async def models_to_try(
    provider: ImageProvider | None = Depends(get_image_provider),
    settings: Settings = Depends(get_settings),
):
    """Report the model names worth trying against /api/generate."""
    if provider is None:
        return not_configured_response()

    available = [{"name": name, "status": "testing"} for name in settings.listed_models]
    return {
        "message": "Test models in /api/generate endpoint",
        "modelsToTry": settings.listed_models,
        "availableModels": available or "No models tested yet",
    }
