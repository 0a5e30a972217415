"""FastAPI dependency injection setup."""

import logging

from fastapi import Depends

from ..config.settings import Settings, get_settings
from ..domain.interfaces.image_provider import ImageProvider
from ..domain.services.image_relay import ImageRelay
from ..infrastructure.genai.gemini_image_provider import GeminiImageProvider

logger = logging.getLogger(__name__)

# Singleton instances
_image_provider: ImageProvider | None = None


def get_image_provider(settings: Settings = Depends(get_settings)) -> ImageProvider | None:
    """
    Get the image provider singleton.

    The provider is built from the API key held by ``settings``; without a
    key there is no provider and callers must answer "not configured".

    Returns:
        ImageProvider implementation, or None if no API key is configured
    """
    global _image_provider
    if not settings.gemini_api_key:
        return None
    if _image_provider is None:
        _image_provider = GeminiImageProvider(api_key=settings.gemini_api_key)
    return _image_provider


def get_image_relay(
    provider: ImageProvider | None = Depends(get_image_provider),
    settings: Settings = Depends(get_settings),
) -> ImageRelay:
    """Build a relay for one request from the configured candidates and retry policy."""
    return ImageRelay.from_settings(provider, settings)


def reset_dependencies() -> None:
    """Reset all dependencies (useful for testing)."""
    global _image_provider
    _image_provider = None
