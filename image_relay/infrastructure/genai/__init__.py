"""Google GenAI implementations."""

from .gemini_image_provider import GeminiImageProvider

__all__ = ["GeminiImageProvider"]
