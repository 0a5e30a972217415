"""Domain interfaces (ports) - abstract contracts for infrastructure."""

from .image_provider import ImageProvider

__all__ = [
    "ImageProvider",
]
