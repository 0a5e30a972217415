"""Domain services."""

from .image_relay import ImageRelay

__all__ = ["ImageRelay"]
