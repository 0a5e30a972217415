"""Image Relay - prompt-to-image relay backed by the Gemini API."""

__version__ = "0.1.0"
