"""Abstract interface for generative image providers."""

from abc import ABC, abstractmethod
from typing import Any

from ..entities.generation_result import GenerationOutcome


class ImageProvider(ABC):
    """
    Abstract interface for a generative-AI provider.

    Implementations never raise from ``generate``: every provider error is
    classified into a ``Failure`` so the relay's fallback loop behaves the
    same whether backed by the real API or a test stub.
    """

    @abstractmethod
    async def generate(
        self,
        model: str,
        contents: str,
        temperature: float | None = None,
    ) -> GenerationOutcome:
        """
        Issue a single generation call against one model.

        Args:
            model: Provider model identifier
            contents: Text sent to the model
            temperature: Sampling temperature, or None for the model default

        Returns:
            Success if an image part was returned, TextOnly if the model
            answered without one, Failure if the call failed
        """
        pass

    @abstractmethod
    async def list_models(self) -> list[dict[str, Any]]:
        """
        List the models visible to the configured credential.

        Returns:
            One dict per model as reported by the provider

        Raises:
            ProviderError: If the listing call fails
        """
        pass
