"""Scripted ImageProvider used in place of the Gemini API."""

from collections import defaultdict
from typing import Any

from image_relay.domain.entities.generation_result import (
    Failure,
    FailureKind,
    GenerationOutcome,
)
from image_relay.domain.errors import ProviderError
from image_relay.domain.interfaces.image_provider import ImageProvider


class StubImageProvider(ImageProvider):
    """
    Image provider that replays scripted outcomes per model.

    Each model maps to a list of outcomes consumed one call at a time; the
    last outcome repeats once the script runs out. Models without a script
    fail with a 404, like an unknown model on the real API. Every call is
    recorded in ``calls`` as ``(model, contents, temperature)``.
    """

    def __init__(
        self,
        scripts: dict[str, list[GenerationOutcome]] | None = None,
        default: GenerationOutcome | None = None,
        models: list[dict[str, Any]] | None = None,
        list_error: str | None = None,
    ) -> None:
        self._scripts = {model: list(outcomes) for model, outcomes in (scripts or {}).items()}
        self._default = default
        self._models = models or []
        self._list_error = list_error
        self._positions: dict[str, int] = defaultdict(int)
        self.calls: list[tuple[str, str, float | None]] = []

    async def generate(
        self,
        model: str,
        contents: str,
        temperature: float | None = None,
    ) -> GenerationOutcome:
        self.calls.append((model, contents, temperature))

        script = self._scripts.get(model)
        if not script:
            if self._default is not None:
                return self._default
            return Failure(
                FailureKind.NOT_FOUND,
                f"models/{model} is not found for API version v1beta",
                status_code=404,
            )

        position = min(self._positions[model], len(script) - 1)
        self._positions[model] += 1
        return script[position]

    async def list_models(self) -> list[dict[str, Any]]:
        if self._list_error:
            raise ProviderError(self._list_error, 500)
        return list(self._models)

    def calls_for(self, model: str) -> int:
        """Number of calls made against one model."""
        return sum(1 for called, _, _ in self.calls if called == model)
