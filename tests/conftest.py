"""Shared pytest fixtures for Image Relay tests."""

from collections.abc import Callable, Iterator

import pytest
from fastapi.testclient import TestClient

from image_relay.api.dependencies import get_image_provider, reset_dependencies
from image_relay.config.settings import Settings, get_settings
from image_relay.domain.entities.generation_result import ImagePayload, Success
from image_relay.main import app

from .stubs import StubImageProvider

TEST_API_KEY = "AIzaTestKey-0123456789"

PNG_SUCCESS = Success(image=ImagePayload(mime_type="image/png", data="AAAA"))


@pytest.fixture
def test_settings() -> Settings:
    """Settings with an API key and no delay between quota retries."""
    return Settings(
        _env_file=None,
        gemini_api_key=TEST_API_KEY,
        quota_retry_delay_seconds=0,
    )


@pytest.fixture
def unconfigured_settings() -> Settings:
    """Settings with no API key configured."""
    return Settings(
        _env_file=None,
        gemini_api_key=None,
        quota_retry_delay_seconds=0,
    )


@pytest.fixture
def make_client() -> Iterator[Callable[..., TestClient]]:
    """Build a TestClient whose settings and provider are replaced.

    Yields:
        Factory taking ``settings`` and an optional ``provider``. When no
        provider is given the real dependency is used, which yields no
        provider for settings without an API key.

    Cleanup:
        Dependency overrides and cached singletons are reset
    """

    def _make(settings: Settings, provider: StubImageProvider | None = None) -> TestClient:
        app.dependency_overrides[get_settings] = lambda: settings
        if provider is not None:
            app.dependency_overrides[get_image_provider] = lambda: provider
        return TestClient(app)

    yield _make

    app.dependency_overrides.clear()
    reset_dependencies()
