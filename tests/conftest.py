"""Shared pytest fixtures for imageform tests."""

import shutil
import tempfile
from pathlib import Path
from types import SimpleNamespace
from typing import Generator
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from imageform.api.main import create_app
from imageform.core.config import ImageformConfig
from imageform.core.provider import ImageProvider

FAKE_IMAGE_URL = "http://example/img.png"

# Environment variables read by ImageformConfig.  Cleared for every test so a
# developer's shell cannot leak into the results.
CONFIG_ENV_VARS = (
    "PORT",
    "API_PORT",
    "API_HOST",
    "LOG_LEVEL",
    "OPENAI_API_KEY",
    "IMAGE_MODEL",
)


def make_images_response(*urls: str | None) -> SimpleNamespace:
    """Build an object shaped like ``openai.types.ImagesResponse``."""
    return SimpleNamespace(data=[SimpleNamespace(url=url) for url in urls])


@pytest.fixture(autouse=True)
def clean_env(monkeypatch) -> None:
    """Remove configuration variables from the process environment."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def test_config(temp_dir: Path) -> ImageformConfig:
    """Create a test configuration with a minimal page template.

    Static assets come from the real package ``views`` directory.

    Args:
        temp_dir: Temporary directory from fixture

    Returns:
        ImageformConfig instance for testing
    """
    templates_dir = temp_dir / "templates"
    templates_dir.mkdir()
    (templates_dir / "index.html").write_text(
        "<!DOCTYPE html><html><body><h1>Image Generator</h1>"
        '<form id="image-form"></form></body></html>',
        encoding="utf-8",
    )

    return ImageformConfig(
        _env_file=None,
        api_host="127.0.0.1",
        api_port=3000,
        openai_api_key="sk-test",
        templates_dir=str(templates_dir),
    )


@pytest.fixture
def openai_client() -> MagicMock:
    """Stand-in for ``AsyncOpenAI`` returning one image URL.

    Returns:
        Mock whose ``images.generate`` is an ``AsyncMock``
    """
    client = MagicMock()
    client.images.generate = AsyncMock(return_value=make_images_response(FAKE_IMAGE_URL))
    client.close = AsyncMock()
    return client


@pytest.fixture
def image_provider(openai_client: MagicMock) -> ImageProvider:
    """ImageProvider wired to the mocked OpenAI client."""
    return ImageProvider(client=openai_client, model="dall-e-2")


@pytest.fixture
def test_app(test_config: ImageformConfig, image_provider: ImageProvider) -> FastAPI:
    """Application built with the test configuration and mocked provider."""
    return create_app(test_config, provider=image_provider)


@pytest.fixture
def test_client(test_app: FastAPI) -> Generator[TestClient, None, None]:
    """TestClient that reports server errors as 500 responses.

    Yields:
        TestClient with the application lifespan running
    """
    with TestClient(test_app, raise_server_exceptions=False) as client:
        yield client


@pytest.fixture
def images_response():
    """Factory for fake provider responses, see :func:`make_images_response`."""
    return make_images_response
