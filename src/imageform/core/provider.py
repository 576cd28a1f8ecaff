"""Image provider client for imageform.

This module provides :class:`ImageProvider`, the single point of contact with
the external image-generation service (OpenAI Images).  It turns a
``(prompt, size tier)`` pair into exactly one outbound request and hands back
the URL of the generated image.

Key Responsibilities
--------------------
- **Tier resolution** — :func:`resolve_image_size` maps the caller's size
  label to a concrete pixel-dimension string.  The mapping is total: any
  label other than ``"small"`` or ``"medium"`` resolves to the largest size.
- **One request, one image** — every call asks for ``n=1`` and returns the
  ``url`` of the first result.  There is no retry, no backoff and no timeout
  override; provider errors propagate to the caller unchanged.
- **Shared client** — the underlying ``AsyncOpenAI`` client is built once,
  on the first request, and only read afterwards, so concurrent requests can
  share it safely.  A missing credential fails that request, not startup.

Usage
-----
::

    from imageform.core.config import ImageformConfig
    from imageform.core.provider import ImageProvider

    provider = ImageProvider.from_config(ImageformConfig())
    url = await provider.generate("a red fox", "small")
    await provider.close()

See Also
--------
- :mod:`imageform.api.main` — the FastAPI application that owns the provider.
"""

from __future__ import annotations

import logging

from openai import AsyncOpenAI

from imageform.core.config import ImageformConfig

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Size tier → dimension mapping.  Anything not listed falls back to
# LARGEST_SIZE.
# ---------------------------------------------------------------------------
SIZE_TIERS: dict[str, str] = {
    "small": "256x256",
    "medium": "512x512",
}
LARGEST_SIZE = "1024x1024"


class ProviderError(Exception):
    """Raised when the provider answers without a usable image URL."""


def resolve_image_size(tier: str | None) -> str:
    """Resolve a size tier label to a pixel-dimension string.

    Matching is exact and case-sensitive; ``"SMALL"`` is not ``"small"``.

    Args:
        tier: Size label submitted by the caller.

    Returns:
        ``"256x256"`` for ``"small"``, ``"512x512"`` for ``"medium"`` and
        ``"1024x1024"`` for everything else, including ``None``.
    """
    return SIZE_TIERS.get(tier, LARGEST_SIZE) if isinstance(tier, str) else LARGEST_SIZE


class ImageProvider:
    """Thin wrapper around a shared ``AsyncOpenAI`` client.

    The SDK client is built on first use, so a missing credential fails the
    generate call rather than application startup.

    Attributes:
        _client (AsyncOpenAI | None):
            The provider SDK client, or ``None`` until the first request.
            Never replaced once built.
        _api_key (str | None):
            Credential used to build the client.
        _model (str):
            Image model identifier sent with every request.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "dall-e-2",
        client: AsyncOpenAI | None = None,
    ) -> None:
        """Initialise the provider.

        Args:
            api_key: OpenAI credential.  Ignored when *client* is given.
            model: Image model identifier.
            client: Pre-built client, mainly for tests.
        """
        self._client = client
        self._api_key = api_key
        self._model = model

    @classmethod
    def from_config(cls, settings: ImageformConfig) -> ImageProvider:
        """Build a provider from application configuration."""
        return cls(api_key=settings.openai_api_key, model=settings.image_model)

    @property
    def model(self) -> str:
        """Image model identifier sent with every request."""
        return self._model

    def _get_client(self) -> AsyncOpenAI:
        """Return the SDK client, building it on first use.

        Raises:
            openai.OpenAIError: If no credential is available.
        """
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self._api_key)
        return self._client

    async def generate(self, prompt: str, size: str | None) -> str:
        """Generate one image and return its URL.

        Args:
            prompt: Free-text description of the image.
            size: Size tier label (see :func:`resolve_image_size`).

        Returns:
            URL of the generated image.

        Raises:
            ProviderError: If the response holds no image URL.
            openai.OpenAIError: On a missing credential or any provider-side
                or network failure.
        """
        image_size = resolve_image_size(size)
        logger.debug(f"Requesting 1 image from {self._model} at {image_size}")

        response = await self._get_client().images.generate(
            model=self._model,
            prompt=prompt,
            n=1,
            size=image_size,
        )

        if not response.data or not response.data[0].url:
            raise ProviderError("Image provider returned no image URL")
        return response.data[0].url

    async def close(self) -> None:
        """Release the underlying HTTP connection pool, if one was opened."""
        if self._client is not None:
            await self._client.close()
