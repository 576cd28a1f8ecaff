"""Pydantic request and response models for the imageform API.

FastAPI uses these models for request validation, response serialisation
and OpenAPI documentation.

Models
------
GenerateRequest
    Payload for ``POST /generate``: the prompt text and a size tier.
GenerateResult
    Response of ``POST /generate``: the URL of the generated image.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class GenerateRequest(BaseModel):
    """Request body for the ``POST /generate`` endpoint.

    Accepted as JSON or as form fields; both are validated against this
    model before the handler runs.

    Attributes:
        prompt: Free-text description of the image.  Must not be empty.
        size: Size tier label.  ``"small"`` and ``"medium"`` are recognised;
            any other value requests the largest size.
    """

    prompt: str = Field(
        ...,
        min_length=1,
        description="Text prompt describing the image.",
    )
    size: str = Field(
        ...,
        description="Size tier: 'small', 'medium', or anything else for large.",
    )


class GenerateResult(BaseModel):
    """Response body for the ``POST /generate`` endpoint.

    Attributes:
        url: URL of the generated image, as returned by the provider.
    """

    url: str = Field(
        ...,
        description="URL of the generated image.",
    )
