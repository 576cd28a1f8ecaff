"""imageform — FastAPI Application.

This module is the single entry point for the web application.  It defines
the application factory, the HTTP routes, and the ``main()`` CLI function
that launches the uvicorn server.

Architecture
------------
- **Configuration** is read once by :class:`~imageform.core.config.ImageformConfig`
  and stored on ``app.state.settings``.
- **Image generation** is delegated to
  :class:`~imageform.core.provider.ImageProvider`, constructed once in the
  lifespan handler and shared by all requests.
- **Static assets** (CSS, JS) are served by ``StaticFiles`` under
  ``/views/...``.
- **The HTML page** is served as a raw ``HTMLResponse``; it needs no
  server-side data.

Endpoints
---------
========  ==================  ==========================================
Method    Path                Purpose
========  ==================  ==========================================
GET       ``/``               Serve the image-request form page
POST      ``/generate``       Generate one image, return its URL
GET       ``/views/*``        Static assets
========  ==================  ==========================================

Usage
-----
CLI (installed entry point)::

    imageform

Direct invocation::

    python -m imageform.api.main

Under another ASGI server::

    uvicorn imageform.api.main:create_app --factory
"""

from __future__ import annotations

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from pydantic import ValidationError

from imageform import __version__
from imageform.api.models import GenerateRequest, GenerateResult
from imageform.core.config import ImageformConfig
from imageform.core.provider import ImageProvider

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# uvicorn registers TRACE at level 5; the rest are stdlib names.
_LOG_LEVELS: dict[str, int] = {
    "critical": logging.CRITICAL,
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": 5,
}

_FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")

# ---------------------------------------------------------------------------
# Application lifecycle: provider setup and teardown.
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application startup and shutdown lifecycle.

    On startup:
        Builds an :class:`ImageProvider` from ``app.state.settings`` unless
        one was injected into :func:`create_app`.  No network client is
        opened yet, so startup succeeds without a credential.

    On shutdown:
        Closes the provider's connection pool if this handler created it.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to the application for the duration of its lifetime.
    """
    owns_provider = getattr(app.state, "image_provider", None) is None
    if owns_provider:
        app.state.image_provider = ImageProvider.from_config(app.state.settings)
        logger.info(f"ImageProvider initialised (model={app.state.image_provider.model}).")

    yield

    if owns_provider:
        await app.state.image_provider.close()
        app.state.image_provider = None
        logger.info("ImageProvider closed on shutdown.")


# ---------------------------------------------------------------------------
# Request dependencies.
# ---------------------------------------------------------------------------


async def parse_generate_request(request: Request) -> GenerateRequest:
    """Read a :class:`GenerateRequest` from a JSON or form-encoded body.

    Args:
        request: The incoming request.

    Returns:
        The validated request model.

    Raises:
        HTTPException: 400 if a non-form body is not valid JSON.
        RequestValidationError: 422 listing every missing or invalid field.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(_FORM_CONTENT_TYPES):
        form = await request.form()
        payload = dict(form)
    else:
        try:
            payload = await request.json()
        except ValueError:
            raise HTTPException(status_code=400, detail="Request body must be valid JSON") from None

    try:
        return GenerateRequest.model_validate(payload)
    except ValidationError as exc:
        errors = [
            {**error, "loc": ("body", *error["loc"])} for error in exc.errors(include_url=False)
        ]
        raise RequestValidationError(errors, body=payload)


def get_image_provider(request: Request) -> ImageProvider:
    """Return the provider shared by the running application."""
    return request.app.state.image_provider


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def index(request: Request) -> HTMLResponse:
    """Serve the image-request form page.

    Returns:
        The HTML content of ``templates/index.html``.

    Raises:
        HTTPException: 404 if ``index.html`` is not found.
    """
    settings: ImageformConfig = request.app.state.settings
    index_path = settings.templates_dir / "index.html"
    if index_path.exists():
        return HTMLResponse(content=index_path.read_text(encoding="utf-8"))
    raise HTTPException(status_code=404, detail="index.html not found")


_GENERATE_BODY_SCHEMA = GenerateRequest.model_json_schema()


@router.post(
    "/generate",
    response_model=GenerateResult,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {"schema": _GENERATE_BODY_SCHEMA},
                "application/x-www-form-urlencoded": {"schema": _GENERATE_BODY_SCHEMA},
            },
        }
    },
)
async def generate_image(
    req: GenerateRequest = Depends(parse_generate_request),
    provider: ImageProvider = Depends(get_image_provider),
) -> GenerateResult:
    """Generate one image and return its URL.

    Provider errors are not caught here; they reach the server error
    middleware and the caller receives a 500.

    Args:
        req: Validated :class:`GenerateRequest` payload.
        provider: The shared :class:`ImageProvider`.

    Returns:
        :class:`GenerateResult` holding the image URL.
    """
    logger.info(f"prompt: {req.prompt} size: {req.size}")
    url = await provider.generate(req.prompt, req.size)
    return GenerateResult(url=url)


# ---------------------------------------------------------------------------
# Application factory.
# ---------------------------------------------------------------------------


def create_app(
    settings: ImageformConfig | None = None,
    provider: ImageProvider | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Configuration to use.  Loaded from the environment when
            omitted.
        provider: Image provider to use instead of building one at startup.
            The caller keeps ownership and is responsible for closing it.

    Returns:
        A fully wired FastAPI application.
    """
    settings = settings if settings is not None else ImageformConfig()

    app = FastAPI(
        title="imageform",
        description="Web form front-end for text-to-image generation.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.image_provider = provider

    app.include_router(router)
    app.mount("/views", StaticFiles(directory=str(settings.views_dir)), name="views")
    return app


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host, port and log level from :class:`ImageformConfig` (the
    ``API_HOST``, ``API_PORT`` and ``LOG_LEVEL`` environment variables).
    Exits with status 1 if the server cannot start, e.g. when the port is
    already taken.

    This function is registered as the ``imageform`` console script in
    ``pyproject.toml``.
    """
    settings = ImageformConfig()
    logging.basicConfig(level=_LOG_LEVELS[settings.log_level], format=LOG_FORMAT)

    app = create_app(settings)
    server = uvicorn.Server(
        uvicorn.Config(
            app,
            host=settings.api_host,
            port=settings.api_port,
            log_level=settings.log_level,
        )
    )
    try:
        server.run()
    except SystemExit as exc:
        # uvicorn exits with its own status on a failed bind; report 1.
        if exc.code not in (None, 0):
            logger.error(
                f"Server failed to start on {settings.api_host}:{settings.api_port} "
                f"(exit status {exc.code})"
            )
            sys.exit(1)
        raise

    if not server.started:
        logger.error(f"Server failed to start on {settings.api_host}:{settings.api_port}")
        sys.exit(1)


if __name__ == "__main__":
    main()
