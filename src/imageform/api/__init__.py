"""imageform — FastAPI HTTP layer.

This package contains the FastAPI application and the Pydantic
request/response models.

Modules
-------
main
    Application factory, route handlers, and the ``main()`` CLI entry point.
models
    Pydantic models for request and response validation.
"""
