"""imageform - web form front-end for text-to-image generation."""

__version__ = "0.1.0"

from imageform.core.config import ImageformConfig
from imageform.core.provider import ImageProvider, ProviderError, resolve_image_size

__all__ = [
    "ImageformConfig",
    "ImageProvider",
    "ProviderError",
    "resolve_image_size",
]
