"""Core components for imageform.

- **ImageformConfig**: Configuration management using Pydantic Settings
- **ImageProvider**: Client for the external image-generation service
- **resolve_image_size**: Size tier to pixel-dimension mapping
"""

from imageform.core.config import ImageformConfig
from imageform.core.provider import ImageProvider, ProviderError, resolve_image_size

__all__ = [
    "ImageformConfig",
    "ImageProvider",
    "ProviderError",
    "resolve_image_size",
]
