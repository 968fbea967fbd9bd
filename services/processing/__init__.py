"""
Processing package.

This package contains the ingestion building blocks split into focused modules:
- rate_limiter: Telegram 429 retry wrapper
- download_cache: persistent, URL-keyed download cache
- image_transformer: in-process emote canvas rendering
- magick_transformer: ImageMagick subprocess backend
"""

from .rate_limiter import RateLimitedCaller, retry_after_seconds
from .download_cache import CachedDownload, DownloadCache
from .image_transformer import (
    ImageFormat,
    PillowTransformer,
    get_transformer,
    render_emote_canvas,
)
from .magick_transformer import MagickTransformer, check_magick_available

__all__ = [
    'RateLimitedCaller',
    'retry_after_seconds',
    'CachedDownload',
    'DownloadCache',
    'ImageFormat',
    'PillowTransformer',
    'get_transformer',
    'render_emote_canvas',
    'MagickTransformer',
    'check_magick_available',
]
