"""
Repository modules for data access layer.
"""

from .published_emotes import PublishedEmoteIndex, published_key

__all__ = [
    'PublishedEmoteIndex',
    'published_key',
]
