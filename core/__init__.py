"""
Core Module

Registry model, error hierarchy and the per-process object graph.
"""

from .catalog import Catalog, CatalogEntry, MediaKind, load_registry, parse_registry
from .errors import (
    EmoteBridgeError,
    RegistryVersionError,
    DownloadError,
    UnsupportedMediaTypeError,
    KeyNotFoundError,
)

__all__ = [
    'Catalog',
    'CatalogEntry',
    'MediaKind',
    'load_registry',
    'parse_registry',
    'EmoteBridgeError',
    'RegistryVersionError',
    'DownloadError',
    'UnsupportedMediaTypeError',
    'KeyNotFoundError',
]
