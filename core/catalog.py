"""
Emote registry loading.

The registry is read once per process into an immutable Catalog which is then
handed explicitly to the ingestion pipeline and the search index.
"""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterator, Tuple

from core.errors import RegistryVersionError
from utils.logging_config import get_logger

logger = get_logger('Catalog')

SUPPORTED_REGISTRY_VERSION = 1


class MediaKind(Enum):
    STATIC = 'static'
    ANIMATED = 'animated'

    @classmethod
    def from_animated_flag(cls, animated: bool) -> 'MediaKind':
        return cls.ANIMATED if animated else cls.STATIC


@dataclass(frozen=True)
class CatalogEntry:
    """One emote from the registry."""
    ref: str
    id: str
    name: str
    requires_colons: bool
    media_kind: MediaKind
    url: str
    safe: bool
    guild_id: str
    guild_name: str

    @property
    def is_animated(self) -> bool:
        return self.media_kind is MediaKind.ANIMATED

    @classmethod
    def from_registry_item(cls, item: Dict[str, Any]) -> 'CatalogEntry':
        return cls(
            ref=str(item['ref']),
            id=str(item['id']),
            name=item.get('name') or '',
            requires_colons=bool(item.get('requires_colons', True)),
            media_kind=MediaKind.from_animated_flag(bool(item['animated'])),
            url=item['url'],
            safe=bool(item['safe']),
            guild_id=str(item.get('guild_id', '')),
            guild_name=item.get('guild_name') or '',
        )


@dataclass(frozen=True)
class Catalog:
    entries: Tuple[CatalogEntry, ...] = ()

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self.entries)

    def eligible(self) -> Iterator[CatalogEntry]:
        """Entries marked safe, in registry order."""
        return (entry for entry in self.entries if entry.safe)


def parse_registry(document: Dict[str, Any]) -> Catalog:
    """
    Build a Catalog from a decoded registry document.

    Raises:
        RegistryVersionError: if the document is not version 1
    """
    version = document.get('version')
    # bool is an int subclass and 1.0 == 1, so compare the type as well
    if type(version) is not int or version != SUPPORTED_REGISTRY_VERSION:
        raise RegistryVersionError(version)

    entries = tuple(CatalogEntry.from_registry_item(item) for item in document.get('list', []))
    return Catalog(entries=entries)


def load_registry(path: str) -> Catalog:
    """Read and parse the registry file at `path`."""
    with open(path, 'r', encoding='utf-8') as f:
        document = json.load(f)

    catalog = parse_registry(document)
    logger.info(f"Loaded {len(catalog)} emotes from {path}")
    return catalog
