"""Inline query search over published emotes."""

import re
import string
from dataclasses import dataclass, field
from typing import List, Optional

import config
from core.catalog import Catalog, MediaKind
from repositories.published_emotes import PublishedEmoteIndex
from utils.logging_config import get_logger

logger = get_logger('Search')

PAGE_SIZE = config.INLINE_QUERY_PAGE_SIZE
PAGE_NUMBER_BASE = config.INLINE_QUERY_PAGE_NUMBER_BASE

_DIGITS = string.digits + string.ascii_lowercase


def encode_page_token(page: int) -> str:
    """Render a page number in base 36, lowercase, as Telegram's next_offset."""
    if page < 0:
        raise ValueError("page number must be non-negative")
    if page == 0:
        return '0'
    digits = []
    while page:
        page, remainder = divmod(page, PAGE_NUMBER_BASE)
        digits.append(_DIGITS[remainder])
    return ''.join(reversed(digits))


def decode_page_token(token: Optional[str]) -> int:
    """Page number encoded in `token`; missing, malformed or negative tokens mean page 0."""
    token = (token or '').strip()
    # int() would also take signs, underscores and non-ASCII digits
    if not (token.isascii() and token.isalnum()):
        return 0
    return int(token, PAGE_NUMBER_BASE)


@dataclass(frozen=True)
class SearchResult:
    id: str
    title: str
    media_kind: MediaKind
    media_reference: str


@dataclass(frozen=True)
class SearchPage:
    results: List[SearchResult] = field(default_factory=list)
    page_number: int = 0
    next_page_token: str = '1'


class SearchIndex:
    """
    Case-insensitive literal substring search over the catalog.

    An entry is returned only if it is safe, its name or guild name contains
    the query, and it has a published record. The catalog is scanned in order
    every time so results reflect whatever ingestion has published so far.
    """

    def __init__(self, catalog: Catalog, published: PublishedEmoteIndex, page_size: int = PAGE_SIZE):
        self.catalog = catalog
        self.published = published
        self.page_size = page_size

    def search(self, query_text: str, page_token: Optional[str] = None) -> SearchPage:
        page = decode_page_token(page_token)
        offset = page * self.page_size
        limit = self.page_size

        pattern = re.compile(re.escape(query_text or ''), re.IGNORECASE)
        results = []
        match_counter = 0
        for entry in self.catalog.eligible():
            if len(results) >= limit:
                break
            if not (pattern.search(entry.name) or pattern.search(entry.guild_name)):
                continue
            file_reference = self.published.lookup(entry.id)
            if file_reference is None:
                continue
            if match_counter >= offset:
                results.append(SearchResult(
                    id=entry.id,
                    title=entry.name,
                    media_kind=entry.media_kind,
                    media_reference=file_reference,
                ))
            match_counter += 1

        logger.info(f"search:{query_text!r} offset:{offset} limit:{limit} results:{len(results)}")
        return SearchPage(results=results, page_number=page, next_page_token=encode_page_token(page + 1))
