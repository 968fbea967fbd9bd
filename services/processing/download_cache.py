"""
Persistent download cache keyed on the exact source URL.

A cached download is stored as two keys:

    download:<url>:data       raw response body
    download:<url>:file_type  Content-Type header

The body is always written before the content type, and a hit requires both,
so a crash between the two writes just causes a re-download.
"""

import asyncio
from dataclasses import dataclass
from typing import Optional

import requests

import config
from core.errors import DownloadError
from database import KeyValueStore, ensure_str
from utils.logging_config import get_logger

logger = get_logger('Download')

DEFAULT_CONTENT_TYPE = 'application/octet-stream'


def data_key(url: str) -> str:
    return f"download:{url}:data"


def file_type_key(url: str) -> str:
    return f"download:{url}:file_type"


@dataclass(frozen=True)
class CachedDownload:
    data: bytes
    content_type: str


class DownloadCache:
    def __init__(self, store: KeyValueStore, session: Optional[requests.Session] = None,
                 timeout: Optional[float] = None):
        self.store = store
        # One session for the whole run so connections to the CDN are reused
        self.session = session or requests.Session()
        self.session.headers.setdefault('User-Agent', config.DOWNLOAD_USER_AGENT)
        self.timeout = config.DOWNLOAD_TIMEOUT if timeout is None else timeout

    def get_cached(self, url: str) -> Optional[CachedDownload]:
        content_type = self.store.get_optional(file_type_key(url))
        if content_type is None:
            return None
        data = self.store.get_optional(data_key(url))
        if data is None:
            return None
        return CachedDownload(data=data, content_type=ensure_str(content_type))

    def _download(self, url: str) -> CachedDownload:
        response = self.session.get(url, timeout=self.timeout)
        if not 200 <= response.status_code < 300:
            raise DownloadError(url, response.status_code, response.reason)

        content_type = response.headers.get('Content-Type') or DEFAULT_CONTENT_TYPE
        download = CachedDownload(data=response.content, content_type=content_type)

        self.store.set(data_key(url), download.data)
        self.store.set(file_type_key(url), download.content_type)
        logger.debug(f"Downloaded {url} ({len(download.data)} bytes, {download.content_type})")
        return download

    def fetch_sync(self, url: str) -> CachedDownload:
        cached = self.get_cached(url)
        if cached is not None:
            return cached
        return self._download(url)

    async def fetch(self, url: str) -> CachedDownload:
        """Return the body and content type of `url`, downloading at most once."""
        return await asyncio.to_thread(self.fetch_sync, url)
