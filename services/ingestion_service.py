"""
Emote ingestion pipeline.

For every safe catalog entry without a published record:

    download (cached) -> render canvas -> upload to Telegram -> record file id

Entries are processed strictly one at a time, in registry order. The first
failure aborts the run; re-running is cheap because published entries are
skipped and downloads are served from the cache.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Optional

from core.catalog import Catalog, CatalogEntry, MediaKind
from repositories.published_emotes import PublishedEmoteIndex
from services.processing.download_cache import DownloadCache
from services.processing.image_transformer import ImageFormat
from services.processing.rate_limiter import RateLimitedCaller
from services.telegram_client import PlatformClient
from utils.logging_config import get_logger

logger = get_logger('Ingestion')


@dataclass
class IngestionReport:
    published: int = 0
    skipped: int = 0
    failed_ref: Optional[str] = None
    failed_stage: Optional[str] = None


@dataclass
class IngestionStatus:
    """Progress of the most recent run, read by the status endpoint."""
    running: bool = False
    current_ref: Optional[str] = None
    report: IngestionReport = field(default_factory=IngestionReport)
    error: Optional[str] = None


class IngestionPipeline:
    def __init__(self, published: PublishedEmoteIndex, downloads: DownloadCache, transformer,
                 platform: PlatformClient, chat_id, rate_limiter: Optional[RateLimitedCaller] = None):
        self.published = published
        self.downloads = downloads
        self.transformer = transformer
        self.platform = platform
        self.chat_id = chat_id
        self.rate_limiter = rate_limiter or RateLimitedCaller()
        self.status = IngestionStatus()

        # Media kind is resolved here once instead of at every call site
        self._uploaders = {
            MediaKind.STATIC: platform.send_image,
            MediaKind.ANIMATED: platform.send_animation,
        }

    async def run(self, catalog: Catalog) -> IngestionReport:
        report = IngestionReport()
        self.status = IngestionStatus(running=True, report=report)
        logger.info(f"Ingestion started ({len(catalog)} emotes in registry)")

        try:
            for entry in catalog.eligible():
                if await asyncio.to_thread(self.published.is_published, entry.id):
                    report.skipped += 1
                    continue
                self.status.current_ref = entry.ref
                await self._ingest_entry(entry, report)
                report.published += 1
        except Exception as e:
            self.status.error = f"{type(e).__name__}: {e}"
            raise
        finally:
            self.status.running = False
            self.status.current_ref = None

        logger.info(f"Ingestion finished: {report.published} published, {report.skipped} already published")
        return report

    async def _ingest_entry(self, entry: CatalogEntry, report: IngestionReport) -> None:
        stage = 'download'
        try:
            download = await self.downloads.fetch(entry.url)

            stage = 'transform'
            source_format = ImageFormat.from_content_type(download.content_type)
            canvas = await self.transformer.transform(download.data, source_format)

            stage = 'upload'
            upload = self._uploaders[entry.media_kind]
            file_reference = await self.rate_limiter.invoke(
                lambda: upload(self.chat_id, canvas, entry.ref)
            )

            stage = 'record'
            await asyncio.to_thread(self.published.record_published, entry.id, file_reference)
        except Exception:
            report.failed_ref = entry.ref
            report.failed_stage = stage
            logger.error(f"Failed to ingest {entry.ref} ({entry.url}) at stage '{stage}'")
            raise

        logger.info(f"Published {entry.ref} -> {file_reference}")
