"""
Per-process object graph.

Built once by app.create_app() (or scripts) and shared with the Quart routes
through ``app.extensions`` and with Telegram handlers through ``bot_data``.
"""

import asyncio
from dataclasses import dataclass
from typing import Optional

from core.catalog import Catalog
from database import KeyValueStore
from repositories.published_emotes import PublishedEmoteIndex
from services.ingestion_service import IngestionPipeline
from services.telegram_client import PlatformClient
from services.search_service import SearchIndex

EXTENSION_KEY = 'emotebridge'


@dataclass
class BridgeContext:
    catalog: Catalog
    store: KeyValueStore
    published: PublishedEmoteIndex
    search_index: SearchIndex
    pipeline: IngestionPipeline
    platform: PlatformClient
    telegram_app: Optional[object] = None
    ingestion_task: Optional[asyncio.Task] = None
