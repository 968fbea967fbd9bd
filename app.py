import asyncio
from typing import Optional

import config
from quart import Quart
from dotenv import load_dotenv
from telegram.ext import Application, InlineQueryHandler

load_dotenv(override=True)

from core.catalog import load_registry
from core.context import BridgeContext, EXTENSION_KEY
from database import KeyValueStore
from repositories.published_emotes import PublishedEmoteIndex
from routers import api_blueprint, telegram_blueprint, handle_inline_query
from routers.telegram import BRIDGE_KEY
from services.ingestion_service import IngestionPipeline
from services.processing.download_cache import DownloadCache
from services.processing.image_transformer import get_transformer
from services.processing.rate_limiter import RateLimitedCaller
from services.search_service import SearchIndex
from services.telegram_client import PlatformClient
from utils.logging_config import setup_logging, get_logger

logger = get_logger('App')


def build_telegram_app(token: str, webhook: bool = False) -> Application:
    builder = Application.builder().token(token)
    if webhook:
        # Updates are pushed to /telegram/webhook instead
        builder = builder.updater(None)
    return builder.build()


def build_bridge(telegram_app: Application) -> BridgeContext:
    """Wire store, registry and services together. Raises on a bad registry version."""
    store = KeyValueStore(config.DATABASE_PATH)
    catalog = load_registry(config.REGISTRY_PATH)
    published = PublishedEmoteIndex(store)
    platform = PlatformClient(telegram_app.bot)

    pipeline = IngestionPipeline(
        published=published,
        downloads=DownloadCache(store),
        transformer=get_transformer(config.IMAGE_TRANSFORM_BACKEND),
        platform=platform,
        chat_id=config.STORAGE_CHAT_ID,
        rate_limiter=RateLimitedCaller(config.RATE_LIMIT_DEFAULT_TIMEOUT),
    )

    bridge = BridgeContext(
        catalog=catalog,
        store=store,
        published=published,
        search_index=SearchIndex(catalog, published),
        pipeline=pipeline,
        platform=platform,
        telegram_app=telegram_app,
    )
    telegram_app.bot_data[BRIDGE_KEY] = bridge
    telegram_app.add_handler(InlineQueryHandler(handle_inline_query))
    return bridge


async def run_ingestion(bridge: BridgeContext):
    """Background wrapper: a failed run is logged, search keeps serving."""
    try:
        await bridge.pipeline.run(bridge.catalog)
    except asyncio.CancelledError:
        logger.warning("Ingestion cancelled by shutdown")
        raise
    except Exception:
        logger.exception("Ingestion aborted; restart to resume from the last published emote")


def create_app(bridge: Optional[BridgeContext] = None):
    """Create and configure the Quart application."""
    # Initialize logging first
    setup_logging(level=config.LOG_LEVEL, log_file=config.LOG_FILE)
    logger.info("Initializing EmoteBridge application...")

    if bridge is None:
        telegram_app = build_telegram_app(config.TELEGRAM_BOT_TOKEN, webhook=bool(config.WEBHOOK_URL))
        bridge = build_bridge(telegram_app)

    app = Quart(__name__)
    app.extensions[EXTENSION_KEY] = bridge

    @app.before_serving
    async def start_services():
        telegram_app = bridge.telegram_app
        if telegram_app is not None:
            await telegram_app.initialize()
            await telegram_app.start()
            if config.WEBHOOK_URL:
                await telegram_app.bot.set_webhook(config.WEBHOOK_URL)
                logger.info(f"Receiving Telegram updates via webhook {config.WEBHOOK_URL}")
            else:
                await telegram_app.updater.start_polling()
                logger.info("Receiving Telegram updates via long polling")

        if config.INGEST_ON_STARTUP:
            bridge.ingestion_task = asyncio.create_task(run_ingestion(bridge))

    @app.after_serving
    async def stop_services():
        task = bridge.ingestion_task
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

        telegram_app = bridge.telegram_app
        if telegram_app is not None:
            if telegram_app.updater is not None and telegram_app.updater.running:
                await telegram_app.updater.stop()
            await telegram_app.stop()
            await telegram_app.shutdown()

        bridge.store.close()

    app.register_blueprint(api_blueprint, url_prefix='/api')
    app.register_blueprint(telegram_blueprint, url_prefix='/telegram')

    return app

if __name__ == '__main__':
    import uvicorn
    app = create_app()
    uvicorn.run(app, host=config.HOST, port=config.PORT, log_level="info")
