#!/usr/bin/env python3
"""
Run the ingestion pipeline once, without the web server.

Useful for seeding a fresh database before starting the bot, or for resuming
after a failed run. Already published emotes are skipped.

Usage:
    python scripts/run_ingestion.py
"""

import asyncio
import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import config
from app import build_bridge, build_telegram_app
from utils.logging_config import setup_logging


async def run():
    telegram_app = build_telegram_app(config.TELEGRAM_BOT_TOKEN)
    bridge = build_bridge(telegram_app)
    try:
        async with telegram_app:
            report = await bridge.pipeline.run(bridge.catalog)
    finally:
        bridge.store.close()
    print(f"✓ Published {report.published} emotes ({report.skipped} already published)")


def main():
    setup_logging(level=config.LOG_LEVEL, log_file=config.LOG_FILE)
    print("=" * 70)
    print("Emote Ingestion")
    print("=" * 70)
    print(f"Registry: {config.REGISTRY_PATH}")
    print(f"Database: {config.DATABASE_PATH}\n")
    asyncio.run(run())


if __name__ == "__main__":
    main()
