#!/usr/bin/env python3
"""
Delete the published record of one or more emotes.

The next ingestion run downloads (from cache), renders and uploads them again.

Usage:
    python scripts/unpublish_emote.py <emote id> [<emote id> ...]
"""

import argparse
import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import config
from database import KeyValueStore
from repositories.published_emotes import PublishedEmoteIndex, published_key


def unpublish(store: KeyValueStore, emote_ids):
    """Delete published records; returns the ids that actually had one."""
    index = PublishedEmoteIndex(store)
    removed = []
    for emote_id in emote_ids:
        if index.is_published(emote_id):
            store.delete(published_key(emote_id))
            removed.append(emote_id)
    return removed


def main():
    parser = argparse.ArgumentParser(description="Forget that emotes were uploaded so they are republished.")
    parser.add_argument('emote_ids', nargs='+', help="Emote ids from the registry")
    parser.add_argument('--db', default=config.DATABASE_PATH, help="Key-value store path")
    args = parser.parse_args()

    with KeyValueStore(args.db) as store:
        removed = unpublish(store, args.emote_ids)
    for emote_id in args.emote_ids:
        mark = "✓ removed" if emote_id in removed else "- not published"
        print(f"{mark}: {emote_id}")


if __name__ == "__main__":
    main()
