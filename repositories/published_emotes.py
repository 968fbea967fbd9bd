"""
Published emote records.

A record ``emote_uploaded_file_id:<emote id> -> <telegram file id>`` is the
only proof that an emote has been uploaded. It is written once, after Telegram
acknowledged the upload, and never changed by the application afterwards.
"""

from typing import Iterable, Optional

from database import KeyValueStore, ensure_str

KEY_PREFIX = 'emote_uploaded_file_id'


def published_key(emote_id: str) -> str:
    return f"{KEY_PREFIX}:{emote_id}"


class PublishedEmoteIndex:
    def __init__(self, store: KeyValueStore):
        self.store = store

    def is_published(self, emote_id: str) -> bool:
        return self.store.has(published_key(emote_id))

    def lookup(self, emote_id: str) -> Optional[str]:
        """Telegram file id of the uploaded emote, or None."""
        value = self.store.get_optional(published_key(emote_id))
        return ensure_str(value) if value is not None else None

    def record_published(self, emote_id: str, file_reference: str) -> None:
        """Call only once the upload has been acknowledged by Telegram."""
        self.store.set(published_key(emote_id), file_reference)

    def count_published(self, emote_ids: Iterable[str]) -> int:
        return sum(1 for emote_id in emote_ids if self.is_published(emote_id))
