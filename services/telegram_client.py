"""
Telegram Bot API client.

Thin wrapper over python-telegram-bot exposing the three calls the
application needs: upload a photo, upload an animation, answer an inline query.
"""

from typing import List

from telegram import Bot, InlineQueryResultCachedGif, InlineQueryResultCachedPhoto

from core.catalog import MediaKind
from services.search_service import SearchResult


def build_inline_result(result: SearchResult):
    """Convert a search hit into a cached-file inline result."""
    result_id = f"emote:{result.id}"
    if result.media_kind is MediaKind.ANIMATED:
        return InlineQueryResultCachedGif(
            id=result_id,
            gif_file_id=result.media_reference,
            title=result.title,
            caption=result.title,
        )
    return InlineQueryResultCachedPhoto(
        id=result_id,
        photo_file_id=result.media_reference,
        title=result.title,
        caption=result.title,
    )


class PlatformClient:
    def __init__(self, bot: Bot):
        self.bot = bot

    async def send_image(self, chat_id, data: bytes, caption: str) -> str:
        """Upload a photo and return the file id of its largest size."""
        message = await self.bot.send_photo(chat_id=chat_id, photo=data, caption=caption)
        return message.photo[-1].file_id

    async def send_animation(self, chat_id, data: bytes, caption: str) -> str:
        message = await self.bot.send_animation(chat_id=chat_id, animation=data, caption=caption)
        # Telegram reports some GIFs as documents
        attachment = message.animation or message.document
        return attachment.file_id

    async def answer_search(self, query_id: str, results: List[SearchResult], next_offset: str) -> None:
        await self.bot.answer_inline_query(
            query_id,
            [build_inline_result(result) for result in results],
            cache_time=0,
            is_personal=False,
            next_offset=next_offset,
        )
