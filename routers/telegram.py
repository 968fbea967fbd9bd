"""
Inbound Telegram updates.

Updates reach the python-telegram-bot Application either by long polling
(started in app.py) or through the webhook route below.
"""

import asyncio

from quart import Blueprint, current_app, request
from telegram import Update
from telegram.ext import ContextTypes

from core.context import EXTENSION_KEY
from utils.logging_config import get_logger

logger = get_logger('Telegram')

telegram_blueprint = Blueprint('telegram', __name__)

BRIDGE_KEY = 'bridge'


async def handle_inline_query(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Answer an inline query with one page of published emotes."""
    inline_query = update.inline_query
    bridge = context.bot_data[BRIDGE_KEY]
    page = await asyncio.to_thread(bridge.search_index.search, inline_query.query, inline_query.offset)
    await bridge.platform.answer_search(inline_query.id, page.results, page.next_page_token)


@telegram_blueprint.route('/webhook', methods=['POST'])
async def webhook():
    bridge = current_app.extensions[EXTENSION_KEY]
    telegram_app = bridge.telegram_app
    payload = await request.get_json()
    if not payload:
        return {"success": False, "error": "Empty update"}, 400
    await telegram_app.update_queue.put(Update.de_json(payload, telegram_app.bot))
    return {"success": True}
