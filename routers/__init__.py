from .api import api_blueprint
from .telegram import telegram_blueprint, handle_inline_query

__all__ = [
    'api_blueprint',
    'telegram_blueprint',
    'handle_inline_query',
]
