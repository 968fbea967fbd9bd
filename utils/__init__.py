from .decorators import api_handler, sync_to_async
from .logging_config import setup_logging, get_logger

__all__ = [
    'api_handler',
    'sync_to_async',
    'setup_logging',
    'get_logger',
]
