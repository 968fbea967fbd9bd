"""
Logging for EmoteBridge. Every component logs under the `emotebridge` root.
"""

import logging
import os
import sys
from typing import Iterable, Optional

_loggers = {}

ROOT_LOGGER_NAME = 'emotebridge'
LOG_FORMAT = '%(asctime)s [%(name)s] %(levelname)s: %(message)s'

# HTTP client libraries log every Bot API request at INFO
NOISY_LOGGERS = ('httpx', 'urllib3', 'telegram.ext.Updater')


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None,
                  quiet: Iterable[str] = NOISY_LOGGERS) -> logging.Logger:
    """Attach stdout (and optionally file) handlers to the `emotebridge` logger. Safe to call again."""
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(getattr(logging, (level or 'INFO').upper(), logging.INFO))
    root_logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT)
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))
    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)
    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Component logger, e.g. get_logger('Ingestion') -> `emotebridge.Ingestion`."""
    if name not in _loggers:
        _loggers[name] = logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
    return _loggers[name]
