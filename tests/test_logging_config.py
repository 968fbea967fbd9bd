"""
Tests for logging setup (utils/logging_config.py)
"""
import logging

import pytest

from utils.logging_config import ROOT_LOGGER_NAME, get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    level, handlers = root_logger.level, list(root_logger.handlers)
    yield
    for handler in root_logger.handlers:
        handler.close()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


def test_component_loggers_share_the_root():
    assert get_logger('Ingestion').name == 'emotebridge.Ingestion'
    assert get_logger('Ingestion') is get_logger('Ingestion')


def test_repeated_setup_does_not_duplicate_handlers():
    setup_logging('DEBUG')
    root_logger = setup_logging('DEBUG')

    assert len(root_logger.handlers) == 1
    assert root_logger.level == logging.DEBUG


def test_unknown_level_falls_back_to_info():
    assert setup_logging('chatty').level == logging.INFO


def test_writes_to_log_file(tmp_path):
    log_file = tmp_path / 'logs' / 'emotebridge.log'
    setup_logging('INFO', log_file=str(log_file))

    get_logger('Search').info("search:kappa offset:0 limit:50 results:1")
    for handler in logging.getLogger(ROOT_LOGGER_NAME).handlers:
        handler.flush()

    assert '[emotebridge.Search] INFO: search:kappa' in log_file.read_text(encoding='utf-8')


def test_quiets_http_client_loggers():
    setup_logging('DEBUG', quiet=('httpx',))
    assert logging.getLogger('httpx').level == logging.WARNING
