import logging

from rich.logging import RichHandler

from ttl_file_cache.util.logging import PACKAGE_LOGGER, get_logger, setup_logging


def test_get_logger_returns_named_logger() -> None:
    logger = get_logger("ttl_file_cache.test")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "ttl_file_cache.test"


def test_setup_logging_installs_single_handler() -> None:
    setup_logging()
    logger = setup_logging(logging.DEBUG)
    assert logger.name == PACKAGE_LOGGER
    assert logger.level == logging.DEBUG
    assert sum(isinstance(h, RichHandler) for h in logger.handlers) == 1
