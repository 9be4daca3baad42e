"""
Unit tests for logging setup.
"""

import logging
import pytest
from latphys.utils import setup_logging


@pytest.fixture
def clean_logger():
    logger = logging.getLogger('latphys')
    level = logger.level
    handlers = list(logger.handlers)
    yield logger
    logger.setLevel(level)
    logger.handlers[:] = handlers


class TestSetupLogging:

    def test_level(self, clean_logger):
        logger = setup_logging("warning")

        assert logger is clean_logger
        assert logger.level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self, clean_logger):
        assert setup_logging("verbose").level == logging.INFO

    def test_repeated_calls_do_not_stack_handlers(self, clean_logger):
        setup_logging()
        setup_logging()
        streams = [h for h in clean_logger.handlers
                   if isinstance(h, logging.StreamHandler)]

        assert len(streams) == 1

    def test_simple_format(self, clean_logger):
        setup_logging(format_type="simple")
        handler = [h for h in clean_logger.handlers
                   if not isinstance(h, logging.NullHandler)][0]

        assert handler.formatter._fmt == '%(levelname)s - %(message)s'

    def test_library_has_null_handler(self):
        import latphys  # noqa: F401

        assert any(isinstance(h, logging.NullHandler)
                   for h in logging.getLogger('latphys').handlers)
