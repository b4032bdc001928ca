"""
Unit tests for logging configuration.
"""

import logging

from gto_workforce.core.logging_config import (
    DETAILED_FORMAT,
    JSON_FORMAT,
    MODULE_LOG_LEVELS,
    get_logger,
    setup_logging,
)


class TestSetupLogging:
    def teardown_method(self):
        setup_logging("INFO", "detailed", enable_file=False)

    def test_console_handler_uses_requested_level_and_format(self):
        setup_logging("WARNING", "json", enable_file=False)
        root = logging.getLogger()
        assert len(root.handlers) == 1
        handler = root.handlers[0]
        assert handler.level == logging.WARNING
        assert handler.formatter._fmt == JSON_FORMAT

    def test_unknown_format_falls_back_to_detailed(self):
        setup_logging("INFO", "fancy", enable_file=False)
        assert logging.getLogger().handlers[0].formatter._fmt == DETAILED_FORMAT

    def test_module_levels_applied(self):
        setup_logging("DEBUG", "simple", enable_file=False)
        for name, level in MODULE_LOG_LEVELS.items():
            assert logging.getLogger(name).level == logging.getLevelName(level)

    def test_get_logger_returns_named_logger(self):
        assert get_logger("gto_workforce.test").name == "gto_workforce.test"
