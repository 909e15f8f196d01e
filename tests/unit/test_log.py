"""
Unit tests for logging setup.
"""

import logging

from dashform.log import configure_logging, format_metadata, set_level


class TestConfigureLogging:
    def test_handler_installed_once(self):
        logger = configure_logging("DEBUG")
        handlers = list(logger.handlers)

        configure_logging("WARNING")

        assert logger.name == "dashform"
        assert logger.handlers == handlers
        assert logger.level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self):
        set_level("chatty")

        assert logging.getLogger("dashform").level == logging.INFO

    def test_module_loggers_are_children(self, caplog):
        configure_logging("DEBUG")

        with caplog.at_level(logging.DEBUG, logger="dashform"):
            logging.getLogger("dashform.codec.widgets").debug("dispatch")

        assert "dispatch" in caplog.text


class TestFormatMetadata:
    def test_empty(self):
        assert format_metadata(None) == ""
        assert format_metadata({}) == ""

    def test_pairs(self):
        assert format_metadata({"id": "abc", "title": "Ops"}) == " [id=abc, title=Ops]"
