"""Tests for structlog configuration."""

from __future__ import annotations

import logging

from assetctl.config.logging import APP_LOGGER, configure_logging, raise_verbosity


class TestConfigureLogging:
    def test_default_is_warning(self) -> None:
        configure_logging()
        assert logging.getLogger(APP_LOGGER).level == logging.WARNING
        assert logging.getLogger("tornado.access").level == logging.WARNING

    def test_verbose_is_debug(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger(APP_LOGGER).level == logging.DEBUG
        assert logging.getLogger("tornado.access").level == logging.INFO

    def test_single_root_handler(self) -> None:
        configure_logging()
        configure_logging(log_json=True)
        assert len(logging.getLogger().handlers) == 1

    def test_third_party_pinned(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger("watchdog").level == logging.WARNING


class TestRaiseVerbosity:
    def test_lowers_to_info(self) -> None:
        configure_logging()
        raise_verbosity()
        assert logging.getLogger(APP_LOGGER).level == logging.INFO

    def test_keeps_debug(self) -> None:
        configure_logging(verbose=True)
        raise_verbosity()
        assert logging.getLogger(APP_LOGGER).level == logging.DEBUG
