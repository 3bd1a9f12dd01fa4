"""Tests for correlation-aware logging."""

import logging

import pytest

from treexml.shared.logging import CorrelationLogger, get_logger


class TestCorrelationLogger:
    """Test suite for CorrelationLogger."""

    def test_component_defaults_to_last_name_part(self) -> None:
        """Test default component name."""
        logger = get_logger("treexml.tree.builder")

        assert isinstance(logger, CorrelationLogger)
        assert logger.component == "builder"
        assert logger.correlation_id is None

    def test_explicit_component(self) -> None:
        """Test explicit component and correlation ID."""
        logger = get_logger("treexml.tree.builder", "req-1", "tree_builder")

        assert logger.component == "tree_builder"
        assert logger.correlation_id == "req-1"

    def test_records_carry_correlation_data(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test that extra data is attached to log records."""
        caplog.set_level(logging.DEBUG, logger="treexml.test")
        logger = get_logger("treexml.test", "req-42", "unit")

        logger.info("hello", extra={"element_count": 3})

        record = caplog.records[-1]
        assert record.getMessage() == "hello"
        assert record.component == "unit"
        assert record.correlation_id == "req-42"
        assert record.element_count == 3

    def test_disabled_level_emits_nothing(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test that records below the logger level are dropped."""
        caplog.set_level(logging.WARNING, logger="treexml.quiet")
        logger = get_logger("treexml.quiet")

        logger.debug("invisible")

        assert all(record.getMessage() != "invisible" for record in caplog.records)

    def test_warning_with_exception_info(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test that warning() attaches the active exception on request."""
        caplog.set_level(logging.WARNING, logger="treexml.warn")
        logger = get_logger("treexml.warn")

        try:
            raise RuntimeError("boom")
        except RuntimeError:
            logger.warning("failed", exc_info=True)

        assert caplog.records[-1].exc_info is not None
