"""Unit tests for logging setup and run ID correlation."""

import contextvars
import logging

from cycle_metrics.utils.logging import (
    RunIdFilter,
    generate_run_id,
    get_run_id,
    set_run_id,
    setup_logging,
)


def _record():
    return logging.LogRecord(
        "cycle_metrics.registry", logging.INFO, __file__, 1, "hello", None, None
    )


class TestSetupLogging:
    """Test setup_logging() root configuration."""

    def test_single_handler_with_filter(self, restore_root_logger):
        setup_logging("debug")

        root = restore_root_logger
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        handler = root.handlers[0]
        assert any(isinstance(f, RunIdFilter) for f in handler.filters)

    def test_format_includes_run_id(self, restore_root_logger):
        setup_logging()
        handler = restore_root_logger.handlers[0]

        record = _record()
        handler.filter(record)

        assert " - cycle_metrics.registry - INFO - [no-run-id] - hello" in handler.format(record)


class TestRunId:
    """Test run ID context helpers."""

    def test_filter_uses_context(self):
        def bound():
            set_run_id("run-abc")
            record = _record()
            RunIdFilter().filter(record)
            return record.run_id, get_run_id()

        assert contextvars.copy_context().run(bound) == ("run-abc", "run-abc")

    def test_generated_ids_unique(self):
        first, second = generate_run_id(), generate_run_id()
        assert first != second
        assert first.startswith("run-")
        assert len(first) == len("run-") + 12
