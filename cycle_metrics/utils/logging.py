"""Logging utilities with run ID correlation."""

import logging
import uuid
from contextvars import ContextVar

from cycle_metrics.config import settings

# Context variable for run ID correlation
run_id_context: ContextVar[str] = ContextVar("run_id", default="")


class RunIdFilter(logging.Filter):
    """Add run ID to all log records for correlation."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Add run ID from context to log record."""
        run_id = run_id_context.get()
        record.run_id = run_id or "no-run-id"
        return True


def setup_logging(level: str | None = None) -> None:
    """Configure root logging with run ID correlation."""
    level_name = (level or settings.log_level).upper()

    logger = logging.getLogger()
    logger.setLevel(getattr(logging, level_name))

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setLevel(getattr(logging, level_name))

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - [%(run_id)s] - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    handler.setFormatter(formatter)
    handler.addFilter(RunIdFilter())

    logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with run ID support."""
    return logging.getLogger(name)


def generate_run_id() -> str:
    """Generate a unique run ID for correlation."""
    return f"run-{uuid.uuid4().hex[:12]}"


def set_run_id(run_id: str) -> None:
    """Set the run ID for the current context."""
    run_id_context.set(run_id)


def get_run_id() -> str:
    """Get the run ID from the current context."""
    return run_id_context.get()
