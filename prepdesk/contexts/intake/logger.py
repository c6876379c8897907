"""
Intake context logger.

Provides logging interface for intake context with automatic [intake] prefix.
All intake modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from prepdesk.utils.logger import setup_logger as _setup_logger
from prepdesk.utils.text_processing import truncate_display

CONTEXT_PREFIX = "[intake]"


def setup_intake_logger(log_dir: Path, source: str = "chat") -> Path:
    """
    Setup logger for intake context.

    Args:
        log_dir: Directory for this intake session
        source: Where the intake payload came from (provenance only)

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="intake",
        log_dir=log_dir,
        extra_provenance={"Source": source},
    )


# Wrapper functions with automatic [intake] prefix


def _log_info(message: str) -> None:
    """Log info message with [intake] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [intake] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [intake] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level intake-specific logging helpers


def log_batch_result(raw_count: int, normalized: list, dropped: int) -> None:
    """Log the outcome of normalizing one intake batch."""
    _log_info(f"Normalized {raw_count} raw entries into {len(normalized)} applications")
    if dropped:
        _log_warning(f"Dropped {dropped} entries with no resolvable company")
    for app in normalized:
        notes = truncate_display(app.notes, 60) if app.notes else None
        _log_debug(f"  {app.company!r}: role={app.role!r} notes={notes!r}")
