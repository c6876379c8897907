"""
Prep context logger.

Provides logging interface for prep context with automatic [prep] prefix.
All prep modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from prepdesk.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[prep]"


def setup_prep_logger(log_dir: Path, action: str = "generate") -> Path:
    """
    Setup logger for prep context.

    Args:
        log_dir: Directory for this prep session
        action: CLI action for provenance ("generate", "complete", "summary")

    Returns:
        Path to log file

    Example:
        from prepdesk.contexts.prep.logger import setup_prep_logger, _log_info

        log_file = setup_prep_logger(log_dir, action="generate")
        _log_info("Generating sprint...")
    """
    return _setup_logger(
        context_name="prep",
        log_dir=log_dir,
        extra_provenance={"Action": action},
    )


# Wrapper functions with automatic [prep] prefix


def _log_info(message: str) -> None:
    """Log info message with [prep] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [prep] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [prep] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [prep] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level prep-specific logging helpers


def log_sprint_generated(sprint) -> None:
    """Log a freshly generated sprint with its day-by-day focus."""
    _log_info(
        f"Generated {sprint.total_days}-day {sprint.role_type} sprint for application {sprint.application_id}"
    )
    for plan in sprint.daily_plans:
        topics = ", ".join(sorted({task.category for block in plan.blocks for task in block.tasks}))
        _log_debug(f"  Day {plan.day} ({plan.date[:10]}): {plan.focus} [{topics}]")
