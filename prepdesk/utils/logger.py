"""
Session logging for prepdesk command-line runs.

Every CLI run writes one session directory under LOGS_PATH holding a
<context>.log file (intake.log, prep.log) with a provenance header, while
CONSOLE_LOG_LEVEL and above also go to the console.
Context-specific wrappers live in contexts/{context}/logger.py.
"""

import os
import sys
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
CONSOLE_LOG_LEVEL = os.getenv("CONSOLE_LOG_LEVEL", "INFO")

# Console colors per level; SUCCESS marks finished sprints and written files
LEVEL_COLORS = {
    "SUCCESS": "<green>",
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "<level>{level: <7}</level> | <level>{message}</level>"


def session_log_dir(prefix: str, started: datetime = None) -> Path:
    """
    Directory for one CLI session, e.g. outs/logs/sprint_20261019_101500.

    Args:
        prefix: Session kind ("intake", "sprint")
        started: Session start time (defaults to now)
    """
    started = started or datetime.now()
    return LOGS_PATH / f"{prefix}_{started.strftime('%Y%m%d_%H%M%S')}"


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: dict = None,
    level_colors: dict = None,
) -> Path:
    """
    Route loguru output to a session log file and the console.

    The file receives DEBUG and above; the console receives CONSOLE_LOG_LEVEL
    and above on stderr so JSON printed on stdout stays machine-readable.

    Args:
        context_name: Context identifier ("intake" or "prep"), used as file name
        log_dir: Session directory (see session_log_dir)
        extra_provenance: Additional key-value pairs for the provenance header
        level_colors: Override console colors (e.g., {"INFO": "<cyan>"})

    Returns:
        Path to log file

    Example:
        from prepdesk.utils.logger import session_log_dir, setup_logger

        log_file = setup_logger(
            context_name="prep",
            log_dir=session_log_dir("sprint"),
            extra_provenance={"Action": "generate"}
        )
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()

    for level_name, color in {**LEVEL_COLORS, **(level_colors or {})}.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG")
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=CONSOLE_LOG_LEVEL, colorize=True)

    log_provenance(context_name, extra_provenance)

    return log_file


def log_provenance(context_name: str, extra_context: dict = None) -> None:
    """Write the provenance header at the top of the session log."""
    logger.debug("=" * 80)
    logger.debug(f"Context: {context_name}")
    logger.debug(f"Command: {' '.join(sys.argv)}")
    logger.debug(f"Working directory: {Path.cwd()}")
    logger.debug(f"Python: {sys.version.split()[0]}")

    for key, value in (extra_context or {}).items():
        logger.debug(f"{key}: {value}")

    logger.debug("=" * 80)
