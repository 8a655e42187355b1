"""Logging setup for Smart Git Commit."""

import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "smart_git_commit"


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the smart_git_commit namespace."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def setup_logging(
    debug_log: Optional[Path] = None,
    level: str = "info",
    verbose: bool = False,
) -> logging.Logger:
    """Configure the package logger.

    All records go to the debug log file (when given). The stderr handler only
    shows warnings unless ``verbose`` is set.

    Args:
        debug_log: File receiving every record
        level: Level shown on stderr with ``verbose`` (debug, info, warning, error)
        verbose: Show records at ``level`` on stderr as well

    Returns:
        The configured package logger
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger(LOGGER_NAME)
    root_logger.setLevel(logging.DEBUG)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
    )
    console_handler.setLevel(log_level if verbose else logging.WARNING)
    root_logger.addHandler(console_handler)

    if debug_log is not None:
        debug_log = Path(debug_log).expanduser()
        try:
            debug_log.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(debug_log, encoding="utf-8")
        except OSError as e:
            root_logger.warning("Could not open debug log %s: %s", debug_log, e)
        else:
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(
                logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
            )
            root_logger.addHandler(file_handler)

    root_logger.propagate = False
    return root_logger
