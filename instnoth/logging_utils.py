from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"


def configure_logging(
    log_path: Optional[str] = None,
    level: int = logging.INFO,
    also_console: bool = True,
    console_level: int = logging.WARNING,
) -> Optional[str]:
    """Configure logging.

    The rendered install goes to stdout, so console logging goes to stderr
    and stays at WARNING unless asked otherwise. A log file is only written
    when `log_path` is given; if that location is not writable we fall back
    to `instnoth.log` in the working directory.

    Returns the actual file path being used, if any.
    """

    logger = logging.getLogger()
    logger.setLevel(min(level, console_level) if also_console else level)

    # Avoid duplicate handlers if configure_logging() is called multiple times.
    if getattr(logger, "_instnoth_configured", False):
        return getattr(logger, "_instnoth_log_path", log_path)

    chosen_path: Optional[str] = None
    handlers: list[logging.Handler] = []

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    if log_path:
        try:
            Path(os.path.dirname(log_path) or ".").mkdir(parents=True, exist_ok=True)
            file_handler: logging.Handler = logging.FileHandler(log_path)
            chosen_path = log_path
        except OSError:
            # Fall back to a writable location.
            fallback = str(Path.cwd() / "instnoth.log")
            file_handler = logging.FileHandler(fallback)
            chosen_path = fallback
        file_handler.setFormatter(fmt)
        file_handler.setLevel(level)
        handlers.append(file_handler)

    if also_console:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(fmt)
        console.setLevel(console_level)
        handlers.append(console)

    for h in handlers:
        logger.addHandler(h)

    setattr(logger, "_instnoth_configured", True)
    setattr(logger, "_instnoth_log_path", chosen_path)

    logging.getLogger(__name__).info("Logging initialized (requested=%s, actual=%s)", log_path, chosen_path)
    return chosen_path
