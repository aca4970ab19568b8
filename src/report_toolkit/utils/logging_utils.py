"""
Logging utilities for command line runs.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
CONSOLE_FORMAT = "%(message)s"

# Loggers from third-party stacks that are chatty at INFO
_NOISY_LOGGERS = ("httpx", "httpcore", "google_genai", "PIL")


def configure_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Configure the root logger for a command line run.

    Console output is kept to the bare message; the optional log file gets
    timestamps and logger names. Calling this again replaces the handlers
    installed by the previous call.

    Args:
        level: Root log level (name or number).
        log_file: Optional path to also write a detailed log to.

    Returns:
        The root logger.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_report_toolkit", False):
            root.removeHandler(handler)
            handler.close()

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    console._report_toolkit = True
    root.addHandler(console)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        file_handler._report_toolkit = True
        root.addHandler(file_handler)

    root.setLevel(level)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
    return root
