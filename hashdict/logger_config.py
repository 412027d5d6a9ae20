"""
Centralized logging setup.

Library modules only create module loggers (``logging.getLogger(__name__)``)
and never attach handlers. Entry points such as the CLI call
:func:`configure_logger` once to decide where records go.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logger(
    name: Optional[str] = None,
    level: int = logging.INFO,
    output: str = "console",
    log_file: Optional[str] = None,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
) -> logging.Logger:
    """
    Configure and return a logger instance.

    Args:
        name (Optional[str]): Logger name; None configures the root logger.
        level (int): Logging level (e.g., logging.INFO, logging.DEBUG).
        output (str): Where to send records: "console", "file" or "both".
        log_file (Optional[str]): Path of the log file; required for "file"/"both".
        max_bytes (int): Size of the log file before it is rotated.
        backup_count (int): Number of rotated files to keep.

    Returns:
        logging.Logger: The configured logger.

    Raises:
        ValueError: If ``output`` is unknown or a file output lacks ``log_file``.
        RuntimeError: If a handler cannot be created.
    """
    if output not in {"console", "file", "both"}:
        raise ValueError(f"Unknown log output {output!r}; expected console, file or both")
    if output in {"file", "both"} and not log_file:
        raise ValueError("log_file is required when logging to a file")

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Repeated calls must not stack duplicate handlers.
    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    if output in {"file", "both"}:
        try:
            log_dir = os.path.dirname(os.path.abspath(log_file))
            os.makedirs(log_dir, exist_ok=True)
            file_handler = RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backup_count)
        except OSError as e:
            raise RuntimeError(f"Failed to configure file handler for logger: {e}") from e
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if output in {"console", "both"}:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger
