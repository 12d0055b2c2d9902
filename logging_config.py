"""
Logging setup shared by every module of the signaling server.
"""
import logging
import os
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logging(log_level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """Configure the root logger with console output and an optional log file."""
    handlers = [logging.StreamHandler()]

    if log_file:
        try:
            directory = os.path.dirname(log_file)
            if directory:
                os.makedirs(directory, exist_ok=True)
            handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
        except (OSError, PermissionError) as e:
            print(f"WARNING: Cannot write to log file {log_file}: {e}", file=sys.stderr)
            print("Logging to console only", file=sys.stderr)

    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=handlers,
        force=True,
    )

    logger = logging.getLogger("signaling")
    logger.info(f"Logging initialized at {logging.getLevelName(level)} - output: {log_file if len(handlers) > 1 else 'console only'}")
    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
