"""Centralized logging configuration for layercache.

Routes library and CLI logs to stdout and, when a log file is configured,
to a size-rotated file.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import List, Optional

DEFAULT_LOG_LEVEL = logging.INFO
DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEFAULT_MAX_BYTES = 1024 * 1024  # 1 MiB per file; 0 disables rotation
DEFAULT_BACKUP_COUNT = 3


def resolve_log_level(level_name: Optional[str], default: int = DEFAULT_LOG_LEVEL) -> int:
    """Converts a level name such as 'debug' to its logging constant."""
    if not level_name:
        return default
    level = logging.getLevelName(str(level_name).upper())
    return level if isinstance(level, int) else default


def _build_handlers(
    log_file: Optional[str],
    max_bytes: int,
    backup_count: int,
) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if not log_file:
        return handlers
    try:
        handlers.append(
            RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backup_count, encoding='utf-8')
        )
    except OSError as e:
        # Console logging still works; report and carry on without the file
        print(f"layercache: cannot open log file {log_file}: {e}", file=sys.stderr)
    return handlers


def setup_logging(
    log_level: int = DEFAULT_LOG_LEVEL,
    log_format: str = DEFAULT_LOG_FORMAT,
    log_file: Optional[str] = None,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
) -> None:
    """Replaces the root logger's handlers with layercache's.

    Args:
        log_level: Minimum level for the root logger and every handler.
        log_format: Format string shared by all handlers.
        log_file: Optional path of a rotated log file.
        max_bytes: Size at which the log file rolls over.
        backup_count: Number of rolled-over files kept.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(log_format)
    for handler in _build_handlers(log_file, max_bytes, backup_count):
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    logging.getLogger(__name__).debug(
        f"Logging configured. Level={logging.getLevelName(log_level)}, file={log_file or '-'}"
    )
