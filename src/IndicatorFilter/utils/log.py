"""IndicatorFilter logging utilities.

All modules share the ``IndicatorFilter`` logger. Console lines carry a short
timestamp and a four-letter level tag; per-command log files keep DEBUG detail.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Final

LOGGER_NAME: Final[str] = "IndicatorFilter"

_LEVEL_TAGS: Final[dict[int, str]] = {
    logging.DEBUG: "DEBG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERRO",
    logging.CRITICAL: "CRIT",
}

_LINE_FORMAT: Final[str] = "%(asctime)s [%(leveltag)s] %(message)s"
_DATE_FORMAT: Final[str] = "%m-%d %H:%M:%S"


class _LevelTagFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 - stdlib method name
        """Attach the short level tag before formatting.

        Args:
            record: Logging record.

        Returns:
            Formatted line.
        """
        record.leveltag = _LEVEL_TAGS.get(record.levelno, record.levelname[:4])
        return super().format(record)


log = logging.getLogger(LOGGER_NAME)


def _log_file_path(log_dir: str, action: str) -> Path:
    """Return ``<log_dir>/<action>/<action>_<stamp>.log`` and create the folder."""
    stamp = datetime.now().strftime("%m%d%H%M%S")
    folder = Path(log_dir or "log") / action
    folder.mkdir(parents=True, exist_ok=True)
    return folder / f"{action}_{stamp}.log"


def configure_logging(
    *,
    level: str = "INFO",
    action: str | None = None,
    log_to_file: bool = False,
    log_dir: str = "log",
) -> Path | None:
    """Configure the IndicatorFilter logger.

    The console handler follows ``level``; the optional file handler always
    records DEBUG so failed requests can be inspected afterwards.

    Args:
        level: Console logging level name (e.g. INFO, DEBUG).
        action: CLI command name used to name the log file.
        log_to_file: Whether to mirror logs to a file.
        log_dir: Base directory for log files.

    Returns:
        Path of the log file, or None when file logging is off.
    """
    console_level = getattr(logging, (level or "INFO").upper(), logging.INFO)
    formatter = _LevelTagFormatter(fmt=_LINE_FORMAT, datefmt=_DATE_FORMAT)

    for handler in list(log.handlers):
        log.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(console_level)
    console.setFormatter(formatter)
    log.addHandler(console)

    log_path: Path | None = None
    if log_to_file and action:
        log_path = _log_file_path(log_dir, action)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        log.addHandler(file_handler)

    log.setLevel(logging.DEBUG if log_path else console_level)
    log.propagate = False
    return log_path
