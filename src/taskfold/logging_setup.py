# src/taskfold/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "taskfold.log"
LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def level_from_name(name: str, default: int = logging.WARNING) -> int:
    """'debug' -> logging.DEBUG; unknown names give `default`."""
    level = logging.getLevelName(str(name).strip().upper())
    return level if isinstance(level, int) else default


class _ConsoleNoiseFilter(logging.Filter):
    """Lets taskfold records through; anything else reaches the console only at ERROR."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "taskfold" or record.name.startswith("taskfold."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/taskfold",
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Route logs to stderr (filtered) and to taskfold.log in `log_dir`.

    The interactive view is printed on stdout, so the console handler stays
    on stderr. Replaces whatever handlers the root logger already has.
    Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.addFilter(_ConsoleNoiseFilter())

    to_file = logging.FileHandler(str(log_file), encoding="utf-8")
    to_file.setLevel(file_level)

    for handler in (console, to_file):
        handler.setFormatter(formatter)
        root.addHandler(handler)

    # warnings.warn(...) arrives as 'py.warnings', which the console filter treats as third-party.
    logging.captureWarnings(True)
    return log_file
