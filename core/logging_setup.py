"""Logging configuration for the API process and client scripts."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

_OWN_PREFIXES = ("api", "auth", "core", "tasks", "taskclient")


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the console readable:
    - allow all TaskDesk logs
    - uvicorn access/error logs at their own level
    - SQLAlchemy engine echo only at WARNING+ (use the file log for SQL)
    - any other third-party logger only at ERROR+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name

        if name.split(".", 1)[0] in _OWN_PREFIXES:
            return True

        if name.startswith("uvicorn"):
            return True

        if name.startswith("sqlalchemy"):
            return record.levelno >= logging.WARNING

        if name == "py.warnings":
            return record.levelno >= logging.ERROR

        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    level: str | int = logging.INFO,
    log_dir: str | Path | None = None,
    file_level: int = logging.DEBUG,
) -> None:
    """
    Configure root logging with a filtered console handler and, when
    ``log_dir`` is given, a file handler that keeps everything.

    Call this once, before the first log line.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_dir / "taskdesk.log"), encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(fmt)
        root.addHandler(fh)

    logging.captureWarnings(True)
