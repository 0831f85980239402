"""Logging setup for entry points.

Library modules never call ``basicConfig``; they only do
``logger = logging.getLogger(__name__)``.  The CLI and scripts call
``setup_logging`` once.
"""

from __future__ import annotations

import logging
from pathlib import Path

DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _coerce_level(level: int | str) -> int:
    """Coerce a logging level given as int or string into an int."""
    if isinstance(level, int):
        return level

    s = str(level).strip().upper()
    if not s:
        raise ValueError("Empty logging level")

    if s.isdigit():
        return int(s)

    mapping: dict[str, int] = {
        "CRITICAL": logging.CRITICAL,
        "ERROR": logging.ERROR,
        "WARNING": logging.WARNING,
        "WARN": logging.WARNING,
        "INFO": logging.INFO,
        "DEBUG": logging.DEBUG,
        "NOTSET": logging.NOTSET,
    }

    try:
        return mapping[s]
    except KeyError as e:
        raise ValueError(f"Unknown logging level: {level!r}") from e


def setup_logging(
    level: int | str = "WARNING",
    *,
    fmt: str = DEFAULT_FORMAT,
    datefmt: str = DEFAULT_DATEFMT,
    log_file: str | Path | None = None,
) -> None:
    """Configure the root logger (stderr, plus ``log_file`` when given).

    Uses ``force=True`` so repeated calls replace handlers instead of
    stacking them.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler()]

    if log_file is not None:
        p = Path(log_file)
        p.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(p, encoding="utf-8"))

    formatter = logging.Formatter(fmt=fmt, datefmt=datefmt)
    for h in handlers:
        h.setFormatter(formatter)

    logging.basicConfig(level=_coerce_level(level), handlers=handlers, force=True)
