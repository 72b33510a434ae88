from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str | int | None = None, *, debug: bool = False) -> int:
    """
    Configure root logging once for the CLI/GUI entry points.

    `debug` wins over `level`; unknown level names fall back to INFO.
    Returns the numeric level that was applied.
    """
    if debug:
        numeric = logging.DEBUG
    elif isinstance(level, int):
        numeric = level
    else:
        numeric = logging.getLevelName((level or "INFO").strip().upper())
        if not isinstance(numeric, int):
            numeric = logging.INFO

    logging.basicConfig(level=numeric, format=LOG_FORMAT, datefmt=DATE_FORMAT)
    logging.getLogger().setLevel(numeric)
    return numeric
