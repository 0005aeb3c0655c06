"""Logging configuration.

Console output goes through rich; a plain-text copy is written to
``~/.config/live_dictation/logs/live_dictation.log``.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.logging import RichHandler

from config import CONFIG_DIR

NOISY_LOGGERS = ("dashscope", "websocket", "urllib3")


def setup_logging(level: str = "INFO", log_dir: Path | None = None) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(log_level)
    root.handlers.clear()

    console_handler = RichHandler(
        level=log_level,
        show_time=True,
        show_path=False,
        rich_tracebacks=True,
    )
    console_handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    root.addHandler(console_handler)

    log_dir = log_dir or CONFIG_DIR / "logs"
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_dir / "live_dictation.log", encoding="utf-8")
    except OSError:
        root.warning("Could not create log file, using console only")
    else:
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(name)-22s | %(levelname)-8s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root.addHandler(file_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    root.debug("Logging configured at %s level", level.upper())
