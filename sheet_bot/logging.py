from __future__ import annotations

import logging
import os
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from .settings import Settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _resolve_log_dir(settings: object) -> Path:
    """SHEET_BOT_LOG_DIR, resolved against the project root when relative."""

    raw = getattr(settings, "SHEET_BOT_LOG_DIR", Path("_logs"))
    p = raw if isinstance(raw, Path) else Path(str(raw))
    if p.is_absolute():
        return p

    project_root = Path(__file__).resolve().parents[1]
    return project_root / p


def setup_bot_logging(settings: Settings | object) -> Path:
    """Log to the console and to `sheet_bot.log`, rotated at midnight.

    Returns the log file path. Safe to call again; root handlers are replaced.
    """

    log_dir = _resolve_log_dir(settings)
    log_dir.mkdir(parents=True, exist_ok=True)

    log_file = log_dir / "sheet_bot.log"

    level_name = str(getattr(settings, "SHEET_BOT_LOG_LEVEL", "INFO") or "INFO").upper().strip()
    level = getattr(logging, level_name, logging.INFO)

    backup_count = max(0, int(getattr(settings, "SHEET_BOT_LOG_BACKUP_COUNT", 14) or 0))
    handlers: list[logging.Handler] = [
        TimedRotatingFileHandler(str(log_file), when="midnight", backupCount=backup_count, encoding="utf-8"),
        logging.StreamHandler(),
    ]

    root = logging.getLogger()
    root.handlers = []
    root.setLevel(level)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)

    log_http = bool(getattr(settings, "SHEET_BOT_LOG_HTTP", False))
    logging.getLogger("httpx").setLevel(level if log_http else logging.WARNING)

    logging.getLogger("sheet_bot").info(
        "sheet_bot logging enabled (file=%s, level=%s, http=%s)",
        os.fspath(log_file),
        level_name,
        log_http,
    )

    return log_file
