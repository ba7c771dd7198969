"""Centralized logging configuration.

Applies the root level and per-category levels from Settings so that noisy
loggers (SQLAlchemy SQL statements, connection pool) can be silenced
without affecting the query engine's own logs.

Usage:
    from src.infrastructure.log_config import setup_logging
    setup_logging()   # Call once at startup
"""

from __future__ import annotations

import logging
import sys

from src.infrastructure.database import Settings, settings as default_settings

# Settings field → logger names whose level it controls.
_CATEGORY_MAP: dict[str, list[str]] = {
    "log_level_sql": [
        "sqlalchemy.engine",
        "sqlalchemy.pool",
        "asyncpg",
    ],
}


def setup_logging(settings: Settings | None = None) -> None:
    """Configure Python logging levels from application settings."""
    settings = settings or default_settings

    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))

    # Scripts and tests may run without any handler installed.
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)-8s %(name)s: %(message)s"))
        root.addHandler(handler)

    for settings_field, logger_names in _CATEGORY_MAP.items():
        level = _parse_level(getattr(settings, settings_field, "INFO"))
        for name in logger_names:
            logging.getLogger(name).setLevel(level)

    logging.getLogger(__name__).debug(
        "Logging configured: root=%s, sql=%s", settings.log_level, settings.log_level_sql
    )


def _parse_level(raw: str) -> int:
    """Convert a level name string to a logging constant, defaulting to INFO."""
    numeric = getattr(logging, raw.upper(), None)
    if isinstance(numeric, int):
        return numeric
    return logging.INFO
