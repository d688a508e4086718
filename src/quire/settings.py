from __future__ import annotations

import logging
import logging.handlers
import os
from dataclasses import dataclass
from pathlib import Path


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    val = raw.strip().lower()
    if val in {"1", "true", "yes", "y", "on"}:
        return True
    if val in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_int(name: str, default: int, min_val: int | None = None) -> int:
    """Get integer from environment with optional minimum enforcement."""
    val = int(os.environ.get(name, str(default)))
    if min_val is not None and val < min_val:
        return min_val
    return val


@dataclass(frozen=True)
class Settings:
    """Static settings for the block document library.

    Everything is read from the environment once, at import time. The library
    itself performs no I/O; the log file is only opened when a host calls
    configure_logging().
    """

    log_level: str = os.environ.get("QUIRE_LOG_LEVEL", "INFO")
    log_path: Path | None = (
        Path(os.environ["QUIRE_LOG_PATH"]) if os.environ.get("QUIRE_LOG_PATH") else None
    )
    log_max_bytes: int = _env_int("QUIRE_LOG_MAX_BYTES", 1_000_000, min_val=1024)
    log_backup_count: int = _env_int("QUIRE_LOG_BACKUP_COUNT", 3, min_val=0)
    log_to_stderr: bool = _env_bool("QUIRE_LOG_TO_STDERR", True)

    # Generated block ids look like "<prefix>-<millis>-<random>".
    id_prefix: str = os.environ.get("QUIRE_ID_PREFIX", "block")

    # Defaults applied when an imported page envelope omits them.
    default_title: str = os.environ.get("QUIRE_DEFAULT_TITLE", "Untitled")
    default_emoji: str = os.environ.get("QUIRE_DEFAULT_EMOJI", "\U0001F4DD")  # memo

    # JSON export text indentation.
    export_indent: int = _env_int("QUIRE_EXPORT_INDENT", 2, min_val=0)


settings = Settings()


def configure_logging(level: str | None = None, log_path: Path | None = None) -> logging.Logger:
    """Attach handlers to the package logger.

    Safe to call more than once: handlers installed by a previous call are
    replaced rather than duplicated.

    Args:
        level: Log level name; defaults to settings.log_level.
        log_path: Rotating log file; defaults to settings.log_path (None disables).

    Returns:
        The configured "quire" logger.
    """
    logger = logging.getLogger("quire")
    logger.setLevel((level or settings.log_level).upper())

    for handler in list(logger.handlers):
        if getattr(handler, "_quire_handler", False):
            logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    handlers: list[logging.Handler] = []

    if settings.log_to_stderr:
        handlers.append(logging.StreamHandler())

    path = log_path or settings.log_path
    if path is not None:
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                path,
                maxBytes=settings.log_max_bytes,
                backupCount=settings.log_backup_count,
                encoding="utf-8",
            )
        )

    for handler in handlers:
        handler.setFormatter(formatter)
        handler._quire_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    return logger
