"""Вспомогательные функции для настройки логирования.

Консольный вывод идёт в stderr: stdout может быть приёмником потока Arrow.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, List, Optional, TextIO, cast

LOG_FORMAT: Final[str] = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_FILE_NAME: Final[str] = "container-arrow.log"


def resolve_log_level(level_name: str) -> int:
    """Преобразует строковый уровень логирования в числовой."""

    level = getattr(logging, level_name.upper(), None)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {level_name}")
    return cast(int, level)


def configure_logging(
    log_dir: Optional[Path] = None,
    *,
    log_file_name: str = LOG_FILE_NAME,
    level_name: str = "INFO",
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
    stream: Optional[TextIO] = None,
) -> None:
    """Создаёт конфигурацию логирования: консоль и, при наличии log_dir, файл с ротацией."""

    log_level = resolve_log_level(level_name)
    formatter = logging.Formatter(LOG_FORMAT)

    stream_handler = logging.StreamHandler(stream or sys.stderr)
    stream_handler.setFormatter(formatter)
    handlers: List[logging.Handler] = [stream_handler]

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_dir / log_file_name,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logging.basicConfig(level=log_level, handlers=handlers, force=True)

    # docker-py пишет каждый HTTP-запрос через urllib3
    logging.getLogger("urllib3").setLevel(max(log_level, logging.WARNING))


def get_logger(name: str) -> logging.Logger:
    """Удобная обёртка над logging.getLogger."""

    return logging.getLogger(name)
