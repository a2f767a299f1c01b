"""Точка входа CLI container-arrow."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Mapping, Optional

from container_arrow import __version__
from container_arrow.arrow_ipc.writer import read_stream
from container_arrow.exceptions import ContainerArrowError, SettingsError
from container_arrow.pipeline import atomic_output, export_containers
from container_arrow.settings.registry import SettingsRegistry
from container_arrow.utils.helpers import parse_filters
from container_arrow.utils.logger import configure_logging

LOGGER = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_EXPORT_FAILED = 1
EXIT_BAD_CONFIG = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="container-arrow",
        description="Export the Docker container list as an Arrow IPC stream.",
    )
    parser.add_argument("-o", "--output", default="-", help="output file, '-' for stdout")
    parser.add_argument("--config", type=Path, help="JSON config file")
    parser.add_argument("--socket", help="Docker socket path or URL")
    parser.add_argument("--timeout", type=int, help="connection timeout in seconds")
    parser.add_argument("--api-version", help="Docker API version, e.g. 1.44")
    parser.add_argument("-a", "--all", action="store_true", default=None, help="include stopped containers")
    parser.add_argument("--limit", type=int, help="return at most N containers")
    parser.add_argument("--size", action="store_true", default=None, help="request size_rw / size_root_fs")
    parser.add_argument("--filter", action="append", default=[], metavar="KEY=VALUE", help="Docker list filter")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING, ERROR")
    parser.add_argument("--verify", action="store_true", help="decode the written file and log its row count")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def initialize_settings(
    args: argparse.Namespace, environ: Optional[Mapping[str, str]] = None
) -> SettingsRegistry:
    """Собирает настройки: config.json, затем окружение, затем флаги CLI."""

    registry = SettingsRegistry(config_path=args.config)
    registry.load_from_disk()
    registry.apply_env_overrides(environ)

    overrides = [
        ("docker", "socket_path", args.socket),
        ("docker", "timeout_sec", args.timeout),
        ("docker", "api_version", args.api_version),
        ("query", "all", args.all),
        ("query", "limit", args.limit),
        ("query", "size", args.size),
        ("logging", "level", args.log_level.upper() if args.log_level else None),
    ]
    for group, key, value in overrides:
        if value is not None:
            registry.set_value(group, key, value)
    if args.filter:
        registry.set_value("query", "filters", parse_filters(args.filter))
    return registry


def setup_logging_from_settings(settings: SettingsRegistry) -> None:
    """Настраивает логирование в соответствии с группой logging."""

    logging_settings = settings.get_group("logging")
    if not logging_settings.get("enabled"):
        logging.disable(logging.CRITICAL)
        return

    logging.disable(logging.NOTSET)
    log_dir = logging_settings.get("log_dir")
    configure_logging(
        log_dir=Path(log_dir).expanduser() if log_dir else None,
        level_name=logging_settings.get("level"),
        max_bytes=logging_settings.get("max_file_size_mb") * 1024 * 1024,
        backup_count=logging_settings.get("max_archived_files"),
    )


def run_export(settings: SettingsRegistry, output: str, *, verify: bool = False) -> int:
    """Выполняет экспорт в stdout или атомарно в файл."""

    if output == "-":
        export_containers(settings, sys.stdout.buffer)
        return EXIT_OK

    target = Path(output)
    with atomic_output(target) as handle:
        export_containers(settings, handle)
    if verify:
        table = read_stream(target)
        LOGGER.info("Verified %s: %d rows, %d columns", target, table.num_rows, table.num_columns)
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Основная точка входа: готовит настройки и запускает экспорт."""

    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verify and args.output == "-":
        parser.error("--verify needs a file output (-o PATH), stdout cannot be read back")
    configure_logging(level_name="WARNING")

    try:
        settings = initialize_settings(args)
    except (SettingsError, ValueError) as exc:
        LOGGER.error("Invalid configuration: %s", exc)
        return EXIT_BAD_CONFIG
    setup_logging_from_settings(settings)

    LOGGER.debug("container-arrow %s starting", __version__)
    try:
        return run_export(settings, args.output, verify=args.verify)
    except ContainerArrowError as exc:
        LOGGER.error("Export failed: %s", exc)
        return EXIT_EXPORT_FAILED


if __name__ == "__main__":
    sys.exit(main())
