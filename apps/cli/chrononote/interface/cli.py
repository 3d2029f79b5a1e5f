from __future__ import annotations

import argparse
import logging
from pathlib import Path

from chrononote.domain.exceptions import ArchiveError, ArchiveWriteError, ConfigError
from chrononote.domain.ports import FileStore
from chrononote.infrastructure.config import Settings, default_config_path, ensure_buffer_file, resolve_settings
from chrononote.infrastructure.persistence.local_files import LocalFileStore
from chrononote.interface.logging_setup import setup_logging
from chrononote.services.processor import process_notes

logger = logging.getLogger("chrononote.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chrononote",
        description="File notes from the buffer file into a date-partitioned markdown archive.",
    )
    parser.add_argument("--config", type=Path, default=None, help="Path to the configuration file")
    parser.add_argument("--buffer", type=Path, default=None, help="Path to the buffer file")
    parser.add_argument("--notes", type=Path, default=None, help="Path to the notes archive directory")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def run(settings: Settings, files: FileStore) -> int:
    try:
        data = files.read(settings.buffer_file)
    except OSError as exc:
        logger.error("buffer_read_failed", extra={"path": str(settings.buffer_file), "error": str(exc)})
        return 1

    try:
        buffer_text = data.decode("utf-8")
    except UnicodeDecodeError as exc:
        logger.error("buffer_not_utf8", extra={"path": str(settings.buffer_file), "error": str(exc)})
        return 1

    try:
        result = process_notes(buffer_text, settings.notes_dir, files)
    except ArchiveWriteError as exc:
        logger.error(
            "process_failed",
            extra={"error": str(exc), "already_written": len(exc.written)},
        )
        return 1
    except ArchiveError as exc:
        logger.error("process_failed", extra={"error": str(exc)})
        return 1

    try:
        files.write(settings.buffer_file, b"")
    except OSError as exc:
        logger.error("buffer_clear_failed", extra={"path": str(settings.buffer_file), "error": str(exc)})
        return 1
    logger.info("buffer_cleared", extra={"path": str(settings.buffer_file)})

    print(f"Filed {result.count} note(s) into {settings.notes_dir}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(verbose=args.verbose)

    config_file = args.config if args.config is not None else default_config_path()
    try:
        settings = resolve_settings(config_file, buffer_file=args.buffer, notes_dir=args.notes)
        ensure_buffer_file(settings)
    except ConfigError as exc:
        logger.error("config_invalid", extra={"error": str(exc)})
        return 1
    except OSError as exc:
        logger.error("config_io_failed", extra={"error": str(exc)})
        return 1

    return run(settings, LocalFileStore())
