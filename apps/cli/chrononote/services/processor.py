from __future__ import annotations

import logging
from pathlib import Path

from chrononote.domain.archive import render_note, resolve_archive_path
from chrononote.domain.entities import ProcessResult
from chrononote.domain.exceptions import ArchiveWriteError
from chrononote.domain.parsing import parse_notes
from chrononote.domain.ports import FileStore
from chrononote.domain.validation import validate_notes

logger = logging.getLogger("chrononote.archive")


def process_notes(buffer_text: str, archive_dir: Path, files: FileStore) -> ProcessResult:
    """File every note in ``buffer_text`` under ``archive_dir``.

    All notes are decoded and validated before anything is written, so a
    DecodeError or ValidationError leaves the archive untouched. Writes are
    not transactional: if an append fails, notes appended earlier in the same
    run stay on disk and are reported on the raised ArchiveWriteError.
    """
    notes = parse_notes(buffer_text)
    validate_notes(notes)

    written: list[Path] = []
    for note in notes:
        logger.info("note_processing", extra={"date": note.date, "title": note.title})
        file_path = resolve_archive_path(note.date, archive_dir)
        try:
            files.ensure_dir(file_path.parent)
            files.append(file_path, render_note(note))
        except OSError as exc:
            logger.error("note_write_failed", extra={"path": str(file_path), "error": str(exc)})
            raise ArchiveWriteError(file_path, list(written), exc) from exc
        written.append(file_path)
        logger.info("note_written", extra={"path": str(file_path)})

    return ProcessResult(written=written)
