from __future__ import annotations

from pathlib import Path

from chrononote.domain.entities import Note


class ArchiveError(Exception):
    pass


class DecodeError(ArchiveError):
    def __init__(self, message: str, *, block_index: int | None = None) -> None:
        super().__init__(message)
        self.block_index = block_index


class ValidationError(ArchiveError):
    reason = "invalid note"

    def __init__(self, note: Note, *, note_index: int | None = None) -> None:
        super().__init__(self.reason)
        self.note = note
        self.note_index = note_index


class MissingTitleError(ValidationError):
    reason = "missing title"


class MissingDateError(ValidationError):
    reason = "missing date"


class InvalidDateError(ValidationError):
    reason = "invalid date"


class PathResolutionError(ArchiveError, ValueError):
    pass


class ArchiveWriteError(ArchiveError):
    """An append or mkdir failed part way through a run.

    Paths in ``written`` were appended earlier in the same run and stay on disk.
    """

    def __init__(self, path: Path, written: list[Path], cause: OSError) -> None:
        super().__init__(f"failed to write {path}: {cause}")
        self.path = path
        self.written = written


class ConfigError(ValueError):
    pass
