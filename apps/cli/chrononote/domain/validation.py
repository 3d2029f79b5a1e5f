from __future__ import annotations

import logging
import re
from datetime import date, datetime

from chrononote.domain.entities import Note
from chrononote.domain.exceptions import (
    InvalidDateError,
    MissingDateError,
    MissingTitleError,
    ValidationError,
)

logger = logging.getLogger("chrononote.archive")

DATE_FORMAT = "%Y-%m-%d"

# strptime alone would also accept single-digit months and days.
_DATE_SHAPE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def parse_note_date(value: str) -> date | None:
    if not _DATE_SHAPE_RE.fullmatch(value):
        return None
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        return None


def validate_note(note: Note, *, note_index: int | None = None) -> None:
    if not note.title:
        raise MissingTitleError(note, note_index=note_index)
    if not note.date:
        raise MissingDateError(note, note_index=note_index)
    if parse_note_date(note.date) is None:
        raise InvalidDateError(note, note_index=note_index)


def validate_notes(notes: list[Note]) -> None:
    for idx, note in enumerate(notes, start=1):
        try:
            validate_note(note, note_index=idx)
        except ValidationError as exc:
            logger.error(
                "note_invalid",
                extra={"note": idx, "reason": exc.reason, "date": note.date, "title": note.title},
            )
            raise
