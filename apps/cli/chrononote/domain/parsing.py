from __future__ import annotations

import logging
import re

import yaml

from chrononote.domain.entities import Note, RawBlock
from chrononote.domain.exceptions import DecodeError

logger = logging.getLogger("chrononote.archive")

DELIMITER = "---"

# The delimiter only counts when it fills a whole line.
_DELIMITER_LINE_RE = re.compile(r"^---\r?(?:\n|\Z)", re.MULTILINE)

# Plain scalars other than null stay as the text the user wrote.
_TYPED_SCALAR_TAGS = {
    "tag:yaml.org,2002:bool",
    "tag:yaml.org,2002:int",
    "tag:yaml.org,2002:float",
    "tag:yaml.org,2002:timestamp",
}


class _FrontMatterLoader(yaml.SafeLoader):
    pass


_FrontMatterLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in _TYPED_SCALAR_TAGS]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def split_blocks(text: str) -> list[RawBlock]:
    segments = _DELIMITER_LINE_RE.split(text)
    blocks: list[RawBlock] = []
    # segments[0] is preamble; after that metadata and body alternate.
    for i in range(1, len(segments), 2):
        metadata = segments[i]
        body = segments[i + 1] if i + 1 < len(segments) else ""
        if not metadata.strip() and not body.strip():
            continue
        blocks.append(RawBlock(metadata=metadata, body=body))
    return blocks


def _scalar_to_str(value: object, field_name: str) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise DecodeError(f"field '{field_name}' must be a scalar, got {type(value).__name__}")


def _tags_to_list(value: object) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise DecodeError(f"field 'tags' must be a list, got {type(value).__name__}")
    return [_scalar_to_str(v, "tags") for v in value]


def decode_metadata(text: str) -> dict:
    try:
        parsed = yaml.load(text, Loader=_FrontMatterLoader)
    except yaml.YAMLError as exc:
        raise DecodeError(f"malformed metadata: {exc}") from exc
    if parsed is None:
        parsed = {}
    if not isinstance(parsed, dict):
        raise DecodeError("metadata is not a mapping")
    return {
        "title": _scalar_to_str(parsed.get("title"), "title"),
        "date": _scalar_to_str(parsed.get("date"), "date"),
        "tags": _tags_to_list(parsed.get("tags")),
    }


def decode_note(block: RawBlock) -> Note:
    fields = decode_metadata(block.metadata)
    return Note(
        title=fields["title"],
        date=fields["date"],
        tags=fields["tags"],
        content=block.body.strip(),
    )


def parse_notes(text: str) -> list[Note]:
    notes: list[Note] = []
    for idx, block in enumerate(split_blocks(text), start=1):
        try:
            notes.append(decode_note(block))
        except DecodeError as exc:
            exc.block_index = idx
            logger.error("notes_decode_failed", extra={"block": idx, "error": str(exc)})
            raise
    return notes
