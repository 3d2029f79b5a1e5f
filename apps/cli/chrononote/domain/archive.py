from __future__ import annotations

import re
from pathlib import Path

import yaml

from chrononote.domain.entities import FrontMatter, Note
from chrononote.domain.exceptions import PathResolutionError
from chrononote.domain.validation import parse_note_date

_DATE_LINE_RE = re.compile(r"^date:.*$", re.MULTILINE)
_EMPTY_TAGS_RE = re.compile(r"^tags: \[\]$", re.MULTILINE)


class _FrontMatterDumper(yaml.SafeDumper):
    # Indent list items under their key: "tags:\n  - a" rather than "tags:\n- a".
    def increase_indent(self, flow: bool = False, indentless: bool = False):
        return super().increase_indent(flow, False)


def resolve_archive_path(date: str, base_dir: Path) -> Path:
    parsed = parse_note_date(date)
    if parsed is None:
        raise PathResolutionError(f"cannot resolve archive path for date {date!r}")
    return Path(base_dir) / f"{parsed.year:04d}" / f"{parsed.month:02d}" / f"{parsed.day:02d}.md"


def render_front_matter(front_matter: FrontMatter) -> str:
    data = {"title": front_matter.title, "date": front_matter.date, "tags": list(front_matter.tags)}
    yaml_text = yaml.dump(
        data,
        Dumper=_FrontMatterDumper,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
        width=float("inf"),
    )
    yaml_text = _EMPTY_TAGS_RE.sub("tags:", yaml_text)
    # The emitter quotes anything that looks like a timestamp.
    return _DATE_LINE_RE.sub(lambda _: f"date: {front_matter.date}", yaml_text)


def render_note(note: Note) -> str:
    return f"---\n{render_front_matter(note.front_matter)}---\n{note.content}\n\n"
