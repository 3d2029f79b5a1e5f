from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class RawBlock:
    metadata: str
    body: str


@dataclass(frozen=True)
class FrontMatter:
    title: str
    date: str
    tags: list[str]


@dataclass(frozen=True)
class Note:
    title: str
    date: str
    tags: list[str] = field(default_factory=list)
    content: str = ""

    @property
    def front_matter(self) -> FrontMatter:
        return FrontMatter(title=self.title, date=self.date, tags=list(self.tags))


@dataclass(frozen=True)
class ProcessResult:
    written: list[Path]

    @property
    def count(self) -> int:
        return len(self.written)
