from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class FileStore(Protocol):
    def read(self, path: Path) -> bytes:
        """Raises FileNotFoundError when nothing exists at ``path``."""
        ...

    def write(self, path: Path, data: bytes) -> None:
        ...

    def append(self, path: Path, text: str) -> None:
        ...

    def ensure_dir(self, path: Path) -> None:
        ...
