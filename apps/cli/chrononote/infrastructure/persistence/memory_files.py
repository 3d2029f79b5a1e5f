from __future__ import annotations

from pathlib import Path


class InMemoryFileStore:
    """FileStore double that keeps everything in dicts.

    ``operations`` records every mutating call in order as ``(name, path)``.
    """

    def __init__(self, files: dict[Path, str] | None = None) -> None:
        self.files: dict[Path, str] = {Path(p): v for p, v in (files or {}).items()}
        self.dirs: set[Path] = set()
        self.operations: list[tuple[str, Path]] = []

    def read(self, path: Path) -> bytes:
        key = Path(path)
        if key not in self.files:
            raise FileNotFoundError(str(path))
        return self.files[key].encode("utf-8")

    def write(self, path: Path, data: bytes) -> None:
        key = Path(path)
        self.operations.append(("write", key))
        self.files[key] = data.decode("utf-8")

    def append(self, path: Path, text: str) -> None:
        key = Path(path)
        self.operations.append(("append", key))
        self.files[key] = self.files.get(key, "") + text

    def ensure_dir(self, path: Path) -> None:
        key = Path(path)
        self.operations.append(("ensure_dir", key))
        self.dirs.add(key)
        self.dirs.update(key.parents)
