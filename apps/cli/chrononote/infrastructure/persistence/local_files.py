from __future__ import annotations

import logging
from pathlib import Path

from chrononote.util import atomic_write_bytes

logger = logging.getLogger("chrononote.storage")


class LocalFileStore:
    def read(self, path: Path) -> bytes:
        return Path(path).read_bytes()

    def write(self, path: Path, data: bytes) -> None:
        atomic_write_bytes(Path(path), data)

    def append(self, path: Path, text: str) -> None:
        try:
            with open(path, "a", encoding="utf-8", newline="") as fh:
                fh.write(text)
        except OSError as exc:
            logger.warning("append_failed", extra={"path": str(path), "error": str(exc)})
            raise

    def ensure_dir(self, path: Path) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)
