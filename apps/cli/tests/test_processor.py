from __future__ import annotations

from pathlib import Path

import pytest

from chrononote.domain.exceptions import ArchiveWriteError, DecodeError, MissingTitleError
from chrononote.domain.ports import FileStore
from chrononote.infrastructure.persistence.memory_files import InMemoryFileStore
from chrononote.services.processor import process_notes


class FailingAppendStore(InMemoryFileStore):
    def __init__(self, fail_on: Path) -> None:
        super().__init__()
        self.fail_on = fail_on

    def append(self, path: Path, text: str) -> None:
        if Path(path) == self.fail_on:
            raise PermissionError(13, "Permission denied", str(path))
        super().append(path, text)


class FailingDirStore(InMemoryFileStore):
    def __init__(self, fail_on: Path) -> None:
        super().__init__()
        self.fail_on = fail_on

    def ensure_dir(self, path: Path) -> None:
        if Path(path) == self.fail_on:
            raise OSError(28, "No space left on device", str(path))
        super().ensure_dir(path)


def test_memory_store_satisfies_port() -> None:
    assert isinstance(InMemoryFileStore(), FileStore)


def test_single_note_lands_in_dated_file() -> None:
    files = InMemoryFileStore()
    data = "---\ntitle: T\ndate: 2024-09-12\ntags:\n  - a\n---\nBody"

    result = process_notes(data, Path("/archive"), files)

    target = Path("/archive/2024/09/12.md")
    assert result.written == [target]
    assert files.files[target] == "---\ntitle: T\ndate: 2024-09-12\ntags:\n  - a\n---\nBody\n\n"
    assert Path("/archive/2024/09") in files.dirs


def test_lone_delimiter_writes_nothing() -> None:
    files = InMemoryFileStore()
    result = process_notes("---", Path("/archive"), files)
    assert result.count == 0
    assert files.operations == []


def test_same_day_notes_are_concatenated_in_input_order() -> None:
    files = InMemoryFileStore()
    data = (
        "---\ntitle: Morning\ndate: 2024-05-01\n---\nCoffee.\n"
        "---\ntitle: Other day\ndate: 2024-04-30\n---\nElsewhere.\n"
        "---\ntitle: Evening\ndate: 2024-05-01\ntags: [tired]\n---\nSleep.\n"
    )

    result = process_notes(data, Path("/archive"), files)

    may_first = Path("/archive/2024/05/01.md")
    assert result.written == [may_first, Path("/archive/2024/04/30.md"), may_first]
    assert files.files[may_first] == (
        "---\ntitle: Morning\ndate: 2024-05-01\ntags:\n---\nCoffee.\n\n"
        "---\ntitle: Evening\ndate: 2024-05-01\ntags:\n  - tired\n---\nSleep.\n\n"
    )


def test_appends_to_existing_archive_file() -> None:
    target = Path("/archive/2024/05/01.md")
    files = InMemoryFileStore({target: "earlier\n"})

    process_notes("---\ntitle: New\ndate: 2024-05-01\n---\nMore.\n", Path("/archive"), files)

    assert files.files[target].startswith("earlier\n---\ntitle: New\n")


def test_block_count_matches_non_empty_pairs() -> None:
    files = InMemoryFileStore()
    data = (
        "preamble\n"
        "---\ntitle: A\ndate: 2024-01-01\n---\nA\n"
        "---\n---\n"
        "---\ntitle: B\ndate: 2024-01-02\n---\n"
    )
    result = process_notes(data, Path("/archive"), files)
    assert result.count == 2
    assert [op for op, _ in files.operations].count("append") == 2


def test_invalid_note_prevents_all_writes() -> None:
    files = InMemoryFileStore()
    data = (
        "---\ntitle: Fine\ndate: 2023-10-01\n---\nok\n"
        "---\ntitle: \ndate: 2023-10-01\ntags:\n  - testing\n---\nContent without a title.\n"
    )

    with pytest.raises(MissingTitleError) as excinfo:
        process_notes(data, Path("/notes"), files)

    assert "missing title" in str(excinfo.value)
    assert excinfo.value.note_index == 2
    assert files.operations == []


def test_decode_error_prevents_all_writes() -> None:
    files = InMemoryFileStore()
    data = "---\ntitle: Fine\ndate: 2023-10-01\n---\nok\n---\ntitle: [broken\n---\nbody\n"

    with pytest.raises(DecodeError):
        process_notes(data, Path("/notes"), files)

    assert files.operations == []


def test_write_failure_keeps_earlier_notes() -> None:
    files = FailingAppendStore(fail_on=Path("/notes/2024/01/02.md"))
    data = (
        "---\ntitle: One\ndate: 2024-01-01\n---\n1\n"
        "---\ntitle: Two\ndate: 2024-01-02\n---\n2\n"
        "---\ntitle: Three\ndate: 2024-01-03\n---\n3\n"
    )

    with pytest.raises(ArchiveWriteError) as excinfo:
        process_notes(data, Path("/notes"), files)

    err = excinfo.value
    assert err.path == Path("/notes/2024/01/02.md")
    assert err.written == [Path("/notes/2024/01/01.md")]
    assert isinstance(err.__cause__, PermissionError)
    assert list(files.files) == [Path("/notes/2024/01/01.md")]


def test_mkdir_failure_keeps_earlier_notes() -> None:
    files = FailingDirStore(fail_on=Path("/notes/2024/02"))
    data = (
        "---\ntitle: One\ndate: 2024-01-31\n---\n1\n"
        "---\ntitle: Two\ndate: 2024-02-01\n---\n2\n"
    )

    with pytest.raises(ArchiveWriteError) as excinfo:
        process_notes(data, Path("/notes"), files)

    err = excinfo.value
    assert err.path == Path("/notes/2024/02/01.md")
    assert err.written == [Path("/notes/2024/01/31.md")]
    assert isinstance(err.__cause__, OSError)
    assert files.operations == [
        ("ensure_dir", Path("/notes/2024/01")),
        ("append", Path("/notes/2024/01/31.md")),
    ]
