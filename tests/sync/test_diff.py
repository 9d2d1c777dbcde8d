"""Tests for planning copies."""

import hashlib
from pathlib import Path

from isc.sync import CopyTask, DirectoryFingerprint, diff


def digest(content: str) -> bytes:
    return hashlib.sha256(content.encode()).digest()


def make_fingerprint(directory: Path, files: dict) -> DirectoryFingerprint:
    path_to_digest = {directory / name: digest(content) for name, content in files.items()}
    return DirectoryFingerprint(
        directory=directory,
        digest_set=frozenset(path_to_digest.values()),
        path_to_digest=path_to_digest,
    )


def test_diff_skips_content_present_under_other_name():
    source = make_fingerprint(Path("/src"), {"a.txt": "hello", "b.txt": "world"})
    destination = make_fingerprint(Path("/dst"), {"x.txt": "hello"})

    tasks = diff(source, destination)

    assert tasks == [CopyTask(source=Path("/src/b.txt"), destination=Path("/dst/b.txt"))]


def test_diff_same_name_different_content_is_copied():
    source = make_fingerprint(Path("/src"), {"a.txt": "new"})
    destination = make_fingerprint(Path("/dst"), {"a.txt": "old"})

    tasks = diff(source, destination)

    assert [task.destination for task in tasks] == [Path("/dst/a.txt")]


def test_diff_emits_task_iff_digest_missing():
    source = make_fingerprint(
        Path("/src"), {f"{i}.txt": f"content {i}" for i in range(20)}
    )
    destination = make_fingerprint(
        Path("/dst"), {f"other_{i}.txt": f"content {i}" for i in range(0, 20, 3)}
    )

    tasks = diff(source, destination)
    planned = {task.source for task in tasks}

    for path, file_digest in source.path_to_digest.items():
        assert (path in planned) == (file_digest not in destination.digest_set)


def test_diff_duplicate_source_content_copies_each_path():
    source = make_fingerprint(Path("/src"), {"a.txt": "same", "b.txt": "same"})
    destination = make_fingerprint(Path("/dst"), {})

    tasks = diff(source, destination)

    assert [task.source.name for task in tasks] == ["a.txt", "b.txt"]


def test_diff_nothing_to_copy():
    source = make_fingerprint(Path("/src"), {"a.txt": "hello"})
    destination = make_fingerprint(Path("/dst"), {"a.txt": "hello"})

    assert diff(source, destination) == []


def test_diff_order_is_stable():
    source = make_fingerprint(Path("/src"), {name: name for name in ["c", "a", "b"]})
    destination = make_fingerprint(Path("/dst"), {})

    first = diff(source, destination)
    second = diff(source, destination)

    assert first == second
    assert [task.source.name for task in first] == ["a", "b", "c"]
