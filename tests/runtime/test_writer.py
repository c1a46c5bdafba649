"""Tests for the compare-before-write file writer."""

import os
from pathlib import Path

import pytest

from slngen.errors import GenerationError
from slngen.runtime.writer import CHUNK_SIZE, IdempotentWriter, WriteStatus

OLD_MTIME_NS = 1_000_000_000 * 1_000_000_000


def _age(path: Path) -> int:
    os.utime(path, ns=(OLD_MTIME_NS, OLD_MTIME_NS))
    return path.stat().st_mtime_ns


def test_new_file_is_written(tmp_path: Path) -> None:
    writer = IdempotentWriter()
    target = tmp_path / "out" / "Game.csproj"

    status = writer.write_if_changed(target, b"<Project />")

    assert status is WriteStatus.WRITTEN
    assert target.read_bytes() == b"<Project />"
    assert target.resolve() in writer.written


def test_identical_content_leaves_file_untouched(tmp_path: Path) -> None:
    writer = IdempotentWriter()
    target = tmp_path / "Game.csproj"
    content = b"x" * (CHUNK_SIZE * 3 + 17)
    target.write_bytes(content)
    mtime = _age(target)

    status = writer.write_if_changed(target, content)

    assert status is WriteStatus.UNCHANGED
    assert target.stat().st_mtime_ns == mtime
    assert target.resolve() in writer.written


def test_same_length_different_content_is_rewritten(tmp_path: Path) -> None:
    writer = IdempotentWriter()
    target = tmp_path / "Game.csproj"
    original = b"a" * (CHUNK_SIZE + 10)
    changed = original[:-1] + b"b"
    target.write_bytes(original)

    status = writer.write_if_changed(target, changed)

    assert status is WriteStatus.WRITTEN
    assert target.read_bytes() == changed


@pytest.mark.parametrize("old", [b"longer previous content", b"x"])
def test_size_change_is_rewritten_exactly(tmp_path: Path, old: bytes) -> None:
    writer = IdempotentWriter()
    target = tmp_path / "App.sln"
    target.write_bytes(old)

    status = writer.write_if_changed(target, b"short body")

    assert status is WriteStatus.WRITTEN
    assert target.read_bytes() == b"short body"


def test_empty_content_truncates(tmp_path: Path) -> None:
    writer = IdempotentWriter()
    target = tmp_path / "Empty.csproj"
    target.write_bytes(b"stale")

    assert writer.write_if_changed(target, b"") is WriteStatus.WRITTEN
    assert writer.write_if_changed(target, b"") is WriteStatus.UNCHANGED
    assert target.read_bytes() == b""


def test_reset_clears_write_set(tmp_path: Path) -> None:
    writer = IdempotentWriter()
    writer.write_if_changed(tmp_path / "A.csproj", b"a")

    writer.reset()

    assert writer.written == set()


def test_unwritable_target_raises_generation_error(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    target = blocker / "Game.csproj"
    writer = IdempotentWriter()

    with pytest.raises(GenerationError) as exc_info:
        writer.write_if_changed(target, b"data")

    assert exc_info.value.path == str(target)
    assert isinstance(exc_info.value, OSError)
    assert writer.written == set()
