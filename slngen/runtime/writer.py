"""Compare-before-write file output.

Rewriting unchanged descriptors makes IDEs and file watchers reload the
projects, so files are only touched when their content differs.
"""

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Set, Union

from slngen.errors import GenerationError

logger = logging.getLogger("slngen.runtime.writer")

CHUNK_SIZE = 1024

_OPEN_FLAGS = os.O_RDWR | os.O_CREAT | getattr(os, "O_BINARY", 0)


class WriteStatus(Enum):
    """Outcome of a write_if_changed call."""

    WRITTEN = "written"
    UNCHANGED = "unchanged"


class IdempotentWriter:
    """Write files only when their content changed, tracking every path seen.

    The write set holds resolved paths of every file written or verified
    during the current pass; the stale-file collector keeps exactly those.
    """

    def __init__(self) -> None:
        self.written: Set[Path] = set()

    def reset(self) -> None:
        """Forget the write set of the previous pass."""
        self.written.clear()

    def write_if_changed(
        self, path: Union[str, Path], data: Union[bytes, memoryview]
    ) -> WriteStatus:
        """Write ``data`` to ``path`` unless the file already holds it.

        Args:
            path: Target file; parent directories are created.
            data: New file content.

        Returns:
            WriteStatus: UNCHANGED when the file was left untouched.

        Raises:
            GenerationError: If the file cannot be opened, read or written.
        """
        target = Path(path)
        content = memoryview(data)

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            # Open read-write without truncating, creating the file if needed.
            fd = os.open(target, _OPEN_FLAGS, 0o666)
            with os.fdopen(fd, "r+b") as stream:
                if os.fstat(stream.fileno()).st_size == len(content) and _matches(
                    stream, content
                ):
                    status = WriteStatus.UNCHANGED
                else:
                    stream.seek(0)
                    stream.truncate(len(content))
                    stream.write(content)
                    stream.flush()
                    status = WriteStatus.WRITTEN
        except OSError as e:
            raise GenerationError(f"Failed to write {target}: {e}", str(target)) from e

        self.written.add(target.resolve())
        logger.debug("%s: %s", status.value, target)
        return status


def _matches(stream, content: memoryview) -> bool:
    """Compare the stream against ``content`` chunk by chunk."""
    offset = 0
    while offset < len(content):
        chunk = stream.read(CHUNK_SIZE)
        if not chunk:
            return False
        if content[offset:offset + len(chunk)] != chunk:
            return False
        offset += len(chunk)
    return not stream.read(1)

