"""Discovery of installed external editors.

This is the boundary to the editor bridge: it only knows which editor
executables are supported and where they are installed. Discovery runs as
a one-shot background job whose result is cached under a generation
token; the cache is only invalidated by an explicit ``invalidate()`` call.
The generation engine never waits on this module.
"""

from __future__ import annotations

import logging
import shutil
import sys
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import PureWindowsPath
from typing import Callable, List, Optional, Sequence, Tuple

logger = logging.getLogger("slngen.editors.locator")

Lookup = Callable[[str], Optional[str]]


@dataclass(frozen=True)
class EditorExecutable:
    """A supported editor executable.

    Attributes:
        filename: Executable name without extension.
        name: Display name of the installation.
        start_arguments: Builds the launch arguments for a listen address.
        focus_command: Key sequence that brings the editor window forward.
    """

    filename: str
    name: str
    start_arguments: Callable[[str], List[str]]
    focus_command: Optional[str] = None


@dataclass(frozen=True)
class Installation:
    """A discovered editor installation."""

    name: str
    path: str


EXECUTABLES: Tuple[EditorExecutable, ...] = (
    EditorExecutable(
        filename="nvim",
        name="Neovim",
        start_arguments=lambda pipe: ["--listen", pipe],
    ),
    EditorExecutable(
        filename="nvim-qt",
        name="Neovim-Qt",
        start_arguments=lambda pipe: ["--", "--listen", pipe],
    ),
    EditorExecutable(
        filename="neovide",
        name="Neovide",
        start_arguments=lambda pipe: ["--", "--listen", pipe],
        focus_command="<cmd>NeovideFocus<cr>",
    ),
)


def find_executable(
    editor_path: str, executables: Sequence[EditorExecutable] = EXECUTABLES
) -> Optional[EditorExecutable]:
    """Match an editor path to a supported executable by file name."""
    # PureWindowsPath accepts both separators.
    stem = PureWindowsPath(editor_path).stem.casefold()
    for executable in executables:
        if executable.filename.casefold() == stem:
            return executable
    return None


def default_pipe_name(project_name: str, platform: str = sys.platform) -> Optional[str]:
    """Named pipe an editor is started with for ``project_name``.

    Only Windows has a conventional pipe namespace; other platforms return None.
    """
    if platform.startswith("win"):
        return f"\\\\.\\pipe\\nvim.unity.{project_name}"
    return None


class InstallationLocator:
    """Find editor installations in the background and cache the result.

    Each discovery job is tagged with the generation token current when it
    was started. ``installations()`` reuses the job of the current token and
    ``invalidate()`` bumps the token so the next call starts a fresh job.
    """

    def __init__(
        self,
        executables: Sequence[EditorExecutable] = EXECUTABLES,
        lookup: Lookup = shutil.which,
    ) -> None:
        self.executables = tuple(executables)
        self._lookup = lookup
        self._lock = threading.Lock()
        self._token = 0
        self._job: Optional[Tuple[int, Future]] = None
        self._executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="slngen-locator"
        )

    def __enter__(self) -> "InstallationLocator":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def generation_token(self) -> int:
        """Token of the discovery result currently considered valid."""
        with self._lock:
            return self._token

    def start(self) -> Future:
        """Start discovery for the current token unless it is already running.

        Returns:
            Future: Resolves to the list of installations.
        """
        with self._lock:
            if self._job is None or self._job[0] != self._token:
                token = self._token
                future = self._executor.submit(self._discover, token)
                self._job = (token, future)
                logger.debug("Started editor discovery (token=%d)", token)
            return self._job[1]

    def installations(self, timeout: Optional[float] = None) -> List[Installation]:
        """Installations found by the current discovery job.

        Args:
            timeout: Seconds to wait for a running job; None waits forever.

        Raises:
            concurrent.futures.TimeoutError: If the job does not finish in time.
        """
        return list(self.start().result(timeout=timeout))

    def invalidate(self) -> int:
        """Discard the cached result; the next lookup starts a new job.

        Returns:
            int: The new generation token.
        """
        with self._lock:
            self._token += 1
            logger.debug("Editor discovery invalidated (token=%d)", self._token)
            return self._token

    def close(self) -> None:
        """Stop the background executor."""
        self._executor.shutdown(wait=False, cancel_futures=True)

    def _discover(self, token: int) -> List[Installation]:
        found: List[Installation] = []
        for executable in self.executables:
            try:
                path = self._lookup(executable.filename)
            except OSError as e:
                logger.warning("Searching for '%s' failed: %s", executable.filename, e)
                continue
            if path and path.strip():
                found.append(Installation(name=executable.name, path=path.strip()))
        logger.info(
            "Found %d editor installation(s) (token=%d)", len(found), token
        )
        return found
