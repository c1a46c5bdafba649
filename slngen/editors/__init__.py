"""Editor installation discovery."""

from .locator import (
    EXECUTABLES,
    EditorExecutable,
    Installation,
    InstallationLocator,
    default_pipe_name,
    find_executable,
)

__all__ = [
    "EXECUTABLES",
    "EditorExecutable",
    "Installation",
    "InstallationLocator",
    "default_pipe_name",
    "find_executable",
]
