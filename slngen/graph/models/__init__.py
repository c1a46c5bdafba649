"""Data models used by the graph package."""

from .schema import (
    AssemblyUnit,
    CompilerOptions,
    EdgeKind,
    ExternalEdge,
    ProjectEdge,
    ProjectNode,
)

__all__ = [
    "AssemblyUnit",
    "CompilerOptions",
    "EdgeKind",
    "ExternalEdge",
    "ProjectEdge",
    "ProjectNode",
]
