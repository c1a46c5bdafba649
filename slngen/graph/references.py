"""Partition declared references into project and external references."""

from __future__ import annotations

import logging
import ntpath

from slngen.graph.manager import ProjectGraph
from slngen.graph.models.schema import ExternalEdge, ProjectEdge, ProjectNode
from slngen.utils.path_utils import relative_or_absolute

logger = logging.getLogger("slngen.graph.references")

BINARY_EXTENSIONS = {".dll", ".exe", ".winmd", ".netmodule", ".csproj"}


def reference_name(reference_path: str) -> str:
    """Bare assembly name of a reference: file name without extension.

    Examples:
        >>> reference_name("/Library/ScriptAssemblies/Game.Core.dll")
        'Game.Core'
        >>> reference_name("OtherUnit")
        'OtherUnit'
    """
    # ntpath splits on both separators.
    filename = ntpath.basename(reference_path)
    stem, ext = ntpath.splitext(filename)
    # Dotted assembly names without a file extension stay whole.
    if ext.lower() in BINARY_EXTENSIONS:
        return stem
    return filename


class ReferenceResolver:
    """Resolve references by exact name against the projects of one pass."""

    def __init__(self, graph: ProjectGraph) -> None:
        self.graph = graph

    def resolve(self, node: ProjectNode) -> None:
        """Fill in the node's project and external references.

        Args:
            node: Project whose unit references are resolved.
        """
        project_refs = []
        external_refs = []
        seen = set()

        for reference_path in node.unit.references:
            name = reference_name(reference_path)
            if name == node.name:
                logger.debug("Ignoring self reference in %s", node.name)
                continue

            target = self.graph.get(name)
            if target is not None:
                if name in seen:
                    continue
                seen.add(name)
                edge = ProjectEdge(
                    source=node.name, target=name, target_filename=target.filename
                )
                project_refs.append(edge)
                self.graph.add_reference(edge)
                continue

            external_refs.append(
                ExternalEdge(
                    source=node.name,
                    name=name,
                    hint_path=relative_or_absolute(node.root_folder, reference_path),
                )
            )

        node.project_references = project_refs
        node.external_references = external_refs
        logger.debug(
            "Resolved %s: %d project reference(s), %d external reference(s)",
            node.name,
            len(project_refs),
            len(external_refs),
        )

    def resolve_all(self) -> None:
        """Resolve references for every project in the graph."""
        for node in self.graph:
            self.resolve(node)
