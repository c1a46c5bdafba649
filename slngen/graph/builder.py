"""Build the project graph from assembly units.

Each unit's root source folder is taken from its definition file when it
has one, otherwise inferred from its source files. Units whose root lies
outside the primary source tree are skipped unless they carry an explicit
definition file and external units were requested.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from slngen.config.schema import GenerationOptions
from slngen.graph.identifiers import project_guid
from slngen.graph.manager import ProjectGraph
from slngen.graph.models.schema import AssemblyUnit, ProjectNode
from slngen.utils.path_utils import (
    absolute_path,
    infer_common_root,
    is_nested,
    parent_folder,
)

logger = logging.getLogger("slngen.graph.builder")

PROJECT_EXTENSION = ".csproj"


def project_filename(unit_name: str) -> str:
    """Descriptor file name for an assembly unit."""
    return f"{unit_name}{PROJECT_EXTENSION}"


class ProjectGraphBuilder:
    """Turn an ordered list of assembly units into a ProjectGraph.

    Inclusion and identifiers depend only on per-unit data; node order
    follows the order units are supplied.
    """

    def __init__(self, options: GenerationOptions) -> None:
        self.options = options
        self.base_dir = str(options.output_dir)
        self.source_root = options.primary_source_tree
        self.excluded: List[str] = []

    def resolve_root_folder(self, unit: AssemblyUnit) -> Optional[str]:
        """Determine the root source folder of a unit.

        Returns:
            Optional[str]: Root folder, or None when it cannot be inferred.
        """
        if unit.definition_path is not None:
            return parent_folder(absolute_path(unit.definition_path, self.base_dir))
        if not unit.source_files:
            return None
        # Relative paths are reported against the project root.
        files = [absolute_path(path, self.base_dir) for path in unit.source_files]
        return infer_common_root(files, self.source_root)

    def is_included(self, unit: AssemblyUnit, root_folder: Optional[str]) -> bool:
        """Decide whether a unit gets a generated project.

        Units without a root folder are never included.
        """
        if not root_folder:
            return False
        if is_nested(self.source_root, root_folder):
            return True
        return unit.definition_path is not None and self.options.include_external_units

    def build(self, units: Iterable[AssemblyUnit]) -> ProjectGraph:
        """Create a node for every included unit.

        Args:
            units: Assembly units in build-system order.

        Returns:
            ProjectGraph: Graph with one node per included unit.
        """
        graph = ProjectGraph()
        self.excluded = []

        for unit in units:
            root_folder = self.resolve_root_folder(unit)

            if not self.is_included(unit, root_folder):
                if not root_folder:
                    logger.warning(
                        "Excluding %s: no common root folder inside %s",
                        unit.name,
                        self.source_root,
                    )
                else:
                    logger.warning(
                        "Excluding %s: root folder %s is outside %s",
                        unit.name,
                        root_folder,
                        self.source_root,
                    )
                self.excluded.append(unit.name)
                continue

            node = ProjectNode(
                unit=unit,
                root_folder=root_folder,
                guid=project_guid(unit.name),
                filename=project_filename(unit.name),
            )
            if not graph.add_project(node):
                self.excluded.append(unit.name)

        logger.info(
            "Project graph built: %d included, %d excluded",
            len(graph),
            len(self.excluded),
        )
        return graph
