"""Exclude globs for projects nested inside another project's root.

Project descriptors compile every source file under the project root, so
a project containing another project's folder must exclude it, or both
would compile the nested sources.
"""

import logging
from typing import List

from slngen.graph.manager import ProjectGraph
from slngen.graph.models.schema import ProjectNode
from slngen.utils.path_utils import is_nested, normalize_path, paths_equal

logger = logging.getLogger("slngen.graph.nesting")

SOURCE_GLOB = "**/*.cs"


def nesting_exclusions(node: ProjectNode, graph: ProjectGraph) -> List[str]:
    """Compute exclude globs for projects nested inside ``node``.

    Args:
        node: Project whose root may contain other project roots.
        graph: All projects of the current pass.

    Returns:
        List[str]: Globs relative to the node's root, in graph order.
    """
    if not node.root_folder:
        return []

    root = normalize_path(node.root_folder)
    exclusions: List[str] = []

    for other in graph:
        if other is node or not other.root_folder:
            continue
        if paths_equal(root, other.root_folder):
            continue
        if not is_nested(root, other.root_folder):
            continue

        nested = normalize_path(other.root_folder)
        relative = nested[len(root):].lstrip("/")
        exclusions.append(f"{relative}/{SOURCE_GLOB}")

    return exclusions


def apply_nesting_exclusions(graph: ProjectGraph) -> None:
    """Recompute the exclusion list of every project in the graph."""
    for node in graph:
        node.exclusions = nesting_exclusions(node, graph)
        if node.exclusions:
            logger.debug("%s excludes %s", node.name, ", ".join(node.exclusions))
