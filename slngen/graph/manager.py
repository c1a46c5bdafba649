"""Project graph for a single generation pass.

ProjectGraph keeps the included projects in the order their units were
supplied (solution files list projects in that order) and mirrors project
references into a NetworkX graph for ordering and cycle inspection.
"""

import logging
from typing import Dict, Iterator, List, Optional

import networkx as nx

from slngen.graph.backend import GraphBackend
from slngen.graph.models.schema import EdgeKind, ProjectEdge, ProjectNode

logger = logging.getLogger("slngen.graph.manager")

CYCLE_ERRORS = (nx.NetworkXError, nx.NetworkXUnfeasible)


class ProjectGraph:
    """Ordered collection of ProjectNodes plus their reference graph.

    The name→node mapping doubles as the lookup table used by the
    reference resolver.
    """

    def __init__(self, backend: Optional[GraphBackend] = None) -> None:
        self._backend = backend or GraphBackend()
        self._nodes: Dict[str, ProjectNode] = {}

    @property
    def backend(self) -> GraphBackend:
        """Return the underlying graph backend."""
        return self._backend

    def add_project(self, node: ProjectNode) -> bool:
        """Add a project node.

        Args:
            node: Node to add.

        Returns:
            bool: False when a project with the same name already exists.
        """
        if node.name in self._nodes:
            logger.warning(
                "Duplicate assembly name %s; keeping the first definition", node.name
            )
            return False

        self._nodes[node.name] = node
        self._backend.add_node(
            node.name,
            guid=node.guid,
            filename=node.filename,
            root_folder=node.root_folder,
            order=len(self._nodes) - 1,
        )
        logger.debug("Added project: %s (root=%s)", node.name, node.root_folder)
        return True

    def add_reference(self, edge: ProjectEdge) -> None:
        """Record a project reference in the backend graph."""
        if self._backend.has_edge(edge.source, edge.target):
            return
        self._backend.add_edge(
            edge.source, edge.target, kind=EdgeKind.PROJECT_REFERENCE.value
        )

    def get(self, name: str) -> Optional[ProjectNode]:
        """Look up a project by exact assembly name."""
        return self._nodes.get(name)

    def __iter__(self) -> Iterator[ProjectNode]:
        return iter(self._nodes.values())

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, name: object) -> bool:
        return name in self._nodes

    def dependencies(self, name: str) -> List[str]:
        """Names of projects referenced by ``name``."""
        if not self._backend.has_node(name):
            return []
        return list(self._backend.successors(name))

    def dependents(self, name: str) -> List[str]:
        """Names of projects referencing ``name``."""
        if not self._backend.has_node(name):
            return []
        return list(self._backend.predecessors(name))

    def find_cycles(self, limit: Optional[int] = None) -> List[List[str]]:
        """Enumerate reference cycles.

        Cycles are reported, never broken: the descriptors simply carry the
        references as declared.

        Args:
            limit: Maximum number of cycles to return; None or <= 0 for all.

        Returns:
            List[List[str]]: Each cycle as project names in traversal order.
        """
        max_cycles = limit if limit is not None and limit > 0 else None
        cycles: List[List[str]] = []
        try:
            for cycle in nx.simple_cycles(self._backend.native_graph):
                cycles.append([str(name) for name in cycle])
                if max_cycles is not None and len(cycles) >= max_cycles:
                    break
        except CYCLE_ERRORS as e:
            logger.warning("Failed to enumerate project cycles: %s", e)
        return cycles

    def build_order(self) -> Optional[List[str]]:
        """Dependencies-first order, ties broken by input order.

        Returns:
            Optional[List[str]]: Project names, or None if references form a cycle.
        """
        graph = self._backend.native_graph
        try:
            # Edges point from dependent to dependency; reverse for build order.
            order = nx.lexicographical_topological_sort(
                graph.reverse(copy=False),
                key=lambda name: self._backend.get_node_data(name)["order"],
            )
            return list(order)
        except nx.NetworkXUnfeasible:
            return None
