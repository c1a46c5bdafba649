"""Graph backend abstraction layer.

Wraps NetworkX so the project graph does not depend on it directly.
"""

import logging
from typing import Any, Dict, Iterable, Optional

import networkx as nx

logger = logging.getLogger("slngen.graph.backend")


class GraphBackend:
    """Directed graph of project names wrapping a NetworkX DiGraph.

    Project references form at most one edge per (source, target) pair,
    so a simple DiGraph is sufficient.
    """

    def __init__(self) -> None:
        """Initialize backend with an empty NetworkX DiGraph."""
        self._graph = nx.DiGraph()
        logger.debug("Graph backend initialized with NetworkX")

    @property
    def native_graph(self) -> nx.DiGraph:
        """Get native NetworkX graph for advanced operations.

        Returns:
            nx.DiGraph: Native graph instance.
        """
        return self._graph

    def add_node(self, node_id: str, **attributes: Any) -> None:
        """Add node to graph.

        Args:
            node_id: Node identifier.
            **attributes: Node attributes.
        """
        self._graph.add_node(node_id, **attributes)

    def add_edge(self, source: str, target: str, **attributes: Any) -> None:
        """Add edge to graph.

        Args:
            source: Source node ID.
            target: Target node ID.
            **attributes: Edge attributes.
        """
        self._graph.add_edge(source, target, **attributes)

    def has_node(self, node_id: str) -> bool:
        """Check if node exists."""
        return self._graph.has_node(node_id)

    def has_edge(self, source: str, target: str) -> bool:
        """Check if edge exists."""
        return self._graph.has_edge(source, target)

    def get_node_data(self, node_id: str) -> Optional[Dict[str, Any]]:
        """Get node attributes.

        Args:
            node_id: Node identifier.

        Returns:
            Optional[Dict[str, Any]]: Node attributes or None if not found.
        """
        return self._graph.nodes.get(node_id)

    def successors(self, node_id: str) -> Iterable[str]:
        """Get successor nodes."""
        return self._graph.successors(node_id)

    def predecessors(self, node_id: str) -> Iterable[str]:
        """Get predecessor nodes."""
        return self._graph.predecessors(node_id)

    def node_count(self) -> int:
        """Get number of nodes."""
        return self._graph.number_of_nodes()

    def edge_count(self) -> int:
        """Get number of edges."""
        return self._graph.number_of_edges()
