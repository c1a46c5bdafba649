"""CLI command to inspect the project graph without writing files.

Shows which units become projects, how their references resolve and which
nested folders each project excludes. With ``--fail-on-cycle`` the command
fails when project references form a cycle, so CI can enforce an acyclic
dependency structure.
"""

from __future__ import annotations

import logging
from typing import List, Tuple

from rich.console import Console
from rich.table import Table

from slngen.cli.common import RECOVERABLE_CLI_ERRORS, load_inputs
from slngen.graph.manager import ProjectGraph
from slngen.runtime.generation import ProjectGenerator

logger = logging.getLogger("slngen.cli.graph")

COLUMNS = (
    "Project",
    "GUID",
    "Root folder",
    "Depends on",
    "Used by",
    "External refs",
    "Excludes",
)


def project_rows(graph: ProjectGraph) -> List[Tuple[str, ...]]:
    """One table row per project, in solution order."""
    rows = []
    for node in graph:
        rows.append(
            (
                node.name,
                node.guid,
                node.root_folder,
                ", ".join(graph.dependencies(node.name)) or "-",
                ", ".join(graph.dependents(node.name)) or "-",
                ", ".join(edge.name for edge in node.external_references) or "-",
                ", ".join(node.exclusions) or "-",
            )
        )
    return rows


def graph_command(args) -> int:
    """Execute graph inspection command.

    Args:
        args: Parsed command-line arguments.

    Returns:
        int: Exit code (0 for success, non-zero for failure).
    """
    fail_on_cycle = getattr(args, "fail_on_cycle", False)

    try:
        units, options = load_inputs(args)
        with ProjectGenerator(options) as generator:
            graph, excluded = generator.build_graph(units)
    except RECOVERABLE_CLI_ERRORS as e:
        logger.error("Graph command failed: %s", e)
        return 1

    console = Console()
    backend = graph.backend
    table = Table(
        title=(
            f"Projects ({backend.node_count()}), "
            f"project references ({backend.edge_count()})"
        )
    )
    for column in COLUMNS:
        table.add_column(column)
    for row in project_rows(graph):
        table.add_row(*row)
    console.print(table)

    if excluded:
        console.print(f"Excluded units: {', '.join(excluded)}")

    order = graph.build_order()
    if order is not None:
        console.print(f"Build order: {' -> '.join(order)}")
        return 0

    cycles = graph.find_cycles(limit=getattr(args, "limit", None))
    logger.warning("Detected %d project reference cycle(s)", len(cycles))
    for idx, cycle in enumerate(cycles, start=1):
        # Present a closed loop for readability: A -> B -> A
        logger.warning("Cycle %d: %s", idx, " -> ".join(cycle + cycle[:1]))

    if fail_on_cycle:
        logger.error("Project graph validation failed: reference cycles detected")
        return 1
    return 0
