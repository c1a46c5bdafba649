"""Project generation engine.

A generation pass runs in three strictly ordered stages:

1. Build and annotate the project graph, then render every descriptor into
   memory. Nothing touches the disk yet, so a failure here leaves the
   previous file set intact.
2. Write each descriptor through the idempotent writer.
3. Only if every write succeeded, delete descriptors that were not part of
   this pass.

Usage:
    with ProjectGenerator(options) as generator:
        result = generator.generate_project_files(units)
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from slngen.config.schema import GenerationOptions
from slngen.export.project import render_project
from slngen.export.solution import render_solution
from slngen.graph.builder import ProjectGraphBuilder
from slngen.graph.manager import ProjectGraph
from slngen.graph.models.schema import AssemblyUnit
from slngen.graph.nesting import apply_nesting_exclusions
from slngen.graph.references import ReferenceResolver
from slngen.runtime.collector import StaleFileCollector
from slngen.runtime.writer import IdempotentWriter, WriteStatus

logger = logging.getLogger("slngen.runtime.generation")


@dataclass
class GenerationResult:
    """Summary of one generation pass."""

    solution: Optional[Path] = None
    project_count: int = 0
    written: List[Path] = field(default_factory=list)
    unchanged: List[Path] = field(default_factory=list)
    deleted: List[Path] = field(default_factory=list)
    failed_deletions: List[Tuple[Path, str]] = field(default_factory=list)
    excluded: List[str] = field(default_factory=list)
    cycles: List[List[str]] = field(default_factory=list)


class ProjectGenerator:
    """Generates the solution and project descriptors for assembly units.

    All state (scratch buffer, write set) belongs to the instance, so
    independent generators never share data.
    """

    def __init__(
        self,
        options: GenerationOptions,
        writer: Optional[IdempotentWriter] = None,
        collector: Optional[StaleFileCollector] = None,
    ) -> None:
        self.options = options
        self.output_dir = options.output_dir
        self.writer = writer or IdempotentWriter()
        self.collector = collector or StaleFileCollector()
        self._buffer: Optional[io.BytesIO] = io.BytesIO()

    def __enter__(self) -> "ProjectGenerator":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Release the scratch buffer."""
        if self._buffer is not None:
            self._buffer.close()
            self._buffer = None

    def _scratch(self) -> io.BytesIO:
        if self._buffer is None:
            raise RuntimeError("ProjectGenerator is closed")
        self._buffer.seek(0)
        self._buffer.truncate(0)
        return self._buffer

    def build_graph(self, units: Iterable[AssemblyUnit]) -> Tuple[ProjectGraph, List[str]]:
        """Build the project graph and resolve references and exclusions.

        Args:
            units: Assembly units in build-system order.

        Returns:
            Tuple[ProjectGraph, List[str]]: The annotated graph and the names
            of units that were excluded.
        """
        builder = ProjectGraphBuilder(self.options)
        graph = builder.build(units)
        ReferenceResolver(graph).resolve_all()
        apply_nesting_exclusions(graph)
        return graph, list(builder.excluded)

    def render(self, graph: ProjectGraph) -> List[Tuple[Path, bytes]]:
        """Render every descriptor of the graph into memory.

        Returns:
            List[Tuple[Path, bytes]]: Output path and content, projects first
            and the solution last.
        """
        documents: List[Tuple[Path, bytes]] = []

        for node in graph:
            buffer = self._scratch()
            render_project(node, self.options, buffer)
            documents.append((self.output_dir / node.filename, buffer.getvalue()))

        buffer = self._scratch()
        render_solution(graph, self.options, buffer)
        documents.append(
            (self.output_dir / self.options.solution_filename, buffer.getvalue())
        )
        return documents

    def write(self, documents: Sequence[Tuple[Path, bytes]], result: GenerationResult) -> None:
        """Write rendered documents, recording their status in ``result``.

        Raises:
            GenerationError: On the first file that cannot be written.
        """
        for path, content in documents:
            status = self.writer.write_if_changed(path, content)
            if status is WriteStatus.WRITTEN:
                result.written.append(path)
            else:
                result.unchanged.append(path)

    def generate_project_files(
        self, units: Iterable[AssemblyUnit], clean: bool = True
    ) -> GenerationResult:
        """Run a full generation pass.

        Args:
            units: Assembly units in build-system order.
            clean: Delete descriptor files not produced by this pass.

        Returns:
            GenerationResult: What was written, left unchanged and deleted.

        Raises:
            GenerationError: If a descriptor cannot be written. Stale files
                are not collected in that case.
        """
        result = GenerationResult()
        self.writer.reset()

        graph, result.excluded = self.build_graph(units)
        result.cycles = graph.find_cycles()
        for cycle in result.cycles:
            logger.warning("Project reference cycle: %s", " -> ".join(cycle + cycle[:1]))

        documents = self.render(graph)
        self.write(documents, result)
        result.solution = documents[-1][0]
        result.project_count = len(graph)

        if clean:
            collected = self.collector.collect([self.output_dir], self.writer.written)
            result.deleted = collected.deleted
            result.failed_deletions = collected.failed

        logger.info(
            "Generated %d project(s) in %s: %d written, %d unchanged, %d deleted",
            len(graph),
            self.output_dir,
            len(result.written),
            len(result.unchanged),
            len(result.deleted),
        )
        return result


def generate_project_files(
    units: Iterable[AssemblyUnit], options: GenerationOptions, clean: bool = True
) -> GenerationResult:
    """Run one generation pass with a throwaway generator."""
    with ProjectGenerator(options) as generator:
        return generator.generate_project_files(units, clean=clean)
