"""Solution descriptor (.sln) rendering.

The solution format is line oriented; projects are listed in input order
followed by the configuration mappings for each project.
"""

import logging
from typing import BinaryIO, List

from slngen.config.schema import GenerationOptions
from slngen.graph.manager import ProjectGraph

logger = logging.getLogger("slngen.export.solution")

FORMAT_HEADER = "Microsoft Visual Studio Solution File, Format Version 12.00"
VISUAL_STUDIO_HEADER = "# Visual Studio 15"
CONFIGURATIONS = ("Debug", "Release")
PLATFORM = "Any CPU"


def solution_lines(graph: ProjectGraph, options: GenerationOptions) -> List[str]:
    """Build the lines of a solution descriptor.

    Args:
        graph: Projects of the current pass.
        options: Generation options providing the project-type GUID.

    Returns:
        List[str]: Lines without terminators.
    """
    lines = [FORMAT_HEADER, VISUAL_STUDIO_HEADER]

    for node in graph:
        lines.append(
            f'Project("{options.project_type_guid}") = '
            f'"{node.name}", "{node.filename}", "{node.guid}"'
        )
        lines.append("EndProject")

    lines.append("Global")
    lines.append("    GlobalSection(SolutionConfigurationPlatforms) = preSolution")
    for configuration in CONFIGURATIONS:
        lines.append(f"        {configuration}|{PLATFORM} = {configuration}|{PLATFORM}")
    lines.append("    EndGlobalSection")

    lines.append("    GlobalSection(ProjectConfigurationPlatforms) = postSolution")
    for node in graph:
        for configuration in CONFIGURATIONS:
            mapping = f"{configuration}|{PLATFORM}"
            lines.append(f"        {node.guid}.{mapping}.ActiveCfg = {mapping}")
            lines.append(f"        {node.guid}.{mapping}.Build.0 = {mapping}")
    lines.append("    EndGlobalSection")

    lines.append("    GlobalSection(SolutionProperties) = preSolution")
    lines.append("        HideSolutionNode = FALSE")
    lines.append("    EndGlobalSection")
    lines.append("EndGlobal")
    return lines


def render_solution(graph: ProjectGraph, options: GenerationOptions, out: BinaryIO) -> None:
    """Render the solution descriptor as UTF-8 into ``out``."""
    newline = options.newline
    text = newline.join(solution_lines(graph, options)) + newline
    out.write(text.encode("utf-8"))
    logger.debug("Rendered solution with %d project(s)", len(graph))
