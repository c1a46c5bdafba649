"""Project descriptor (.csproj) rendering.

The layout mirrors what SDK-style tooling expects from generated projects:
sources are included by glob from the project's root folder, framework
references are disabled and assemblies are referenced explicitly by hint
path.
"""

import logging
import xml.etree.ElementTree as ET
from typing import BinaryIO, Optional

from slngen.config.schema import GenerationOptions
from slngen.graph.models.schema import ProjectNode
from slngen.graph.nesting import SOURCE_GLOB

logger = logging.getLogger("slngen.export.project")

INDENT = "    "
DEBUG_CONDITION = "'$(Configuration)|$(Platform)' == 'Debug|AnyCPU'"
RELEASE_CONDITION = "'$(Configuration)|$(Platform)' == 'Release|AnyCPU'"


def _element(
    parent: ET.Element, tag: str, text: Optional[str] = None, **attributes: str
) -> ET.Element:
    element = ET.SubElement(parent, tag, attributes)
    if text is not None:
        element.text = text
    return element


def _property_group(parent: ET.Element, condition: Optional[str] = None) -> ET.Element:
    if condition is None:
        return _element(parent, "PropertyGroup")
    return _element(parent, "PropertyGroup", Condition=condition)


def build_project_element(node: ProjectNode, options: GenerationOptions) -> ET.Element:
    """Build the XML tree of a project descriptor.

    Args:
        node: Project with references and exclusions already resolved.
        options: Generation options of the current pass.

    Returns:
        ET.Element: The ``Project`` root element.
    """
    unit = node.unit
    compiler = unit.compiler_options

    project = ET.Element("Project", {"ToolsVersion": "Current"})

    paths = _property_group(project)
    _element(
        paths,
        "BaseIntermediateOutputPath",
        "$(SolutionDir)/Temp/obj/$(Configuration)/$(MSBuildProjectName)",
    )
    _element(paths, "IntermediateOutputPath", "$(BaseIntermediateOutputPath)")

    _element(project, "Import", Project="Sdk.props", Sdk="Microsoft.NET.Sdk")

    general = _property_group(project)
    _element(general, "GenerateAssemblyInfo", "false")
    _element(general, "EnableDefaultItems", "false")
    _element(general, "AppendTargetFrameworkToOutputPath", "false")
    _element(general, "LangVersion", compiler.language_version)
    _element(general, "Configurations", "Debug;Release")
    _element(general, "Configuration", "Debug", Condition="'$(Configuration)' == ''")
    _element(general, "Platform", "AnyCPU", Condition="'$(Platform)' == ''")
    _element(general, "RootNamespace", unit.root_namespace)
    _element(general, "OutputType", "Library")
    _element(general, "AssemblyName", unit.name)
    _element(general, "TargetFramework", options.target_framework)
    _element(general, "WarningLevel", "4")
    _element(general, "NoWarn", "0169;USG0001")
    _element(general, "AllowUnsafeBlocks", str(compiler.allow_unsafe_code))
    _element(general, "OutputPath", "Temp/bin/$(Configuration)/")

    debug = _property_group(project, DEBUG_CONDITION)
    _element(debug, "DebugSymbols", "true")
    _element(debug, "DebugType", "full")
    _element(debug, "Optimize", "false")
    _element(debug, "DefineConstants", ";".join(compiler.defines))

    release = _property_group(project, RELEASE_CONDITION)
    _element(release, "DebugType", "pdbonly")
    _element(release, "Optimize", "true")

    framework = _property_group(project)
    _element(framework, "NoStandardLibraries", "true")
    _element(framework, "NoStdLib", "true")
    _element(framework, "NoConfig", "true")
    _element(framework, "DisableImplicitFrameworkReferences", "true")
    _element(framework, "MSBuildWarningsAsMessages", "MSB3277")

    analyzers = _element(project, "ItemGroup")
    for analyzer in [*compiler.analyzers, *options.analyzers]:
        _element(analyzers, "Analyzer", Include=analyzer)

    _element(project, "Import", Project="Sdk.targets", Sdk="Microsoft.NET.Sdk")

    if options.capabilities_to_remove:
        capabilities = _element(project, "ItemGroup")
        for capability in options.capabilities_to_remove:
            _element(capabilities, "ProjectCapability", Remove=capability)

    sources = _element(project, "ItemGroup")
    _element(sources, "Compile", Include=f"{node.root_folder}/{SOURCE_GLOB}")
    for exclusion in node.exclusions:
        _element(sources, "Compile", Remove=exclusion)

    references = _element(project, "ItemGroup")
    for external in node.external_references:
        reference = _element(references, "Reference", Include=external.name)
        _element(reference, "HintPath", external.hint_path)
        _element(reference, "Private", str(external.private).lower())

    project_references = _element(project, "ItemGroup")
    for edge in node.project_references:
        # Descriptors share one output folder, so the file name is a
        # path relative to the referencing project.
        _element(project_references, "ProjectReference", Include=edge.target_filename)

    return project


def render_project(node: ProjectNode, options: GenerationOptions, out: BinaryIO) -> None:
    """Render a project descriptor as UTF-8 into ``out``.

    Args:
        node: Project to render.
        options: Generation options of the current pass.
        out: Binary stream receiving the document.
    """
    project = build_project_element(node, options)
    ET.indent(project, space=INDENT)
    text = ET.tostring(project, encoding="unicode", short_empty_elements=True)
    if options.newline != "\n":
        text = text.replace("\n", options.newline)
    out.write(text.encode("utf-8"))
    logger.debug("Rendered project %s", node.filename)
