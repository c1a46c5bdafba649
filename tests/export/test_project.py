"""Tests for project descriptor rendering."""

import io
import xml.etree.ElementTree as ET

from slngen.config.schema import DEFAULT_CAPABILITIES_TO_REMOVE, GenerationOptions
from slngen.export.project import build_project_element, render_project
from slngen.graph.builder import ProjectGraphBuilder
from slngen.graph.models.schema import AssemblyUnit, CompilerOptions
from slngen.graph.nesting import apply_nesting_exclusions
from slngen.graph.references import ReferenceResolver

ASSETS = "/proj/Assets"


def _options(**kwargs) -> GenerationOptions:
    return GenerationOptions(project_root="/proj", source_root=ASSETS, **kwargs)


def _graph(options: GenerationOptions):
    game = AssemblyUnit(
        name="Game",
        definition_path=f"{ASSETS}/Game/Game.asmdef",
        references=["/proj/Library/Plugins/Foo.dll", "Game.Core"],
        compiler_options=CompilerOptions(
            language_version="9.0",
            allow_unsafe_code=True,
            defines=["UNITY_EDITOR", "DEBUG"],
            analyzers=["/proj/Analyzers/Unit.dll"],
        ),
        root_namespace="Studio.Game",
    )
    core = AssemblyUnit(name="Game.Core", definition_path=f"{ASSETS}/Game/Core/Core.asmdef")
    graph = ProjectGraphBuilder(options).build([game, core])
    ReferenceResolver(graph).resolve_all()
    apply_nesting_exclusions(graph)
    return graph


def _render(options: GenerationOptions, name: str = "Game") -> str:
    out = io.BytesIO()
    render_project(_graph(options).get(name), options, out)
    return out.getvalue().decode("utf-8")


def test_general_properties() -> None:
    options = _options()
    project = build_project_element(_graph(options).get("Game"), options)

    general = project.findall("PropertyGroup")[1]
    assert general.findtext("LangVersion") == "9.0"
    assert general.findtext("RootNamespace") == "Studio.Game"
    assert general.findtext("AssemblyName") == "Game"
    assert general.findtext("TargetFramework") == "netstandard2.1"
    assert general.findtext("AllowUnsafeBlocks") == "True"
    assert general.findtext("NoWarn") == "0169;USG0001"
    assert general.find("Configuration").get("Condition") == "'$(Configuration)' == ''"

    debug = project.findall("PropertyGroup")[2]
    assert "Debug|AnyCPU" in debug.get("Condition")
    assert debug.findtext("DefineConstants") == "UNITY_EDITOR;DEBUG"


def test_element_order() -> None:
    options = _options(capabilities_to_remove=DEFAULT_CAPABILITIES_TO_REMOVE)
    project = build_project_element(_graph(options).get("Game"), options)

    tags = [child.tag for child in project]
    assert tags == [
        "PropertyGroup",
        "Import",
        "PropertyGroup",
        "PropertyGroup",
        "PropertyGroup",
        "PropertyGroup",
        "ItemGroup",
        "Import",
        "ItemGroup",
        "ItemGroup",
        "ItemGroup",
        "ItemGroup",
    ]
    assert project[1].get("Project") == "Sdk.props"
    assert project[7].get("Project") == "Sdk.targets"
    removed = [item.get("Remove") for item in project[8]]
    assert removed == DEFAULT_CAPABILITIES_TO_REMOVE


def test_sources_references_and_analyzers() -> None:
    options = _options(analyzers=["/proj/Analyzers/Shared.dll"])
    project = build_project_element(_graph(options).get("Game"), options)

    analyzers = [item.get("Include") for item in project.iter("Analyzer")]
    assert analyzers == ["/proj/Analyzers/Unit.dll", "/proj/Analyzers/Shared.dll"]

    compile_items = list(project.iter("Compile"))
    assert compile_items[0].get("Include") == f"{ASSETS}/Game/**/*.cs"
    assert compile_items[1].get("Remove") == "Core/**/*.cs"

    references = list(project.iter("Reference"))
    assert len(references) == 1
    assert references[0].get("Include") == "Foo"
    assert references[0].findtext("HintPath") == "../../Library/Plugins/Foo.dll"
    assert references[0].findtext("Private") == "false"

    project_refs = [item.get("Include") for item in project.iter("ProjectReference")]
    assert project_refs == ["Game.Core.csproj"]


def test_capability_group_is_omitted_when_empty() -> None:
    text = _render(_options())

    assert "ProjectCapability" not in text


def test_rendered_text_layout() -> None:
    text = _render(_options())

    assert text.startswith('<Project ToolsVersion="Current">\n    <PropertyGroup>\n')
    assert not text.startswith("<?xml")
    assert text.rstrip().endswith("</Project>")
    assert '        <AssemblyName>Game</AssemblyName>' in text
    assert ET.fromstring(text).tag == "Project"


def test_rendered_text_uses_configured_newline() -> None:
    text = _render(_options(newline="\r\n"))

    assert "\r\n    <PropertyGroup>\r\n" in text
    assert "\n" not in text.replace("\r\n", "")


def test_project_without_references_has_empty_item_groups() -> None:
    options = _options()
    project = build_project_element(_graph(options).get("Game.Core"), options)

    assert list(project.iter("Reference")) == []
    assert list(project.iter("ProjectReference")) == []
    compile_items = list(project.iter("Compile"))
    assert len(compile_items) == 1
    assert compile_items[0].get("Include") == f"{ASSETS}/Game/Core/**/*.cs"
