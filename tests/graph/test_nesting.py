"""Tests for nested project exclusions."""

from slngen.config.schema import GenerationOptions
from slngen.graph.builder import ProjectGraphBuilder
from slngen.graph.identifiers import project_guid
from slngen.graph.models.schema import AssemblyUnit, ProjectNode
from slngen.graph.nesting import apply_nesting_exclusions, nesting_exclusions

ASSETS = "/proj/Assets"


def _graph(roots):
    options = GenerationOptions(project_root="/proj", source_root=ASSETS)
    units = [
        AssemblyUnit(name=name, definition_path=f"{root}/{name}.asmdef")
        for name, root in roots
    ]
    graph = ProjectGraphBuilder(options).build(units)
    apply_nesting_exclusions(graph)
    return graph


def test_nested_project_is_excluded_from_parent() -> None:
    graph = _graph([("P", f"{ASSETS}/Lib"), ("Q", f"{ASSETS}/Lib/Sub")])

    assert graph.get("P").exclusions == ["Sub/**/*.cs"]
    assert graph.get("Q").exclusions == []


def test_deeply_nested_projects_are_listed_in_graph_order() -> None:
    graph = _graph(
        [
            ("Root", ASSETS),
            ("Deep", f"{ASSETS}/A/B"),
            ("Mid", f"{ASSETS}/A"),
        ]
    )

    assert graph.get("Root").exclusions == ["A/B/**/*.cs", "A/**/*.cs"]
    assert graph.get("Mid").exclusions == ["B/**/*.cs"]
    assert graph.get("Deep").exclusions == []


def test_sibling_with_shared_prefix_is_not_nested() -> None:
    graph = _graph([("Lib", f"{ASSETS}/Lib"), ("Library", f"{ASSETS}/Library")])

    assert graph.get("Lib").exclusions == []
    assert graph.get("Library").exclusions == []


def test_projects_sharing_a_root_do_not_exclude_each_other() -> None:
    graph = _graph([("One", f"{ASSETS}/Shared"), ("Two", f"{ASSETS}/Shared")])

    assert nesting_exclusions(graph.get("One"), graph) == []
    assert nesting_exclusions(graph.get("Two"), graph) == []


def test_project_without_root_folder_is_ignored() -> None:
    graph = _graph([("Top", ASSETS)])
    graph.add_project(
        ProjectNode(
            unit=AssemblyUnit(name="Loose"),
            root_folder="",
            guid=project_guid("Loose"),
            filename="Loose.csproj",
        )
    )
    apply_nesting_exclusions(graph)

    assert graph.get("Loose").exclusions == []
    assert graph.get("Top").exclusions == []
