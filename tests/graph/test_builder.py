"""Tests for project graph construction."""

import pytest
from pydantic import ValidationError

from slngen.config.schema import GenerationOptions
from slngen.graph.builder import ProjectGraphBuilder
from slngen.graph.identifiers import project_guid
from slngen.graph.models.schema import AssemblyUnit

ROOT = "/proj"
ASSETS = "/proj/Assets"


def _options(**kwargs) -> GenerationOptions:
    return GenerationOptions(project_root=ROOT, source_root=ASSETS, **kwargs)


def test_definition_file_folder_is_root() -> None:
    unit = AssemblyUnit(
        name="Game",
        definition_path=f"{ASSETS}/Game/Game.asmdef",
        source_files=[f"{ASSETS}/Game/Sub/Player.cs"],
    )

    graph = ProjectGraphBuilder(_options()).build([unit])

    node = graph.get("Game")
    assert node is not None
    assert node.root_folder == f"{ASSETS}/Game"
    assert node.filename == "Game.csproj"
    assert node.guid == project_guid("Game")


def test_root_is_inferred_from_source_files() -> None:
    unit = AssemblyUnit(
        name="Assembly-CSharp",
        source_files=[
            f"{ASSETS}/Scripts/Player/Player.cs",
            f"{ASSETS}/Scripts/Enemy.cs",
        ],
    )

    graph = ProjectGraphBuilder(_options()).build([unit])

    assert graph.get("Assembly-CSharp").root_folder == f"{ASSETS}/Scripts"


def test_external_units_need_opt_in() -> None:
    package = AssemblyUnit(
        name="Vendor.Lib",
        definition_path=f"{ROOT}/Packages/Vendor/Vendor.Lib.asmdef",
        source_files=[f"{ROOT}/Packages/Vendor/Lib.cs"],
    )

    default_builder = ProjectGraphBuilder(_options())
    assert "Vendor.Lib" not in default_builder.build([package])
    assert default_builder.excluded == ["Vendor.Lib"]

    graph = ProjectGraphBuilder(_options(include_external_units=True)).build([package])
    assert graph.get("Vendor.Lib").root_folder == f"{ROOT}/Packages/Vendor"


def test_inferred_units_outside_source_tree_are_always_excluded() -> None:
    unit = AssemblyUnit(
        name="Scattered",
        source_files=[f"{ASSETS}/A/a.cs", f"{ROOT}/Other/b.cs"],
    )
    no_sources = AssemblyUnit(name="Empty")

    builder = ProjectGraphBuilder(_options(include_external_units=True))
    graph = builder.build([unit, no_sources])

    assert len(graph) == 0
    assert builder.excluded == ["Scattered", "Empty"]


def test_node_order_follows_input_order() -> None:
    names = ["Zeta", "Alpha", "Mid"]
    units = [
        AssemblyUnit(name=name, definition_path=f"{ASSETS}/{name}/{name}.asmdef")
        for name in names
    ]

    graph = ProjectGraphBuilder(_options()).build(units)

    assert [node.name for node in graph] == names


def test_duplicate_names_keep_first_definition() -> None:
    first = AssemblyUnit(name="Game", definition_path=f"{ASSETS}/A/Game.asmdef")
    second = AssemblyUnit(name="Game", definition_path=f"{ASSETS}/B/Game.asmdef")

    builder = ProjectGraphBuilder(_options())
    graph = builder.build([first, second])

    assert len(graph) == 1
    assert graph.get("Game").root_folder == f"{ASSETS}/A"
    assert builder.excluded == ["Game"]


def test_root_folder_cannot_be_reassigned() -> None:
    unit = AssemblyUnit(name="Game", definition_path=f"{ASSETS}/Game/Game.asmdef")
    node = ProjectGraphBuilder(_options()).build([unit]).get("Game")

    with pytest.raises(ValidationError):
        node.root_folder = f"{ASSETS}/Other"


def test_assembly_unit_validation() -> None:
    with pytest.raises(ValidationError):
        AssemblyUnit(name="")
    with pytest.raises(ValidationError):
        AssemblyUnit(name="Game", definition_path="   ")


def test_relative_unit_paths_are_taken_from_project_root() -> None:
    units = [
        AssemblyUnit(name="Game", definition_path="Assets/Game/Game.asmdef"),
        AssemblyUnit(
            name="Core",
            source_files=["Assets/Core/Player.cs", "Assets/Core/../Core/AI/Brain.cs"],
        ),
    ]

    graph = ProjectGraphBuilder(_options()).build(units)

    assert graph.get("Game").root_folder == f"{ASSETS}/Game"
    assert graph.get("Core").root_folder == f"{ASSETS}/Core"


def test_external_unit_without_root_folder_is_excluded() -> None:
    # The definition file sits at the filesystem root, leaving no folder.
    loose = AssemblyUnit(name="Loose", definition_path="/Loose.asmdef")

    builder = ProjectGraphBuilder(_options(include_external_units=True))
    graph = builder.build([loose])

    assert "Loose" not in graph
    assert builder.excluded == ["Loose"]
