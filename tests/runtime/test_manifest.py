"""Tests for assembly unit manifests."""

import json
from pathlib import Path

import pytest

from slngen.errors import ManifestError
from slngen.runtime.manifest import load_units, parse_units

UNIT = {
    "name": "Game.Core",
    "definition_path": "/proj/Assets/Core/Game.Core.asmdef",
    "source_files": ["/proj/Assets/Core/Player.cs"],
    "references": ["/proj/Library/ScriptAssemblies/Game.Util.dll"],
    "compiler_options": {"language_version": "9.0", "defines": ["DEBUG"]},
    "root_namespace": "Game",
}


def test_parse_list_and_object_forms() -> None:
    from_list = parse_units([UNIT, {"name": "Other"}])
    from_object = parse_units({"units": [UNIT, {"name": "Other"}]})

    assert [unit.name for unit in from_list] == ["Game.Core", "Other"]
    assert from_list == from_object
    assert from_list[0].compiler_options.language_version == "9.0"
    assert from_list[0].compiler_options.allow_unsafe_code is False
    assert from_list[1].definition_path is None


@pytest.mark.parametrize(
    "data",
    [
        {"projects": []},
        "units",
        [{"definition_path": "/proj/x.asmdef"}],
        [{"name": "A", "unexpected": True}],
    ],
)
def test_invalid_manifest(data) -> None:
    with pytest.raises(ManifestError):
        parse_units(data)


def test_load_units_from_file(tmp_path: Path) -> None:
    manifest = tmp_path / "units.json"
    manifest.write_text(json.dumps({"units": [UNIT]}), encoding="utf-8")

    units = load_units(manifest)

    assert len(units) == 1
    assert units[0].references == UNIT["references"]


def test_load_units_errors(tmp_path: Path) -> None:
    with pytest.raises(ManifestError):
        load_units(tmp_path / "missing.json")

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(ManifestError):
        load_units(broken)
