"""Load the assembly unit list exported by the host build system.

The manifest is a JSON document, either a bare list of units or an object
with a ``units`` list::

    {
      "units": [
        {
          "name": "Game.Core",
          "definition_path": "/proj/Assets/Core/Game.Core.asmdef",
          "source_files": ["/proj/Assets/Core/Player.cs"],
          "references": ["/proj/Library/ScriptAssemblies/Game.Util.dll"],
          "compiler_options": {"language_version": "9.0", "defines": ["DEBUG"]},
          "root_namespace": "Game"
        }
      ]
    }

Unit order is preserved; it becomes the project order of the solution.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List, Union

from pydantic import ValidationError

from slngen.errors import ManifestError
from slngen.graph.models.schema import AssemblyUnit

logger = logging.getLogger("slngen.runtime.manifest")


def parse_units(data: Any) -> List[AssemblyUnit]:
    """Validate already-parsed manifest data.

    Raises:
        ManifestError: If the structure or any unit is invalid.
    """
    if isinstance(data, dict):
        data = data.get("units")
    if not isinstance(data, list):
        raise ManifestError("Manifest must be a list of units or contain a 'units' list")

    units: List[AssemblyUnit] = []
    for index, entry in enumerate(data):
        try:
            units.append(AssemblyUnit.model_validate(entry))
        except ValidationError as e:
            raise ManifestError(f"Invalid assembly unit at index {index}: {e}") from e
    return units


def load_units(path: Union[str, Path]) -> List[AssemblyUnit]:
    """Read assembly units from a JSON manifest file.

    Args:
        path: Manifest file path.

    Returns:
        List[AssemblyUnit]: Units in manifest order.

    Raises:
        ManifestError: If the file cannot be read or is invalid.
    """
    manifest_path = Path(path)
    try:
        data = json.loads(manifest_path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ManifestError(f"Cannot read manifest {manifest_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ManifestError(f"Manifest {manifest_path} is not valid JSON: {e}") from e

    units = parse_units(data)
    logger.info("Loaded %d assembly unit(s) from %s", len(units), manifest_path)
    return units
