"""Configuration schema definitions using Pydantic for validation.

GenerationOptions is supplied once per invocation and is read-only for
the duration of a generation pass.
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from slngen.utils.path_utils import absolute_path, normalize_path

CSHARP_PROJECT_TYPE_GUID = "{FAE04EC0-301F-11D3-BF4B-00C04F79EFBC}"

# Capabilities hidden from the IDE by default; references are managed by
# the build system, not edited in the IDE.
DEFAULT_CAPABILITIES_TO_REMOVE = [
    "LaunchProfiles",
    "SharedProjectReferences",
    "ReferenceManagerSharedProjects",
    "ProjectReferences",
    "ReferenceManagerProjects",
    "COMReferences",
    "ReferenceManagerCOM",
    "AssemblyReferences",
    "ReferenceManagerAssemblies",
]


class GenerationOptions(BaseModel):
    """Top-level configuration for a generation pass.

    Attributes:
        project_root: Directory that receives the solution and project files.
        source_root: Primary source tree; defaults to ``<project_root>/Assets``.
        solution_name: Solution file stem; defaults to the project root name.
        include_external_units: Include units with an explicit definition
            file even when they live outside the primary source tree.
        analyzers: Extra analyzer paths added to every project.
        project_type_guid: IDE project-type identifier used in the solution.
        capabilities_to_remove: IDE capabilities suppressed in each project.
        target_framework: Value for ``TargetFramework``.
        newline: Line terminator used in generated files.
    """

    project_root: str = "."
    source_root: Optional[str] = None
    solution_name: Optional[str] = None
    include_external_units: bool = False
    analyzers: List[str] = Field(default_factory=list)
    project_type_guid: str = CSHARP_PROJECT_TYPE_GUID
    capabilities_to_remove: List[str] = Field(default_factory=list)
    target_framework: str = "netstandard2.1"
    newline: Literal["\n", "\r\n"] = "\n"

    model_config = {"extra": "forbid", "frozen": True}

    @field_validator("project_type_guid")
    @classmethod
    def validate_project_type_guid(cls, v: str) -> str:
        """Require the braced 8-4-4-4-12 form used in solution files."""
        parts = v.strip("{}").split("-")
        if (
            not (v.startswith("{") and v.endswith("}"))
            or [len(p) for p in parts] != [8, 4, 4, 4, 12]
        ):
            raise ValueError(f"Invalid project type GUID '{v}'")
        return v.upper()

    @field_validator("solution_name")
    @classmethod
    def validate_solution_name(cls, v: Optional[str]) -> Optional[str]:
        """Reject names that would place the solution outside the project root."""
        if v is not None and (not v.strip() or "/" in v or "\\" in v):
            raise ValueError(f"Invalid solution name '{v}'")
        return v

    @property
    def output_dir(self) -> Path:
        """Absolute directory receiving generated files.

        Symbolic links are kept as spelled; unit paths from the build system
        use the same spelling.
        """
        return Path(os.path.abspath(os.path.expanduser(self.project_root)))

    @property
    def primary_source_tree(self) -> str:
        """Primary source tree as a normalized path string."""
        if self.source_root:
            return absolute_path(self.source_root, str(self.output_dir))
        return normalize_path(str(self.output_dir / "Assets"))

    @property
    def solution_filename(self) -> str:
        """File name of the solution descriptor."""
        return f"{self.solution_name or self.output_dir.name}.sln"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GenerationOptions":
        """Create options from a dictionary.

        Raises:
            ValidationError: If the configuration is invalid.
        """
        return cls.model_validate(data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert options to a dictionary."""
        return self.model_dump()
