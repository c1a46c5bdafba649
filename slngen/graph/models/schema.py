"""Input and derived models for project generation.

AssemblyUnit records come from the host build system and are frozen for
the duration of a generation pass. ProjectNode and the edge models are
derived per pass and discarded once the descriptor files are written.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger("slngen.graph.models.schema")


class EdgeKind(str, Enum):
    """Edge kind constants for the project graph."""

    PROJECT_REFERENCE = "project_reference"
    EXTERNAL_REFERENCE = "external_reference"


class CompilerOptions(BaseModel):
    """Compiler settings copied verbatim into the project descriptor.

    Attributes:
        language_version: Value for ``LangVersion``.
        allow_unsafe_code: Whether unsafe blocks are allowed.
        defines: Preprocessor symbols for the debug configuration.
        analyzers: Analyzer assembly paths declared by the unit.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    language_version: str = "latest"
    allow_unsafe_code: bool = False
    defines: List[str] = Field(default_factory=list)
    analyzers: List[str] = Field(default_factory=list)


class AssemblyUnit(BaseModel):
    """One compilable grouping of source files reported by the build system."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: Annotated[str, Field(..., description="Unique assembly name")]
    definition_path: Annotated[
        Optional[str],
        Field(
            default=None,
            description="Explicit definition file; its folder is the root source folder",
        ),
    ]
    source_files: List[str] = Field(default_factory=list)
    references: List[str] = Field(default_factory=list)
    compiler_options: CompilerOptions = Field(default_factory=CompilerOptions)
    root_namespace: str = ""

    @field_validator("name")
    @classmethod
    def _check_name_non_empty(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("Assembly unit name must be a non-empty string")
        return value

    @field_validator("definition_path")
    @classmethod
    def _check_definition_path(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            raise ValueError("definition_path must be omitted or non-blank")
        return value


class ProjectEdge(BaseModel):
    """Reference from one generated project to another."""

    model_config = ConfigDict(frozen=True)

    source: str
    target: str
    target_filename: str

    @property
    def kind(self) -> EdgeKind:
        return EdgeKind.PROJECT_REFERENCE


class ExternalEdge(BaseModel):
    """Reference to a prebuilt binary outside the generated solution.

    ``private`` maps to the ``Private`` (copy local) flag and is always
    False: the binary already lives on a path the IDE resolves itself.
    """

    model_config = ConfigDict(frozen=True)

    source: str
    name: str
    hint_path: str
    private: bool = False

    @property
    def kind(self) -> EdgeKind:
        return EdgeKind.EXTERNAL_REFERENCE


class ProjectNode(BaseModel):
    """A generated project, one per included assembly unit.

    ``root_folder`` is resolved once by the graph builder and never
    re-derived. The reference and exclusion lists are filled in by the
    resolver and the nesting calculator.
    """

    model_config = ConfigDict(validate_assignment=True)

    unit: AssemblyUnit
    root_folder: str = Field(default="", frozen=True)
    guid: str
    filename: str

    project_references: List[ProjectEdge] = Field(default_factory=list)
    external_references: List[ExternalEdge] = Field(default_factory=list)
    exclusions: List[str] = Field(default_factory=list)

    @property
    def name(self) -> str:
        return self.unit.name

    @field_validator("root_folder")
    @classmethod
    def _normalize_root(cls, value: str) -> str:
        return value.replace("\\", "/")
