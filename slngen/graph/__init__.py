"""Project graph construction and annotation."""

from .builder import ProjectGraphBuilder, project_filename
from .identifiers import project_guid
from .manager import ProjectGraph
from .nesting import apply_nesting_exclusions, nesting_exclusions
from .references import ReferenceResolver, reference_name

__all__ = [
    "ProjectGraph",
    "ProjectGraphBuilder",
    "ReferenceResolver",
    "apply_nesting_exclusions",
    "nesting_exclusions",
    "project_filename",
    "project_guid",
    "reference_name",
]
