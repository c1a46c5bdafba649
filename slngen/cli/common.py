"""Shared helpers for CLI commands."""

import json
import logging
from typing import List, Tuple

from slngen.config.schema import DEFAULT_CAPABILITIES_TO_REMOVE, GenerationOptions
from slngen.errors import SlngenError
from slngen.graph.models.schema import AssemblyUnit
from slngen.runtime.config_loader import load_generation_options
from slngen.runtime.manifest import load_units

logger = logging.getLogger("slngen.cli.common")

RECOVERABLE_CLI_ERRORS = (
    SlngenError,
    OSError,
    TypeError,
    ValueError,
    json.JSONDecodeError,
)


def load_inputs(args) -> Tuple[List[AssemblyUnit], GenerationOptions]:
    """Load units and options from parsed arguments.

    CLI flags take precedence over the configuration file. When neither
    specifies capabilities to remove, the default list is used.
    """
    overrides = {
        "project_root": getattr(args, "project_root", None),
        "source_root": getattr(args, "source_root", None),
        "solution_name": getattr(args, "solution_name", None),
    }
    if getattr(args, "include_external", False):
        overrides["include_external_units"] = True
    analyzers = getattr(args, "analyzer", None)
    if analyzers:
        overrides["analyzers"] = list(analyzers)

    options = load_generation_options(getattr(args, "config", None), **overrides)
    if "capabilities_to_remove" not in options.model_fields_set:
        options = options.model_copy(
            update={"capabilities_to_remove": list(DEFAULT_CAPABILITIES_TO_REMOVE)}
        )

    units = load_units(args.units)
    return units, options
