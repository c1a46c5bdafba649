"""Generate command implementation."""

import logging

from rich.console import Console
from rich.table import Table

from slngen.cli.common import RECOVERABLE_CLI_ERRORS, load_inputs
from slngen.runtime.generation import GenerationResult, ProjectGenerator

logger = logging.getLogger("slngen.cli.generate")


def _print_summary(result: GenerationResult, console: Console) -> None:
    table = Table(title="Generated descriptors", show_lines=False)
    table.add_column("File")
    table.add_column("Status")

    for path in result.written:
        table.add_row(path.name, "[green]written[/green]")
    for path in result.unchanged:
        table.add_row(path.name, "[dim]unchanged[/dim]")
    for path in result.deleted:
        table.add_row(path.name, "[yellow]deleted[/yellow]")
    for path, error in result.failed_deletions:
        table.add_row(path.name, f"[red]delete failed: {error}[/red]")

    console.print(table)
    if result.excluded:
        console.print(f"Excluded units: {', '.join(result.excluded)}")


def generate_command(args) -> int:
    """Execute generate command.

    Args:
        args: Parsed command-line arguments containing:
            - units: Unit manifest path
            - project_root / source_root / solution_name: Output layout
            - config: Optional TOML/JSON configuration
            - include_external, analyzer: Option overrides
            - no_clean: Skip stale file deletion

    Returns:
        int: Exit code (0 for success, non-zero for failure).
    """
    try:
        units, options = load_inputs(args)
        logger.debug("Output directory: %s", options.output_dir)
        logger.debug("Primary source tree: %s", options.primary_source_tree)

        with ProjectGenerator(options) as generator:
            result = generator.generate_project_files(
                units, clean=not getattr(args, "no_clean", False)
            )
    except RECOVERABLE_CLI_ERRORS as e:
        logger.error("Project generation failed: %s", e)
        return 1

    _print_summary(result, Console())
    if result.failed_deletions:
        logger.warning(
            "%d stale file(s) could not be deleted", len(result.failed_deletions)
        )
    return 0
