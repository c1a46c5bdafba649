"""List supported editor installations found on this machine."""

import logging
from concurrent.futures import TimeoutError as FutureTimeoutError

from rich.console import Console
from rich.table import Table

from slngen.editors.locator import InstallationLocator

logger = logging.getLogger("slngen.cli.editors")


def editors_command(args) -> int:
    """Execute editors command.

    Args:
        args: Parsed command-line arguments containing ``timeout``.

    Returns:
        int: Exit code (0 for success, non-zero for failure).
    """
    timeout = getattr(args, "timeout", 5.0)

    with InstallationLocator() as locator:
        try:
            installations = locator.installations(timeout=timeout)
        except FutureTimeoutError:
            logger.error("Timed out searching for editors (%.1fs)", timeout)
            return 1

    if not installations:
        logger.warning("No supported editor installations found")
        return 0

    table = Table(title="Editor installations")
    table.add_column("Name")
    table.add_column("Path")
    for installation in installations:
        table.add_row(installation.name, installation.path)
    Console().print(table)
    return 0
