"""Removal of descriptor files left over from earlier passes."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Collection, Iterable, List, Tuple

from slngen.utils.path_utils import path_key

logger = logging.getLogger("slngen.runtime.collector")

DESCRIPTOR_EXTENSIONS = (".csproj", ".sln")


@dataclass
class CollectionResult:
    """Files deleted by a collection run and files that could not be deleted."""

    deleted: List[Path] = field(default_factory=list)
    failed: List[Tuple[Path, str]] = field(default_factory=list)


class StaleFileCollector:
    """Delete descriptor files that the current pass did not produce.

    Must only run after a complete, successful pass; otherwise files of
    units that were not processed yet would be deleted.
    """

    def __init__(self, extensions: Iterable[str] = DESCRIPTOR_EXTENSIONS) -> None:
        self.extensions = tuple(ext.lower() for ext in extensions)

    def find_stale(self, directories: Iterable[Path], keep: Collection[Path]) -> List[Path]:
        """List descriptor files in ``directories`` that are not in ``keep``.

        Args:
            directories: Folders to scan (non-recursive).
            keep: Resolved paths written or verified in this pass. Paths are
                compared under the platform case policy.

        Returns:
            List[Path]: Stale files, sorted for stable reporting.
        """
        kept = {path_key(str(path)) for path in keep}
        stale: List[Path] = []
        for directory in directories:
            if not directory.is_dir():
                continue
            for candidate in directory.iterdir():
                if candidate.suffix.lower() not in self.extensions:
                    continue
                if not candidate.is_file():
                    continue
                if path_key(str(candidate.resolve())) in kept:
                    continue
                stale.append(candidate)
        return sorted(stale)

    def collect(self, directories: Iterable[Path], keep: Collection[Path]) -> CollectionResult:
        """Delete stale descriptor files.

        A file that cannot be deleted (e.g. locked by another process) is
        reported and skipped; the remaining files are still collected.
        """
        result = CollectionResult()
        for path in self.find_stale(directories, keep):
            try:
                path.unlink()
            except FileNotFoundError:
                continue
            except OSError as e:
                logger.warning("Failed to delete stale file %s: %s", path, e)
                result.failed.append((path, str(e)))
                continue
            logger.warning("Deleted stale file: %s", path)
            result.deleted.append(path)
        return result
