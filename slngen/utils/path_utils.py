"""Path algebra used to reconcile assembly unit source folders.

All helpers operate on plain strings so that paths reported by the host
build system (which may mix ``/`` and ``\\`` separators) are compared
exactly as given, without touching the filesystem. Paths returned by these
helpers use forward slashes.
"""

import logging
import posixpath
import re
import sys
from typing import Iterable, Optional

logger = logging.getLogger("slngen.utils.path_utils")

# Windows and macOS default to case-insensitive filesystems.
PATH_CASE_INSENSITIVE: bool = sys.platform.startswith(("win", "darwin"))

_SEPARATORS = ("/", "\\")
_DRIVE_PATTERN = re.compile(r"^([A-Za-z]:)(/|$)")


def _fold(path: str) -> str:
    return path.casefold() if PATH_CASE_INSENSITIVE else path


def normalize_path(path: str) -> str:
    """Normalize separators to ``/`` and strip trailing separators.

    Filesystem roots (``/`` or ``C:/``) keep their trailing separator.

    Examples:
        >>> normalize_path("Assets\\\\Lib\\\\")
        'Assets/Lib'
        >>> normalize_path("/")
        '/'
    """
    if not path:
        return ""
    text = path.replace("\\", "/")
    stripped = text.rstrip("/")
    if not stripped:
        return "/"
    if stripped.endswith(":") and len(stripped) == 2:
        return stripped + "/"
    return stripped


def parent_folder(path: str) -> str:
    """Return everything before the last path separator.

    Returns an empty string when the path contains no separator.
    """
    index = max(path.rfind(sep) for sep in _SEPARATORS)
    return "" if index < 0 else path[:index]


def paths_equal(first: str, second: str) -> bool:
    """Compare two paths under the platform case policy."""
    return _fold(normalize_path(first)) == _fold(normalize_path(second))


def path_key(path: str) -> str:
    """Comparison key of a path under the platform case policy."""
    return _fold(normalize_path(path))


def is_nested(root_path: str, candidate_path: str) -> bool:
    """Check whether ``candidate_path`` is ``root_path`` or lies below it.

    Args:
        root_path: Folder that may contain the candidate.
        candidate_path: Folder or file to test.

    Returns:
        bool: True when the candidate equals the root or starts with the
        root immediately followed by a separator.
    """
    if not root_path or not candidate_path:
        return False

    root = _fold(normalize_path(root_path))
    candidate = _fold(normalize_path(candidate_path))

    if root.endswith("/"):
        return candidate.startswith(root)
    if len(candidate) == len(root):
        return candidate == root
    return (
        len(candidate) > len(root)
        and candidate[len(root)] == "/"
        and candidate.startswith(root)
    )


def infer_common_root(files: Iterable[str], source_root: str) -> Optional[str]:
    """Find the deepest folder containing every file, inside ``source_root``.

    The first file's parent folder is the initial candidate. For each
    following file, whichever of the candidate and the file's folder is
    longer is shortened to its parent until both agree or one runs out.
    The candidate must stay inside ``source_root`` after every file;
    otherwise there is no usable root and None is returned instead of a
    misleadingly shallow folder.

    Args:
        files: Source file paths in the order reported by the build system.
        source_root: Primary source tree the result must lie in.

    Returns:
        Optional[str]: Common root folder, or None when it cannot be inferred.

    Examples:
        >>> infer_common_root(["A/B/C/x.cs", "A/B/y.cs", "A/B/C/D/z.cs"], "A")
        'A/B'
    """
    root: Optional[str] = None

    for source_file in files:
        folder = parent_folder(normalize_path(source_file))
        if root is None:
            root = folder

        while root and folder and not paths_equal(root, folder):
            if len(root) > len(folder):
                root = parent_folder(root)
            else:
                folder = parent_folder(folder)

        if not paths_equal(root, folder):
            # Ran out of ancestors without meeting.
            root = ""

        if not is_nested(source_root, root):
            logger.debug(
                "Common root %r of %s is outside source root %s",
                root,
                source_file,
                source_root,
            )
            return None

    return root


def is_absolute(path: str) -> bool:
    """Return True for POSIX absolute paths and drive-qualified Windows paths."""
    text = path.replace("\\", "/")
    return text.startswith("/") or bool(_DRIVE_PATTERN.match(text))


def absolute_path(path: str, base: str) -> str:
    """Make ``path`` absolute against ``base`` and collapse ``.`` and ``..``.

    Symbolic links are not followed, so paths reported through a linked
    folder keep that folder's spelling.

    Examples:
        >>> absolute_path("Assets/Game/../Core/A.cs", "/proj")
        '/proj/Assets/Core/A.cs'
        >>> absolute_path("C:\\\\proj\\\\Assets", "/elsewhere")
        'C:/proj/Assets'
    """
    text = normalize_path(path)
    if not is_absolute(text):
        text = f"{normalize_path(base).rstrip('/')}/{text}" if text else normalize_path(base)
    return posixpath.normpath(text)


def _drive(path: str) -> str:
    match = _DRIVE_PATTERN.match(path)
    return match.group(1).upper() if match else ""


def relative_or_absolute(relative_to: str, path: str) -> str:
    """Express ``path`` relative to ``relative_to`` when both share a volume.

    Relative inputs, or absolute paths on different drives, are returned
    unchanged.

    Examples:
        >>> relative_or_absolute("/p/Assets/Lib", "/p/Library/Foo.dll")
        '../../Library/Foo.dll'
        >>> relative_or_absolute("C:/p/Assets", "D:/libs/Foo.dll")
        'D:/libs/Foo.dll'
    """
    if not relative_to or not is_absolute(relative_to) or not is_absolute(path):
        return path

    base = normalize_path(relative_to)
    target = normalize_path(path)
    if _drive(base) != _drive(target):
        return path

    return posixpath.relpath(target, base)
