"""Stable project identifiers derived from assembly unit names.

IDEs cache per-project state keyed by the project GUID, so the GUID must
not change between regenerations. It is derived from the unit name alone.
"""

from __future__ import annotations

import hashlib

from slngen.errors import IdentityError

_DIGEST_SIZE = 16

# Byte ranges of the 8-4-4-4-12 groups.
_GROUPS = ((0, 4), (4, 6), (6, 8), (8, 10), (10, 16))


def project_guid(name: str) -> str:
    """Return the braced, uppercase GUID for an assembly unit name.

    Args:
        name: Assembly unit name.

    Returns:
        str: Identifier such as ``{0CC175B9-C0F1-B6A8-31C3-99E269772661}``.

    Raises:
        ValueError: If ``name`` is empty.
        IdentityError: If the digest does not have the expected size.
    """
    if not name:
        raise ValueError("Assembly unit name must be a non-empty string")

    digest = hashlib.md5(name.encode("utf-8"), usedforsecurity=False).digest()
    if len(digest) != _DIGEST_SIZE:
        raise IdentityError(
            f"Failed to compute project GUID for {name!r}: "
            f"expected {_DIGEST_SIZE} bytes, got {len(digest)}"
        )

    groups = [digest[start:end].hex().upper() for start, end in _GROUPS]
    return "{" + "-".join(groups) + "}"
