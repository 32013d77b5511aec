"""Version identifiers for migrations.

Versions are decimal digit strings, usually 14-digit timestamps such as
``20240131120000``. They are compared by numeric magnitude (natural order)
and stored in normalized form, without leading zeros, so ``"007"``, ``"7"``
and ``"0000007"`` are the same version.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import PurePath

from .errors import MalformedVersionError

ZERO = "0"


def normalize(version: str | int) -> str:
    """Strip leading zeros, keeping at least one digit.

    Raises:
        MalformedVersionError: If the version is not made of decimal digits
    """
    text = str(version).strip()
    if not text or not (text.isascii() and text.isdigit()):
        raise MalformedVersionError(f"Invalid version: {version!r}")
    return text.lstrip("0") or ZERO


def parse(name: str) -> str:
    """Extract and normalize the version token of a migration identifier.

    The token is everything before the first underscore of the file name,
    e.g. ``20240131120000_add_users.py`` -> ``"20240131120000"``.

    Raises:
        MalformedVersionError: If the token is empty or not all digits
    """
    token = PurePath(name).name.split("_", 1)[0].split(".", 1)[0]
    if not token or not (token.isascii() and token.isdigit()):
        raise MalformedVersionError(
            f"Migration name could not be parsed: {name!r}"
        )
    return normalize(token)


def version_key(version: str | int) -> tuple[int, str]:
    """Sort key matching compare(): shorter normalized strings are smaller."""
    normalized = normalize(version)
    return (len(normalized), normalized)


def compare(a: str | int, b: str | int) -> int:
    """Natural-order comparison of two versions.

    Returns:
        -1, 0 or 1 as ``a`` is lower than, equal to or greater than ``b``
    """
    key_a = version_key(a)
    key_b = version_key(b)
    if key_a < key_b:
        return -1
    if key_a > key_b:
        return 1
    return 0


def sort_versions(versions: Iterable[str | int]) -> list[str]:
    """Normalize and sort versions ascending."""
    return sorted((normalize(v) for v in versions), key=version_key)
