"""
GitHub Enterprise Server version helpers.

Checks use these to skip APIs that a given GHES release does not expose.
A server version of ``None`` means github.com, where every API exists.
"""

from __future__ import annotations

import re

from repo_audit.exceptions import ValidationError

_VERSION_RE = re.compile(r"^\s*v?(\d+)(?:\.(\d+))?(?:\.(\d+))?")


def parse_version(version: str) -> tuple[int, int, int]:
    """
    Parse a GHES version such as ``3.11.2`` or ``3.9`` into a tuple.

    Pre-release and build suffixes (``3.12.0-rc1``) are ignored.

    Raises:
        ValidationError: If the string does not start with a version number
    """
    match = _VERSION_RE.match(version or "")
    if not match:
        raise ValidationError(
            f"Invalid GitHub Enterprise Server version: {version!r}",
            field="server_version",
        )
    major, minor, patch = (int(part) if part else 0 for part in match.groups())
    return major, minor, patch


def supports_feature(server_version: str | None, minimum: str | None) -> bool:
    """
    Return whether an API is available on the audited server.

    Args:
        server_version: GHES version, or None for github.com
        minimum: First GHES version exposing the API, or None if the API
            only exists on github.com
    """
    if server_version is None:
        return True
    if minimum is None:
        return False
    return parse_version(server_version) >= parse_version(minimum)
