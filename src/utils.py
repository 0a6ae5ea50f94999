"""Shared utilities for depflat-core."""

from __future__ import annotations

KEY_SEPARATOR = ":"


def artifact_key(group_id: str, artifact_id: str) -> str:
    """Build the version-independent key used for rule matching.

    Examples:
        >>> artifact_key("com.acme", "core")
        'com.acme:core'
    """
    return f"{group_id}{KEY_SEPARATOR}{artifact_id}"


def is_artifact_key(token: str) -> bool:
    """Return True if ``token`` has the ``groupId:artifactId`` shape.

    Examples:
        >>> is_artifact_key("com.acme:core")
        True
        >>> is_artifact_key("com.acme")
        False
        >>> is_artifact_key("com.acme:core:1.0")
        False
    """
    parts = token.split(KEY_SEPARATOR)
    return len(parts) == 2 and all(parts)
