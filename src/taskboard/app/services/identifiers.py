"""Helpers for opaque resource identifiers taken from request paths."""

from __future__ import annotations

import uuid


def parse_identifier(value: uuid.UUID | str) -> uuid.UUID | None:
    """Return ``value`` as a UUID, or ``None`` when it is not one."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None
