"""Ownership policy for alias records.

Only the user who created a binding may remove it. There is no
administrator or server override.
"""

from __future__ import annotations

from roomdir.domain.records import AliasRecord


def can_delete(record: AliasRecord, requester: str) -> bool:
    """Return True if *requester* may unbind *record*."""
    return record.owner == requester
