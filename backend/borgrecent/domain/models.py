"""Records parsed from `borg list` output.

All of them are immutable and live only for the duration of one request.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Archive:
    """One snapshot inside a repository."""

    name: str
    repository_name: str
    timestamp: datetime


@dataclass(frozen=True)
class ArchivedFile:
    """One file entry from an archive's manifest."""

    path: str
    modified_at: datetime
    size_bytes: int


@dataclass(frozen=True)
class RecentEntry:
    """A repository's most recent archive plus its newest matching artifact."""

    archive: Archive
    artifact: Optional[ArchivedFile] = None
