"""Schemas for the /recent endpoint."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from borgrecent.core.timestamps import format_rfc3339
from borgrecent.domain.models import RecentEntry


class RecentArchiveResponse(BaseModel):
    """Most recent archive of one repository."""

    repo: str = Field(..., description="Repository directory name under the root")
    date: str = Field(..., description="Archive timestamp (RFC3339)")
    mysql_date: Optional[str] = Field(
        None,
        description="Newest matching artifact timestamp (RFC3339), '' when none was found; "
        "omitted when artifact lookup is disabled",
    )


def to_response(entry: RecentEntry, *, artifact_lookup: bool) -> RecentArchiveResponse:
    mysql_date: Optional[str] = None
    if artifact_lookup:
        mysql_date = format_rfc3339(entry.artifact.modified_at) if entry.artifact else ""
    return RecentArchiveResponse(
        repo=entry.archive.repository_name,
        date=format_rfc3339(entry.archive.timestamp),
        mysql_date=mysql_date,
    )
