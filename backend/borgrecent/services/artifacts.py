"""Locating backup artifacts inside an archive's file listing.

``borg list <repo>::<archive>`` prints one line per file::

    -rw-r--r-- root root 52710 Wed, 2016-01-27 03:01:19 var/backups/mysql/daily/db.sql.gz

Only non-empty files whose path matches one of the configured globs are kept.
"""

from __future__ import annotations

import os
from typing import List, Sequence

from borgrecent.core.borg import BorgRunner, archive_location
from borgrecent.core.errors import ArtifactParseError
from borgrecent.core.globs import first_match
from borgrecent.core.timestamps import parse_borg_timestamp
from borgrecent.domain.models import Archive, ArchivedFile

MIN_FILE_FIELDS = 8
SIZE_FIELD = 3
TIMESTAMP_FIELDS = slice(4, 7)
PATH_FIELD = 7


def parse_file_listing(output: bytes, globs: Sequence[str]) -> List[ArchivedFile]:
    """Return the matching, non-empty files in listing order.

    Raises ArtifactParseError for a matching line whose timestamp or size
    can't be read.
    """
    files: List[ArchivedFile] = []
    for line in output.decode(errors="replace").splitlines():
        fields = line.split()
        if len(fields) < MIN_FILE_FIELDS:
            continue

        size = fields[SIZE_FIELD]
        if size == "0":
            continue

        path = fields[PATH_FIELD]
        if first_match(globs, path) is None:
            continue

        text = " ".join(fields[TIMESTAMP_FIELDS])
        modified_at = parse_borg_timestamp(text)
        if modified_at is None:
            raise ArtifactParseError(text)
        try:
            size_bytes = int(size)
        except ValueError:
            raise ArtifactParseError(size) from None

        files.append(ArchivedFile(path=path, modified_at=modified_at, size_bytes=size_bytes))
    return files


class ArtifactLocator:
    def __init__(self, root: str, runner: BorgRunner) -> None:
        self.root = root
        self.runner = runner

    def location(self, archive: Archive) -> str:
        repository_path = os.path.join(self.root, archive.repository_name)
        return archive_location(repository_path, archive.name)

    async def list_artifacts(self, archive: Archive, globs: Sequence[str]) -> List[ArchivedFile]:
        output = await self.runner.list(self.location(archive))
        return parse_file_listing(output, globs)
