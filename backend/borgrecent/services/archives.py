"""Parsing of ``borg list <repository>`` output into Archive records."""

from __future__ import annotations

import os
from typing import List

from borgrecent.core.borg import BorgRunner
from borgrecent.core.errors import ArchiveParseError
from borgrecent.core.timestamps import parse_borg_timestamp
from borgrecent.domain.models import Archive

# borg 1.x: "<name>  Wed, 2016-01-27 03:01:19 [<id>]"
MIN_ARCHIVE_FIELDS = 4
TIMESTAMP_FIELDS = slice(1, 4)


def parse_archive_listing(output: bytes, repository_name: str) -> List[Archive]:
    """Turn listing output into archives, keeping borg's oldest-first order.

    Lines with too few fields are skipped. A line of the right shape whose
    timestamp doesn't parse fails the whole listing.
    """
    archives: List[Archive] = []
    for line in output.decode(errors="replace").splitlines():
        fields = line.split()
        if len(fields) < MIN_ARCHIVE_FIELDS:
            continue

        text = " ".join(fields[TIMESTAMP_FIELDS])
        timestamp = parse_borg_timestamp(text)
        if timestamp is None:
            raise ArchiveParseError(text)

        archives.append(
            Archive(name=fields[0], repository_name=repository_name, timestamp=timestamp)
        )
    return archives


class ArchiveLister:
    def __init__(self, root: str, runner: BorgRunner) -> None:
        self.root = root
        self.runner = runner

    def repository_path(self, repository_name: str) -> str:
        return os.path.join(self.root, repository_name)

    async def list_archives(self, repository_name: str) -> List[Archive]:
        """List every archive in a repository.

        CommandError propagates when borg fails; an empty listing is not an error.
        """
        output = await self.runner.list(self.repository_path(repository_name))
        return parse_archive_listing(output, repository_name)
