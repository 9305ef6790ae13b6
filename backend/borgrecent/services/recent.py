"""Most recent archive per repository, optionally with its newest artifact."""

from __future__ import annotations

import logging
from functools import partial
from typing import List, Optional, Sequence

from borgrecent.core.borg import BorgRunner
from borgrecent.core.config import DEFAULT_ARTIFACT_GLOBS
from borgrecent.core.errors import ArtifactParseError, CommandError
from borgrecent.core.tasks import run_bounded
from borgrecent.domain.models import Archive, ArchivedFile, RecentEntry
from borgrecent.services.archives import ArchiveLister
from borgrecent.services.artifacts import ArtifactLocator
from borgrecent.services.repositories import RepositoryScanner


class RecentArchivesService:
    """Combines scanning, archive listing and artifact lookup for one request.

    Any CommandError or parse error from listing a repository aborts the whole
    aggregation. Artifact lookup failures only drop that entry's artifact.
    ``concurrency`` bounds how many borg processes run at once; 1 keeps
    everything sequential.
    """

    def __init__(
        self,
        root: str,
        runner: BorgRunner,
        *,
        artifact_globs: Sequence[str] = DEFAULT_ARTIFACT_GLOBS,
        concurrency: int = 1,
    ) -> None:
        self.scanner = RepositoryScanner(root, runner)
        self.lister = ArchiveLister(root, runner)
        self.locator = ArtifactLocator(root, runner)
        self.artifact_globs = tuple(artifact_globs)
        self.concurrency = concurrency
        self._logger = logging.getLogger(__name__)

    async def most_recent_per_repository(self) -> List[Archive]:
        """Last archive of every repository that has at least one.

        borg lists oldest first, so the last line wins even if its timestamp
        is older than an earlier one.
        """
        names = await self.scanner.scan(self.concurrency)
        listings = await run_bounded(
            [partial(self.lister.list_archives, name) for name in names],
            self.concurrency,
        )
        return [archives[-1] for archives in listings if archives]

    async def most_recent_artifact(self, archive: Archive) -> Optional[ArchivedFile]:
        """Newest matching artifact in ``archive``, or None.

        A failure to list the archive, or a listing that can't be parsed,
        counts as "no artifact".
        """
        try:
            files = await self.locator.list_artifacts(archive, self.artifact_globs)
        except (CommandError, ArtifactParseError) as exc:
            self._logger.warning(
                "artifact_listing_failed | repo=%s archive=%s error=%s",
                archive.repository_name,
                archive.name,
                exc,
            )
            return None

        if not files:
            return None
        return max(files, key=lambda f: f.modified_at)

    async def recent_entries(self, artifact_lookup: bool = True) -> List[RecentEntry]:
        """Most recent archives sorted oldest first, each paired with its artifact."""
        archives = sorted(await self.most_recent_per_repository(), key=lambda a: a.timestamp)
        if not artifact_lookup:
            return [RecentEntry(archive=archive) for archive in archives]

        artifacts = await run_bounded(
            [partial(self.most_recent_artifact, archive) for archive in archives],
            self.concurrency,
        )
        return [
            RecentEntry(archive=archive, artifact=artifact)
            for archive, artifact in zip(archives, artifacts)
        ]
