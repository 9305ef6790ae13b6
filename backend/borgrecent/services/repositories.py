"""Discovery of borg repositories directly under the root directory."""

from __future__ import annotations

import logging
import os
from functools import partial
from pathlib import Path
from typing import List

from borgrecent.core.borg import BorgRunner
from borgrecent.core.errors import CommandError, ScanError
from borgrecent.core.tasks import run_bounded
from borgrecent.domain.enums import RepositoryProbe


class RepositoryScanner:
    """Classifies the immediate subdirectories of ``root``.

    A directory counts as a repository when ``borg list <dir>`` exits 0.
    """

    def __init__(self, root: str, runner: BorgRunner) -> None:
        self.root = root
        self.runner = runner
        self._logger = logging.getLogger(__name__)

    async def probe(self, path: str) -> RepositoryProbe:
        """Never raises for a failed probe; the diagnostic is logged instead."""
        try:
            await self.runner.list(path)
        except CommandError as exc:
            self._logger.info("repository_probe_rejected | path=%s error=%s", path, exc.message)
            return RepositoryProbe.NOT_REPOSITORY
        return RepositoryProbe.REPOSITORY

    def candidates(self) -> List[str]:
        """Names of the subdirectories of root, sorted.

        Raises ScanError when root itself can't be read.
        """
        try:
            entries = list(Path(self.root).iterdir())
        except OSError as exc:
            raise ScanError(self.root, exc.strerror or str(exc)) from exc

        # symlinks count as non-directory entries, even when they point at one
        names = [entry.name for entry in entries if entry.is_dir() and not entry.is_symlink()]
        return sorted(names)

    async def scan(self, concurrency: int = 1) -> List[str]:
        names = self.candidates()
        probes = await run_bounded(
            [partial(self.probe, os.path.join(self.root, name)) for name in names],
            concurrency,
        )
        repositories = [
            name for name, probe in zip(names, probes) if probe is RepositoryProbe.REPOSITORY
        ]
        self._logger.debug("repository_scan_done | root=%s found=%d", self.root, len(repositories))
        return repositories
