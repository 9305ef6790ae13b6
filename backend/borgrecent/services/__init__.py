"""Service layer for the discovery pipeline.

Exposes:
- RepositoryScanner
- ArchiveLister
- ArtifactLocator
- RecentArchivesService
"""

from .repositories import RepositoryScanner
from .archives import ArchiveLister
from .artifacts import ArtifactLocator
from .recent import RecentArchivesService

__all__ = [
    "RepositoryScanner",
    "ArchiveLister",
    "ArtifactLocator",
    "RecentArchivesService",
]
