from __future__ import annotations

from enum import Enum


class RepositoryProbe(str, Enum):
    REPOSITORY = "repository"
    NOT_REPOSITORY = "not_repository"
