"""Pydantic response schemas."""

from .recent import RecentArchiveResponse, to_response  # noqa: F401
