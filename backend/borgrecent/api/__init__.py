"""API routers package."""

from . import health, recent  # noqa: F401
