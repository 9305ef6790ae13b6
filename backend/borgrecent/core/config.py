"""Runtime settings.

Values come from CLI flags, then environment variables, then defaults:

- ``BORG_RECENT_HOST`` / ``BORG_RECENT_PORT``: listen address (default 0.0.0.0:2674)
- ``BORG_RECENT_GLOBS``: comma-separated artifact patterns
- ``BORG_RECENT_ARTIFACTS``: enable artifact lookup (default on)
- ``BORG_RECENT_CONCURRENCY``: concurrent borg invocations per request (default 1)
- ``BORG_BINARY``: explicit path to borg, skipping the lookup
- ``LOG_LEVEL``: logging level (default INFO)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional, Sequence

from fastapi import Request

from borgrecent.core.borg import find_borg_binary
from borgrecent.core.errors import ConfigError, RootNotADirectory, RootNotFound
from borgrecent.core.globs import BadPattern, validate_globs

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 2674
DEFAULT_ARTIFACT_GLOBS: tuple[str, ...] = (
    # sql dumps
    "var/backups/mysql/daily/*.sql.gz",
    # binary backups
    "var/backups/mysql/daily/*/ibdata1",
)

_TRUTHY = ("1", "true", "yes", "on")
_FALSY = ("0", "false", "no", "off")


@dataclass(frozen=True)
class Settings:
    root: str
    borg_binary: str
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    artifact_globs: tuple[str, ...] = field(default=DEFAULT_ARTIFACT_GLOBS)
    artifact_lookup: bool = True
    concurrency: int = 1
    log_level: str = "INFO"


def expand_tilde(path: str) -> str:
    """Expand a leading ``~/`` to the current user's home directory.

    ``~otheruser/...`` is not supported and is returned as-is.
    """
    if path.startswith("~" + os.sep):
        return str(Path.home()) + path[1:]
    return path


def resolve_root(path: str) -> str:
    root = expand_tilde(path)
    if not os.path.exists(root):
        raise RootNotFound(root)
    if not os.path.isdir(root):
        raise RootNotADirectory(root)
    return root


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ConfigError(f"{name} must be a boolean, got {raw!r}")


def _parse_int(name: str, raw: str, *, minimum: int) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None
    if value < minimum:
        raise ConfigError(f"{name} must be >= {minimum}, got {value}")
    return value


def build_settings(
    root: str,
    *,
    host: Optional[str] = None,
    port: Optional[int] = None,
    globs: Optional[Sequence[str]] = None,
    artifact_lookup: Optional[bool] = None,
    concurrency: Optional[int] = None,
    borg_binary: Optional[str] = None,
    log_level: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """Resolve settings, letting explicit arguments override the environment.

    Raises a StartupError subclass when the root, the borg binary or any
    option is unusable.
    """
    env = os.environ if environ is None else environ

    resolved_root = resolve_root(root)

    if port is None:
        raw = env.get("BORG_RECENT_PORT")
        port = _parse_int("BORG_RECENT_PORT", raw, minimum=1) if raw else DEFAULT_PORT
    if not 0 < port < 65536:
        raise ConfigError(f"port must be between 1 and 65535, got {port}")

    if concurrency is None:
        raw = env.get("BORG_RECENT_CONCURRENCY")
        concurrency = _parse_int("BORG_RECENT_CONCURRENCY", raw, minimum=1) if raw else 1
    elif concurrency < 1:
        raise ConfigError(f"concurrency must be >= 1, got {concurrency}")

    if artifact_lookup is None:
        raw = env.get("BORG_RECENT_ARTIFACTS")
        artifact_lookup = _parse_bool("BORG_RECENT_ARTIFACTS", raw) if raw else True

    if not globs:
        raw = env.get("BORG_RECENT_GLOBS", "")
        globs = [g.strip() for g in raw.split(",") if g.strip()] or list(DEFAULT_ARTIFACT_GLOBS)
    try:
        validate_globs(globs)
    except BadPattern as exc:
        raise ConfigError(f"invalid artifact glob: {exc}") from exc

    binary = find_borg_binary(explicit=borg_binary or env.get("BORG_BINARY") or None)

    return Settings(
        root=resolved_root,
        borg_binary=binary,
        host=host or env.get("BORG_RECENT_HOST") or DEFAULT_HOST,
        port=port,
        artifact_globs=tuple(globs),
        artifact_lookup=artifact_lookup,
        concurrency=concurrency,
        log_level=(log_level or env.get("LOG_LEVEL") or "INFO").upper(),
    )


def get_settings(request: Request) -> Settings:
    """FastAPI dependency returning the settings installed at startup."""
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        raise RuntimeError("settings not configured; start the service through borgrecent.cli")
    return settings
