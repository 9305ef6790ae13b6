"""Invocation of the external ``borg`` binary."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import os
import shutil
from typing import Optional

from borgrecent.core.errors import CommandError, ToolNotFound

BORG_BINARY_NAME = "borg"


def find_borg_binary(
    name: str = BORG_BINARY_NAME,
    *,
    explicit: Optional[str] = None,
    cwd: Optional[str] = None,
) -> str:
    """Locate the borg executable.

    Lookup order: ``explicit`` (when given), ``./<name>`` in the working
    directory, then ``$PATH``.
    """
    if explicit:
        if os.path.isfile(explicit) and os.access(explicit, os.X_OK):
            return os.path.abspath(explicit)
        raise ToolNotFound(explicit)

    local = os.path.join(cwd or os.getcwd(), name)
    if os.path.isfile(local) and os.access(local, os.X_OK):
        return local

    found = shutil.which(name)
    if found is None:
        raise ToolNotFound(name)
    return found


def archive_location(repository_path: str, archive_name: str) -> str:
    return f"{repository_path}::{archive_name}"


def first_line(data: bytes) -> str:
    text = data.decode(errors="replace")
    return text.split("\n", 1)[0].rstrip("\r")


class BorgRunner:
    """Runs ``borg list`` and hands back its complete standard output.

    The binary path is fixed at construction. Each call waits for the child
    to exit; there is no timeout.
    """

    def __init__(self, binary: str) -> None:
        self.binary = binary
        self._logger = logging.getLogger(__name__)

    async def list(self, location: str) -> bytes:
        """List a repository (``path``) or an archive (``path::name``).

        Raises CommandError with the first line of stderr on non-zero exit.
        Stderr is ignored when the exit status is zero.
        """
        self._logger.debug("borg_list_start | binary=%s location=%s", self.binary, location)
        try:
            proc = await asyncio.create_subprocess_exec(
                self.binary,
                "list",
                location,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            try:
                stdout_data, stderr_data = await proc.communicate()
            except asyncio.CancelledError:
                # borg holds the repository lock until it exits
                with contextlib.suppress(ProcessLookupError):
                    proc.kill()
                await proc.wait()
                raise
        except OSError as exc:
            self._logger.warning(
                "borg_exec_error | binary=%s location=%s error=%s",
                self.binary,
                location,
                exc,
            )
            raise CommandError(str(exc)) from exc

        if proc.returncode != 0:
            err = first_line(stderr_data or b"")
            self._logger.debug(
                "borg_list_failed | location=%s returncode=%s error=%s",
                location,
                proc.returncode,
                err,
            )
            raise CommandError(err)

        return stdout_data or b""
