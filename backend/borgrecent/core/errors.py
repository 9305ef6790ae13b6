"""Error types raised by the discovery pipeline and at startup."""

from __future__ import annotations


class BorgRecentError(Exception):
    """Base class for all errors raised by this package."""


class StartupError(BorgRecentError):
    """Invalid configuration detected before the HTTP server starts."""


class RootNotFound(StartupError):
    def __init__(self, root: str) -> None:
        super().__init__(f"{root} doesn't exist")
        self.root = root


class RootNotADirectory(StartupError):
    def __init__(self, root: str) -> None:
        super().__init__(f"{root} is not a directory")
        self.root = root


class ToolNotFound(StartupError):
    def __init__(self, name: str) -> None:
        super().__init__(f"{name}: executable file not found in current directory or $PATH")
        self.name = name


class ConfigError(StartupError):
    pass


class PipelineError(BorgRecentError):
    """Failure while serving a request; surfaced as HTTP 500."""


class CommandError(PipelineError):
    """The external tool exited non-zero.

    ``message`` holds the first line of its standard error only.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ScanError(PipelineError):
    def __init__(self, root: str, reason: str) -> None:
        super().__init__(f"can't read {root}: {reason}")
        self.root = root
        self.reason = reason


class ParseError(PipelineError):
    def __init__(self, text: str) -> None:
        super().__init__(f"Can't parse {text}")
        self.text = text


class ArchiveParseError(ParseError):
    pass


class ArtifactParseError(ParseError):
    pass
