"""Most-recent borg archive reporter."""

__version__ = "0.1.0"
