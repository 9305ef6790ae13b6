"""Root conftest for tests directory."""

from __future__ import annotations

from pathlib import Path

import pytest

from borg_output import FakeRunner


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def borg_root(tmp_path: Path) -> Path:
    """Root directory with alpha, beta, notarepo and a plain file."""
    root = tmp_path / "borg"
    root.mkdir()
    for name in ("alpha", "beta", "notarepo"):
        (root / name).mkdir()
    (root / "README.txt").write_text("not a directory")
    return root
