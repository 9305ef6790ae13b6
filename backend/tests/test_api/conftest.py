from __future__ import annotations

from typing import Generator

import pytest
from fastapi.testclient import TestClient

from borg_output import FakeRunner
from borgrecent.api.recent import get_runner
from borgrecent.core.config import Settings
from borgrecent.main import app


@pytest.fixture
def settings(borg_root) -> Settings:
    return Settings(root=str(borg_root), borg_binary="/usr/local/bin/borg")


@pytest.fixture
def client(settings: Settings, fake_runner: FakeRunner) -> Generator[TestClient, None, None]:
    """FastAPI TestClient with settings installed and borg replaced by a fake."""
    app.state.settings = settings
    app.dependency_overrides[get_runner] = lambda: fake_runner

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    del app.state.settings
