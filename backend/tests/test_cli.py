"""Tests for the command line entry point."""

import stat

import pytest

from borgrecent import cli
from borgrecent.main import app


@pytest.fixture
def borg_binary(tmp_path):
    path = tmp_path / "borg"
    path.write_text("#!/bin/sh\nexit 0\n")
    path.chmod(path.stat().st_mode | stat.S_IXUSR)
    return str(path)


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "BORG_RECENT_PORT",
        "BORG_RECENT_HOST",
        "BORG_RECENT_GLOBS",
        "BORG_RECENT_ARTIFACTS",
        "BORG_RECENT_CONCURRENCY",
        "BORG_BINARY",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


def test_parser_defaults():
    args = cli.build_parser().parse_args(["/srv/borg"])
    assert args.root == "/srv/borg"
    assert args.port is None
    assert args.globs is None
    assert args.artifact_lookup is None


def test_load_settings(tmp_path, borg_binary, clean_env):
    settings = cli.load_settings(
        [
            str(tmp_path),
            "--port", "8000",
            "--glob", "srv/*.sql",
            "--glob", "srv/*/ibdata1",
            "--no-artifacts",
            "--concurrency", "2",
            "--borg", borg_binary,
        ]
    )
    assert settings.port == 8000
    assert settings.artifact_globs == ("srv/*.sql", "srv/*/ibdata1")
    assert settings.artifact_lookup is False
    assert settings.concurrency == 2


def test_main_runs_server(tmp_path, borg_binary, clean_env, monkeypatch):
    seen = {}

    def fake_run(application, host, port, **kwargs):
        seen.update(application=application, host=host, port=port)

    monkeypatch.setattr(cli.uvicorn, "run", fake_run)
    try:
        cli.main([str(tmp_path), "--borg", borg_binary])
        assert seen["application"] is app
        assert seen["port"] == 2674
        assert seen["host"] == "0.0.0.0"
        assert app.state.settings.root == str(tmp_path)
    finally:
        del app.state.settings


def test_main_exits_on_missing_root(tmp_path, borg_binary, clean_env, monkeypatch):
    monkeypatch.setattr(cli.uvicorn, "run", lambda *a, **kw: pytest.fail("server must not start"))
    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(tmp_path / "missing"), "--borg", borg_binary])
    assert excinfo.value.code == 1


def test_main_exits_when_borg_missing(tmp_path, clean_env, monkeypatch):
    monkeypatch.setattr(cli.uvicorn, "run", lambda *a, **kw: pytest.fail("server must not start"))
    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(tmp_path), "--borg", str(tmp_path / "no-borg")])
    assert excinfo.value.code == 1
