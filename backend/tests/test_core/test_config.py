"""Tests for settings resolution."""

import os
import stat
from pathlib import Path

import pytest

from borgrecent.core.config import (
    DEFAULT_ARTIFACT_GLOBS,
    DEFAULT_PORT,
    build_settings,
    expand_tilde,
    resolve_root,
)
from borgrecent.core.errors import ConfigError, RootNotADirectory, RootNotFound, ToolNotFound


@pytest.fixture
def borg_binary(tmp_path):
    path = tmp_path / "borg"
    path.write_text("#!/bin/sh\nexit 0\n")
    path.chmod(path.stat().st_mode | stat.S_IXUSR)
    return str(path)


def test_expand_tilde_current_user(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    assert expand_tilde("~/backups") == str(tmp_path) + "/backups"


def test_expand_tilde_leaves_other_paths():
    assert expand_tilde("~otheruser/backups") == "~otheruser/backups"
    assert expand_tilde("/srv/~/backups") == "/srv/~/backups"
    assert expand_tilde("~") == "~"


def test_resolve_root(tmp_path):
    assert resolve_root(str(tmp_path)) == str(tmp_path)

    with pytest.raises(RootNotFound, match="doesn't exist"):
        resolve_root(str(tmp_path / "missing"))

    plain = tmp_path / "file.txt"
    plain.write_text("x")
    with pytest.raises(RootNotADirectory, match="is not a directory"):
        resolve_root(str(plain))


def test_build_settings_defaults(tmp_path, borg_binary):
    settings = build_settings(str(tmp_path), borg_binary=borg_binary, environ={})
    assert settings.root == str(tmp_path)
    assert settings.borg_binary == os.path.abspath(borg_binary)
    assert settings.port == DEFAULT_PORT == 2674
    assert settings.host == "0.0.0.0"
    assert settings.artifact_globs == DEFAULT_ARTIFACT_GLOBS
    assert settings.artifact_lookup is True
    assert settings.concurrency == 1
    assert settings.log_level == "INFO"


def test_build_settings_from_environment(tmp_path, borg_binary):
    environ = {
        "BORG_RECENT_PORT": "8081",
        "BORG_RECENT_HOST": "127.0.0.1",
        "BORG_RECENT_GLOBS": "srv/dumps/*.sql, ,srv/dumps/*.tar",
        "BORG_RECENT_ARTIFACTS": "off",
        "BORG_RECENT_CONCURRENCY": "4",
        "BORG_BINARY": borg_binary,
        "LOG_LEVEL": "debug",
    }
    settings = build_settings(str(tmp_path), environ=environ)
    assert settings.port == 8081
    assert settings.host == "127.0.0.1"
    assert settings.artifact_globs == ("srv/dumps/*.sql", "srv/dumps/*.tar")
    assert settings.artifact_lookup is False
    assert settings.concurrency == 4
    assert settings.borg_binary == os.path.abspath(borg_binary)
    assert settings.log_level == "DEBUG"


def test_explicit_arguments_override_environment(tmp_path, borg_binary):
    environ = {"BORG_RECENT_PORT": "8081", "BORG_RECENT_ARTIFACTS": "0"}
    settings = build_settings(
        str(tmp_path),
        port=9000,
        artifact_lookup=True,
        globs=["a/*"],
        borg_binary=borg_binary,
        environ=environ,
    )
    assert settings.port == 9000
    assert settings.artifact_lookup is True
    assert settings.artifact_globs == ("a/*",)


@pytest.mark.parametrize(
    "environ",
    [
        {"BORG_RECENT_PORT": "http"},
        {"BORG_RECENT_CONCURRENCY": "0"},
        {"BORG_RECENT_ARTIFACTS": "maybe"},
        {"BORG_RECENT_GLOBS": "var/[oops"},
    ],
)
def test_build_settings_rejects_bad_values(tmp_path, borg_binary, environ):
    with pytest.raises(ConfigError):
        build_settings(str(tmp_path), borg_binary=borg_binary, environ=environ)


def test_build_settings_rejects_bad_arguments(tmp_path, borg_binary):
    with pytest.raises(ConfigError):
        build_settings(str(tmp_path), port=70000, borg_binary=borg_binary, environ={})
    with pytest.raises(ConfigError):
        build_settings(str(tmp_path), concurrency=0, borg_binary=borg_binary, environ={})


def test_build_settings_missing_root_or_tool(tmp_path, borg_binary):
    with pytest.raises(RootNotFound):
        build_settings(str(tmp_path / "missing"), borg_binary=borg_binary, environ={})
    with pytest.raises(ToolNotFound):
        build_settings(str(tmp_path), borg_binary=str(tmp_path / "nope"), environ={})


def test_build_settings_expands_tilde(tmp_path, borg_binary, monkeypatch):
    (tmp_path / "backups").mkdir()
    monkeypatch.setenv("HOME", str(tmp_path))
    settings = build_settings("~/backups", borg_binary=borg_binary, environ={})
    assert Path(settings.root) == tmp_path / "backups"
