"""Shared test setup."""

import os

import pytest

from printnode_cli import config


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep the developer's env vars, .env and config file out of the tests."""
    for key in list(os.environ):
        if key.startswith("PRINTNODE_"):
            monkeypatch.delenv(key)
    monkeypatch.setattr(config, "CONFIG_PATH", tmp_path / "config.yaml")
    monkeypatch.chdir(tmp_path)
    config.reset_settings()
    yield
    config.reset_settings()
