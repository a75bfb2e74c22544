"""Shared pytest fixtures."""

import tempfile
from pathlib import Path

import pytest

from choosy.utils.debug import reload_config


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test data."""
    with tempfile.TemporaryDirectory() as d:
        yield Path(d)


@pytest.fixture(autouse=True)
def mock_choosy_dir(temp_dir, monkeypatch):
    """Point CHOOSY_DIR at a temporary directory and clear CHOOSY_* vars."""
    import os

    for key in list(os.environ):
        if key.startswith("CHOOSY_"):
            monkeypatch.delenv(key)
    choosy_dir = temp_dir / ".choosy"
    choosy_dir.mkdir()
    monkeypatch.setenv("CHOOSY_DIR", str(choosy_dir))
    reload_config()
    yield choosy_dir
    reload_config()
