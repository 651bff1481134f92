# tests/conftest.py
from __future__ import annotations

import pytest

from tableprops.settings import ENV_DEFAULT_COMPRESSOR, configure


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch):
    """
    Keep the process-wide settings deterministic: no env override leaks in from
    the caller's shell, and whatever a test installs is dropped afterwards.
    """
    monkeypatch.delenv(ENV_DEFAULT_COMPRESSOR, raising=False)
    previous = configure(None)
    yield
    configure(previous)
