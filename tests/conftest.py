# tests/conftest.py
from __future__ import annotations

import pytest

from numkit import runtime


@pytest.fixture(autouse=True)
def fresh_runtime(monkeypatch):
    """Every test starts from the packaged defaults, whatever the environment says."""
    monkeypatch.delenv("NUMKIT_CONFIG", raising=False)
    token = runtime._current_runtime.set(None)
    yield
    runtime._current_runtime.reset(token)
