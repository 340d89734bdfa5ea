from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """Prevent developer machine `~/.svcs/config.json` and SVCS_* from influencing tests."""

    monkeypatch.setenv("HOME", str(tmp_path))
    for var in ("SVCS_DIR", "SVCS_PROJECT_ROOT", "SVCS_DEBUG"):
        monkeypatch.delenv(var, raising=False)
