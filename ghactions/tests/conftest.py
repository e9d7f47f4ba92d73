import logging

import pytest

from ghactions.config import get_settings


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point logging into tmp_path and pin the package name used for defaults."""
    monkeypatch.setenv("GHACTIONS_LOG_FILE", str(tmp_path / "logs" / "ghactions.log"))
    monkeypatch.setenv("GHACTIONS_PACKAGE_NAME", "hello-action")
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()
    for h in root.handlers[:]:
        if h not in saved_handlers:
            root.removeHandler(h)
            h.close()
    for h in saved_handlers:
        if h not in root.handlers:
            root.addHandler(h)
    root.setLevel(saved_level)
