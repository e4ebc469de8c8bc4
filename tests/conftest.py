"""
Pytest configuration and shared fixtures.

Headless Qt on Linux: set QT_QPA_PLATFORM=offscreen so widgets can be created in CI
without a display. Where offscreen is not available, run under Xvfb:

  xvfb-run -a pytest tests/test_recent_files_menu.py tests/test_main_window.py -v
"""
import os
import sys

# Must set before any PySide6/Qt import
if sys.platform.startswith("linux"):
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from drawctl.core.config import ENV_CONFIG, reset_config
from drawctl.core.preferences import MemoryStore, QSettingsStore


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch):
    """No user config leaks into tests; config cache is dropped around each test."""
    monkeypatch.delenv(ENV_CONFIG, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def ini_path(tmp_path):
    return tmp_path / "prefs" / "drawctl.ini"


@pytest.fixture
def ini_store(ini_path):
    """QSettingsStore on a throwaway INI file."""
    return QSettingsStore.from_file(ini_path)


@pytest.fixture(scope="module")
def qapp():
    """Single QApplication for the module."""
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app
