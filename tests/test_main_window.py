"""
MainWindow tests: Reopen wiring, geometry restore/save. Headless Qt via conftest.
"""
import pytest

from drawctl.application.window_geometry import WindowGeometry, load_geometry, save_geometry
from drawctl.core.config import load_config
from drawctl.core.preferences import MemoryStore
from drawctl.gui.main_window import MainWindow

SCREEN = (0, 0, 1920, 1080)


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def window(qapp, memory_store, config):
    w = MainWindow(memory_store, config, screen=SCREEN)
    yield w
    w.deleteLater()


def test_reopen_menu_uses_configured_label(window):
    assert window.reopen_menu.title() == "Reopen"
    assert window.recent_files.max_files() == 10


def test_open_file_records_recent_and_rebuilds_menu(window):
    window.open_file("/plots/cat.svg")
    window.open_file("/plots/dog.svg")
    assert window.current_path == "/plots/dog.svg"
    assert window.recent_files.files() == ["/plots/dog.svg", "/plots/cat.svg"]
    assert [a.text() for a in window.reopen_menu.entry_actions()] == ["/plots/dog.svg", "/plots/cat.svg"]


def test_open_file_ignores_blank(window):
    window.open_file("   ")
    assert window.current_path is None
    assert window.recent_files.count() == 0


def test_reopen_selection_opens_file_and_promotes(window):
    window.open_file("/plots/cat.svg")
    window.open_file("/plots/dog.svg")
    window.reopen_menu.entry_actions()[1].trigger()
    assert window.current_path == "/plots/cat.svg"
    assert window.recent_files.files() == ["/plots/cat.svg", "/plots/dog.svg"]


def test_recent_list_survives_new_window(qapp, memory_store, config):
    first = MainWindow(memory_store, config, screen=SCREEN)
    first.open_file("/plots/a.svg")
    first.deleteLater()
    second = MainWindow(memory_store, config, screen=SCREEN)
    assert second.recent_files.files() == ["/plots/a.svg"]
    second.deleteLater()


def test_storage_failure_keeps_window_usable(qapp, config):
    store = MemoryStore()
    w = MainWindow(store, config, screen=SCREEN)
    store.fail_writes = True
    w.open_file("/plots/a.svg")
    assert w.current_path == "/plots/a.svg"
    assert w.recent_files.files() == ["/plots/a.svg"]
    w.deleteLater()


def test_restores_saved_geometry(qapp, memory_store, config):
    save_geometry(memory_store, WindowGeometry(width=800, height=600, x=20, y=30))
    w = MainWindow(memory_store, config, screen=SCREEN)
    assert (w.width(), w.height()) == (800, 600)
    assert (w.pos().x(), w.pos().y()) == (20, 30)
    w.deleteLater()


def test_oversized_geometry_is_clamped(qapp, memory_store, config):
    save_geometry(memory_store, WindowGeometry(width=5000, height=4000, x=0, y=0))
    w = MainWindow(memory_store, config, screen=SCREEN)
    assert (w.width(), w.height()) == (1920, 1080)
    w.deleteLater()


def test_close_saves_geometry(qapp, memory_store, config):
    save_geometry(memory_store, WindowGeometry(width=900, height=700, x=10, y=10))
    w = MainWindow(memory_store, config, screen=SCREEN)
    w.show()
    qapp.processEvents()
    w.resize(1000, 750)
    qapp.processEvents()
    w.close()
    saved = load_geometry(memory_store, WindowGeometry(width=1, height=1))
    assert (saved.width, saved.height) == (1000, 750)
    assert saved.fullscreen is False


def test_geometry_round_trip_is_stable(qapp, memory_store, config):
    saved = WindowGeometry(width=800, height=600, x=20, y=50)
    save_geometry(memory_store, saved)
    w = MainWindow(memory_store, config, screen=SCREEN)
    assert w.current_geometry() == saved
    w.show()
    qapp.processEvents()
    w.close()
    assert load_geometry(memory_store, WindowGeometry(width=1, height=1)) == saved
    second = MainWindow(memory_store, config, screen=SCREEN)
    assert second.current_geometry() == saved
    second.deleteLater()


def test_label_argument_overrides_config(qapp, memory_store, config):
    memory_store.put_ordered_strings("recent_files/recent_plots", ["/plots/x.svg"])
    w = MainWindow(memory_store, config, screen=SCREEN, label="Recent Plots")
    assert w.reopen_menu.title() == "Recent Plots"
    assert w.recent_files.files() == ["/plots/x.svg"]
    w.deleteLater()


def test_clear_recent(window):
    window.open_file("/plots/a.svg")
    window._on_clear_recent()
    assert window.recent_files.count() == 0
    assert window.reopen_menu.entry_actions() == []
    assert window.statusBar().currentMessage() == "Recent files cleared."


def test_clear_recent_storage_failure_warns(qapp, config, monkeypatch):
    from PySide6.QtWidgets import QMessageBox

    warnings = []
    monkeypatch.setattr(QMessageBox, "warning", lambda *args, **kwargs: warnings.append(args))
    store = MemoryStore()
    w = MainWindow(store, config, screen=SCREEN)
    w.open_file("/plots/a.svg")
    store.fail_writes = True
    w._on_clear_recent()
    assert len(warnings) == 1
    assert w.recent_files.count() == 0
    assert w.reopen_menu.entry_actions() == []
    assert w.statusBar().currentMessage() != "Recent files cleared."
    w.deleteLater()


def test_show_restored_opens_fullscreen(qapp, memory_store, config):
    save_geometry(memory_store, WindowGeometry(width=800, height=600, x=20, y=30, fullscreen=True))
    w = MainWindow(memory_store, config, screen=SCREEN)
    w.show_restored()
    qapp.processEvents()
    assert w.isFullScreen()
    w.close()


def test_show_restored_normal_window(qapp, memory_store, config):
    save_geometry(memory_store, WindowGeometry(width=800, height=600, x=20, y=30))
    w = MainWindow(memory_store, config, screen=SCREEN)
    w.show_restored()
    qapp.processEvents()
    assert w.isVisible()
    assert not w.isFullScreen()
    w.close()


def test_close_while_fullscreen_saves_normal_geometry(qapp, memory_store, config):
    save_geometry(memory_store, WindowGeometry(width=800, height=600, x=20, y=30, fullscreen=True))
    w = MainWindow(memory_store, config, screen=SCREEN)
    w.show_restored()
    qapp.processEvents()
    w.close()
    saved = load_geometry(memory_store, WindowGeometry(width=1, height=1))
    assert saved == WindowGeometry(width=800, height=600, x=20, y=30, fullscreen=True)
