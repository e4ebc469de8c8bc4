"""Main application window: File menu with Reopen list, geometry restored from preferences."""

from pathlib import Path

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QApplication,
    QFileDialog,
    QLabel,
    QMainWindow,
    QMessageBox,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from drawctl.application.recent_files import RecentFiles
from drawctl.application.window_geometry import (
    WindowGeometry,
    default_geometry,
    fit_to_screen,
    load_geometry,
    save_geometry,
)
from drawctl.core.exceptions import StorageError
from drawctl.core.logger import get_logger
from drawctl.core.preferences import PreferenceStore
from drawctl.gui.recent_files_menu import RecentFilesMenu

logger = get_logger("gui.main_window")

DRAWING_FILTER = "Drawings (*.svg *.dxf *.gcode *.ngc);;Images (*.png *.jpg *.jpeg *.bmp);;All files (*)"


def _available_screen_rect():
    app = QApplication.instance()
    screen = app.primaryScreen() if app is not None else None
    if screen is None:
        return None
    rect = screen.availableGeometry()
    return rect.x(), rect.y(), rect.width(), rect.height()


class MainWindow(QMainWindow):
    """Main window: File menu (Open, Reopen, Clear Recent, Exit), current drawing label, status bar."""

    def __init__(self, store: PreferenceStore, config: dict, screen=None, label=None):
        super().__init__()
        self._store = store
        self._config = config
        recent_cfg = config.get("recent_files") or {}
        self._recent = RecentFiles(
            label or recent_cfg.get("label", "Reopen"),
            store,
            max_files=int(recent_cfg.get("max_files", 10)),
        )
        self._recent.add_selection_listener(self.open_file)
        self._current_path = None
        self._setup_window()
        self._setup_menubar()
        self._setup_statusbar()
        self._setup_central_widget()
        self._restore_geometry(screen)

    @property
    def recent_files(self) -> RecentFiles:
        return self._recent

    @property
    def reopen_menu(self) -> RecentFilesMenu:
        return self._reopen_menu

    @property
    def current_path(self):
        return self._current_path

    def _setup_window(self):
        self.setWindowTitle("drawctl")
        window_cfg = self._config.get("window") or {}
        self.setMinimumSize(int(window_cfg.get("min_width", 640)), int(window_cfg.get("min_height", 480)))

    def _setup_menubar(self):
        menubar = self.menuBar()

        file_menu = menubar.addMenu("&File")
        file_menu.addAction("&Open...", self._on_open)
        self._reopen_menu = RecentFilesMenu(self._recent, self)
        file_menu.addMenu(self._reopen_menu)
        file_menu.addAction("&Clear Recent", self._on_clear_recent)
        file_menu.addSeparator()
        file_menu.addAction("E&xit", self.close)

    def _setup_statusbar(self):
        self._statusbar = QStatusBar()
        self.setStatusBar(self._statusbar)
        self._statusbar.showMessage("Ready")

    def _setup_central_widget(self):
        central = QWidget()
        layout = QVBoxLayout(central)
        layout.setContentsMargins(8, 8, 8, 8)
        self._drawing_label = QLabel("No drawing loaded.")
        self._drawing_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._drawing_label.setStyleSheet("color: #8a8a8a; font-size: 12px;")
        layout.addWidget(self._drawing_label)
        self.setCentralWidget(central)

    # -------------------------------------------------------------------------
    # Geometry
    # -------------------------------------------------------------------------

    def _min_size(self):
        return self.minimumWidth(), self.minimumHeight()

    def _restore_geometry(self, screen):
        saved = load_geometry(self._store, default_geometry(self._config.get("window")))
        screen = screen or _available_screen_rect()
        if screen is not None:
            saved = fit_to_screen(saved, screen, self._min_size())
        self._restored = saved
        # Same client rectangle as current_geometry() saves; move() would place the frame instead.
        if saved.centered:
            self.resize(saved.width, saved.height)
        else:
            self.setGeometry(saved.x, saved.y, saved.width, saved.height)
        logger.debug("Restored window geometry: %s", saved)

    def show_restored(self):
        """Show the window, fullscreen if it was fullscreen when last closed."""
        if self._restored.fullscreen:
            self.showFullScreen()
        else:
            self.show()

    def current_geometry(self) -> WindowGeometry:
        rect = self.normalGeometry() if self.isFullScreen() else self.geometry()
        return WindowGeometry(
            width=rect.width(),
            height=rect.height(),
            x=rect.x(),
            y=rect.y(),
            fullscreen=self.isFullScreen(),
        )

    # -------------------------------------------------------------------------
    # Files
    # -------------------------------------------------------------------------

    def open_file(self, path: str):
        """Make path the current drawing and record it in the Reopen list."""
        if not isinstance(path, str) or not path.strip():
            return
        self._current_path = path
        self._drawing_label.setText(path)
        self.setWindowTitle("drawctl - %s" % Path(path).name)
        try:
            self._recent.add_path(path)
        except StorageError as e:
            logger.error("Could not save recent files: %s", e)
            self._statusbar.showMessage("Opened: %s (recent list not saved: %s)" % (path, e))
        else:
            self._statusbar.showMessage("Opened: %s" % path)
        self._reopen_menu.rebuild()
        logger.info("Opened %s", path)

    def _on_open(self):
        start_dir = str(Path(self._current_path).parent) if self._current_path else ""
        path, _ = QFileDialog.getOpenFileName(self, "Open drawing", start_dir, DRAWING_FILTER)
        if path:
            self.open_file(path)

    def _on_clear_recent(self):
        try:
            self._recent.clear()
        except StorageError as e:
            logger.error("Could not clear recent files: %s", e)
            QMessageBox.warning(self, "Clear Recent", "Could not clear recent files: %s" % e)
        else:
            self._statusbar.showMessage("Recent files cleared.")
        self._reopen_menu.rebuild()

    def closeEvent(self, event):
        try:
            save_geometry(self._store, self.current_geometry())
        except StorageError as e:
            logger.error("Could not save window geometry: %s", e)
        event.accept()
