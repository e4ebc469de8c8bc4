"""PySide6 application entry point."""

import sys

from PySide6.QtWidgets import QApplication

from drawctl.core.config import load_config
from drawctl.core.logger import get_logger, setup_logging
from drawctl.core.preferences import open_store
from drawctl.gui.main_window import MainWindow

logger = get_logger("app")


def main(files=None, config_path=None, label=None):
    setup_logging()
    config = load_config(config_path)

    app = QApplication.instance() or QApplication(sys.argv[:1])
    app.setQuitOnLastWindowClosed(True)
    prefs = config["preferences"]
    app.setOrganizationName(str(prefs.get("organization") or "drawctl"))
    app.setApplicationName(str(prefs.get("application") or "drawctl"))

    store = open_store(config)
    window = MainWindow(store, config, label=label)
    for path in files or ():
        window.open_file(path)
    window.show_restored()
    logger.info("drawctl started")
    sys.exit(app.exec())


if __name__ == "__main__":
    main(sys.argv[1:])
