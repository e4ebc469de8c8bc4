# Application layer: recent files list, window geometry

from drawctl.application.recent_files import RecentFiles, namespace_for_label
from drawctl.application.window_geometry import WindowGeometry, fit_to_screen, load_geometry, save_geometry

__all__ = ["RecentFiles", "namespace_for_label", "WindowGeometry", "fit_to_screen", "load_geometry", "save_geometry"]
