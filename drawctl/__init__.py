"""drawctl: desktop shell for a drawing machine controller."""

__version__ = "0.1.0"

from drawctl.application.recent_files import RecentFiles
from drawctl.application.window_geometry import WindowGeometry
from drawctl.core.preferences import MemoryStore, PreferenceStore, QSettingsStore
from drawctl.core.exceptions import DrawCtlError, StorageError

__all__ = [
    "__version__",
    "RecentFiles",
    "WindowGeometry",
    "PreferenceStore",
    "QSettingsStore",
    "MemoryStore",
    "DrawCtlError",
    "StorageError",
]
