from .exceptions import DrawCtlError, ConfigError, StorageError
from .config import load_config, get_config, reset_config
from .logger import get_logger, setup_logging
from .event_bus import EventBus
from .preferences import PreferenceStore, QSettingsStore, MemoryStore, open_store

__all__ = [
    "DrawCtlError", "ConfigError", "StorageError",
    "load_config", "get_config", "reset_config",
    "get_logger", "setup_logging",
    "EventBus",
    "PreferenceStore", "QSettingsStore", "MemoryStore", "open_store",
]
