"""
Persisted key-value preference store.

Values live under '/'-separated namespaces (e.g. "window", "recent_files/reopen").
PreferenceStore defines the contract; QSettingsStore persists through Qt's QSettings,
MemoryStore keeps everything in-process (tests, in-memory-only fallback).
"""
from pathlib import Path
from typing import Any, Iterable, List, Optional

from PySide6.QtCore import QSettings

from .config import BACKENDS
from .exceptions import ConfigError, StorageError
from .logger import get_logger

logger = get_logger("preferences")

_SEQUENCE_VALUE_KEY = "path"
_TRUE_STRINGS = ("true", "1", "yes", "on")
_FALSE_STRINGS = ("false", "0", "no", "off")


def _check_namespace(namespace: str) -> str:
    if not isinstance(namespace, str) or not namespace.strip("/ "):
        raise ValueError("namespace must be a non-empty string, got %r" % (namespace,))
    return namespace.strip("/")


def _join(namespace: str, key: str) -> str:
    return "%s/%s" % (_check_namespace(namespace), key)


class PreferenceStore:
    """
    Namespaced key-value store. Subclasses implement value/set_value/remove/clear/flush
    and the ordered-sequence pair; typed getters are built on top of value().
    """

    def value(self, namespace: str, key: str) -> Any:
        """Raw stored value or None."""
        raise NotImplementedError

    def set_value(self, namespace: str, key: str, value: Any) -> None:
        raise NotImplementedError

    def remove(self, namespace: str, key: str) -> None:
        raise NotImplementedError

    def clear(self, namespace: str) -> None:
        """Remove every key and sequence stored under namespace."""
        raise NotImplementedError

    def flush(self) -> None:
        """Make all writes durable; raise StorageError if that is not possible."""
        raise NotImplementedError

    def get_ordered_strings(self, namespace: str) -> List[str]:
        raise NotImplementedError

    def put_ordered_strings(self, namespace: str, sequence: Iterable[str]) -> None:
        """Overwrite the sequence stored under namespace."""
        raise NotImplementedError

    def get_string(self, namespace: str, key: str, default: Optional[str] = None) -> Optional[str]:
        raw = self.value(namespace, key)
        return default if raw is None else str(raw)

    def put_string(self, namespace: str, key: str, value: str) -> None:
        self.set_value(namespace, key, str(value))

    def get_int(self, namespace: str, key: str, default: int = 0) -> int:
        raw = self.value(namespace, key)
        if raw is None or isinstance(raw, bool):
            return default
        try:
            return int(raw)
        except (TypeError, ValueError):
            return default

    def put_int(self, namespace: str, key: str, value: int) -> None:
        self.set_value(namespace, key, int(value))

    def get_bool(self, namespace: str, key: str, default: bool = False) -> bool:
        raw = self.value(namespace, key)
        if isinstance(raw, bool):
            return raw
        if isinstance(raw, str):
            lowered = raw.strip().lower()
            if lowered in _TRUE_STRINGS:
                return True
            if lowered in _FALSE_STRINGS:
                return False
        return default

    def put_bool(self, namespace: str, key: str, value: bool) -> None:
        self.set_value(namespace, key, bool(value))


class QSettingsStore(PreferenceStore):
    """Durable store on QSettings (native format per platform, or an INI file)."""

    def __init__(self, organization: str = "drawctl", application: str = "drawctl", settings: QSettings | None = None):
        self._settings = settings if settings is not None else QSettings(organization, application)

    @classmethod
    def from_file(cls, path: str | Path) -> "QSettingsStore":
        """Store backed by an INI file at path (created on first flush)."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        return cls(settings=QSettings(str(path), QSettings.Format.IniFormat))

    @property
    def location(self) -> str:
        return self._settings.fileName()

    def value(self, namespace, key):
        return self._settings.value(_join(namespace, key))

    def set_value(self, namespace, key, value):
        self._settings.setValue(_join(namespace, key), value)

    def remove(self, namespace, key):
        self._settings.remove(_join(namespace, key))

    def clear(self, namespace):
        self._settings.remove(_check_namespace(namespace))

    def flush(self):
        self._settings.sync()
        status = self._settings.status()
        if status == QSettings.Status.AccessError:
            raise StorageError("Preference store not writable: %s" % self.location)
        if status == QSettings.Status.FormatError:
            raise StorageError("Preference store is corrupt: %s" % self.location)

    def get_ordered_strings(self, namespace):
        ns = _check_namespace(namespace)
        size = self._settings.beginReadArray(ns)
        try:
            out = []
            for i in range(size):
                self._settings.setArrayIndex(i)
                raw = self._settings.value(_SEQUENCE_VALUE_KEY)
                if isinstance(raw, str):
                    out.append(raw)
            return out
        finally:
            self._settings.endArray()

    def put_ordered_strings(self, namespace, sequence):
        ns = _check_namespace(namespace)
        items = list(sequence)
        # Drop stale elements past the new size before rewriting.
        self._settings.remove(ns)
        self._settings.beginWriteArray(ns, len(items))
        try:
            for i, item in enumerate(items):
                self._settings.setArrayIndex(i)
                self._settings.setValue(_SEQUENCE_VALUE_KEY, item)
        finally:
            self._settings.endArray()


class MemoryStore(PreferenceStore):
    """
    In-process store. fail_writes=True makes every write raise StorageError,
    which stands in for an unavailable backing store.
    """

    def __init__(self, fail_writes: bool = False):
        self._values: dict[str, Any] = {}
        self.fail_writes = fail_writes
        self.write_count = 0
        self.flush_count = 0

    def _writing(self) -> None:
        if self.fail_writes:
            raise StorageError("Preference store unavailable")
        self.write_count += 1

    def value(self, namespace, key):
        raw = self._values.get(_join(namespace, key))
        return None if isinstance(raw, list) else raw

    def set_value(self, namespace, key, value):
        self._writing()
        self._values[_join(namespace, key)] = value

    def remove(self, namespace, key):
        self._writing()
        self._values.pop(_join(namespace, key), None)

    def clear(self, namespace):
        self._writing()
        ns = _check_namespace(namespace)
        for k in [k for k in self._values if k == ns or k.startswith(ns + "/")]:
            del self._values[k]

    def flush(self):
        if self.fail_writes:
            raise StorageError("Preference store unavailable")
        self.flush_count += 1

    def get_ordered_strings(self, namespace):
        raw = self._values.get(_check_namespace(namespace))
        return list(raw) if isinstance(raw, list) else []

    def put_ordered_strings(self, namespace, sequence):
        self._writing()
        ns = _check_namespace(namespace)
        for k in [k for k in self._values if k.startswith(ns + "/")]:
            del self._values[k]
        self._values[ns] = list(sequence)


def open_store(config: dict) -> PreferenceStore:
    """Build the preference store named by config['preferences']."""
    prefs = config.get("preferences") or {}
    backend = str(prefs.get("backend") or "qsettings").strip().lower()
    if backend not in BACKENDS:
        raise ConfigError("Unknown preferences backend: %r (expected one of %s)" % (backend, ", ".join(BACKENDS)))
    if backend == "memory":
        logger.info("Using in-memory preference store; nothing will be persisted")
        return MemoryStore()
    ini_file = prefs.get("file")
    if ini_file:
        store = QSettingsStore.from_file(Path(ini_file).expanduser())
    else:
        store = QSettingsStore(str(prefs.get("organization") or "drawctl"), str(prefs.get("application") or "drawctl"))
    logger.debug("Preference store: %s", store.location)
    return store
