"""
Recent files: bounded, most-recent-first, persisted list of paths with selection listeners.

Every mutation rewrites the whole sequence to the preference store and flushes it
before returning. Selection listeners are called synchronously, in registration order.
"""
import re
from typing import Callable, Iterator, List, Optional

from drawctl.core.config import RECENT_FILES_NAMESPACE
from drawctl.core.event_bus import EventBus
from drawctl.core.logger import get_logger
from drawctl.core.preferences import PreferenceStore

logger = get_logger("recent_files")

DEFAULT_LABEL = "Reopen"
DEFAULT_MAX_FILES = 10
SELECTED_EVENT = "file_selected"

_SLUG_RE = re.compile(r"[^a-z0-9]+")


def namespace_for_label(label: str) -> str:
    """Map a menu label to its store namespace: "Reopen" -> "recent_files/reopen"."""
    if not isinstance(label, str) or not label.strip():
        raise ValueError("label must be a non-empty string")
    slug = _SLUG_RE.sub("_", label.strip().lower()).strip("_") or "_"
    return "%s/%s" % (RECENT_FILES_NAMESPACE, slug)


def is_valid_entry(path) -> bool:
    """True for strings that are not empty after trimming whitespace."""
    return isinstance(path, str) and bool(path.strip())


class RecentFiles:
    """
    Bounded recency list bound to a label and a preference store.

    Entries are unique (exact string match), newest first, at most max_files long.
    Valid paths are stored as given; whitespace is only trimmed to decide validity.
    """

    def __init__(self, label: str, store: PreferenceStore, max_files: int = DEFAULT_MAX_FILES):
        if not isinstance(max_files, int) or isinstance(max_files, bool) or max_files < 1:
            raise ValueError("max_files must be a positive integer, got %r" % (max_files,))
        self._namespace = namespace_for_label(label)
        self._label = label
        self._store = store
        self._max_files = max_files
        self._events = EventBus()
        self._items: List[str] = self._load()
        logger.debug("Loaded %d recent file(s) from %s", len(self._items), self._namespace)

    def _load(self) -> List[str]:
        items: List[str] = []
        for path in self._store.get_ordered_strings(self._namespace):
            if is_valid_entry(path) and path not in items:
                items.append(path)
        return items[: self._max_files]

    def _save(self) -> None:
        self._store.put_ordered_strings(self._namespace, self._items)
        self._store.flush()
        logger.debug("Saved %d recent file(s) to %s", len(self._items), self._namespace)

    @property
    def label(self) -> str:
        return self._label

    @property
    def namespace(self) -> str:
        return self._namespace

    def add_path(self, path: Optional[str]) -> None:
        """Put path at the front (moving it there if already listed); evict the oldest past capacity."""
        if not is_valid_entry(path):
            return
        if path in self._items:
            self._items.remove(path)
        self._items.insert(0, path)
        while len(self._items) > self._max_files:
            evicted = self._items.pop()
            logger.debug("Evicted oldest recent file: %s", evicted)
        self._save()

    def remove_filename(self, path: Optional[str]) -> None:
        """Remove path if listed; unknown paths are ignored."""
        if path not in self._items:
            return
        self._items.remove(path)
        self._save()

    def clear(self) -> None:
        self._items = []
        self._store.clear(self._namespace)
        self._store.flush()
        logger.debug("Cleared recent files in %s", self._namespace)

    def get_file(self, index: int) -> str:
        """Entry at index (0 = most recent). Raises IndexError outside [0, count())."""
        if not isinstance(index, int) or isinstance(index, bool):
            raise TypeError("index must be an int, got %r" % (index,))
        if index < 0 or index >= len(self._items):
            raise IndexError("recent file index %d out of range (count=%d)" % (index, len(self._items)))
        return self._items[index]

    def count(self) -> int:
        return len(self._items)

    def max_files(self) -> int:
        return self._max_files

    def files(self) -> List[str]:
        """Copy of the entries, most recent first."""
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._items))

    def __contains__(self, path) -> bool:
        return path in self._items

    # -------------------------------------------------------------------------
    # Selection listeners
    # -------------------------------------------------------------------------

    def add_selection_listener(self, callback: Callable[[str], None]) -> None:
        """Call callback(path) whenever an entry is activated."""
        self._events.subscribe(SELECTED_EVENT, callback)

    def remove_selection_listener(self, callback: Callable[[str], None]) -> None:
        self._events.unsubscribe(SELECTED_EVENT, callback)

    def selection_listener_count(self) -> int:
        return self._events.subscribers(SELECTED_EVENT)

    def activate(self, index: int) -> str:
        """Notify listeners that the entry at index was chosen. Returns the path."""
        path = self.get_file(index)
        self.notify_selected(path)
        return path

    def notify_selected(self, path: str) -> None:
        logger.debug("Recent file selected: %s", path)
        self._events.emit(SELECTED_EVENT, path)

    def __repr__(self) -> str:
        return "RecentFiles(label=%r, count=%d, max_files=%d)" % (self._label, len(self._items), self._max_files)
