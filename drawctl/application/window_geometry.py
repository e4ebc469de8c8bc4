"""Main window geometry: persisted size, position and fullscreen flag, fitted to the screen."""

from dataclasses import dataclass, replace
from typing import Tuple

from drawctl.core.config import (
    KEY_FULLSCREEN,
    KEY_WINDOW_HEIGHT,
    KEY_WINDOW_WIDTH,
    KEY_WINDOW_X,
    KEY_WINDOW_Y,
    WINDOW_NAMESPACE,
)
from drawctl.core.preferences import PreferenceStore

UNSET = -1  # x/y value meaning "center on screen"

Rect = Tuple[int, int, int, int]  # x, y, width, height


@dataclass(frozen=True)
class WindowGeometry:
    width: int
    height: int
    x: int = UNSET
    y: int = UNSET
    fullscreen: bool = False

    @property
    def centered(self) -> bool:
        return self.x == UNSET or self.y == UNSET


def default_geometry(window_cfg: dict | None = None) -> WindowGeometry:
    cfg = window_cfg or {}
    return WindowGeometry(width=int(cfg.get("width", 1200)), height=int(cfg.get("height", 800)))


def load_geometry(store: PreferenceStore, defaults: WindowGeometry) -> WindowGeometry:
    """Read the saved geometry; any missing key falls back to defaults."""
    return WindowGeometry(
        width=store.get_int(WINDOW_NAMESPACE, KEY_WINDOW_WIDTH, defaults.width),
        height=store.get_int(WINDOW_NAMESPACE, KEY_WINDOW_HEIGHT, defaults.height),
        x=store.get_int(WINDOW_NAMESPACE, KEY_WINDOW_X, defaults.x),
        y=store.get_int(WINDOW_NAMESPACE, KEY_WINDOW_Y, defaults.y),
        fullscreen=store.get_bool(WINDOW_NAMESPACE, KEY_FULLSCREEN, defaults.fullscreen),
    )


def save_geometry(store: PreferenceStore, geometry: WindowGeometry) -> None:
    store.put_int(WINDOW_NAMESPACE, KEY_WINDOW_WIDTH, geometry.width)
    store.put_int(WINDOW_NAMESPACE, KEY_WINDOW_HEIGHT, geometry.height)
    store.put_int(WINDOW_NAMESPACE, KEY_WINDOW_X, geometry.x)
    store.put_int(WINDOW_NAMESPACE, KEY_WINDOW_Y, geometry.y)
    store.put_bool(WINDOW_NAMESPACE, KEY_FULLSCREEN, geometry.fullscreen)
    store.flush()


def fit_to_screen(geometry: WindowGeometry, screen: Rect, min_size: Tuple[int, int] = (0, 0)) -> WindowGeometry:
    """
    Clamp size to [min_size, screen size] and center the window when it is
    unplaced or not fully inside the screen rectangle.
    """
    sx, sy, sw, sh = screen
    min_w, min_h = min_size
    width = min(max(geometry.width, min_w), sw)
    height = min(max(geometry.height, min_h), sh)
    x, y = geometry.x, geometry.y
    inside = (
        not geometry.centered
        and x >= sx
        and y >= sy
        and x + width <= sx + sw
        and y + height <= sy + sh
    )
    if not inside:
        x = sx + (sw - width) // 2
        y = sy + (sh - height) // 2
    return replace(geometry, width=width, height=height, x=x, y=y)
