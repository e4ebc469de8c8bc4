"""
Load configuration from YAML. No hardcoded preference locations in Python.
Default: drawctl/core/config/default.yaml. Override: --config <file> or DRAWCTL_CONFIG.
"""
import os
from pathlib import Path
from typing import Any

import yaml

from drawctl.core.exceptions import ConfigError

_CACHE: dict[str, Any] | None = None
_CONFIG_DIR = Path(__file__).resolve().parent


def _deep_merge(base: dict, override: dict) -> dict:
    """Merge override into base (recursive). base is not mutated."""
    out = dict(base)
    for k, v in override.items():
        if k in out and isinstance(out[k], dict) and isinstance(v, dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def _load_yaml(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError("Invalid YAML in %s: %s" % (path, e)) from e
    return data if isinstance(data, dict) else {}


def _defaults() -> dict:
    """Built-in defaults (no file)."""
    return {
        "preferences": {
            "backend": "qsettings",
            "organization": "drawctl",
            "application": "drawctl",
            "file": None,  # INI file; when set, organization/application are ignored
        },
        "recent_files": {"label": "Reopen", "max_files": 10},
        "window": {"width": 1200, "height": 800, "min_width": 640, "min_height": 480},
    }


def _validate(cfg: dict) -> None:
    for section in ("preferences", "recent_files", "window"):
        if not isinstance(cfg.get(section), dict):
            raise ConfigError("config section %r must be a mapping" % section)
    max_files = cfg["recent_files"].get("max_files")
    if not isinstance(max_files, int) or isinstance(max_files, bool) or max_files < 1:
        raise ConfigError("recent_files.max_files must be a positive integer, got %r" % (max_files,))
    label = cfg["recent_files"].get("label")
    if not isinstance(label, str) or not label.strip():
        raise ConfigError("recent_files.label must be a non-empty string")


def load_config(override_path: str | Path | None = None) -> dict:
    """
    Load config: default.yaml + env DRAWCTL_CONFIG + optional override file.
    Returns merged dict. Cached after first call unless override_path is given.
    """
    global _CACHE
    if override_path is not None:
        _CACHE = None

    if _CACHE is not None:
        return _CACHE

    base = _defaults()
    default_file = _CONFIG_DIR / "default.yaml"
    if default_file.exists():
        base = _deep_merge(base, _load_yaml(default_file))

    env_path = os.environ.get(ENV_CONFIG)
    if env_path and Path(env_path).exists():
        base = _deep_merge(base, _load_yaml(Path(env_path)))

    if override_path is not None:
        p = Path(override_path)
        if not p.exists():
            raise ConfigError("Config file not found: %s" % p)
        base = _deep_merge(base, _load_yaml(p))

    _validate(base)
    base["preferences"]["backend"] = str(base["preferences"].get("backend") or "qsettings").strip().lower()

    _CACHE = base
    return base


def get_config(override_path: str | Path | None = None) -> dict:
    """Alias for load_config; use for read-only access."""
    return load_config(override_path)


def reset_config() -> None:
    """Clear cache (e.g. for tests)."""
    global _CACHE
    _CACHE = None


# ---------------------------------------------------------------------------
# Preference keys and environment names
# ---------------------------------------------------------------------------
ENV_CONFIG = "DRAWCTL_CONFIG"
ENV_LOG_LEVEL = "DRAWCTL_LOG_LEVEL"
ENV_LOG_DIR = "DRAWCTL_LOG_DIR"
BACKENDS = ("qsettings", "memory")
RECENT_FILES_NAMESPACE = "recent_files"
WINDOW_NAMESPACE = "window"
KEY_WINDOW_WIDTH = "windowWidth"
KEY_WINDOW_HEIGHT = "windowHeight"
KEY_WINDOW_X = "windowX"
KEY_WINDOW_Y = "windowY"
KEY_FULLSCREEN = "isFullscreen"
