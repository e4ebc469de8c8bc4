"""
Logging: level, file log, timestamp.
Configure once with setup_logging(); use get_logger() everywhere.
"""
import logging
import os
from pathlib import Path
from typing import Optional

from .config import ENV_LOG_LEVEL, ENV_LOG_DIR

ROOT_NAME = "drawctl"
LOG_FILE_NAME = "drawctl.log"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s %(message)s"
_setup_done = False


class DrawCtlFormatter(logging.Formatter):
    """Formatter with timestamp, level and logger name."""

    def __init__(self, fmt: Optional[str] = None, datefmt: Optional[str] = None):
        super().__init__(fmt=fmt or _DEFAULT_FORMAT, datefmt=datefmt or _DATE_FORMAT)


def _get_level_from_env() -> int:
    raw = os.environ.get(ENV_LOG_LEVEL, "").strip().upper()
    level = getattr(logging, raw, logging.INFO)
    return level if isinstance(level, int) else logging.INFO


def _ensure_log_dir(log_dir: Optional[Path]) -> Optional[Path]:
    if log_dir is None:
        env_dir = os.environ.get(ENV_LOG_DIR)
        if env_dir:
            log_dir = Path(env_dir)
    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def _add_file_handler(root: logging.Logger, path: Path, level: int, formatter: logging.Formatter) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fh = logging.FileHandler(path, encoding="utf-8")
    fh.setLevel(level)
    fh.setFormatter(formatter)
    root.addHandler(fh)


def setup_logging(
    level: Optional[int] = None,
    log_file: Optional[os.PathLike | str] = None,
    log_dir: Optional[os.PathLike | str] = None,
    format_string: Optional[str] = None,
    use_console: bool = True,
) -> None:
    """
    Configure drawctl root logger: level, console handler, optional file handler.
    Idempotent; safe to call once at startup.
    """
    global _setup_done
    if _setup_done:
        return

    root = logging.getLogger(ROOT_NAME)
    if level is None:
        level = _get_level_from_env()
    root.setLevel(level)

    formatter = DrawCtlFormatter(format_string)

    if use_console:
        console = logging.StreamHandler()
        console.setLevel(level)
        console.setFormatter(formatter)
        root.addHandler(console)

    if log_file is not None:
        _add_file_handler(root, Path(log_file), level, formatter)
    else:
        resolved_dir = _ensure_log_dir(Path(log_dir) if log_dir else None)
        if resolved_dir is not None:
            _add_file_handler(root, resolved_dir / LOG_FILE_NAME, level, formatter)

    _setup_done = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger under drawctl.* (e.g. drawctl.recent_files)."""
    if name != ROOT_NAME and not name.startswith(ROOT_NAME + "."):
        name = f"{ROOT_NAME}.{name}"
    return logging.getLogger(name)
