"""
CLI entry point. Usage: drawctl gui [FILE...] | drawctl recent {list,add,remove,clear}
The recent subcommands work on the same preference store the GUI uses, without opening a window.
"""
import argparse
import logging
import sys

from drawctl.application.recent_files import RecentFiles
from drawctl.core.config import load_config
from drawctl.core.exceptions import DrawCtlError
from drawctl.core.logger import get_logger, setup_logging
from drawctl.core.preferences import open_store

logger = get_logger("cli")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="drawctl", description="drawctl: drawing machine controller")
    parser.add_argument("--config", "-c", type=str, default=None, help="Path to YAML config (default: drawctl/core/config/default.yaml + DRAWCTL_CONFIG)")
    parser.add_argument("--log-level", type=str, default=None, choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Log level (default: INFO or DRAWCTL_LOG_LEVEL)")
    parser.add_argument("--log-dir", type=str, default=None, help="Directory for drawctl.log (default: DRAWCTL_LOG_DIR or console only)")
    parser.add_argument("--label", type=str, default=None, help="Recent files menu label (default: from config)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    gui_parser = subparsers.add_parser("gui", help="Open the drawctl desktop window")
    gui_parser.add_argument("files", nargs="*", help="Drawings to open on startup")

    recent_parser = subparsers.add_parser("recent", help="Inspect or edit the recent files list")
    recent_sub = recent_parser.add_subparsers(dest="action", required=True)
    recent_sub.add_parser("list", help="Print recent files, newest first")
    add_parser = recent_sub.add_parser("add", help="Add paths (the last one given ends up first)")
    add_parser.add_argument("paths", nargs="+")
    remove_parser = recent_sub.add_parser("remove", help="Remove paths")
    remove_parser.add_argument("paths", nargs="+")
    recent_sub.add_parser("clear", help="Remove every recent file")
    return parser


def _open_recent(config: dict, label: str | None) -> RecentFiles:
    recent_cfg = config["recent_files"]
    store = open_store(config)
    return RecentFiles(label or recent_cfg["label"], store, max_files=recent_cfg["max_files"])


def _run_recent(args, config: dict) -> int:
    recent = _open_recent(config, args.label)
    if args.action == "list":
        for index, path in enumerate(recent):
            print("%d\t%s" % (index, path))
    elif args.action == "add":
        for path in args.paths:
            recent.add_path(path)
        logger.info("%d recent file(s) in %s", recent.count(), recent.namespace)
    elif args.action == "remove":
        for path in args.paths:
            recent.remove_filename(path)
        logger.info("%d recent file(s) in %s", recent.count(), recent.namespace)
    elif args.action == "clear":
        recent.clear()
        logger.info("Cleared %s", recent.namespace)
    return 0


def main(argv=None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    level = getattr(logging, args.log_level) if args.log_level else None
    setup_logging(level=level, log_dir=args.log_dir)

    try:
        config = load_config(override_path=args.config)
        if args.command == "gui":
            from drawctl.app import main as app_main
            app_main(files=args.files, config_path=args.config, label=args.label)
            return 0
        return _run_recent(args, config)
    except (DrawCtlError, ValueError) as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
