#!/usr/bin/env python3
"""Command-line interface for diagsnap."""

import sys
import json
import argparse
import logging
from pathlib import Path

from .config import context_from_config, load_config
from .exceptions import DiagsnapError
from .levels import LEVELS
from .normalize import diagnostics
from .snapshot.modes import UpdateMode, update_mode_from_env
from .snapshot.report import format_result
from .snapshot.store import SnapshotStore
from .snapshot.summary import print_summary


_UPDATE_CHOICES = {
    "wip": UpdateMode.WIP,
    "overwrite": UpdateMode.OVERWRITE,
    "disabled": UpdateMode.DISABLED,
}


def _read_raw(source: str) -> bytes:
    if source == "-":
        return sys.stdin.buffer.read()
    try:
        return Path(source).read_bytes()
    except OSError as exc:
        raise DiagsnapError(f"Failed to read compiler output {source}: {exc}") from exc


def _context(args):
    return context_from_config(
        args.config_data,
        package_name=args.crate,
        source_directory=args.source_dir,
        workspace_root=args.workspace,
    )


def _snapshots_dir(args) -> Path:
    return Path(args.snapshots or args.config_data["snapshots_dir"])


def _update_mode(args) -> UpdateMode:
    if args.update:
        return _UPDATE_CHOICES[args.update]
    return update_mode_from_env(UpdateMode(args.config_data["update"]))


def cmd_normalize(args):
    """Print normalized compiler output"""
    variations = diagnostics(_read_raw(args.raw), _context(args))

    if not args.all:
        sys.stdout.write(variations.preferred())
        return 0

    for level, text in zip(LEVELS, variations):
        print(f"== {level.label} ==")
        sys.stdout.write(text)
    return 0


def cmd_check(args):
    """Compare compiler output against a saved snapshot"""
    context = _context(args)
    wip = args.wip or args.config_data.get("wip_dir")
    store = SnapshotStore(
        _snapshots_dir(args),
        wip_dir=Path(wip) if wip else None,
        mode=_update_mode(args),
    )

    result = store.check(args.name, diagnostics(_read_raw(args.raw), context))
    print(format_result(result))

    if args.summary:
        print_summary(store)
    return 0 if result.passed else 1


def cmd_snapshots_list(args):
    """List saved snapshots"""
    store = SnapshotStore(_snapshots_dir(args))
    store.load_all()

    if not store.paths:
        print(f"No snapshots found in {store.root}")
        return 0

    for path in store.paths:
        print(path.relative_to(store.root))
    return 0


def cmd_config_show(args):
    """Show the effective configuration"""
    config = args.config_data

    if args.json:
        print(json.dumps(config, indent=2))
        return 0

    print(f"Log level: {config['log_level']}")
    print(f"Snapshots: {config['snapshots_dir']}")
    print(f"WIP dir: {config['wip_dir'] or '<snapshots>/wip'}")
    print(f"Update mode: {config['update']}")
    context = config.get("context") or {}
    if context:
        print("\nContext:")
        for key, value in context.items():
            print(f"  {key}: {value}")
    return 0


def _setup_logging(debug: bool, config: dict) -> None:
    if debug:
        logging.basicConfig(level=logging.DEBUG)
        return

    level_name = str(config.get("log_level", "INFO")).upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        logging.warning(
            "Unknown log level '%s' in configuration. Falling back to INFO.",
            level_name,
        )
        level = logging.INFO
    logging.basicConfig(level=level)


def main(argv=None):
    """Main CLI entry point"""
    parser = argparse.ArgumentParser(
        prog="diagsnap",
        description="Normalize compiler diagnostics and compare them to snapshots",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--config",
        help="Path to a diagsnap.json5 configuration file",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    context_parent = argparse.ArgumentParser(add_help=False)
    context_parent.add_argument("raw", help="File with raw compiler output, or - for stdin")
    context_parent.add_argument("--crate", help="Package name to redact as $CRATE")
    context_parent.add_argument("--source-dir", help="Source directory to redact as $DIR")
    context_parent.add_argument("--workspace", help="Workspace root to redact as $WORKSPACE")

    # normalize command
    normalize_parser = subparsers.add_parser(
        "normalize", parents=[context_parent], help="Print normalized output"
    )
    normalize_parser.add_argument("--all", action="store_true", help="Print every variation")
    normalize_parser.set_defaults(func=cmd_normalize)

    # check command
    check_parser = subparsers.add_parser(
        "check", parents=[context_parent], help="Check output against a snapshot"
    )
    check_parser.add_argument("name", help="Snapshot name, relative to the snapshot directory")
    check_parser.add_argument("--snapshots", help="Snapshot directory")
    check_parser.add_argument("--wip", help="Directory for work-in-progress snapshots")
    check_parser.add_argument("--update", choices=list(_UPDATE_CHOICES.keys()), help="Update mode")
    check_parser.add_argument(
        "--summary",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="Toggle exit summary reporting",
    )
    check_parser.set_defaults(func=cmd_check)

    # snapshot management commands
    snapshots_parser = subparsers.add_parser("snapshots", help="Manage snapshots")
    snapshots_subparsers = snapshots_parser.add_subparsers(dest="snapshots_command")

    snapshots_list_parser = snapshots_subparsers.add_parser("list", help="List saved snapshots")
    snapshots_list_parser.add_argument("--snapshots", help="Snapshot directory")
    snapshots_list_parser.set_defaults(func=cmd_snapshots_list)

    # config command
    config_parser = subparsers.add_parser("config", help="Inspect configuration")
    config_subparsers = config_parser.add_subparsers(dest="config_command", help="Config commands")

    config_show_parser = config_subparsers.add_parser("show", help="Show effective configuration")
    config_show_parser.add_argument("--json", action="store_true", help="Output as JSON")
    config_show_parser.set_defaults(func=cmd_config_show)

    # Parse arguments
    args = parser.parse_args(argv)

    if getattr(args, "command", None) == "snapshots" and getattr(args, "snapshots_command", None) is None:
        snapshots_parser.print_help()
        return 0

    try:
        args.config_data = load_config(args.config)
    except DiagsnapError as e:
        print(f"Error: {e}")
        return 1

    _setup_logging(args.debug, args.config_data)

    # Run command
    if not hasattr(args, "func"):
        parser.print_help()
        return 0

    try:
        return args.func(args)
    except DiagsnapError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
