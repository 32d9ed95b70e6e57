#!/usr/bin/env python3
"""
syngestures-ctl: Command-line tool for inspecting syngestures configuration.

This tool allows:
- Listing the configuration search paths
- Showing the resolved gesture bindings
- Checking configuration files for errors
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from ..config import (
    ConfigurationStore,
    ConfigurationLoader,
    ConfigParseError,
    SourceKind,
    SourceResolver,
    load_config_file,
    log_diagnostics,
)

logger = logging.getLogger("syngestures")


class ConfigController:
    """
    High-level controller for configuration inspection.

    Bridges between CLI commands and the configuration core.
    """

    def __init__(self, prefix: Optional[str] = None):
        """Initialize controller with optional prefix override."""
        prefix_path = Path(prefix) if prefix else None
        self.resolver = SourceResolver(prefix_path)

    def list_paths(self) -> list:
        """List the search paths and whether each is present."""
        resolved = self.resolver.resolve()
        log_diagnostics(resolved.diagnostics, logger)

        paths = []
        for source in resolved.sources:
            if source.skipped:
                status = "skipped"
            elif source.kind is SourceKind.DIRECTORY:
                status = "present" if source.path.is_dir() else "missing"
            else:
                status = "present" if source.path.exists() else "missing"
            paths.append({
                "level": source.level.name.lower(),
                "kind": source.kind.name.lower(),
                "location": source.display,
                "status": status,
            })
        return paths

    def resolve(self) -> ConfigurationStore:
        """Resolve the configuration, logging any diagnostics."""
        resolution = ConfigurationLoader(self.resolver).load()
        log_diagnostics(resolution.diagnostics, logger)
        return resolution.store

    def check_file(self, path: str) -> Optional[str]:
        """
        Parse a single file on its own.

        Returns:
            Error message, or None if the file is valid
        """
        try:
            load_config_file(ConfigurationStore(), Path(path))
        except ConfigParseError as e:
            return e.message
        except OSError as e:
            return e.strerror or str(e)
        return None


def store_to_dict(store: ConfigurationStore) -> dict:
    """Plain data view of a resolved store, for JSON output."""
    result = {device: [] for device in store.devices}
    for device, gesture, action in store.bindings():
        entry = gesture.to_fields()
        if not action.is_none:
            entry["execute"] = action.command
        result[device].append(entry)
    return result


def cmd_paths(args, controller: ConfigController) -> int:
    """Handle 'paths' command."""
    paths = controller.list_paths()

    if args.json:
        print(json.dumps(paths, indent=2))
    else:
        print("Configuration sources (lowest precedence first):")
        for entry in paths:
            print(f"  [{entry['status']:>7}] {entry['location']}")

    return 0


def cmd_show(args, controller: ConfigController) -> int:
    """Handle 'show' command."""
    store = controller.resolve()

    if args.json:
        print(json.dumps(store_to_dict(store), indent=2))
        return 0

    if store.is_empty:
        print("No devices configured")
        return 0

    for device in store.devices:
        print(f"{device}:")
        gestures = store.get_gestures(device)
        if not gestures:
            print("  (no gestures)")
        for gesture in sorted(gestures):
            print(f"  {gesture}: {gestures[gesture]}")
        print()

    return 0


def cmd_check(args, controller: ConfigController) -> int:
    """Handle 'check' command."""
    status = 0
    for path in args.files:
        error = controller.check_file(path)
        if error:
            print(f"{path}: {error}", file=sys.stderr)
            status = 1
        else:
            print(f"{path}: OK")
    return status


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="syngestures-ctl",
        description="syngestures configuration utility",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  syngestures-ctl paths                   List configuration search paths
  syngestures-ctl show                    Show resolved gesture bindings
  syngestures-ctl check ~/.config/syngestures.toml
                                          Check a configuration file
""",
    )

    parser.add_argument(
        "--prefix",
        help="Override installation prefix",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output in JSON format",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # paths
    subparsers.add_parser("paths", help="List configuration search paths")

    # show
    subparsers.add_parser("show", help="Show resolved configuration")

    # check
    p = subparsers.add_parser("check", help="Check configuration files")
    p.add_argument("files", nargs="+", help="Files to check")

    return parser


def main(argv: Optional[list] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 0

    controller = ConfigController(args.prefix)

    commands = {
        "paths": cmd_paths,
        "show": cmd_show,
        "check": cmd_check,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args, controller)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
