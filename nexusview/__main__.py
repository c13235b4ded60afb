#!/usr/bin/env python3
'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''

import sys
import argparse
from pathlib import Path

from nexusview.core.log import Log
from nexusview.core.settings import Settings
from nexusview.core.snapshot import SnapshotSource

DEFAULT_SETTINGS = Path("~/.config/nexusview/settings.json")

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="NexusView character inventory browser")
    parser.add_argument(
        "--snapshot",
        type=str, default=None,
        help="Scanner snapshot (JSON) to display."
    )
    parser.add_argument(
        "--settings",
        type=str, default=str(DEFAULT_SETTINGS),
        help="Profile file holding view options and expanded groups."
    )
    parser.add_argument(
        "--verbosity",
        type=int, default=0,
        help="Set verbosity level (0=quiet, 1=normal, 2=verbose, 3+=debug)"
    )
    parser.add_argument(
        "--stdexp",
        action="store_true",
        help="Use standard exception handling to stdout / stderr."
    )
    parser.add_argument(
        "--headless",
        choices=("currency", "items", "storage", "reputation"), default=None,
        help="Render one tab as text to stdout instead of opening a window."
    )
    parser.add_argument(
        "--search",
        type=str, default="",
        help="Search text applied to the --headless tab."
    )
    parser.add_argument(
        "--log-file",
        type=str, default=None,
        help="Write the log to this file on exit."
    )
    return parser

def render_headless(source, settings, tab: str, query: str = "") -> str:
    from nexusview.ui.headless import HeadlessHost
    from nexusview.ui.view import TabView

    host = HeadlessHost()
    view = TabView(host, source, settings)
    view.current = tab
    view.search_text[tab] = query
    container = host.create_container()
    height = view.render_tab(container)
    return f"{host.dump(container)}\n-- {tab}: content height {height}px"

def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    Log.set_verbosity(args.verbosity)

    try:
        source = SnapshotSource.from_file(args.snapshot) if args.snapshot else SnapshotSource.empty()
        settings = Settings(args.settings).load()
    except ValueError as e:
        print(f"nexusview: {e}", file=sys.stderr)
        return 2

    try:
        if args.headless:
            print(render_headless(source, settings, args.headless, args.search))
            return 0

        from nexusview.app import main as run_app
        return run_app(source, settings, verbosity=args.verbosity, stdexp=args.stdexp,
                       snapshot_path=args.snapshot) or 0
    finally:
        if args.log_file:
            Log.write_to_file(args.log_file)

if __name__ == "__main__":
    sys.exit(main())
