#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

from tuxmate.aur import parse_helper
from tuxmate.catalog import CatalogError, load_catalog
from tuxmate.logger import get_logger, setup_logging
from tuxmate.session import Session

log = get_logger("cli")

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="tuxmate", description="Pick Linux apps, get one install command.")
    ap.add_argument("--data", default=None, help="catalog JSON (default: bundled catalog)")
    ap.add_argument("--distro", default=None, help="distro id, e.g. arch, ubuntu")
    ap.add_argument("--select", default="", help="comma-separated app ids")
    ap.add_argument("--helper", default="yay", help="AUR helper: yay or paru")
    ap.add_argument("--have-helper", action="store_true", help="AUR helper is already installed")
    ap.add_argument("--print", dest="emit", choices=("command", "script"), default=None)
    ap.add_argument("--output", default=None, help="write the script (or command) to FILE")
    ap.add_argument("-v", "--verbose", action="store_true")
    ap.add_argument("--log-file", default=None)
    return ap

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=logging.WARNING, log_file=args.log_file, verbose=args.verbose)

    try:
        catalog = load_catalog(args.data)
    except CatalogError as e:
        print(f"tuxmate: bad catalog: {e}", file=sys.stderr)
        return 1

    if args.distro and catalog.distro(args.distro) is None:
        known = ", ".join(d.id for d in catalog.distros)
        print(f"tuxmate: unknown distro {args.distro!r} (known: {known})", file=sys.stderr)
        return 2
    try:
        helper = parse_helper(args.helper)
    except ValueError:
        print(f"tuxmate: unknown AUR helper {args.helper!r} (yay or paru)", file=sys.stderr)
        return 2

    session = Session(catalog, distro_id=args.distro)
    session.set_helper(helper)
    session.set_has_helper_installed(args.have_helper)
    for app_id in [x.strip() for x in args.select.split(",") if x.strip()]:
        if not catalog.has_app(app_id):
            log.warning("unknown app %r ignored", app_id)
            continue
        if not session.selection.has(app_id):
            session.toggle(app_id)

    if args.emit is None and args.output is None:
        from tuxmate.ui_app import TuxmateApp
        TuxmateApp(catalog, session=session).run()
        return 0

    out = session.output()
    for app_id in out.excluded:
        log.warning("%s is not packaged for %s, skipped", app_id, session.distro_id)
    text = out.command if args.emit == "command" else out.script
    if args.emit == "command" and text:
        text += "\n"

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(text)
        if args.emit != "command":
            os.chmod(args.output, 0o755)
        log.info("wrote %s", args.output)
        return 0

    sys.stdout.write(text)
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
