"""
Logging setup for tuxmate.

Everything logs under the ``tuxmate`` namespace to stderr, with an optional
file handler. The TUI keeps stderr quiet unless ``--verbose`` is given.
"""
from __future__ import annotations

import logging
import sys
from typing import Optional

class TuxmateFormatter(logging.Formatter):
    FORMATS = {
        logging.DEBUG: "[%(name)s] %(message)s",
        logging.INFO: "[%(name)s] %(message)s",
        logging.WARNING: "[%(name)s] Warning: %(message)s",
        logging.ERROR: "[%(name)s] Error: %(message)s",
        logging.CRITICAL: "[%(name)s] CRITICAL: %(message)s",
    }

    def format(self, record):
        fmt = self.FORMATS.get(record.levelno, self._fmt)
        return logging.Formatter(fmt).format(record)

def setup_logging(level: int = logging.WARNING, log_file: Optional[str] = None, verbose: bool = False) -> logging.Logger:
    """
    Configure the root ``tuxmate`` logger.

    Calling it again replaces the previous handlers, so the CLI can reconfigure
    after parsing its flags.
    """
    if verbose:
        level = logging.DEBUG

    root = logging.getLogger("tuxmate")
    root.setLevel(level)
    root.handlers.clear()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(TuxmateFormatter())
    root.addHandler(console)

    if log_file:
        try:
            fh = logging.FileHandler(log_file, encoding="utf-8")
        except OSError as e:
            root.warning("cannot open log file %s: %s", log_file, e)
        else:
            fh.setLevel(logging.DEBUG)
            fh.setFormatter(logging.Formatter(
                "%(asctime)s [%(name)s] %(levelname)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            ))
            root.addHandler(fh)
            root.setLevel(logging.DEBUG)

    return root

def get_logger(name: str = "tuxmate") -> logging.Logger:
    if not name.startswith("tuxmate"):
        name = f"tuxmate.{name}"
    return logging.getLogger(name)
