"""Linepad CLI entry point.

Allows running via `python -m linepad` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import logging
import os
import sys

from .version import get_version_string

LOG_FILE_ENV = "LINEPAD_LOG_FILE"
LOG_LEVEL_ENV = "LINEPAD_LOG_LEVEL"


def configure_logging() -> None:
    """Send log records to a file when ``LINEPAD_LOG_FILE`` is set.

    The editor owns the screen, so nothing is logged to the terminal.
    """
    log_file = os.environ.get(LOG_FILE_ENV)
    if not log_file:
        logging.getLogger("linepad").addHandler(logging.NullHandler())
        return
    level_name = os.environ.get(LOG_LEVEL_ENV, "DEBUG").upper()
    logging.basicConfig(
        filename=log_file,
        level=getattr(logging, level_name, logging.DEBUG),
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s (%(filename)s:%(lineno)d)",
    )


def main() -> None:
    args = sys.argv[1:]
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return

    configure_logging()
    # Lazy import to avoid touching the terminal for --version
    from .editor import Editor
    editor = Editor()
    if args:
        editor.load_file(args[0])
    editor.run()
    print("Goodbye!")


if __name__ == "__main__":  # pragma: no cover
    main()
