"""Marknote CLI entry point.

Allows running via `python -m marknote` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

from .constants import EditorConstants
from .version import get_version_string

USAGE = "usage: marknote [--version] [--textual] [FILE]"


def configure_logging(environ=os.environ) -> Optional[str]:
    """Send debug logging to the file named by MARKNOTE_DEBUG, if set.

    Logging goes to a file because the terminal is taken over by the editor.
    """
    path = environ.get(EditorConstants.DEBUG_LOG_ENV)
    if not path:
        return None
    logging.basicConfig(
        filename=path,
        level=logging.DEBUG,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    return path


def main(argv: Optional[list[str]] = None) -> None:
    args = sys.argv[1:] if argv is None else list(argv)
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return
    if args and args[0] in ("--help", "-h"):
        print(USAGE)
        return

    use_textual = "--textual" in args
    files = [a for a in args if a != "--textual"]
    if len(files) > 1 or any(f.startswith("-") for f in files):
        print(USAGE, file=sys.stderr)
        sys.exit(2)
    filename = files[0] if files else None

    configure_logging()

    # Lazy imports keep --version free of UI deps
    if use_textual:
        from .textual_app import main as textual_main
        textual_main(filename)
        return

    from .editor import Editor
    editor = Editor()
    if filename:
        editor.load_file(filename)
    editor.run()


if __name__ == "__main__":  # pragma: no cover
    main()
