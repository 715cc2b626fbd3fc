"""wikiview CLI entry point.

Allows running via `python -m wikiview` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import importlib.metadata
import logging
import sys
from pathlib import Path

import platformdirs

USAGE = "usage: wikiview [--version] [--debug] PAGE.json"


def get_version_string() -> str:
    try:
        return importlib.metadata.version("wikiview")
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


def setup_logging(debug: bool) -> Path:
    """Log to a file; the terminal belongs to the reader."""
    log_dir = Path(platformdirs.user_log_dir("wikiview"))
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "wikiview.log"
    logging.basicConfig(
        filename=str(log_file),
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return log_file


def main() -> None:
    # Very small arg parsing: version, debug flag and the page file
    args = sys.argv[1:]
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return

    debug = "--debug" in args
    args = [arg for arg in args if arg != "--debug"]
    if len(args) != 1:
        print(USAGE, file=sys.stderr)
        sys.exit(2)

    try:
        setup_logging(debug)
    except OSError as e:
        print(f"wikiview: logging disabled: {e}", file=sys.stderr)

    # Lazy import to avoid importing UI deps for --version
    from .app import Viewer
    from .loader import PageLoadError

    try:
        viewer = Viewer(args[0], debug=debug)
    except PageLoadError as e:
        print(f"wikiview: {e}", file=sys.stderr)
        sys.exit(1)
    viewer.run()


if __name__ == "__main__":  # pragma: no cover
    main()
