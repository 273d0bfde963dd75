"""Pageflow CLI entry point.

Allows running via `python -m pageflow` and provides the console script
defined in `pyproject.toml`.
"""

import sys

from .cli import main

if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
