#!/usr/bin/env python3
"""Pageflow - Paginate a text file.

Usage:
    python main.py [input] [-o output] [--width N] [--lines N]

Reads document.txt and writes result.txt when no files are given.
"""

import sys
from pageflow.cli import main


if __name__ == "__main__":
    sys.exit(main())
