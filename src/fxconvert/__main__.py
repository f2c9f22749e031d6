# src/fxconvert/__main__.py
"""Module entry point: ``python -m fxconvert``."""

import sys

from fxconvert.app import main

if __name__ == "__main__":
    sys.exit(main())
