"""
Entry point for running methodlint as a module.

Usage:
    python -m methodlint scan ./src
    python -m methodlint --help
"""

import sys
from methodlint.cli import main

if __name__ == "__main__":
    sys.exit(main())
