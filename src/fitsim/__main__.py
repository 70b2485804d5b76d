"""
Entry point for running fitsim as a module.

This allows running the CLI with: python -m fitsim f < pfile
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
