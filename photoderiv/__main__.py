"""
Main entry point for running the package as a module.

Usage:
    python -m photoderiv
    python -m photoderiv run --mode basic --dry-run
    python -m photoderiv count
"""

import sys
from .cli import main

if __name__ == '__main__':
    sys.exit(main())
