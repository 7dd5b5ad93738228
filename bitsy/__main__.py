"""
Entry point for running bitsy as a module.

Usage:
    python -m bitsy parse program.bitsy
"""

import sys
from .cli import main

if __name__ == "__main__":
    sys.exit(main())
