"""CLI entry point for dirtrie.

Usage:
    python -m dirtrie [options] [query ...]

Example:
    python -m dirtrie lsb
    python -m dirtrie --recursive -d ~/projects README
    python -m dirtrie --config dirtrie.yaml --list
"""

from .cli import main
import sys

if __name__ == '__main__':
    sys.exit(main())
