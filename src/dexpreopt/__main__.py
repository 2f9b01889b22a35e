"""
dexpreopt - Main entry point

This module delegates to cli.py.
"""

from .cli import main

if __name__ == "__main__":
    main()
