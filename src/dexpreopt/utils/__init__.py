"""
dexpreopt Utils Module

- logger: Logging setup and configuration
- util: Order-preserving list helpers and path joining

Usage:
    from dexpreopt.utils import setup_logger, remove_list_from_list
"""

from .logger import setup_logger, parse_module_levels
from .util import remove_list_from_list, concat, copy_of, join_path

__all__ = [
    'setup_logger',
    'parse_module_levels',
    # List helpers
    'remove_list_from_list',
    'concat',
    'copy_of',
    # Paths
    'join_path',
]
