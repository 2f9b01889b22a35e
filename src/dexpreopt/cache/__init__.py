"""
dexpreopt Cache Module

Memoization for values derived from a build context:
- OnceKey: Identity token naming one cached computation
- OnceCache: Per-context table guaranteeing at-most-once computation per key
"""

from .once import OnceKey, OnceCache

__all__ = [
    'OnceKey',
    'OnceCache',
]
