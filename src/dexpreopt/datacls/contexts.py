"""
dexpreopt Build Context

This module contains the BuildContext data class, which holds the per-build
values every derivation reads and owns the cache that memoizes them.
"""

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr
from typing import Callable, Dict, List, Optional, Tuple, TypeVar

from .. import constants
from ..cache import OnceCache, OnceKey
from ..utils import join_path
from .targets import OsType, Target

T = TypeVar('T')


class BuildContext(BaseModel):
    """
    Holds the shared, immutable state of a build configuration.

    Everything derived from it is cached in the context's own `OnceCache`, so
    derived values live exactly as long as the context.
    """
    model_config = ConfigDict(frozen=True)

    device_name: str = constants.DEFAULT_DEVICE_NAME
    out_dir: str = constants.DEFAULT_OUT_DIR
    targets: Dict[OsType, List[Target]] = Field(default_factory=dict)
    # Path of the global dexpreopt.config; None when the build does not provide one
    dexpreopt_global_config: Optional[str] = None

    _cache: OnceCache = PrivateAttr(default_factory=OnceCache)
    _file_deps: List[str] = PrivateAttr(default_factory=list)

    def once(self, key: OnceKey, factory: Callable[[], T]) -> T:
        return self._cache.get_or_compute(key, factory)

    @property
    def cache(self) -> OnceCache:
        return self._cache

    def path_for_output(self, *segments: str) -> str:
        """<out_dir>/<segments...>"""
        return join_path(self.out_dir, *segments)

    def path_for_device_output(self, *segments: str) -> str:
        """<out_dir>/<device_name>/<segments...>"""
        return self.path_for_output(self.device_name, *segments)

    def add_file_deps(self, *paths: str):
        """Record files the derived configuration was read from."""
        for path in paths:
            if path not in self._file_deps:
                self._file_deps.append(path)

    @property
    def file_deps(self) -> Tuple[str, ...]:
        return tuple(self._file_deps)
