import logging
import threading
from typing import Any, Callable, Dict, Iterable, Optional, TypeVar

from ..exceptions import CircularDependencyError

logger = logging.getLogger(__name__)

T = TypeVar('T')


class OnceKey:
    """
    Opaque identity token for a memoized computation.

    Two keys are equal only if they are the same object, so two keys created
    with the same name never share a cache slot.
    """
    __slots__ = ("name",)

    def __init__(self, name: str):
        self.name = name

    def __repr__(self) -> str:
        return f"OnceKey({self.name!r})"


class OnceCache:
    """
    Compute-once table owned by a build context.

    Each key is computed at most once. Concurrent first callers of the same
    key wait on a per-key lock and then read the stored value; different keys
    compute in parallel. A value is published only after its factory returns,
    and a factory that raises leaves the slot empty.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._values: Dict[OnceKey, Any] = {}
        self._key_locks: Dict[OnceKey, threading.Lock] = {}
        self._owners: Dict[OnceKey, int] = {}

    def get_or_compute(self, key: OnceKey, factory: Callable[[], T]) -> T:
        with self._lock:
            if key in self._values:
                return self._values[key]
            if self._owners.get(key) == threading.get_ident():
                raise CircularDependencyError(f"{key.name} requested its own value while being computed.")
            key_lock = self._key_locks.setdefault(key, threading.Lock())

        with key_lock:
            with self._lock:
                if key in self._values:
                    return self._values[key]
                self._owners[key] = threading.get_ident()
            try:
                logger.debug(f"Computing '{key.name}'...")
                value = factory()
            finally:
                with self._lock:
                    self._owners.pop(key, None)
            with self._lock:
                self._values[key] = value
            return value

    def try_insert(self, key: OnceKey, value: Any, blocked_by: Iterable[OnceKey] = ()) -> bool:
        """
        Store `value` under `key` unless `key` or any key in `blocked_by` is
        already stored or being computed. Returns whether the value was stored.
        """
        with self._lock:
            for k in (key, *blocked_by):
                if k in self._values or k in self._owners:
                    return False
            self._values[key] = value
            return True

    def contains(self, key: OnceKey) -> bool:
        with self._lock:
            return key in self._values

    def peek(self, key: OnceKey, default: Optional[Any] = None) -> Any:
        """Return the stored value for `key` without computing it."""
        with self._lock:
            return self._values.get(key, default)

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)
