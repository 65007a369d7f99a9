import dataclasses
import time
from collections.abc import Callable
from threading import Lock
from typing import Any, overload


@dataclasses.dataclass(slots=True, frozen=True)
class _ExpiringCacheEntry[VT]:
    value: VT
    inserted_at: float


class ExpiringCache[KT, VT]:
    """
    A cache holding key-value pairs that expire a fixed number of seconds after insertion.

    Reading an entry does not extend its lifetime, and setting a value at an existing key replaces
    the entry and restarts its lifetime. Expired entries are treated as absent and are removed
    lazily when encountered, or all at once by `expire()`. The number of entries is unbounded.

    Every operation is guarded by a lock, so a single instance may be shared by threads and by
    concurrent tasks. The lock is never held while calling code awaits.

    The clock is injectable through `timer`, which must return monotonically increasing seconds.
    """

    def __init__(
        self,
        ttl: float,
        *,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl <= 0:
            msg = "TTL must be positive."
            raise ValueError(msg)

        self._ttl = ttl
        self._timer = timer
        self._entries: dict[KT, _ExpiringCacheEntry[VT]] = {}
        self._lock = Lock()

    def __repr__(self) -> str:  # pragma: no cover
        return f"{self.__class__.__name__}(ttl={self._ttl}, entries={len(self._entries)})"

    def __reduce__(self) -> tuple[Any, ...]:
        # Locks cannot be pickled, so rebuild an empty cache with the same TTL
        return self.__class__, (self._ttl,)

    def _is_expired(self, entry: _ExpiringCacheEntry[VT], now: float) -> bool:
        return now - entry.inserted_at >= self._ttl

    @property
    def ttl(self) -> float:
        return self._ttl

    @overload
    def get(self, key: KT) -> VT | None: ...

    @overload
    def get[DT](self, key: KT, default: DT) -> VT | DT: ...

    def get(self, key: KT, default: Any = None) -> Any:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return default
            if self._is_expired(entry, self._timer()):
                del self._entries[key]
                return default
            return entry.value

    def set(self, key: KT, value: VT) -> None:
        with self._lock:
            self._entries[key] = _ExpiringCacheEntry(value=value, inserted_at=self._timer())

    def __getitem__(self, key: KT) -> VT:
        sentinel = object()
        value = self.get(key, sentinel)
        if value is sentinel:
            raise KeyError(key)
        return value

    def __setitem__(self, key: KT, value: VT) -> None:
        self.set(key, value)

    def __contains__(self, key: object) -> bool:
        sentinel = object()
        return self.get(key, sentinel) is not sentinel  # type: ignore[arg-type]

    def __len__(self) -> int:
        with self._lock:
            now = self._timer()
            return sum(not self._is_expired(entry, now) for entry in self._entries.values())

    def expire(self) -> int:
        """
        Remove all expired entries and return the number removed.
        """

        with self._lock:
            now = self._timer()
            expired_keys = [
                key for key, entry in self._entries.items() if self._is_expired(entry, now)
            ]
            for key in expired_keys:
                del self._entries[key]
            return len(expired_keys)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
