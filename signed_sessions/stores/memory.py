"""In-process session store, for tests and single-process deployments."""

import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple

from ..exceptions import SessionSaveFailed, UnknownSession
from ..serializers import JSONSerializer, Serializer
from .base import SessionStore, store_key


class MemoryStore(SessionStore):
    """
    Holds serialized session state in a dict.

    State always passes through the serializer, so that callers never share
    mutable objects with the store. If ``duration`` (in seconds) is set,
    entries expire after that long without being read, mirroring
    :class:`.RedisStore`.
    """

    def __init__(self, serializer: Optional[Serializer] = None,
                 duration: Optional[float] = None,
                 clock: Callable[[], float] = time.monotonic) -> None:
        self._serializer = serializer or JSONSerializer()
        self._duration = duration
        self._clock = clock
        self._entries: Dict[str, Tuple[bytes, Optional[float]]] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _expires(self) -> Optional[float]:
        if self._duration is None:
            return None
        return self._clock() + self._duration

    def save(self, session_id: bytes, state: Any) -> None:
        try:
            data = self._serializer.dumps(state)
        except (TypeError, ValueError) as e:
            raise SessionSaveFailed(f'Failed to encode state: {e}') from e
        with self._lock:
            self._entries[store_key(session_id)] = (data, self._expires())

    def get(self, session_id: bytes) -> Any:
        key = store_key(session_id)
        with self._lock:
            data, expires = self._entries.get(key, (None, None))
            if data is not None and expires is not None \
                    and expires <= self._clock():
                del self._entries[key]
                data = None
            if data is None:
                raise UnknownSession('Failed to find session')
            # Reading a session keeps it alive.
            self._entries[key] = (data, self._expires())
        return self._serializer.loads(data)

    def delete(self, session_id: bytes) -> None:
        with self._lock:
            self._entries.pop(store_key(session_id), None)
