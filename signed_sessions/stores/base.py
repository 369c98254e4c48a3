"""The contract that session stores must satisfy."""

import base64
from abc import ABC, abstractmethod
from typing import Any


def store_key(session_id: bytes, prefix: str = '') -> str:
    """
    Get the store key for a session ID.

    The key is the unpadded URL-safe base64 form of the ID. Use ``prefix`` to
    keep session keys apart from other keys in a shared backend.
    """
    encoded = base64.urlsafe_b64encode(session_id).decode('ascii')
    return prefix + encoded.rstrip('=')


class SessionStore(ABC):
    """
    Saves, gets, and deletes opaque session state keyed by session ID.

    Implementations decide how state is serialized and when it expires. The
    store is the only source of truth for whether a session exists.
    """

    @abstractmethod
    def save(self, session_id: bytes, state: Any) -> None:
        """
        Save ``state``, replacing anything previously saved for the ID.

        Raises
        ------
        :class:`.StoreError`

        """

    @abstractmethod
    def get(self, session_id: bytes) -> Any:
        """
        Get the state previously saved for the ID.

        Raises
        ------
        :class:`.UnknownSession`
            Raised if there is no state for the ID, including when it has
            expired.
        :class:`.StoreError`

        """

    @abstractmethod
    def delete(self, session_id: bytes) -> None:
        """
        Delete any state saved for the ID.

        Deleting an ID with no state is not an error.
        """
