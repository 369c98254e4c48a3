"""Serializers for session state held in a session store."""

import json
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

import jwt

from .exceptions import CorruptSession


class Serializer(ABC):
    """Converts caller-defined session state to bytes and back."""

    @abstractmethod
    def dumps(self, state: Any) -> bytes:
        """Serialize ``state``."""

    @abstractmethod
    def loads(self, data: bytes) -> Any:
        """Deserialize state previously produced by :meth:`dumps`."""


class JSONSerializer(Serializer):
    """
    Stores session state as JSON.

    State made of anything other than the JSON types needs ``default`` (to
    convert it on the way in) and ``object_hook`` (to rebuild it on the way
    out), as for :func:`json.dumps` and :func:`json.loads`.
    """

    def __init__(self, default: Optional[Callable[[Any], Any]] = None,
                 object_hook: Optional[Callable[[dict], Any]] = None) -> None:
        self._default = default
        self._object_hook = object_hook

    def dumps(self, state: Any) -> bytes:
        return json.dumps(state, default=self._default).encode('utf-8')

    def loads(self, data: bytes) -> Any:
        try:
            return json.loads(data, object_hook=self._object_hook)
        except (ValueError, TypeError) as e:
            raise CorruptSession('Invalid or corrupted session data') from e


class JWTSerializer(JSONSerializer):
    """
    Stores session state as a signed JWT.

    Anything that can write to the store directly cannot forge or modify
    session state without ``secret``.
    """

    def __init__(self, secret: str, algorithm: str = 'HS256',
                 default: Optional[Callable[[Any], Any]] = None,
                 object_hook: Optional[Callable[[dict], Any]] = None) -> None:
        super(JWTSerializer, self).__init__(default, object_hook)
        self._secret = secret
        self._algorithm = algorithm

    def dumps(self, state: Any) -> bytes:
        # Round-trip through JSON first so that ``default`` applies.
        claims = {'state': json.loads(super(JWTSerializer, self).dumps(state))}
        encoded = jwt.encode(claims, self._secret, algorithm=self._algorithm)
        return encoded.encode('ascii')

    def loads(self, data: bytes) -> Any:
        try:
            claims = jwt.decode(data, self._secret,
                                algorithms=[self._algorithm])
            state = claims['state']
        except (KeyError, jwt.exceptions.InvalidTokenError) as e:
            raise CorruptSession('Invalid or corrupted session token') from e
        if self._object_hook is None:
            return state
        return json.loads(json.dumps(state), object_hook=self._object_hook)
