"""
Session store backed by Redis.

.. code-block:: python

   from signed_sessions.stores import RedisStore, get_redis

   store = RedisStore(get_redis('localhost', 6379, 0), duration=3600)

The ``duration`` is the time-to-live for session state. It is reset each time
the state is read, so it controls how long idle sessions last.
"""

import logging
from typing import Any, Optional, Union

import redis
from redis import exceptions as redis_exceptions

from ..exceptions import SessionSaveFailed, SessionLookupFailed, \
    SessionDeletionFailed, UnknownSession
from ..serializers import JSONSerializer, Serializer
from .base import SessionStore, store_key

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = 'sid:'
"""Keeps session keys separate from other keys in the same Redis."""


def get_redis_pool(host: str, port: int, db: int, test_after_idle: int = 300,
                   max_connections: int = 512) -> redis.ConnectionPool:
    """
    Get a connection pool with defaults that work well in most situations.

    Connections that have been idle for ``test_after_idle`` seconds or more
    are health-checked with ``PING`` before they are used. Set it to ``0`` to
    turn health checks off.
    """
    return redis.ConnectionPool(host=host, port=port, db=db,
                                max_connections=max_connections,
                                health_check_interval=test_after_idle)


def get_redis(host: str, port: int, db: int = 0, cluster: bool = False,
              test_after_idle: int = 300) \
        -> Union[redis.Redis, redis.RedisCluster]:
    """Get a Redis client, or a cluster client if ``cluster`` is set."""
    logger.debug('New Redis connection at %s, port %s', host, port)
    if cluster:
        return redis.RedisCluster(host=host, port=port,
                                  health_check_interval=test_after_idle)
    return redis.Redis(connection_pool=get_redis_pool(host, port, db,
                                                      test_after_idle))


class RedisStore(SessionStore):
    """
    Stores serialized session state in Redis, with a TTL.

    The Redis client is thread safe, and connections are taken from its pool
    when a command is executed. This class adds key naming, serialization,
    and expiry.
    """

    def __init__(self, r: Union[redis.Redis, redis.RedisCluster],
                 duration: Optional[int] = 7200,
                 prefix: str = DEFAULT_PREFIX,
                 serializer: Optional[Serializer] = None) -> None:
        self.r = r
        self.duration = duration
        self.prefix = prefix
        self._serializer = serializer or JSONSerializer()

    def _key(self, session_id: bytes) -> str:
        return store_key(session_id, self.prefix)

    def save(self, session_id: bytes, state: Any) -> None:
        """Save ``state`` with a TTL of :attr:`duration` seconds."""
        try:
            data = self._serializer.dumps(state)
        except (TypeError, ValueError) as e:
            raise SessionSaveFailed(f'Failed to encode state: {e}') from e
        ex = int(self.duration) if self.duration else None
        try:
            self.r.set(self._key(session_id), data, ex=ex)
        except redis_exceptions.ConnectionError as e:
            raise SessionSaveFailed(f'Connection failed: {e}') from e
        except redis_exceptions.RedisError as e:
            raise SessionSaveFailed(f'Failed to save: {e}') from e

    def get(self, session_id: bytes) -> Any:
        """Get the state for the ID, and reset its TTL."""
        key = self._key(session_id)
        try:
            if self.duration:
                # Pipeline GET and EXPIRE to get the state and reset its TTL.
                pipe = self.r.pipeline()
                pipe.get(key)
                pipe.expire(key, int(self.duration))
                data, _ = pipe.execute()
            else:
                data = self.r.get(key)
        except redis_exceptions.ConnectionError as e:
            raise SessionLookupFailed(f'Connection failed: {e}') from e
        except redis_exceptions.RedisError as e:
            raise SessionLookupFailed(f'Failed to get: {e}') from e
        if not data:
            raise UnknownSession('Failed to find session')
        return self._serializer.loads(data)

    def delete(self, session_id: bytes) -> None:
        """Delete all state for the ID."""
        try:
            self.r.delete(self._key(session_id))
        except redis_exceptions.ConnectionError as e:
            raise SessionDeletionFailed(f'Connection failed: {e}') from e
        except redis_exceptions.RedisError as e:
            raise SessionDeletionFailed(f'Failed to delete: {e}') from e
