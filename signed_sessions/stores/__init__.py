"""
Session stores.

A store holds caller-defined session state, keyed by the ID portion of a
session token. Any implementation of :class:`.base.SessionStore` can be
passed to :class:`signed_sessions.manager.SessionManager`.
"""

from .base import SessionStore, store_key
from .memory import MemoryStore
from .redis_store import RedisStore, get_redis, get_redis_pool
