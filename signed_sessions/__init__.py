"""
Signed bearer-token sessions for stateless web services.

Start by constructing a session store. For example, to use Redis:

.. code-block:: python

   from signed_sessions import SessionManager
   from signed_sessions.stores import RedisStore, get_redis

   store = RedisStore(get_redis('localhost', 6379, 0), duration=3600)

The duration is the time-to-live for session state, in seconds. It is reset
each time the state is read, so it controls how long idle sessions last.

Next, construct a :class:`.SessionManager` with your token signing keys and
the store. Tokens are digitally signed so that attempts to modify them (to
hop into someone else's session) are detected. If you supply more than one
key, the key for each new token is chosen at random; keys can be retired by
leaving them in the list until the sessions signed with them have expired.

.. code-block:: python

   manager = SessionManager(store, [os.environ['SIGNKEY_1'],
                                    os.environ['SIGNKEY_2']])

   token = manager.begin_session(response, {'user_id': 42})
   token, state = manager.get_state(request)
   manager.update_state(token, {'user_id': 42, 'visits': 1})
   manager.end_session(request)

:meth:`.SessionManager.begin_session` adds an ``Authorization`` header to the
response containing ``Bearer <token>``. Clients send that value back in the
``Authorization`` header on subsequent requests. Because browsers do not
attach this header automatically, it is not susceptible to typical CSRF
attacks.

If you would prefer to use a cookie or some other method of transmission, you
can bypass the manager and use :mod:`.tokens` and the store directly. For
Flask applications, see :mod:`.integration`.
"""

from .exceptions import SessionError, ConfigurationError, InvalidKeyError, \
    InvalidLengthError, RandomSourceError, NoTokenError, \
    UnsupportedTokenTypeError, InvalidToken, DecodingError, TooShortError, \
    SignatureInvalidError, StoreError, UnknownSession, CorruptSession, \
    SessionSaveFailed, SessionLookupFailed, SessionDeletionFailed
from .keyring import KeyRing
from .manager import SessionManager
from .tokens import Token, DEFAULT_ID_LENGTH, MIN_ID_LENGTH
