"""
Session lifecycle over HTTP requests and responses.

:class:`SessionManager` issues a signed token when a session begins, saves
the caller's session state in a :class:`.SessionStore`, and returns the token
to the client in the ``Authorization`` response header. On later requests it
reads the token back from the ``Authorization`` header (or the ``auth`` query
parameter), verifies it, and loads the associated state.

The manager holds no mutable state, so a single instance can be shared
across threads. Whether a session exists is decided entirely by the store: an
ended or expired session looks the same as one that never existed.
"""

import logging
import secrets
from typing import Any, Iterable, Tuple, Union

from . import tokens
from .exceptions import InvalidLengthError, NoTokenError, \
    UnsupportedTokenTypeError
from .keyring import KeyRing
from .stores.base import SessionStore

logger = logging.getLogger(__name__)

HEADER_AUTHORIZATION = 'Authorization'
PARAM_AUTHORIZATION = 'auth'
AUTH_TYPE_BEARER = 'Bearer'


class SessionManager(object):
    """
    Begins, loads, updates, and ends sessions.

    Requests can be anything with ``headers`` and ``args`` mappings, and
    responses anything with a ``headers`` mapping; :class:`flask.Request`
    and :class:`flask.Response` both qualify.
    """

    def __init__(self, store: SessionStore,
                 signing_keys: Union[KeyRing, Iterable[tokens.Key]],
                 id_length: int = tokens.DEFAULT_ID_LENGTH,
                 random_source: tokens.RandomSource = secrets.token_bytes) \
            -> None:
        """
        Initialize the manager.

        Parameters
        ----------
        store : :class:`.SessionStore`
            Used to save, get, and delete session state.
        signing_keys : :class:`.KeyRing` or iterable
            One or more keys used to sign tokens. If several are provided,
            the key used for each new token is chosen at random.
        id_length : int
            Byte length of new session IDs (see
            :const:`.tokens.DEFAULT_ID_LENGTH`).
        random_source : callable
            Source of the random session ID bytes.

        Raises
        ------
        :class:`.ConfigurationError`

        """
        if isinstance(id_length, bool) or not isinstance(id_length, int) \
                or id_length < tokens.MIN_ID_LENGTH:
            raise InvalidLengthError(
                f'ID length must be at least {tokens.MIN_ID_LENGTH}'
            )
        if not isinstance(signing_keys, KeyRing):
            signing_keys = KeyRing(signing_keys)
        self._store = store
        self._keys = signing_keys
        self._id_length = id_length
        self._random_source = random_source

    @property
    def store(self) -> SessionStore:
        """The store that holds session state."""
        return self._store

    @property
    def keys(self) -> KeyRing:
        """The signing keys."""
        return self._keys

    @property
    def id_length(self) -> int:
        """Byte length of new session IDs."""
        return self._id_length

    def begin_session(self, response: Any, state: Any) -> tokens.Token:
        """
        Begin a new session, saving ``state`` to the store.

        An ``Authorization: Bearer <token>`` header is set on ``response``.
        Nothing is saved if a token cannot be issued.

        Returns
        -------
        :class:`.Token`

        """
        token = self._keys.issue(self._id_length, self._random_source)
        self._store.save(token.id, state)
        response.headers[HEADER_AUTHORIZATION] = \
            f'{AUTH_TYPE_BEARER} {token}'
        logger.debug('Began new session')
        return token

    def get_token(self, request: Any) -> tokens.Token:
        """
        Get and verify the session token on ``request``.

        Raises
        ------
        :class:`.NoTokenError`
            Raised if there is no token in the ``Authorization`` header or
            the ``auth`` query parameter.
        :class:`.UnsupportedTokenTypeError`
            Raised if the token is not a ``Bearer`` token.
        :class:`.InvalidToken`
            Raised if the token cannot be verified with any signing key.

        """
        value = request.headers.get(HEADER_AUTHORIZATION)
        if not value:
            value = request.args.get(PARAM_AUTHORIZATION)
        if not value:
            logger.debug('No session token on request')
            raise NoTokenError('No session token')

        prefix = f'{AUTH_TYPE_BEARER} '
        if not value.startswith(prefix):
            raise UnsupportedTokenTypeError('Unsupported session token type')
        return self._keys.verify(value[len(prefix):])

    def get_state(self, request: Any) -> Tuple[tokens.Token, Any]:
        """
        Get the verified token on ``request`` and its session state.

        Raises
        ------
        :class:`.UnknownSession`
            Raised if the store has no state for the token, for example
            because the session has ended or expired.

        """
        token = self.get_token(request)
        return token, self._store.get(token.id)

    def update_state(self, token: tokens.Token, state: Any) -> None:
        """
        Replace the session state for ``token``.

        The token is not verified again; pass one obtained from
        :meth:`begin_session`, :meth:`get_token`, or :meth:`get_state`.
        """
        self._store.save(token.id, state)

    def end_session(self, request_or_token: Any) -> None:
        """
        End a session by deleting its state from the store.

        Accepts either a :class:`.Token`, or a request that carries one.
        """
        if isinstance(request_or_token, tokens.Token):
            token = request_or_token
        else:
            token = self.get_token(request_or_token)
        self._store.delete(token.id)
        logger.debug('Ended session')
