"""
Crypto-random, digitally-signed session tokens.

A token is the session ID (a series of crypto-random bytes) followed by an
HMAC-SHA256 signature of that ID. The whole buffer is transported as a single
URL-safe base64 string, for example in an ``Authorization: Bearer`` header.

.. code-block:: python

   from signed_sessions import tokens

   token = tokens.issue(b'thesigningkey')
   value = str(token)      # Give this to the client.

   # ...later, on a subsequent request...
   token = tokens.verify(value, b'thesigningkey')
   token.id                # The crypto-random session ID.

Tokens are not stored anywhere; only the ID is used as the key for the
session state in a :class:`.stores.base.SessionStore`.
"""

import base64
import binascii
import hashlib
import hmac
import re
import secrets
from typing import Callable, Union

from .exceptions import InvalidKeyError, InvalidLengthError, \
    RandomSourceError, DecodingError, TooShortError, SignatureInvalidError

MIN_ID_LENGTH = 16
"""
Minimum ID byte length allowed.

See https://owasp.org/www-community/vulnerabilities/Insufficient_Session-ID_Length
"""

DEFAULT_ID_LENGTH = 32
"""Default ID byte length."""

SIGNATURE_SIZE = hashlib.sha256().digest_size
"""Byte length of the HMAC-SHA256 signature at the end of each token."""

MIN_TOKEN_LENGTH = MIN_ID_LENGTH + SIGNATURE_SIZE
"""Smallest decoded token that :func:`verify` will accept."""

RandomSource = Callable[[int], bytes]
Key = Union[bytes, str]

_URLSAFE = re.compile(r'[A-Za-z0-9_-]*={0,2}')


def coerce_key(key: Key) -> bytes:
    """Get a signing key as bytes, rejecting zero-length keys."""
    if isinstance(key, str):
        key = key.encode('utf-8')
    if not isinstance(key, (bytes, bytearray)) or len(key) == 0:
        raise InvalidKeyError('Zero-length signing key')
    return bytes(key)


def _sign(key: bytes, session_id: bytes) -> bytes:
    return hmac.new(key, session_id, hashlib.sha256).digest()


def _b64encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode('ascii')


def _b64decode(value: str) -> bytes:
    """Strictly decode URL-safe base64, with or without padding."""
    if _URLSAFE.fullmatch(value) is None:
        raise DecodingError('Token is not URL-safe base64')
    data = value.rstrip('=')
    if data != value and len(value) % 4:
        raise DecodingError('Token has malformed padding')
    try:
        buf = base64.urlsafe_b64decode(data + '=' * (-len(data) % 4))
    except (binascii.Error, ValueError) as e:
        raise DecodingError(f'Error base64-decoding the token: {e}') from e
    # Reject encodings with non-zero trailing bits, which would otherwise
    # let several strings decode to the same token.
    if _b64encode(buf).rstrip('=') != data:
        raise DecodingError('Token is not canonically encoded')
    return buf


class Token(object):
    """
    A crypto-random, digitally-signed session token.

    Use :func:`issue` to generate a new token, and :func:`verify` to verify a
    token string sent by a client. ``str(token)`` gives the transport-safe
    string form.
    """

    __slots__ = ('_buf',)

    def __init__(self, buf: bytes) -> None:
        """Wrap a complete ``ID || signature`` buffer."""
        self._buf = bytes(buf)

    @property
    def id(self) -> bytes:
        """The crypto-random session ID bytes."""
        return self._buf[:-SIGNATURE_SIZE]

    @property
    def session_id(self) -> str:
        """Text form of :attr:`id`, suitable for use as a store key."""
        return _b64encode(self.id).rstrip('=')

    def encode(self) -> str:
        """Get the URL-safe base64 form of the token."""
        return encode(self)

    def __str__(self) -> str:
        return self.encode()

    def __repr__(self) -> str:
        return f'Token(session_id={self.session_id!r})'

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return hmac.compare_digest(self._buf, other._buf)

    def __hash__(self) -> int:
        return hash(self._buf)


def issue(signing_key: Key, id_length: int = DEFAULT_ID_LENGTH,
          random_source: RandomSource = secrets.token_bytes) -> Token:
    """
    Generate a new signed token.

    Parameters
    ----------
    signing_key : bytes or str
        Used with HMAC-SHA256 to sign the ID. Must not be empty.
    id_length : int
        Byte length of the session ID. Must be at least
        :const:`MIN_ID_LENGTH`.
    random_source : callable
        Takes a byte count and returns that many random bytes. Defaults to
        :func:`secrets.token_bytes`.

    Returns
    -------
    :class:`.Token`

    Raises
    ------
    :class:`.InvalidKeyError`
    :class:`.InvalidLengthError`
    :class:`.RandomSourceError`
        Raised if the random source fails, or returns the wrong number of
        bytes.

    """
    key = coerce_key(signing_key)
    if isinstance(id_length, bool) or not isinstance(id_length, int) \
            or id_length < MIN_ID_LENGTH:
        raise InvalidLengthError(
            f'ID length must be at least {MIN_ID_LENGTH}'
        )
    try:
        session_id = random_source(id_length)
    except Exception as e:
        raise RandomSourceError(f'Error reading random bytes: {e}') from e
    if not isinstance(session_id, (bytes, bytearray)) \
            or len(session_id) != id_length:
        raise RandomSourceError(f'Random source did not supply {id_length}'
                                ' bytes')
    session_id = bytes(session_id)
    return Token(session_id + _sign(key, session_id))


def verify(token: Union[str, bytes], signing_key: Key) -> Token:
    """
    Verify a token string using ``signing_key``.

    Parameters
    ----------
    token : str
        URL-safe base64 token, as produced by :func:`encode`.
    signing_key : bytes or str

    Returns
    -------
    :class:`.Token`
        Wraps the decoded buffer verbatim, so that ``str()`` round-trips.

    Raises
    ------
    :class:`.InvalidKeyError`
    :class:`.DecodingError`
    :class:`.TooShortError`
    :class:`.SignatureInvalidError`

    """
    key = coerce_key(signing_key)
    if isinstance(token, (bytes, bytearray)):
        try:
            token = bytes(token).decode('ascii')
        except UnicodeDecodeError as e:
            raise DecodingError('Token is not ASCII') from e
    if not isinstance(token, str):
        raise DecodingError('Token must be a string')

    buf = _b64decode(token)
    if len(buf) < MIN_TOKEN_LENGTH:
        raise TooShortError('Token not long enough')

    session_id, signature = buf[:-SIGNATURE_SIZE], buf[-SIGNATURE_SIZE:]
    if not hmac.compare_digest(signature, _sign(key, session_id)):
        raise SignatureInvalidError('Token has been modified since signed')
    return Token(buf)


def encode(token: Token) -> str:
    """Get the URL-safe base64 form of ``token``."""
    return _b64encode(token._buf)
