"""Exceptions raised while issuing, verifying, and storing sessions."""


class SessionError(Exception):
    """Base class for all session errors."""


class ConfigurationError(SessionError, ValueError):
    """Raised when the manager or the token codec is misconfigured."""


class InvalidKeyError(ConfigurationError):
    """A signing key is empty, or no signing keys were provided."""


class InvalidLengthError(ConfigurationError):
    """The requested session ID length is below the minimum."""


class RandomSourceError(SessionError, RuntimeError):
    """The random source failed to supply the requested number of bytes."""


class NoTokenError(SessionError):
    """There is no session token on the request."""


class UnsupportedTokenTypeError(SessionError, ValueError):
    """The session token does not use the ``Bearer`` scheme."""


class InvalidToken(SessionError, ValueError):
    """Raised when a passed token is malformed or otherwise invalid."""


class DecodingError(InvalidToken):
    """The token is not valid URL-safe base64."""


class TooShortError(InvalidToken):
    """The decoded token is too short to hold an ID and a signature."""


class SignatureInvalidError(InvalidToken):
    """The token has been modified since it was signed."""


class StoreError(SessionError, RuntimeError):
    """Base class for errors raised by session stores."""


class UnknownSession(StoreError):
    """Failed to locate a session in the session store."""


class CorruptSession(StoreError):
    """Session data in the store could not be decoded."""


class SessionSaveFailed(StoreError):
    """Failed to save a session in the session store."""


class SessionLookupFailed(StoreError):
    """Failed to retrieve a session from the session store."""


class SessionDeletionFailed(StoreError):
    """Failed to delete a session in the session store."""
