"""Signing key rotation and fallback verification."""

import secrets
from typing import Callable, Iterable, Iterator, Sequence, Tuple

from . import tokens
from .exceptions import InvalidKeyError, InvalidToken


class KeyRing(object):
    """
    An ordered, immutable collection of signing keys.

    New tokens are signed with a key chosen at random, so that keys can be
    rotated out gradually: a retired key stays on the ring until every token
    signed with it has expired in the store. Verification tries every key.
    """

    def __init__(self, keys: Iterable[tokens.Key],
                 chooser: Callable[[Sequence[bytes]], bytes] = secrets.choice
                 ) -> None:
        """
        Initialize with one or more signing keys.

        Parameters
        ----------
        keys : iterable
            Non-empty ``bytes`` or ``str`` keys.
        chooser : callable
            Picks one key from a sequence. The default draws from the OS
            CSPRNG and is safe to call from many threads at once.

        """
        if isinstance(keys, (bytes, bytearray, str)):
            keys = [keys]
        self._keys: Tuple[bytes, ...] = tuple(tokens.coerce_key(k)
                                              for k in keys)
        if not self._keys:
            raise InvalidKeyError('At least one signing key is required')
        self._choose = chooser

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[bytes]:
        return iter(self._keys)

    def __repr__(self) -> str:
        return f'KeyRing(<{len(self._keys)} keys>)'

    def select_for_issuance(self) -> bytes:
        """Choose a signing key for a new token."""
        return self._choose(self._keys)

    def issue(self, id_length: int = tokens.DEFAULT_ID_LENGTH,
              random_source: tokens.RandomSource = secrets.token_bytes) \
            -> tokens.Token:
        """Issue a new token signed with a randomly selected key."""
        return tokens.issue(self.select_for_issuance(), id_length,
                            random_source)

    def verify(self, token: str) -> tokens.Token:
        """
        Verify ``token`` against each key in the ring.

        Returns the token from the first key that verifies it. If none do,
        the last failure is raised; which key failed and why is not exposed.

        Raises
        ------
        :class:`.InvalidToken`

        """
        *earlier, last = self._keys
        for key in earlier:
            try:
                return tokens.verify(token, key)
            except InvalidToken:
                continue
        return tokens.verify(token, last)
