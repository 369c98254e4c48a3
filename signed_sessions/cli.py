"""
Command-line helpers for signing keys and session tokens.

Be sure that you are using the same keys when running these commands as when
you run the app. Set ``SESSION_SIGNING_KEYS=key1,key2`` in your environment.

.. code-block:: bash

   $ signed-sessions generate-key
   3c2Qq3pN0GZ0v1p8v2mQh6f0Yk2zWvM6cJt6ZzB2yL4=
   $ SESSION_SIGNING_KEYS=foosecret signed-sessions issue-token
   Bearer 9mBv...
   $ SESSION_SIGNING_KEYS=foosecret signed-sessions verify-token "Bearer 9mBv..."
   9mBv...

Pass the token with its ``Bearer`` prefix, since a bare token may start with
a hyphen.
"""

import base64
import os
import secrets

import click

from . import config, tokens
from .exceptions import ConfigurationError, InvalidToken
from .keyring import KeyRing


def _keyring() -> KeyRing:
    try:
        return KeyRing(config.parse_signing_keys(
            os.environ.get('SESSION_SIGNING_KEYS')
        ))
    except ConfigurationError as e:
        raise click.UsageError(str(e)) from e


@click.group()
def main() -> None:
    """Work with signed session tokens."""


@main.command('generate-key')
@click.option('--length', default=32, show_default=True,
              help='Number of random bytes in the key.')
def generate_key(length: int) -> None:
    """Print a new random signing key."""
    if length < 1:
        raise click.BadParameter('must be positive', param_hint='--length')
    key = base64.urlsafe_b64encode(secrets.token_bytes(length))
    click.echo(key.decode('ascii'))


@main.command('issue-token')
@click.option('--id-length', default=tokens.DEFAULT_ID_LENGTH,
              show_default=True, help='Byte length of the session ID.')
def issue_token(id_length: int) -> None:
    """Print a new token, signed with one of the configured keys."""
    try:
        token = _keyring().issue(id_length)
    except ConfigurationError as e:
        raise click.BadParameter(str(e), param_hint='--id-length') from e
    click.echo(f'Bearer {token}')


@main.command('verify-token')
@click.argument('token')
def verify_token(token: str) -> None:
    """Verify TOKEN, and print its session ID."""
    if token.startswith('Bearer '):
        token = token[len('Bearer '):]
    try:
        verified = _keyring().verify(token)
    except InvalidToken as e:
        raise click.ClickException('invalid token') from e
    click.echo(verified.session_id)
