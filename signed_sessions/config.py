"""
Configuration for session management.

Values are read from the Flask application config where one is available, and
from the process environment otherwise. Use :func:`init_app` to set defaults
on an application.
"""

import os
from typing import Any, List, Mapping, Optional, Union

from flask import current_app

from .exceptions import ConfigurationError, InvalidKeyError

DEFAULTS = {
    'SESSION_ID_LENGTH': '32',
    'SESSION_STORE': 'redis',
    'SESSION_DURATION': '7200',
    'SESSION_KEY_PREFIX': 'sid:',
    'SESSION_JSON_LOGGING': '0',
    'REDIS_HOST': 'localhost',
    'REDIS_PORT': '6379',
    'REDIS_DATABASE': '0',
    'REDIS_CLUSTER': '0',
    'REDIS_HEALTH_CHECK_INTERVAL': '300',
}
"""Default values. There is no default for ``SESSION_SIGNING_KEYS``."""


def get_application_config(app: Optional[Any] = None) -> Mapping[str, Any]:
    """
    Get a configuration from the current app, or from the environment.

    Parameters
    ----------
    app : :class:`flask.Flask`
        If not provided, the current application (if any) is used.

    Returns
    -------
    mapping
        The app's ``config``, or :data:`os.environ`.

    """
    if app is not None:
        return app.config
    try:
        return current_app.config
    except RuntimeError:    # Working outside of application context.
        return os.environ


def init_app(app: Any) -> None:
    """Set default configuration parameters for an application instance."""
    for key, value in DEFAULTS.items():
        app.config.setdefault(key, value)


def get(config: Mapping[str, Any], key: str) -> Any:
    """Get a value from ``config``, falling back to :data:`DEFAULTS`."""
    return config.get(key, DEFAULTS.get(key))


def get_bool(config: Mapping[str, Any], key: str) -> bool:
    """Get a flag; ``'1'``, ``'true'``, ``'yes'``, or ``True`` are set."""
    value = get(config, key)
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ('1', 'true', 'yes', 'on')


def get_int(config: Mapping[str, Any], key: str) -> int:
    """Get an integer value."""
    try:
        return int(get(config, key))
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f'{key} must be an integer') from e


def parse_signing_keys(value: Union[None, str, bytes, List[Any]]) \
        -> List[Union[str, bytes]]:
    """
    Get signing keys from a config value.

    A string is split on commas; a list is used as-is. Whitespace around each
    key is stripped, and empty items are dropped.

    Raises
    ------
    :class:`.InvalidKeyError`
        Raised if no keys remain.

    """
    if value is None:
        items: List[Any] = []
    elif isinstance(value, str):
        items = value.split(',')
    elif isinstance(value, (bytes, bytearray)):
        items = [bytes(value)]
    else:
        items = list(value)
    keys = [item.strip() for item in items if item and item.strip()]
    if not keys:
        raise InvalidKeyError('No session signing keys configured')
    return keys
