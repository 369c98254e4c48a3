"""
Flask integration.

Intended for use in a Flask application factory, for example:

.. code-block:: python

   from flask import Flask
   from signed_sessions.integration import Sessions
   from someapp import routes


   def create_web_app() -> Flask:
       app = Flask('someapp')
       app.config.from_pyfile('config.py')
       Sessions(app)
       app.register_blueprint(routes.blueprint)
       return app

Route functions can then use the module-level helpers, which act on the
current request:

.. code-block:: python

   from signed_sessions import integration

   @blueprint.route('/login', methods=['POST'])
   def login():
       response = make_response('', 200)
       integration.begin_session(response, {'user_id': user.user_id})
       return response

   @blueprint.route('/stuff')
   def stuff():
       token, state = integration.get_state()
       ...

See :mod:`.config` for the configuration parameters.
"""

import logging
import threading
from functools import wraps
from typing import Any, Optional, Tuple

from flask import Flask, current_app, has_app_context, request

from . import app_logging, config
from .manager import SessionManager
from .stores.base import SessionStore
from .stores.memory import MemoryStore
from .stores.redis_store import RedisStore, get_redis
from .tokens import Token
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

EXTENSION = 'signed_sessions'


class Sessions(object):
    """Attaches session management to a Flask application."""

    def __init__(self, app: Optional[Flask] = None) -> None:
        """
        Initialize ``app`` with :class:`.Sessions`.

        Parameters
        ----------
        app : :class:`Flask`

        """
        self.manager: Optional[SessionManager] = None
        self._lock = threading.Lock()
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        """Set configuration defaults, and register the extension."""
        config.init_app(app)
        if config.get_bool(app.config, 'SESSION_JSON_LOGGING'):
            app_logging.setup_logger()
        app.extensions[EXTENSION] = self

    def get_manager(self, app: Flask) -> SessionManager:
        """
        Get the :class:`.SessionManager` for ``app``, creating it once.

        Concurrent first requests all get the same manager, and so the same
        store.
        """
        if self.manager is None:
            with self._lock:
                if self.manager is None:
                    self.manager = get_session_manager(app)
        return self.manager


_register_lock = threading.Lock()


def _get_extension(app: Flask) -> Sessions:
    extension = app.extensions.get(EXTENSION)
    if extension is None:
        with _register_lock:
            extension = app.extensions.get(EXTENSION)
            if extension is None:
                logger.debug('Registering sessions extension on %s', app.name)
                extension = Sessions(app)
    return extension     # type: ignore


def get_store(app: Optional[Flask] = None) -> SessionStore:
    """Get a new session store, as configured."""
    cfg = config.get_application_config(app)
    kind = config.get(cfg, 'SESSION_STORE')
    duration = config.get_int(cfg, 'SESSION_DURATION')
    logger.debug('Using %s session store', kind)
    if kind == 'memory':
        return MemoryStore(duration=duration or None)
    if kind != 'redis':
        raise ConfigurationError(f'Unknown session store: {kind}')
    r = get_redis(config.get(cfg, 'REDIS_HOST'),
                  config.get_int(cfg, 'REDIS_PORT'),
                  config.get_int(cfg, 'REDIS_DATABASE'),
                  cluster=config.get_bool(cfg, 'REDIS_CLUSTER'),
                  test_after_idle=config.get_int(
                      cfg, 'REDIS_HEALTH_CHECK_INTERVAL'
                  ))
    return RedisStore(r, duration=duration or None,
                      prefix=config.get(cfg, 'SESSION_KEY_PREFIX'))


def get_session_manager(app: Optional[Flask] = None) -> SessionManager:
    """Get a new :class:`.SessionManager`, as configured."""
    cfg = config.get_application_config(app)
    keys = config.parse_signing_keys(cfg.get('SESSION_SIGNING_KEYS'))
    return SessionManager(get_store(app), keys,
                          config.get_int(cfg, 'SESSION_ID_LENGTH'))


def current_manager() -> SessionManager:
    """
    Get/create the :class:`.SessionManager` for this context.

    In an app context there is one manager per app, shared by every request.
    Apps that were not set up with :class:`.Sessions` have it registered on
    first use. Outside of an app context a new manager is built from the
    environment on each call, so the memory store is not allowed there.
    """
    if has_app_context():
        app = current_app._get_current_object()    # type: ignore
        return _get_extension(app).get_manager(app)
    if config.get(config.get_application_config(), 'SESSION_STORE') \
            == 'memory':
        raise ConfigurationError('The memory store needs a Flask app')
    return get_session_manager()


@wraps(SessionManager.begin_session)
def begin_session(response: Any, state: Any) -> Token:
    """Begin a new session."""
    return current_manager().begin_session(response, state)


def get_token(req: Optional[Any] = None) -> Token:
    """Get the verified token on ``req``, or on the current request."""
    return current_manager().get_token(req if req is not None else request)


def get_state(req: Optional[Any] = None) -> Tuple[Token, Any]:
    """Get the token and session state for ``req``, or the current request."""
    return current_manager().get_state(req if req is not None else request)


@wraps(SessionManager.update_state)
def update_state(token: Token, state: Any) -> None:
    """Replace the session state for ``token``."""
    return current_manager().update_state(token, state)


def end_session(request_or_token: Optional[Any] = None) -> None:
    """End the session for a token, a request, or the current request."""
    if request_or_token is None:
        request_or_token = request
    return current_manager().end_session(request_or_token)
