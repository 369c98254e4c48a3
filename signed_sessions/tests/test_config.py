"""Tests for :mod:`signed_sessions.config`."""

import os
from unittest import TestCase, mock

from flask import Flask

from .. import config
from ..exceptions import ConfigurationError, InvalidKeyError


class TestGetApplicationConfig(TestCase):
    """Config comes from the app if there is one, or the environment."""

    def test_app(self):
        """An explicit app's config is used."""
        app = Flask('test')
        self.assertIs(config.get_application_config(app), app.config)

    def test_current_app(self):
        """The current app's config is used in an app context."""
        app = Flask('test')
        with app.app_context():
            self.assertIs(config.get_application_config(), app.config)

    def test_no_app(self):
        """Outside of an app context, the environment is used."""
        self.assertIs(config.get_application_config(), os.environ)


class TestInitApp(TestCase):
    """Tests for :func:`config.init_app`."""

    def test_defaults(self):
        """Defaults are set, without clobbering explicit values."""
        app = Flask('test')
        app.config['SESSION_DURATION'] = '60'
        config.init_app(app)
        self.assertEqual(app.config['SESSION_DURATION'], '60')
        self.assertEqual(app.config['SESSION_ID_LENGTH'], '32')
        self.assertEqual(app.config['REDIS_HOST'], 'localhost')
        self.assertNotIn('SESSION_SIGNING_KEYS', app.config)


class TestValues(TestCase):
    """Values are parsed from strings, falling back to the defaults."""

    def test_get_int(self):
        """Integers are parsed."""
        self.assertEqual(config.get_int({'REDIS_PORT': '7000'}, 'REDIS_PORT'),
                         7000)
        self.assertEqual(config.get_int({}, 'SESSION_ID_LENGTH'), 32)
        with self.assertRaises(ConfigurationError):
            config.get_int({'REDIS_PORT': 'foo'}, 'REDIS_PORT')

    def test_get_bool(self):
        """Flags are parsed."""
        for value in ['1', 'true', 'True', 'yes', True]:
            self.assertTrue(config.get_bool({'REDIS_CLUSTER': value},
                                            'REDIS_CLUSTER'))
        for value in ['0', 'false', '', False]:
            self.assertFalse(config.get_bool({'REDIS_CLUSTER': value},
                                             'REDIS_CLUSTER'))
        self.assertFalse(config.get_bool({}, 'REDIS_CLUSTER'))

    @mock.patch.dict(os.environ, {'SESSION_ID_LENGTH': '48'})
    def test_environ(self):
        """The environment works as a config."""
        cfg = config.get_application_config()
        self.assertEqual(config.get_int(cfg, 'SESSION_ID_LENGTH'), 48)


class TestParseSigningKeys(TestCase):
    """Tests for :func:`config.parse_signing_keys`."""

    def test_comma_separated(self):
        """A string is split on commas."""
        self.assertEqual(config.parse_signing_keys('foo, bar ,baz,'),
                         ['foo', 'bar', 'baz'])

    def test_list(self):
        """A list is used as-is."""
        self.assertEqual(config.parse_signing_keys([b'foo', 'bar']),
                         [b'foo', 'bar'])

    def test_bytes(self):
        """A single bytes value is one key."""
        self.assertEqual(config.parse_signing_keys(b'foo,bar'), [b'foo,bar'])

    def test_missing(self):
        """At least one key must be configured."""
        for value in [None, '', ' , ', []]:
            with self.assertRaises(InvalidKeyError):
                config.parse_signing_keys(value)
