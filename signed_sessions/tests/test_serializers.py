"""Tests for :mod:`signed_sessions.serializers`."""

from datetime import date
from unittest import TestCase

import jwt

from .. import serializers
from ..exceptions import CorruptSession


def _default(obj):
    if isinstance(obj, date):
        return {'__date__': obj.isoformat()}
    raise TypeError(f'Cannot serialize {obj!r}')


def _object_hook(obj):
    if '__date__' in obj:
        return date.fromisoformat(obj['__date__'])
    return obj


class TestJSONSerializer(TestCase):
    """Session state can be stored as JSON."""

    def test_dumps_bytes(self):
        """State is serialized to UTF-8 bytes."""
        data = serializers.JSONSerializer().dumps({'name': 'tëster'})
        self.assertIsInstance(data, bytes)
        self.assertEqual(serializers.JSONSerializer().loads(data),
                         {'name': 'tëster'})

    def test_unsupported_type(self):
        """Types that JSON cannot represent raise TypeError."""
        with self.assertRaises(TypeError):
            serializers.JSONSerializer().dumps({'when': date(2018, 8, 9)})

    def test_custom_types(self):
        """Custom types are handled by ``default`` and ``object_hook``."""
        serializer = serializers.JSONSerializer(default=_default,
                                                object_hook=_object_hook)
        state = {'when': date(2018, 8, 9), 'reqs': 3}
        self.assertEqual(serializer.loads(serializer.dumps(state)), state)

    def test_corrupt(self):
        """Data that is not JSON raises :class:`.CorruptSession`."""
        with self.assertRaises(CorruptSession):
            serializers.JSONSerializer().loads(b'{"foo": ')


class TestJWTSerializer(TestCase):
    """Session state can be stored as a signed JWT."""

    def test_round_trip(self):
        """State is stored in the ``state`` claim."""
        serializer = serializers.JWTSerializer('foosecret')
        data = serializer.dumps({'reqs': 1})
        claims = jwt.decode(data, 'foosecret', algorithms=['HS256'])
        self.assertEqual(claims, {'state': {'reqs': 1}})
        self.assertEqual(serializer.loads(data), {'reqs': 1})

    def test_wrong_secret(self):
        """State signed with another secret is corrupt."""
        data = serializers.JWTSerializer('foosecret').dumps({'reqs': 1})
        with self.assertRaises(CorruptSession):
            serializers.JWTSerializer('barsecret').loads(data)

    def test_not_a_token(self):
        """Something other than a JWT is corrupt."""
        with self.assertRaises(CorruptSession):
            serializers.JWTSerializer('foosecret').loads(b'notatoken')

    def test_missing_claim(self):
        """A JWT without the ``state`` claim is corrupt."""
        data = jwt.encode({'foo': 'bar'}, 'foosecret').encode('ascii')
        with self.assertRaises(CorruptSession):
            serializers.JWTSerializer('foosecret').loads(data)

    def test_custom_types(self):
        """Custom types are handled by ``default`` and ``object_hook``."""
        serializer = serializers.JWTSerializer('foosecret', default=_default,
                                               object_hook=_object_hook)
        state = {'when': date(2018, 8, 9)}
        self.assertEqual(serializer.loads(serializer.dumps(state)), state)
