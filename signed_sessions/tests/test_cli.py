"""Tests for :mod:`signed_sessions.cli`."""

import base64
from unittest import TestCase

from click.testing import CliRunner

from .. import cli, tokens


class TestGenerateKey(TestCase):
    """Tests for the ``generate-key`` command."""

    def test_generate_key(self):
        """A random URL-safe key is printed."""
        runner = CliRunner()
        result = runner.invoke(cli.main, ['generate-key'])
        self.assertEqual(result.exit_code, 0)
        key = base64.urlsafe_b64decode(result.output.strip())
        self.assertEqual(len(key), 32)

        again = runner.invoke(cli.main, ['generate-key'])
        self.assertNotEqual(result.output, again.output)

    def test_length(self):
        """The key length can be set."""
        result = CliRunner().invoke(cli.main, ['generate-key',
                                               '--length', '64'])
        key = base64.urlsafe_b64decode(result.output.strip())
        self.assertEqual(len(key), 64)

    def test_bad_length(self):
        """The key must have at least one byte."""
        result = CliRunner().invoke(cli.main, ['generate-key',
                                               '--length', '0'])
        self.assertNotEqual(result.exit_code, 0)


class TestTokens(TestCase):
    """Tests for the ``issue-token`` and ``verify-token`` commands."""

    env = {'SESSION_SIGNING_KEYS': 'foosecret,barsecret'}

    def test_issue_and_verify(self):
        """An issued token verifies with the same keys."""
        runner = CliRunner(env=self.env)
        result = runner.invoke(cli.main, ['issue-token', '--id-length', '16'])
        self.assertEqual(result.exit_code, 0)
        header = result.output.strip()
        self.assertTrue(header.startswith('Bearer '))
        result = runner.invoke(cli.main, ['verify-token', header])
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(len(base64.urlsafe_b64decode(
            result.output.strip() + '==')), 16)

    def test_issue_bad_length(self):
        """IDs shorter than the minimum cannot be issued."""
        runner = CliRunner(env=self.env)
        result = runner.invoke(cli.main, ['issue-token', '--id-length', '8'])
        self.assertNotEqual(result.exit_code, 0)

    def test_verify_wrong_key(self):
        """A token signed with another key is invalid."""
        token = tokens.issue(b'notthekey')
        result = CliRunner(env=self.env).invoke(
            cli.main, ['verify-token', f'Bearer {token}']
        )
        self.assertEqual(result.exit_code, 1)
        self.assertIn('invalid token', result.output)

    def test_no_keys(self):
        """Keys must be configured."""
        result = CliRunner(env={'SESSION_SIGNING_KEYS': ''}).invoke(
            cli.main, ['issue-token']
        )
        self.assertEqual(result.exit_code, 2)
