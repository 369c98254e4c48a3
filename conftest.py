import pytest

from flask import Flask

from signed_sessions.integration import Sessions


@pytest.fixture()
def app():
    app = Flask('test_sessions_app')
    app.config['SESSION_SIGNING_KEYS'] = 'foosecret,barsecret'
    app.config['SESSION_STORE'] = 'memory'
    Sessions(app)
    return app


@pytest.fixture()
def request_context(app):
    yield app.test_request_context()
