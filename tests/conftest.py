"""Pytest fixtures for tinycert tests."""
import json
from unittest.mock import Mock
from urllib.parse import parse_qsl

import pytest

from tinycert.core.api import APIConfig, Session

SERVER_PATH = 'https://tinycert.test/api/v1/'


def _make_response(status_code=200, body=None):
    response = Mock()
    response.status_code = status_code
    if body is None:
        body = {}
    response.text = body if isinstance(body, str) else json.dumps(body)
    return response


@pytest.fixture
def reply():
    """Returns a factory for fake HTTP responses (dict bodies are JSON encoded)."""
    return _make_response


@pytest.fixture
def config():
    """Configuration with dummy credentials."""
    return APIConfig(
        email='user@example.com',
        passphrase='correct horse',
        api_key='api-key-123',
        server_path=SERVER_PATH,
    )


@pytest.fixture
def routes():
    """Responses by endpoint name; values may also be exceptions to raise."""
    return {
        'connect': _make_response(200, {'token': 'tok-1'}),
        'disconnect': _make_response(200, {}),
    }


@pytest.fixture
def http(routes):
    """Stand-in for requests.Session routing POSTs through ``routes``."""
    http = Mock()

    def post(url, **kwargs):
        endpoint = url[len(SERVER_PATH):]
        result = routes.get(endpoint)
        if result is None:
            return _make_response(404, 'not found')
        if isinstance(result, Exception):
            raise result
        return result

    http.post.side_effect = post
    return http


@pytest.fixture
def sent(http):
    """Returns the (name, value) pairs posted to an endpoint by its last call."""
    def _sent(endpoint):
        for call in reversed(http.post.call_args_list):
            if call.args[0] == SERVER_PATH + endpoint:
                return parse_qsl(call.kwargs['data'].decode('utf-8'), keep_blank_values=True)
        raise AssertionError(f"no request sent to {endpoint}")
    return _sent


@pytest.fixture
def session(config, http):
    """Unconnected session using the fake HTTP session."""
    return Session(config, http=http)


@pytest.fixture
def connected_session(session):
    """Session after a successful connect."""
    session.connect()
    return session
