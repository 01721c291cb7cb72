"""Shared fixtures: a fake transport that records prepared requests."""
import json
from unittest import mock

import pytest
import requests


def make_response(status_code=200, payload=None, body=None):
    """Build a requests.Response with a JSON payload (or a raw body)."""
    response = requests.Response()
    response.status_code = status_code
    if body is None:
        body = json.dumps(payload if payload is not None else {})
    response._content = body.encode("utf-8")
    response.headers["Content-Type"] = "application/json"
    return response


@pytest.fixture
def fake_session():
    """A requests.Session stand-in; set .send.return_value or .send.side_effect."""
    session = mock.create_autospec(requests.Session, instance=True)
    session.merge_environment_settings.side_effect = requests.Session().merge_environment_settings
    session.send.return_value = make_response(200, {})
    return session


@pytest.fixture
def sent_request(fake_session):
    """Return the PreparedRequest of the most recent send() call."""
    def _sent():
        args, _kwargs = fake_session.send.call_args
        return args[0]
    return _sent


@pytest.fixture
def metadata_payload():
    """Metadata as the service returns it for a freshly created secret."""
    return {
        "custid": "anon",
        "metadata_key": "qjpjroeit8wra0ojeyhcw5pjsgwtuq7",
        "secret_key": "7nv8buhmhcd2xmwbhl1lkeqjvd2ewgf",
        "recipient": [],
        "passphrase_required": False,
        "ttl": 604800,
        "metadata_ttl": 1209600,
        "secret_ttl": 604800,
        "created": 1490224384,
        "updated": 1490224384,
    }
