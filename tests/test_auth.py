"""
Tests for the authentication module – token exchange and failure modes.
"""

import json
import logging

import pytest
import requests

from nsot_client.auth import authenticate
from nsot_client.exceptions import NsotAuthError, NsotTransportError

from conftest import BASE_URL, EMAIL, SECRET, TOKEN, FakeSession, ok


def _auth(session):
    return authenticate(session, BASE_URL, EMAIL, SECRET)


def test_returns_token_on_ok_envelope(session):
    assert _auth(session) == TOKEN


def test_posts_credentials_as_json(session):
    _auth(session)

    request = session.sent[0]
    assert request.method == "POST"
    assert request.url == f"{BASE_URL}/authenticate/"
    assert request.headers["Content-Type"] == "application/json"
    assert json.loads(request.body) == {"email": EMAIL, "secret_key": SECRET}


def test_credentials_with_quotes_are_escaped():
    session = FakeSession()
    session.add_auth()

    authenticate(session, BASE_URL, 'a"b@example.com', 'x", "y')

    assert json.loads(session.sent[0].body) == {
        "email": 'a"b@example.com',
        "secret_key": 'x", "y',
    }


@pytest.mark.parametrize("status", [201, 401, 403, 500])
def test_non_200_status_is_rejected(status):
    session = FakeSession()
    session.add_auth(status=status)

    with pytest.raises(NsotAuthError) as info:
        _auth(session)

    assert info.value.reason == "unexpected_status"
    assert info.value.status_code == status
    assert str(status) in str(info.value)


def test_undecodable_body():
    session = FakeSession()
    session.add_auth(payload="<html>oops</html>")

    with pytest.raises(NsotAuthError) as info:
        _auth(session)

    assert info.value.reason == "decode"


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"status": "ok"},
        {"status": "ok", "data": "token"},
        ok({}),
        ok({"auth_token": ""}),
        ok({"auth_token": 123}),
    ],
)
def test_malformed_body(payload):
    session = FakeSession()
    session.add_auth(payload=payload)

    with pytest.raises(NsotAuthError) as info:
        _auth(session)

    assert info.value.reason == "malformed"


def test_non_ok_envelope_status():
    session = FakeSession()
    session.add_auth(payload={"status": "error", "data": {"auth_token": TOKEN}})

    with pytest.raises(NsotAuthError) as info:
        _auth(session)

    assert info.value.reason == "rejected"


def test_connection_failure_is_transport_error():
    session = FakeSession()
    session.add("POST", "authenticate/", requests.ConnectionError("connection refused"))

    with pytest.raises(NsotTransportError) as info:
        _auth(session)

    assert "connection refused" in str(info.value)
    assert isinstance(info.value.__cause__, requests.ConnectionError)


def test_token_and_secret_are_not_logged(session, caplog):
    caplog.set_level(logging.DEBUG, logger="nsot_client")

    _auth(session)

    assert EMAIL in caplog.text
    assert TOKEN not in caplog.text
    assert SECRET not in caplog.text
