"""Shared fixtures: a fake NSoT server behind a ``requests.Session``."""

import json
from http import HTTPStatus

import pytest
import requests

from nsot_client import ClientConfig, NsotClient

BASE_URL = "http://nsot.test/api"
EMAIL = "admin@example.com"
SECRET = "s3cr3t"
TOKEN = "tok123"


def make_response(status_code=200, payload=None, text=None, request=None):
    """Build a real ``requests.Response`` carrying a canned body."""
    response = requests.Response()
    response.status_code = status_code
    try:
        response.reason = HTTPStatus(status_code).phrase
    except ValueError:
        response.reason = ""
    if payload is not None:
        response._content = json.dumps(payload).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    else:
        response._content = (text or "").encode("utf-8")
    response.encoding = "utf-8"
    if request is not None:
        response.request = request
        response.url = request.url
    return response


def ok(data):
    return {"status": "ok", "data": data}


class FakeSession(requests.Session):
    """Session whose ``send`` answers from a route table.

    Routes are keyed by ``(METHOD, path?query)`` relative to the API
    base.  A value is a ``(status, payload)`` tuple, an exception to
    raise, or a list of those consumed in order.
    """

    def __init__(self):
        super().__init__()
        self.routes = {}
        self.sent = []

    def add(self, method, path, *answers):
        self.routes[(method, path)] = list(answers)

    def add_auth(self, status=200, payload=None):
        if payload is None:
            payload = ok({"auth_token": TOKEN})
        self.add("POST", "authenticate/", (status, payload))

    def send(self, request, **kwargs):
        self.sent.append(request)
        key = (request.method, request.url[len(BASE_URL) + 1:])
        if key not in self.routes:
            return make_response(404, {"status": "error", "data": {}}, request=request)
        answers = self.routes[key]
        # The last answer is sticky so auth can be hit many times
        answer = answers.pop(0) if len(answers) > 1 else answers[0]
        if isinstance(answer, Exception):
            raise answer
        status, payload = answer
        if isinstance(payload, str):
            return make_response(status, text=payload, request=request)
        return make_response(status, payload, request=request)

    def api_requests(self):
        """Sent requests other than the auth calls."""
        return [r for r in self.sent if not r.url.endswith("/authenticate/")]


@pytest.fixture
def session():
    fake = FakeSession()
    fake.add_auth()
    return fake


@pytest.fixture
def client(session):
    config = ClientConfig(email=EMAIL, secret=SECRET, url=BASE_URL)
    return NsotClient(config=config, session=session)
