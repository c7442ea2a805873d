"""
Client implementation for the NSoT REST API.

This module defines the :class:`NsotClient` class which
authenticates against the NSoT ``/authenticate/`` endpoint and
performs CRUD requests against the ``sites/`` and ``networks/``
collections.  Unlike most token-based clients, a fresh auth token
is requested for every API call; nothing is cached between calls.

Usage
-----

.. code-block:: python

    from nsot_client import NsotClient

    client = NsotClient(
        email="admin@example.com",
        secret="shhsecret",
        url="https://nsot.example.com/api",
    )

    site = client.create_site("lab", description="Lab site")
    network = client.create_network("10.0.0.0/24", site_id=site.id)
    client.destroy_network_by_cidr("10.0.0.0/24")

Values not passed explicitly are read from the ``NSOT_EMAIL``,
``NSOT_SECRET`` and ``NSOT_URL`` environment variables.
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional

import requests

from .auth import authenticate
from .config import ClientConfig
from .envelope import Envelope, decode_envelope
from .exceptions import (
    NsotAuthBuildError,
    NsotAuthError,
    NsotBuildError,
    NsotError,
    NsotHTTPError,
    NsotTransportError,
)
from .networks import NetworkOperations
from .sites import SiteOperations
from .transport import build_session

log = logging.getLogger(__name__)

SUCCESS_STATUS_CODES = frozenset({200, 201, 204})


def check_response(response: requests.Response) -> requests.Response:
    """Return ``response`` if its status is 200, 201 or 204.

    Runs before any attempt to decode the body.

    Raises
    ------
    NsotHTTPError
        For any other status; the status line is kept in the message.
    """
    if response.status_code in SUCCESS_STATUS_CODES:
        return response
    raise NsotHTTPError(
        f"API Error: {response.status_code} {response.reason}",
        status_code=response.status_code,
        reason=response.reason or "",
    )


class NsotClient(SiteOperations, NetworkOperations):
    """A client for the NSoT REST API.

    Parameters
    ----------
    email : str, optional
        The user's NSoT email.  Falls back to ``NSOT_EMAIL``.
    secret : str, optional
        The user's secret key.  Falls back to ``NSOT_SECRET``.
    url : str, optional
        Base URL of the API.  Falls back to ``NSOT_URL``.
    config : ClientConfig, optional
        A complete configuration.  When given, ``email``, ``secret``,
        ``url`` and ``timeout`` must not be passed.
    session : requests.Session, optional
        Transport to use instead of the one built by
        :func:`~nsot_client.transport.build_session`.
    timeout : float, optional
        Timeout in seconds for each HTTP call.  Defaults to no timeout.

    Notes
    -----
    The client holds no state besides its configuration and session.
    ``requests.Session`` is not documented as thread-safe, so callers
    working from several threads should use one client per thread.
    """

    def __init__(
        self,
        email: Optional[str] = None,
        secret: Optional[str] = None,
        url: Optional[str] = None,
        *,
        config: Optional[ClientConfig] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ) -> None:
        if config is None:
            config = ClientConfig.from_env(email, secret, url, timeout=timeout)
        elif email or secret or url or timeout is not None:
            raise ValueError("pass either config or individual settings, not both")
        self.config = config
        self.session = session if session is not None else build_session()

    @property
    def email(self) -> str:
        return self.config.email

    @property
    def base_url(self) -> str:
        return self.config.url

    def __repr__(self) -> str:
        return f"{type(self).__name__}(email={self.email!r}, url={self.base_url!r})"

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------
    def _get_auth_token(self) -> str:
        """Fetch a new auth token; called once per outgoing request."""
        return authenticate(
            self.session,
            self.base_url,
            self.config.email,
            self.config.secret,
            timeout=self.config.timeout,
        )

    # ------------------------------------------------------------------
    # HTTP request helpers
    # ------------------------------------------------------------------
    def _prepare_url(self, path: str) -> str:
        """Join ``path`` to the base URL.

        The path is used verbatim, including any query string, so
        callers must embed values that are already URL-safe.
        """
        return f"{self.base_url}/{path}"

    def build_request(
        self,
        path: str,
        method: str,
        body: Optional[Any] = None,
    ) -> requests.PreparedRequest:
        """Build an authenticated request ready to be sent.

        Parameters
        ----------
        path : str
            Resource path relative to the base URL, e.g. ``"sites/3/"``
            or ``"networks/?network_address=10.0.0.0/24"``.
        method : str
            The HTTP verb.
        body : str or mapping, optional
            A string is sent as literal JSON text; any other value is
            serialized with :func:`json.dumps`.  ``None`` sends no body.

        Raises
        ------
        NsotAuthBuildError
            If no auth token could be obtained.  It is both an
            :class:`NsotBuildError` and an :class:`NsotAuthError`.
        NsotTransportError
            If the auth endpoint could not be reached.
        NsotBuildError
            If the body cannot be serialized or the request cannot be
            prepared.
        """
        try:
            token = self._get_auth_token()
        except NsotAuthError as exc:
            raise NsotAuthBuildError(
                f"Error getting auth token for {path}: {exc.message}",
                reason=exc.reason,
                status_code=exc.status_code,
            ) from exc

        if body is None:
            data = None
        elif isinstance(body, str):
            data = body.encode("utf-8")
        else:
            try:
                data = json.dumps(body).encode("utf-8")
            except (TypeError, ValueError) as exc:
                raise NsotBuildError(f"Error encoding request body: {exc}") from exc

        request = requests.Request(
            method=method.upper(),
            url=self._prepare_url(path),
            headers={
                "Authorization": f"AuthToken {self.config.email}:{token}",
                "Content-Type": "application/json",
            },
            data=data,
        )
        try:
            return self.session.prepare_request(request)
        except (requests.RequestException, ValueError) as exc:
            raise NsotBuildError(f"Error crafting http request: {exc}") from exc

    def _send(self, request: requests.PreparedRequest) -> requests.Response:
        log.debug(">> %s %s", request.method, request.url)
        # Same environment merge Session.request does for the auth call
        settings = self.session.merge_environment_settings(request.url, {}, None, None, None)
        try:
            response = self.session.send(request, timeout=self.config.timeout, **settings)
        except requests.RequestException as exc:
            raise NsotTransportError(f"Failed to connect to {request.url}: {exc}") from exc
        log.debug("<< %s %s", response.status_code, response.reason)
        return response

    def _request(self, method: str, path: str, body: Optional[Any] = None) -> requests.Response:
        """Authenticate, send and status-check one API call."""
        request = self.build_request(path, method, body)
        return check_response(self._send(request))

    def _fetch(self, method: str, path: str, body: Optional[Any] = None) -> Envelope:
        """Like :meth:`_request` but also decode the response envelope."""
        return decode_envelope(self._request(method, path, body))

    @contextmanager
    def _operation(self, name: str, resource: Optional[str] = None) -> Iterator[None]:
        """Tag any :class:`NsotError` raised inside with ``name`` and ``resource``."""
        try:
            yield
        except NsotError as exc:
            exc.add_context(name, resource)
            raise
