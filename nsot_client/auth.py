"""
Token acquisition against the NSoT ``/authenticate/`` endpoint.

NSoT exchanges a user's email and secret key for a short-lived
``auth_token``.  The client does not cache the token: a fresh one is
requested for every outgoing API call.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from .exceptions import NsotAuthError, NsotTransportError

log = logging.getLogger(__name__)

AUTH_PATH = "authenticate/"


def authenticate(
    session: requests.Session,
    base_url: str,
    email: str,
    secret: str,
    *,
    timeout: Optional[float] = None,
) -> str:
    """Retrieve a new auth token from the NSoT server.

    This posts ``{"email": ..., "secret_key": ...}`` to
    ``{base_url}/authenticate/``.  The token is returned only when the
    server answers with status 200 and an ``ok`` envelope whose
    ``data.auth_token`` is a non-empty string.

    Parameters
    ----------
    session : requests.Session
        The transport to send the request with.
    base_url : str
        API base URL without a trailing slash.
    email, secret : str
        The user's credentials.
    timeout : float, optional
        Timeout in seconds for the HTTP call.

    Returns
    -------
    str
        The auth token.

    Raises
    ------
    NsotTransportError
        If the server could not be reached.
    NsotAuthError
        If the server rejected the credentials or returned a body
        without a usable token.
    """
    auth_url = f"{base_url}/{AUTH_PATH}"
    log.debug("Requesting auth token for %s from %s", email, auth_url)
    try:
        response = session.post(
            auth_url,
            json={"email": email, "secret_key": secret},
            timeout=timeout,
        )
    except requests.RequestException as exc:
        raise NsotTransportError(f"Failed to connect to {auth_url}: {exc}") from exc

    if response.status_code != 200:
        raise NsotAuthError(
            f"Not expected return code, {response.status_code} {response.reason}",
            reason="unexpected_status",
            status_code=response.status_code,
        )

    try:
        body: Any = response.json()
    except ValueError as exc:
        raise NsotAuthError(
            f"Error parsing auth token response: {exc}",
            reason="decode",
            status_code=response.status_code,
        ) from exc

    if not isinstance(body, dict):
        raise NsotAuthError(
            "Auth token response is not a JSON object",
            reason="malformed",
            status_code=response.status_code,
        )
    status = body.get("status")
    if status != "ok":
        raise NsotAuthError(
            f"Authentication rejected with status {status!r}",
            reason="rejected",
            status_code=response.status_code,
        )
    data = body.get("data")
    if not isinstance(data, dict):
        raise NsotAuthError(
            "Auth token response has no data object",
            reason="malformed",
            status_code=response.status_code,
        )
    token = data.get("auth_token")
    if not isinstance(token, str) or not token:
        raise NsotAuthError(
            "Auth token response did not contain an auth_token",
            reason="malformed",
            status_code=response.status_code,
        )
    return token
