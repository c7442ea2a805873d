"""
HTTP transport used for every NSoT call.

Provides a pooled ``requests.Session`` with retries disabled; failed
calls are surfaced to the caller, who owns any retry policy.
"""

from __future__ import annotations

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from . import __version__

USER_AGENT = f"nsot-client/{__version__}"


def build_session(pool_connections: int = 10, pool_maxsize: int = 10) -> requests.Session:
    """Return a requests.Session with connection pooling and no retries.

    Parameters
    ----------
    pool_connections : int, optional
        Number of host pools to cache.
    pool_maxsize : int, optional
        Maximum connections kept per host pool.

    Returns
    -------
    requests.Session
        The configured session.
    """
    session = requests.Session()
    adapter = HTTPAdapter(
        pool_connections=pool_connections,
        pool_maxsize=pool_maxsize,
        max_retries=Retry(total=0, read=False),
    )
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.headers.update({
        "User-Agent": USER_AGENT,
        "Accept": "application/json",
    })
    return session
