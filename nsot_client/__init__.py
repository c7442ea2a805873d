"""
Python client for interacting with the NSoT REST API.

This package provides a `NsotClient` class that authenticates against
an NSoT ("network source of truth") server with an email and secret
key, and creates, retrieves, updates and deletes sites and networks.
Responses are decoded into the `Site` and `Network` dataclasses.

A fresh auth token is requested for every API call; the client keeps
no session state between calls.

Examples
--------

```python
from nsot_client import NsotClient

client = NsotClient(
    email="admin@example.com",
    secret="YOUR_SECRET_KEY",
    url="https://nsot.example.com/api",
)

site = client.create_site("lab")
network = client.retrieve_network_by_cidr("10.0.0.0/24")
```
"""

import logging

__version__ = "0.1.0"

from .client import NsotClient, check_response
from .config import ClientConfig
from .exceptions import (
    NsotAPIError,
    NsotAuthBuildError,
    NsotAuthError,
    NsotBuildError,
    NsotDecodeError,
    NsotError,
    NsotHTTPError,
    NsotNotFoundError,
    NsotResponseStatusError,
    NsotTransportError,
)
from .models import Network, NetworkOpts, Site, SiteOpts

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ClientConfig",
    "Network",
    "NetworkOpts",
    "NsotAPIError",
    "NsotAuthBuildError",
    "NsotAuthError",
    "NsotBuildError",
    "NsotClient",
    "NsotDecodeError",
    "NsotError",
    "NsotHTTPError",
    "NsotNotFoundError",
    "NsotResponseStatusError",
    "NsotTransportError",
    "Site",
    "SiteOpts",
    "check_response",
]
