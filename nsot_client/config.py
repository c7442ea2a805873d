"""Connection settings for the NSoT client."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

ENV_EMAIL = "NSOT_EMAIL"
ENV_SECRET = "NSOT_SECRET"
ENV_URL = "NSOT_URL"


@dataclass(frozen=True)
class ClientConfig:
    """Credentials and endpoint used by :class:`~nsot_client.NsotClient`.

    Parameters
    ----------
    email : str
        The user's NSoT email address.
    secret : str
        The user's secret key.  Never shown in ``repr``.
    url : str
        Base URL of the API, e.g. ``"https://nsot.example.com/api"``.
        A trailing slash is removed.
    timeout : float, optional
        Timeout in seconds applied to every HTTP call.  ``None`` means
        no timeout, which is the ``requests`` default.
    """

    email: str
    secret: str = field(repr=False)
    url: str
    timeout: Optional[float] = None

    def __post_init__(self) -> None:
        if not self.email:
            raise ValueError("email must be provided")
        if not self.secret:
            raise ValueError("secret must be provided")
        if not self.url:
            raise ValueError("url must be provided")
        object.__setattr__(self, "url", self.url.rstrip("/"))

    @classmethod
    def from_env(
        cls,
        email: Optional[str] = None,
        secret: Optional[str] = None,
        url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "ClientConfig":
        """Build a config, filling missing values from the environment.

        Explicit arguments take precedence over ``NSOT_EMAIL``,
        ``NSOT_SECRET`` and ``NSOT_URL``.
        """
        env = os.environ if environ is None else environ
        return cls(
            email=email or env.get(ENV_EMAIL, ""),
            secret=secret or env.get(ENV_SECRET, ""),
            url=url or env.get(ENV_URL, ""),
            timeout=timeout,
        )
