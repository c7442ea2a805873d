"""
Decoding of the NSoT ``{"status": ..., "data": {...}}`` response envelope.

The HTTP status has already been checked by the time a response gets
here; these helpers deal with the body only.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List

import requests

from .exceptions import NsotDecodeError, NsotNotFoundError, NsotResponseStatusError

STATUS_OK = "ok"


@dataclass
class Envelope:
    """A decoded response body."""

    status: Any
    data: Any

    def unwrap(self) -> Dict[str, Any]:
        """Return ``data`` once the envelope status is ``"ok"``.

        Raises
        ------
        NsotResponseStatusError
            If the server reported any other status.
        NsotDecodeError
            If ``data`` is not an object.
        """
        if self.status != STATUS_OK:
            raise NsotResponseStatusError(f"API Error: {self.status}", api_status=self.status)
        if not isinstance(self.data, dict):
            raise NsotDecodeError("response 'data' is not an object")
        return self.data

    def entity(self, key: str) -> Dict[str, Any]:
        """Return the single record stored under ``data[key]``."""
        value = self.unwrap().get(key)
        if not isinstance(value, dict):
            raise NsotDecodeError(f"response data has no {key!r} object")
        return value

    def entities(self, key: str) -> List[Dict[str, Any]]:
        """Return the list of records stored under ``data[key]``."""
        value = self.unwrap().get(key)
        if not isinstance(value, list):
            raise NsotDecodeError(f"response data has no {key!r} list")
        for item in value:
            if not isinstance(item, dict):
                raise NsotDecodeError(f"response data {key!r} contains a non-object entry")
        return value

    def first_id(self, key: str) -> int:
        """Return the ``id`` of the first record under ``data[key]``.

        Only index 0 is consulted; any further matches are ignored.

        Raises
        ------
        NsotNotFoundError
            If the list is empty.
        """
        items = self.entities(key)
        if not items:
            raise NsotNotFoundError(f"no {key} matched")
        record_id = items[0].get("id")
        if not isinstance(record_id, int) or isinstance(record_id, bool):
            raise NsotDecodeError(f"first entry in {key!r} has no integer 'id'")
        return record_id


def decode_envelope(response: requests.Response) -> Envelope:
    """Read and decode the full body of ``response``.

    Raises
    ------
    NsotDecodeError
        If the body cannot be read, is not JSON, or is not an object
        with ``status`` and ``data`` keys.
    """
    try:
        body = response.json()
    except ValueError as exc:
        # requests.JSONDecodeError is also a RequestException
        raise NsotDecodeError(f"Error parsing response body: {exc}") from exc
    except requests.RequestException as exc:
        raise NsotDecodeError(f"Error reading response body: {exc}") from exc

    if not isinstance(body, dict):
        raise NsotDecodeError("response body is not a JSON object")
    if "status" not in body or "data" not in body:
        raise NsotDecodeError("response body is missing 'status' or 'data'")
    return Envelope(status=body["status"], data=body["data"])
