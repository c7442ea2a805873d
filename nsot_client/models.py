"""
Typed records for NSoT sites and networks.

Records are built only from server responses via ``from_dict``; the
server assigns every ``id``.  The ``*Opts`` classes describe what a
caller wants to send and serialize only the fields that were supplied.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Union

from .exceptions import NsotDecodeError

# Values allowed inside a network's free-form attribute map.
AttributeValue = Union[str, int, float, bool, None]

_ATTRIBUTE_TYPES = (str, int, float, bool, type(None))


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _require(data: Mapping[str, Any], key: str, kind: str) -> Any:
    if key not in data:
        raise NsotDecodeError(f"{kind} record is missing {key!r}")
    return data[key]


def _int_field(data: Mapping[str, Any], key: str, kind: str, default: Optional[int] = None) -> Optional[int]:
    value = data.get(key, default)
    if value is not None and not _is_int(value):
        raise NsotDecodeError(f"{kind} field {key!r} must be an integer, got {value!r}")
    return value


def _str_field(data: Mapping[str, Any], key: str, kind: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise NsotDecodeError(f"{kind} field {key!r} must be a string, got {value!r}")
    return value


def validate_attributes(attributes: Mapping[str, Any]) -> Dict[str, AttributeValue]:
    """Return ``attributes`` as a plain dict, rejecting unsupported values.

    Raises
    ------
    TypeError
        If a key is not a string or a value is not a string, number,
        boolean or ``None``.
    """
    result: Dict[str, AttributeValue] = {}
    for key, value in attributes.items():
        if not isinstance(key, str):
            raise TypeError(f"attribute names must be strings, got {key!r}")
        if not isinstance(value, _ATTRIBUTE_TYPES):
            raise TypeError(
                f"attribute {key!r} has unsupported value type {type(value).__name__}"
            )
        result[key] = value
    return result


# ---------------------------------------------------------------------------
# Sites
# ---------------------------------------------------------------------------


@dataclass
class Site:
    """An NSoT site."""

    id: int
    name: str
    description: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Site":
        """Create from API response dict."""
        site_id = _int_field(data, "id", "site")
        if site_id is None:
            raise NsotDecodeError("site record is missing 'id'")
        return cls(
            id=site_id,
            name=_str_field(data, "name", "site"),
            description=_str_field(data, "description", "site"),
        )


@dataclass
class SiteOpts:
    """Fields to send when creating or updating a site.

    Fields left as ``None`` are not sent, so an update only touches
    the fields that were given.  An empty string is sent and clears
    the field.
    """

    name: Optional[str] = None
    description: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        if self.name is not None:
            payload["name"] = self.name
        if self.description is not None:
            payload["description"] = self.description
        return payload


# ---------------------------------------------------------------------------
# Networks
# ---------------------------------------------------------------------------


@dataclass
class Network:
    """An NSoT network or IP address."""

    id: int
    network_address: str
    prefix_length: int
    ip_version: str = ""
    state: str = ""
    site_id: Optional[int] = None
    is_ip: bool = False
    attributes: Dict[str, AttributeValue] = field(default_factory=dict)

    @property
    def cidr(self) -> str:
        return f"{self.network_address}/{self.prefix_length}"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Network":
        """Create from API response dict."""
        network_id = _int_field(data, "id", "network")
        if network_id is None:
            raise NsotDecodeError("network record is missing 'id'")
        address = _require(data, "network_address", "network")
        if not isinstance(address, str):
            raise NsotDecodeError(f"network field 'network_address' must be a string, got {address!r}")
        prefix_length = _int_field(data, "prefix_length", "network")
        if prefix_length is None:
            raise NsotDecodeError("network record is missing 'prefix_length'")

        # NSoT reports ip_version as a string ("4"), tolerate an int too
        ip_version = data.get("ip_version")
        if ip_version is None:
            ip_version = ""
        elif _is_int(ip_version):
            ip_version = str(ip_version)
        elif not isinstance(ip_version, str):
            raise NsotDecodeError(f"network field 'ip_version' must be a string, got {ip_version!r}")

        is_ip = data.get("is_ip", False)
        if not isinstance(is_ip, bool):
            raise NsotDecodeError(f"network field 'is_ip' must be a boolean, got {is_ip!r}")

        raw_attributes = data.get("attributes") or {}
        if not isinstance(raw_attributes, dict):
            raise NsotDecodeError("network field 'attributes' must be an object")
        try:
            attributes = validate_attributes(raw_attributes)
        except TypeError as exc:
            raise NsotDecodeError(f"network attributes: {exc}") from exc

        return cls(
            id=network_id,
            network_address=address,
            prefix_length=prefix_length,
            ip_version=ip_version,
            state=_str_field(data, "state", "network"),
            site_id=_int_field(data, "site_id", "network"),
            is_ip=is_ip,
            attributes=attributes,
        )


@dataclass
class NetworkOpts:
    """Fields to send when creating or updating a network.

    Fields left as ``None`` are not sent.  An empty string or an empty
    attribute map is sent and clears the field on the server.
    """

    cidr: Optional[str] = None
    site_id: Optional[int] = None
    state: Optional[str] = None
    attributes: Optional[Mapping[str, AttributeValue]] = None

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        if self.cidr is not None:
            payload["cidr"] = self.cidr
        if self.state is not None:
            payload["state"] = self.state
        if self.site_id is not None:
            payload["site_id"] = self.site_id
        if self.attributes is not None:
            payload["attributes"] = validate_attributes(self.attributes)
        return payload
