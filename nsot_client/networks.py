"""Network operations, mixed into :class:`~nsot_client.client.NsotClient`."""

from __future__ import annotations

import logging
from typing import List, Mapping, Optional

from .models import AttributeValue, Network, NetworkOpts

log = logging.getLogger(__name__)


class NetworkOperations:
    """CRUD calls against the ``networks/`` collection.

    CIDRs are interpolated into query strings as given, e.g.
    ``networks/?network_address=10.0.0.0/24``.
    """

    def create_network(
        self,
        cidr: str,
        site_id: Optional[int] = None,
        state: Optional[str] = None,
        attributes: Optional[Mapping[str, AttributeValue]] = None,
    ) -> Network:
        """Create a network and return the record the server stored.

        Raises
        ------
        TypeError
            If ``attributes`` holds a value that is not a string,
            number, boolean or ``None``.
        """
        payload = NetworkOpts(
            cidr=cidr, site_id=site_id, state=state, attributes=attributes
        ).to_payload()
        with self._operation("create network", cidr):
            envelope = self._fetch("POST", "networks/", payload)
            return Network.from_dict(envelope.entity("network"))

    def list_networks(self, network_address: Optional[str] = None) -> List[Network]:
        """Return every network, or only those matching ``network_address``."""
        if network_address:
            path = f"networks/?network_address={network_address}"
        else:
            path = "networks/"
        with self._operation("list networks", network_address):
            envelope = self._fetch("GET", path)
            return [Network.from_dict(item) for item in envelope.entities("networks")]

    def retrieve_network_id_by_cidr(self, cidr: str) -> int:
        """Resolve a CIDR to a network id using the first match."""
        with self._operation("retrieve network id", cidr):
            envelope = self._fetch("GET", f"networks/?network_address={cidr}")
            network_id = envelope.first_id("networks")
        log.debug("Resolved network %s to id %d", cidr, network_id)
        return network_id

    def retrieve_network_by_id(self, network_id: int) -> Network:
        with self._operation("retrieve network", str(network_id)):
            envelope = self._fetch("GET", f"networks/{network_id}/")
            return Network.from_dict(envelope.entity("network"))

    def retrieve_network_by_cidr(self, cidr: str) -> Network:
        network_id = self.retrieve_network_id_by_cidr(cidr)
        return self.retrieve_network_by_id(network_id)

    def update_network_by_id(
        self,
        network_id: int,
        site_id: Optional[int] = None,
        state: Optional[str] = None,
        attributes: Optional[Mapping[str, AttributeValue]] = None,
    ) -> Network:
        """Partially update a network; only the given fields are sent."""
        payload = NetworkOpts(site_id=site_id, state=state, attributes=attributes).to_payload()
        with self._operation("update network", str(network_id)):
            envelope = self._fetch("PATCH", f"networks/{network_id}/", payload)
            return Network.from_dict(envelope.entity("network"))

    def destroy_network_by_id(self, network_id: int) -> None:
        with self._operation("delete network", str(network_id)):
            self._request("DELETE", f"networks/{network_id}/")

    def destroy_network_by_cidr(self, cidr: str) -> None:
        """Resolve ``cidr`` to an id, then delete that network.

        Two round trips; the network may change between them.
        """
        network_id = self.retrieve_network_id_by_cidr(cidr)
        self.destroy_network_by_id(network_id)
