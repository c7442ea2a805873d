"""Site operations, mixed into :class:`~nsot_client.client.NsotClient`."""

from __future__ import annotations

import logging
from typing import List, Optional

from .models import Site, SiteOpts

log = logging.getLogger(__name__)


class SiteOperations:
    """CRUD calls against the ``sites/`` collection."""

    def create_site(self, name: str, description: Optional[str] = None) -> Site:
        """Create a site and return the record the server stored.

        ``description`` is only sent when non-empty; a new site has an
        empty description anyway.
        """
        payload = SiteOpts(name=name, description=description or None).to_payload()
        with self._operation("create site", name):
            envelope = self._fetch("POST", "sites/", payload)
            return Site.from_dict(envelope.entity("site"))

    def list_sites(self, name: Optional[str] = None) -> List[Site]:
        """Return every site, or only those called ``name``."""
        path = f"sites/?name={name}" if name else "sites/"
        with self._operation("list sites", name):
            envelope = self._fetch("GET", path)
            return [Site.from_dict(item) for item in envelope.entities("sites")]

    def retrieve_site_id_by_name(self, name: str) -> int:
        """Resolve a site name to its id.

        Only the first match is used.  Raises
        :class:`~nsot_client.exceptions.NsotNotFoundError` when no site
        has that name.
        """
        with self._operation("retrieve site id", name):
            envelope = self._fetch("GET", f"sites/?name={name}")
            site_id = envelope.first_id("sites")
        log.debug("Resolved site %r to id %d", name, site_id)
        return site_id

    def retrieve_site_by_id(self, site_id: int) -> Site:
        with self._operation("retrieve site", str(site_id)):
            envelope = self._fetch("GET", f"sites/{site_id}/")
            return Site.from_dict(envelope.entity("site"))

    def retrieve_site_by_name(self, name: str) -> Site:
        """Resolve ``name`` to an id, then fetch that site.

        The two calls are not atomic; a site renamed or removed in
        between surfaces as an error from the second call.
        """
        site_id = self.retrieve_site_id_by_name(name)
        return self.retrieve_site_by_id(site_id)

    def update_site_by_id(
        self,
        site_id: int,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Site:
        """Partially update a site; only the given fields are sent."""
        payload = SiteOpts(name=name, description=description).to_payload()
        with self._operation("update site", str(site_id)):
            envelope = self._fetch("PATCH", f"sites/{site_id}/", payload)
            return Site.from_dict(envelope.entity("site"))

    def destroy_site_by_id(self, site_id: int) -> None:
        with self._operation("delete site", str(site_id)):
            self._request("DELETE", f"sites/{site_id}/")

    def destroy_site_by_name(self, name: str) -> None:
        site_id = self.retrieve_site_id_by_name(name)
        self.destroy_site_by_id(site_id)
