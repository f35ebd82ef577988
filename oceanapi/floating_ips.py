"""Floating IPs: the floating IP model and its endpoints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .client import Client, ListOptions, Response, add_options
from .droplets import Droplet

FLOATING_BASE_PATH = "v2/floating_ips"


def _root(document: Any) -> dict[str, Any]:
    return document if isinstance(document, dict) else {}


@dataclass
class FloatingIP:
    """A floating IP; the region is kept as the mapping the API returned."""

    region: dict[str, Any] | None = None
    droplet: Droplet | None = None
    ip: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FloatingIP:
        droplet = data.get("droplet")
        return cls(
            region=data.get("region"),
            droplet=Droplet.from_dict(droplet) if droplet is not None else None,
            ip=data.get("ip") or "",
        )


@dataclass
class FloatingIPCreateRequest:
    """A request for a floating IP, assigned to a droplet or reserved in a region."""

    region: str = ""
    droplet_id: int = 0

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {}
        if self.region:
            body["region"] = self.region
        if self.droplet_id:
            body["droplet_id"] = self.droplet_id
        return body


class FloatingIPsService:
    """The floating IP endpoints of the API.

    Calls that return data give it together with the Response.
    """

    def __init__(self, client: Client) -> None:
        self._client = client

    def _send(self, method: str, path: str, body: Any = None) -> tuple[dict[str, Any], Response]:
        request = self._client.new_request(method, path, body)
        response = self._client.do(request, _root)
        return response.data or {}, response

    def list(self, options: ListOptions | None = None) -> tuple[list[FloatingIP], Response]:
        """List all floating IPs."""
        root, response = self._send("GET", add_options(FLOATING_BASE_PATH, options))
        if root.get("links") is not None:
            response.links = root["links"]
        if root.get("meta") is not None:
            response.meta = root["meta"]
        return [FloatingIP.from_dict(item) for item in root.get("floating_ips") or []], response

    def get(self, ip: str) -> tuple[FloatingIP | None, Response]:
        """Fetch one floating IP."""
        root, response = self._send("GET", f"{FLOATING_BASE_PATH}/{ip}")
        floating_ip = root.get("floating_ip")
        return (FloatingIP.from_dict(floating_ip) if floating_ip is not None else None), response

    def create(self, request: FloatingIPCreateRequest) -> tuple[FloatingIP | None, Response]:
        """Create a floating IP, assigning it to the droplet when one is given."""
        root, response = self._send("POST", FLOATING_BASE_PATH, request)
        if root.get("links") is not None:
            response.links = root["links"]
        floating_ip = root.get("floating_ip")
        return (FloatingIP.from_dict(floating_ip) if floating_ip is not None else None), response

    def delete(self, ip: str) -> Response:
        """Release a floating IP."""
        return self._client.do(self._client.new_request("DELETE", f"{FLOATING_BASE_PATH}/{ip}"))