"""Floating IP actions: assigning and unassigning floating IPs."""

from __future__ import annotations

from typing import Any

from .client import Client, ListOptions, Response, add_options
from .floating_ips import FLOATING_BASE_PATH


def _root(document: Any) -> dict[str, Any]:
    return document if isinstance(document, dict) else {}


def floating_ip_action_path(ip: str) -> str:
    """Path of the actions collection of one floating IP."""
    return f"{FLOATING_BASE_PATH}/{ip}/actions"


class FloatingIPActionsService:
    """The floating IP action endpoints of the API.

    Actions are returned as the mappings the API sent, together with the Response.
    """

    def __init__(self, client: Client) -> None:
        self._client = client

    def _send(self, method: str, path: str, body: Any = None) -> tuple[dict[str, Any], Response]:
        request = self._client.new_request(method, path, body)
        response = self._client.do(request, _root)
        return response.data or {}, response

    def _do_action(self, ip: str, request: dict[str, Any]) -> tuple[dict[str, Any] | None, Response]:
        root, response = self._send("POST", floating_ip_action_path(ip), request)
        return root.get("action"), response

    def assign(self, ip: str, droplet_id: int) -> tuple[dict[str, Any] | None, Response]:
        """Assign a floating IP to a droplet."""
        return self._do_action(ip, {"type": "assign", "droplet_id": droplet_id})

    def unassign(self, ip: str) -> tuple[dict[str, Any] | None, Response]:
        """Unassign a floating IP from the droplet it is assigned to."""
        return self._do_action(ip, {"type": "unassign"})

    def get(self, ip: str, action_id: int) -> tuple[dict[str, Any] | None, Response]:
        """Fetch one action of a floating IP."""
        root, response = self._send("GET", f"{floating_ip_action_path(ip)}/{action_id}")
        return root.get("action"), response

    def list(self, ip: str, options: ListOptions | None = None) -> tuple[list[dict[str, Any]], Response]:
        """List the actions of a floating IP."""
        path = add_options(floating_ip_action_path(ip), options)
        root, response = self._send("GET", path)
        if root.get("links") is not None:
            response.links = root["links"]
        return list(root.get("actions") or []), response