"""Droplet actions: power, snapshot, rebuild and other operations on droplets."""

from __future__ import annotations

from typing import Any
from urllib.parse import urlsplit

from .client import Client, Response
from .errors import ArgError

ActionRequest = dict[str, Any]


def _root(document: Any) -> dict[str, Any]:
    return document if isinstance(document, dict) else {}


def droplet_action_path(droplet_id: int) -> str:
    """Path of the actions collection of one droplet."""
    return f"v2/droplets/{droplet_id}/actions"


def droplet_action_path_by_tag(tag: str) -> str:
    """Path of the actions endpoint for the droplets carrying ``tag``."""
    return f"v2/droplets/actions?tag_name={tag}"


class DropletActionsService:
    """The droplet action endpoints of the API.

    Actions are returned as the mappings the API sent, together with the Response.
    """

    def __init__(self, client: Client) -> None:
        self._client = client

    def _send(self, method: str, path: str, body: Any = None) -> tuple[dict[str, Any], Response]:
        request = self._client.new_request(method, path, body)
        response = self._client.do(request, _root)
        return response.data or {}, response

    def _do_action(self, droplet_id: int, request: ActionRequest) -> tuple[dict[str, Any] | None, Response]:
        if droplet_id < 1:
            raise ArgError("droplet_id", "cannot be less than 1")
        if request is None:
            raise ArgError("request", "request can't be None")
        root, response = self._send("POST", droplet_action_path(droplet_id), request)
        return root.get("action"), response

    def _do_action_by_tag(self, tag: str, request: ActionRequest) -> tuple[list[dict[str, Any]], Response]:
        if not tag:
            raise ArgError("tag", "cannot be empty")
        if request is None:
            raise ArgError("request", "request can't be None")
        root, response = self._send("POST", droplet_action_path_by_tag(tag), request)
        return list(root.get("actions") or []), response

    def _get(self, path: str) -> tuple[dict[str, Any] | None, Response]:
        root, response = self._send("GET", path)
        return root.get("action"), response

    def shutdown(self, droplet_id: int) -> tuple[dict[str, Any] | None, Response]:
        """Shut a droplet down."""
        return self._do_action(droplet_id, {"type": "shutdown"})

    def shutdown_by_tag(self, tag: str) -> tuple[list[dict[str, Any]], Response]:
        """Shut down the droplets carrying ``tag``."""
        return self._do_action_by_tag(tag, {"type": "shutdown"})

    def power_off(self, droplet_id: int) -> tuple[dict[str, Any] | None, Response]:
        """Power a droplet off."""
        return self._do_action(droplet_id, {"type": "power_off"})

    def power_off_by_tag(self, tag: str) -> tuple[list[dict[str, Any]], Response]:
        """Power off the droplets carrying ``tag``."""
        return self._do_action_by_tag(tag, {"type": "power_off"})

    def power_on(self, droplet_id: int) -> tuple[dict[str, Any] | None, Response]:
        """Power a droplet on."""
        return self._do_action(droplet_id, {"type": "power_on"})

    def power_on_by_tag(self, tag: str) -> tuple[list[dict[str, Any]], Response]:
        """Power on the droplets carrying ``tag``."""
        return self._do_action_by_tag(tag, {"type": "power_on"})

    def power_cycle(self, droplet_id: int) -> tuple[dict[str, Any] | None, Response]:
        """Power cycle a droplet."""
        return self._do_action(droplet_id, {"type": "power_cycle"})

    def power_cycle_by_tag(self, tag: str) -> tuple[list[dict[str, Any]], Response]:
        """Power cycle the droplets carrying ``tag``."""
        return self._do_action_by_tag(tag, {"type": "power_cycle"})

    def reboot(self, droplet_id: int) -> tuple[dict[str, Any] | None, Response]:
        """Reboot a droplet."""
        return self._do_action(droplet_id, {"type": "reboot"})

    def restore(self, droplet_id: int, image_id: int) -> tuple[dict[str, Any] | None, Response]:
        """Restore an image to a droplet."""
        return self._do_action(droplet_id, {"type": "restore", "image": image_id})

    def resize(self, droplet_id: int, size_slug: str, resize_disk: bool) -> tuple[dict[str, Any] | None, Response]:
        """Resize a droplet, optionally resizing its disk too."""
        return self._do_action(droplet_id, {"type": "resize", "size": size_slug, "disk": resize_disk})

    def rename(self, droplet_id: int, name: str) -> tuple[dict[str, Any] | None, Response]:
        """Rename a droplet."""
        return self._do_action(droplet_id, {"type": "rename", "name": name})

    def snapshot(self, droplet_id: int, name: str) -> tuple[dict[str, Any] | None, Response]:
        """Take a snapshot of a droplet."""
        return self._do_action(droplet_id, {"type": "snapshot", "name": name})

    def snapshot_by_tag(self, tag: str, name: str) -> tuple[list[dict[str, Any]], Response]:
        """Take snapshots of the droplets carrying ``tag``."""
        return self._do_action_by_tag(tag, {"type": "snapshot", "name": name})

    def enable_backups(self, droplet_id: int) -> tuple[dict[str, Any] | None, Response]:
        """Enable backups for a droplet."""
        return self._do_action(droplet_id, {"type": "enable_backups"})

    def enable_backups_by_tag(self, tag: str) -> tuple[list[dict[str, Any]], Response]:
        """Enable backups for the droplets carrying ``tag``."""
        return self._do_action_by_tag(tag, {"type": "enable_backups"})

    def disable_backups(self, droplet_id: int) -> tuple[dict[str, Any] | None, Response]:
        """Disable backups for a droplet."""
        return self._do_action(droplet_id, {"type": "disable_backups"})

    def disable_backups_by_tag(self, tag: str) -> tuple[list[dict[str, Any]], Response]:
        """Disable backups for the droplets carrying ``tag``."""
        return self._do_action_by_tag(tag, {"type": "disable_backups"})

    def password_reset(self, droplet_id: int) -> tuple[dict[str, Any] | None, Response]:
        """Reset the root password of a droplet."""
        return self._do_action(droplet_id, {"type": "password_reset"})

    def rebuild_by_image_id(self, droplet_id: int, image_id: int) -> tuple[dict[str, Any] | None, Response]:
        """Rebuild a droplet from the image with ``image_id``."""
        return self._do_action(droplet_id, {"type": "rebuild", "image": image_id})

    def rebuild_by_image_slug(self, droplet_id: int, slug: str) -> tuple[dict[str, Any] | None, Response]:
        """Rebuild a droplet from the image named by ``slug``."""
        return self._do_action(droplet_id, {"type": "rebuild", "image": slug})

    def change_kernel(self, droplet_id: int, kernel_id: int) -> tuple[dict[str, Any] | None, Response]:
        """Change the kernel of a droplet."""
        return self._do_action(droplet_id, {"type": "change_kernel", "kernel": kernel_id})

    def enable_ipv6(self, droplet_id: int) -> tuple[dict[str, Any] | None, Response]:
        """Enable IPv6 for a droplet."""
        return self._do_action(droplet_id, {"type": "enable_ipv6"})

    def enable_ipv6_by_tag(self, tag: str) -> tuple[list[dict[str, Any]], Response]:
        """Enable IPv6 for the droplets carrying ``tag``."""
        return self._do_action_by_tag(tag, {"type": "enable_ipv6"})

    def enable_private_networking(self, droplet_id: int) -> tuple[dict[str, Any] | None, Response]:
        """Enable private networking for a droplet."""
        return self._do_action(droplet_id, {"type": "enable_private_networking"})

    def enable_private_networking_by_tag(self, tag: str) -> tuple[list[dict[str, Any]], Response]:
        """Enable private networking for the droplets carrying ``tag``."""
        return self._do_action_by_tag(tag, {"type": "enable_private_networking"})

    def get(self, droplet_id: int, action_id: int) -> tuple[dict[str, Any] | None, Response]:
        """Fetch one action of a droplet."""
        if droplet_id < 1:
            raise ArgError("droplet_id", "cannot be less than 1")
        if action_id < 1:
            raise ArgError("action_id", "cannot be less than 1")
        return self._get(f"{droplet_action_path(droplet_id)}/{action_id}")

    def get_by_uri(self, raw_url: str) -> tuple[dict[str, Any] | None, Response]:
        """Fetch an action by its URI; only the path of ``raw_url`` is used."""
        return self._get(urlsplit(raw_url).path)