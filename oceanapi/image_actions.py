"""Image actions: transferring and converting images."""

from __future__ import annotations

from typing import Any

from .client import Client, Response
from .errors import ArgError


def _root(document: Any) -> dict[str, Any]:
    return document if isinstance(document, dict) else {}


def _check_image_id(image_id: int) -> None:
    if image_id < 1:
        raise ArgError("image_id", "cannot be less than 1")


class ImageActionsService:
    """The image action endpoints of the API.

    Actions are returned as the mappings the API sent, together with the Response.
    """

    def __init__(self, client: Client) -> None:
        self._client = client

    def _action(self, method: str, path: str, body: Any = None) -> tuple[dict[str, Any] | None, Response]:
        request = self._client.new_request(method, path, body)
        response = self._client.do(request, _root)
        return (response.data or {}).get("action"), response

    def transfer(self, image_id: int, transfer_request: dict[str, Any]) -> tuple[dict[str, Any] | None, Response]:
        """Run the action described by ``transfer_request`` on an image."""
        _check_image_id(image_id)
        if transfer_request is None:
            raise ArgError("transfer_request", "cannot be None")
        return self._action("POST", f"v2/images/{image_id}/actions", transfer_request)

    def convert(self, image_id: int) -> tuple[dict[str, Any] | None, Response]:
        """Convert an image to a snapshot."""
        _check_image_id(image_id)
        return self._action("POST", f"v2/images/{image_id}/actions", {"type": "convert"})

    def get(self, image_id: int, action_id: int) -> tuple[dict[str, Any] | None, Response]:
        """Fetch one action of an image."""
        _check_image_id(image_id)
        if action_id < 1:
            raise ArgError("action_id", "cannot be less than 1")
        return self._action("GET", f"v2/images/{image_id}/actions/{action_id}")