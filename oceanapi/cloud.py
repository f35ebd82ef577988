"""The API client with every service attached, and ways to construct it."""

from __future__ import annotations

from typing import Any

import requests

from .client import Client
from .droplet_actions import DropletActionsService
from .droplets import DropletsService
from .firewalls import FirewallsService
from .floating_ip_actions import FloatingIPActionsService
from .floating_ips import FloatingIPsService
from .image_actions import ImageActionsService


class CloudClient(Client):
    """A client exposing the API's services as attributes."""

    def __init__(self, session: requests.Session | None = None) -> None:
        super().__init__(session)
        self.droplets = DropletsService(self)
        self.droplet_actions = DropletActionsService(self)
        self.image_actions = ImageActionsService(self)
        self.firewalls = FirewallsService(self)
        self.floating_ips = FloatingIPsService(self)
        self.floating_ip_actions = FloatingIPActionsService(self)


def new_client(session: requests.Session | None = None) -> CloudClient:
    """Return a client that sends its requests through ``session``."""
    return CloudClient(session)


def new_from_token(token: str) -> CloudClient:
    """Return a client authenticating with the given API token.

    Surrounding whitespace and single quotes are removed from the token.
    """
    clean = token.strip().strip("'")
    session = requests.Session()
    session.headers["Authorization"] = f"Bearer {clean}"
    return CloudClient(session)


def new(session: requests.Session | None = None, *args: Any) -> CloudClient:
    """Return a client with each option in ``args`` applied in turn."""
    client = new_client(session)
    for option in args:
        option(client)
    return client