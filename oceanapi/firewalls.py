"""Firewalls: rule models and the firewall endpoints."""

from __future__ import annotations

import posixpath
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, TypeVar

from .client import Client, ListOptions, Response, add_options
from .droplets import DROPLET_BASE_PATH

FIREWALLS_BASE_PATH = "/v2/firewalls"

_T = TypeVar("_T")

_TARGET_KEYS = ("addresses", "tags", "droplet_ids", "load_balancer_uids", "kubernetes_ids")


def _join(*parts: Any) -> str:
    return posixpath.normpath("/".join(str(part) for part in parts if part != ""))


def _root(document: Any) -> dict[str, Any]:
    return document if isinstance(document, dict) else {}


def _convert_all(items: Iterable[Any] | None, convert: Callable[[Any], _T]) -> list[_T]:
    return [convert(item) for item in items or []]


def _targets_from_dict(data: dict[str, Any]) -> dict[str, list[Any]]:
    return {
        "addresses": list(data.get("addresses") or []),
        "tags": list(data.get("tags") or []),
        "droplet_ids": _convert_all(data.get("droplet_ids"), int),
        "load_balancer_uids": list(data.get("load_balancer_uids") or []),
        "kubernetes_ids": list(data.get("kubernetes_ids") or []),
    }


def _targets_to_dict(targets: Any) -> dict[str, Any]:
    values = {key: getattr(targets, key) for key in _TARGET_KEYS}
    return {key: list(value) for key, value in values.items() if value}


@dataclass
class Sources:
    """Where the traffic of an inbound rule may come from."""

    addresses: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    droplet_ids: list[int] = field(default_factory=list)
    load_balancer_uids: list[str] = field(default_factory=list)
    kubernetes_ids: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Sources:
        return cls(**_targets_from_dict(data))

    def to_dict(self) -> dict[str, Any]:
        return _targets_to_dict(self)


@dataclass
class Destinations:
    """Where the traffic of an outbound rule may go to."""

    addresses: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    droplet_ids: list[int] = field(default_factory=list)
    load_balancer_uids: list[str] = field(default_factory=list)
    kubernetes_ids: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Destinations:
        return cls(**_targets_from_dict(data))

    def to_dict(self) -> dict[str, Any]:
        return _targets_to_dict(self)


def _rule_head(protocol: str, port_range: str) -> dict[str, Any]:
    body: dict[str, Any] = {}
    if protocol:
        body["protocol"] = protocol
    if port_range:
        body["ports"] = port_range
    return body


@dataclass
class InboundRule:
    """A rule admitting inbound traffic."""

    protocol: str = ""
    port_range: str = ""
    sources: Sources | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> InboundRule:
        sources = data.get("sources")
        return cls(
            protocol=data.get("protocol") or "",
            port_range=data.get("ports") or "",
            sources=Sources.from_dict(sources) if sources is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        body = _rule_head(self.protocol, self.port_range)
        body["sources"] = self.sources.to_dict() if self.sources is not None else None
        return body


@dataclass
class OutboundRule:
    """A rule admitting outbound traffic."""

    protocol: str = ""
    port_range: str = ""
    destinations: Destinations | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> OutboundRule:
        destinations = data.get("destinations")
        return cls(
            protocol=data.get("protocol") or "",
            port_range=data.get("ports") or "",
            destinations=Destinations.from_dict(destinations) if destinations is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        body = _rule_head(self.protocol, self.port_range)
        body["destinations"] = self.destinations.to_dict() if self.destinations is not None else None
        return body


@dataclass
class PendingChange:
    """A change to a firewall that has not been applied to a droplet yet."""

    droplet_id: int = 0
    removing: bool = False
    status: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PendingChange:
        return cls(
            droplet_id=int(data.get("droplet_id") or 0),
            removing=bool(data.get("removing", False)),
            status=data.get("status") or "",
        )


@dataclass
class Firewall:
    """A firewall configuration as described by the API."""

    id: str = ""
    name: str = ""
    status: str = ""
    inbound_rules: list[InboundRule] = field(default_factory=list)
    outbound_rules: list[OutboundRule] = field(default_factory=list)
    droplet_ids: list[int] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    created: str = ""
    pending_changes: list[PendingChange] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Firewall:
        return cls(
            id=data.get("id") or "",
            name=data.get("name") or "",
            status=data.get("status") or "",
            inbound_rules=_convert_all(data.get("inbound_rules"), InboundRule.from_dict),
            outbound_rules=_convert_all(data.get("outbound_rules"), OutboundRule.from_dict),
            droplet_ids=_convert_all(data.get("droplet_ids"), int),
            tags=list(data.get("tags") or []),
            created=data.get("created_at") or "",
            pending_changes=_convert_all(data.get("pending_changes"), PendingChange.from_dict),
        )


def _rules_json(rules: list[Any] | None) -> list[dict[str, Any]] | None:
    return None if rules is None else [rule.to_dict() for rule in rules]


@dataclass
class FirewallRequest:
    """The configuration to apply to a new or existing firewall."""

    name: str = ""
    inbound_rules: list[InboundRule] | None = None
    outbound_rules: list[OutboundRule] | None = None
    droplet_ids: list[int] | None = None
    tags: list[str] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "inbound_rules": _rules_json(self.inbound_rules),
            "outbound_rules": _rules_json(self.outbound_rules),
            "droplet_ids": None if self.droplet_ids is None else list(self.droplet_ids),
            "tags": None if self.tags is None else list(self.tags),
        }


@dataclass
class FirewallRulesRequest:
    """Rules to add to or remove from an existing firewall."""

    inbound_rules: list[InboundRule] | None = None
    outbound_rules: list[OutboundRule] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "inbound_rules": _rules_json(self.inbound_rules),
            "outbound_rules": _rules_json(self.outbound_rules),
        }


class FirewallsService:
    """The firewall endpoints of the API.

    Calls that return data give it together with the Response.
    """

    def __init__(self, client: Client) -> None:
        self._client = client

    def _send(
        self, method: str, path: str, body: Any = None, *, paged: bool = False
    ) -> tuple[dict[str, Any], Response]:
        request = self._client.new_request(method, path, body)
        response = self._client.do(request, _root)
        root = response.data or {}
        if paged:
            if root.get("links") is not None:
                response.links = root["links"]
            if root.get("meta") is not None:
                response.meta = root["meta"]
        return root, response

    def _firewall(self, method: str, path: str, body: Any = None) -> tuple[Firewall | None, Response]:
        root, response = self._send(method, path, body)
        firewall = root.get("firewall")
        return (Firewall.from_dict(firewall) if firewall is not None else None), response

    def _no_content(self, method: str, path: str, body: Any = None) -> Response:
        return self._client.do(self._client.new_request(method, path, body))

    def _list(self, path: str) -> tuple[list[Firewall], Response]:
        root, response = self._send("GET", path, paged=True)
        return _convert_all(root.get("firewalls"), Firewall.from_dict), response

    def get(self, firewall_id: str) -> tuple[Firewall | None, Response]:
        """Fetch a firewall by its identifier."""
        return self._firewall("GET", _join(FIREWALLS_BASE_PATH, firewall_id))

    def create(self, request: FirewallRequest) -> tuple[Firewall | None, Response]:
        """Create a firewall with the given configuration."""
        return self._firewall("POST", FIREWALLS_BASE_PATH, request)

    def update(self, firewall_id: str, request: FirewallRequest) -> tuple[Firewall | None, Response]:
        """Replace the configuration of an existing firewall."""
        return self._firewall("PUT", _join(FIREWALLS_BASE_PATH, firewall_id), request)

    def delete(self, firewall_id: str) -> Response:
        """Delete a firewall."""
        return self._no_content("DELETE", _join(FIREWALLS_BASE_PATH, firewall_id))

    def list(self, options: ListOptions | None = None) -> tuple[list[Firewall], Response]:
        """List all firewalls."""
        return self._list(add_options(FIREWALLS_BASE_PATH, options))

    def list_by_droplet(
        self, droplet_id: int, options: ListOptions | None = None
    ) -> tuple[list[Firewall], Response]:
        """List the firewalls applied to a droplet."""
        base = _join(DROPLET_BASE_PATH, str(droplet_id), "firewalls")
        return self._list(add_options(base, options))

    def add_droplets(self, firewall_id: str, *args: int) -> Response:
        """Apply a firewall to the given droplets."""
        path = _join(FIREWALLS_BASE_PATH, firewall_id, "droplets")
        return self._no_content("POST", path, {"droplet_ids": list(args) if args else None})

    def remove_droplets(self, firewall_id: str, *args: int) -> Response:
        """Remove the given droplets from a firewall."""
        path = _join(FIREWALLS_BASE_PATH, firewall_id, "droplets")
        return self._no_content("DELETE", path, {"droplet_ids": list(args) if args else None})

    def add_tags(self, firewall_id: str, *args: str) -> Response:
        """Apply a firewall to the droplets carrying the given tags."""
        path = _join(FIREWALLS_BASE_PATH, firewall_id, "tags")
        return self._no_content("POST", path, {"tags": list(args) if args else None})

    def remove_tags(self, firewall_id: str, *args: str) -> Response:
        """Remove the given tags from a firewall."""
        path = _join(FIREWALLS_BASE_PATH, firewall_id, "tags")
        return self._no_content("DELETE", path, {"tags": list(args) if args else None})

    def add_rules(self, firewall_id: str, rules: FirewallRulesRequest) -> Response:
        """Add rules to a firewall."""
        return self._no_content("POST", _join(FIREWALLS_BASE_PATH, firewall_id, "rules"), rules)

    def remove_rules(self, firewall_id: str, rules: FirewallRulesRequest) -> Response:
        """Remove rules from a firewall."""
        return self._no_content("DELETE", _join(FIREWALLS_BASE_PATH, firewall_id, "rules"), rules)