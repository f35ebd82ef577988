"""Droplets: the droplet model, create requests and the droplets endpoints."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from .client import Client, ListOptions, Response, add_options
from .errors import ArgError

DROPLET_BASE_PATH = "v2/droplets"


class NoNetworksError(LookupError):
    """The droplet has no networks defined."""

    def __init__(self) -> None:
        super().__init__("no networks have been defined")


@dataclass
class Kernel:
    """A kernel that a droplet can run."""

    id: int = 0
    name: str = ""
    version: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Kernel:
        return cls(
            id=int(data.get("id") or 0),
            name=data.get("name") or "",
            version=data.get("version") or "",
        )


@dataclass
class BackupWindow:
    """The time window of a droplet's next backup."""

    start: str | None = None
    end: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BackupWindow:
        return cls(start=data.get("start"), end=data.get("end"))


@dataclass
class NetworkV4:
    """An IPv4 network of a droplet."""

    ip_address: str = ""
    netmask: str = ""
    gateway: str = ""
    type: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> NetworkV4:
        return cls(
            ip_address=data.get("ip_address") or "",
            netmask=data.get("netmask") or "",
            gateway=data.get("gateway") or "",
            type=data.get("type") or "",
        )


@dataclass
class NetworkV6:
    """An IPv6 network of a droplet."""

    ip_address: str = ""
    netmask: int = 0
    gateway: str = ""
    type: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> NetworkV6:
        return cls(
            ip_address=data.get("ip_address") or "",
            netmask=int(data.get("netmask") or 0),
            gateway=data.get("gateway") or "",
            type=data.get("type") or "",
        )


@dataclass
class Networks:
    """The IPv4 and IPv6 networks of a droplet."""

    v4: list[NetworkV4] = field(default_factory=list)
    v6: list[NetworkV6] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Networks:
        return cls(
            v4=[NetworkV4.from_dict(n) for n in data.get("v4") or []],
            v6=[NetworkV6.from_dict(n) for n in data.get("v6") or []],
        )


@dataclass
class Droplet:
    """A droplet as described by the API.

    Region, image and size are kept as the mappings the API returned.
    """

    id: int = 0
    name: str = ""
    memory: int = 0
    vcpus: int = 0
    disk: int = 0
    region: dict[str, Any] | None = None
    image: dict[str, Any] | None = None
    size: dict[str, Any] | None = None
    size_slug: str = ""
    backup_ids: list[int] = field(default_factory=list)
    next_backup_window: BackupWindow | None = None
    snapshot_ids: list[int] = field(default_factory=list)
    features: list[str] = field(default_factory=list)
    locked: bool = False
    status: str = ""
    networks: Networks | None = None
    created: str = ""
    kernel: Kernel | None = None
    tags: list[str] = field(default_factory=list)
    volume_ids: list[str] = field(default_factory=list)
    vpc_uuid: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Droplet:
        networks = data.get("networks")
        kernel = data.get("kernel")
        window = data.get("next_backup_window")
        return cls(
            id=int(data.get("id") or 0),
            name=data.get("name") or "",
            memory=int(data.get("memory") or 0),
            vcpus=int(data.get("vcpus") or 0),
            disk=int(data.get("disk") or 0),
            region=data.get("region"),
            image=data.get("image"),
            size=data.get("size"),
            size_slug=data.get("size_slug") or "",
            backup_ids=[int(i) for i in data.get("backup_ids") or []],
            next_backup_window=BackupWindow.from_dict(window) if window is not None else None,
            snapshot_ids=[int(i) for i in data.get("snapshot_ids") or []],
            features=list(data.get("features") or []),
            locked=bool(data.get("locked", False)),
            status=data.get("status") or "",
            networks=Networks.from_dict(networks) if networks is not None else None,
            created=data.get("created_at") or "",
            kernel=Kernel.from_dict(kernel) if kernel is not None else None,
            tags=list(data.get("tags") or []),
            volume_ids=list(data.get("volume_ids") or []),
            vpc_uuid=data.get("vpc_uuid") or "",
        )

    def _first_address(self, networks: list[Any], kind: str) -> str:
        return next((n.ip_address for n in networks if n.type == kind), "")

    def public_ipv4(self) -> str:
        """The first public IPv4 address, or "" when there is none."""
        if self.networks is None:
            raise NoNetworksError()
        return self._first_address(self.networks.v4, "public")

    def private_ipv4(self) -> str:
        """The first private IPv4 address, or "" when there is none."""
        if self.networks is None:
            raise NoNetworksError()
        return self._first_address(self.networks.v4, "private")

    def public_ipv6(self) -> str:
        """The first public IPv6 address, or "" when there is none."""
        if self.networks is None:
            raise NoNetworksError()
        return self._first_address(self.networks.v6, "public")


@dataclass
class DropletCreateImage:
    """The image of a create request; a slug is preferred over an id."""

    id: int = 0
    slug: str = ""

    def to_json(self) -> int | str:
        return self.slug if self.slug else self.id


@dataclass
class DropletCreateVolume:
    """A volume to attach on creation; an id is preferred over a name."""

    id: str = ""
    name: str = ""

    def to_json(self) -> dict[str, str]:
        if self.id:
            return {"id": self.id}
        return {"name": self.name}


@dataclass
class DropletCreateSSHKey:
    """An SSH key for a create request; a fingerprint is preferred over an id."""

    id: int = 0
    fingerprint: str = ""

    def to_json(self) -> int | str:
        return self.fingerprint if self.fingerprint else self.id


def _ssh_keys_json(keys: list[DropletCreateSSHKey] | None) -> list[int | str] | None:
    return None if keys is None else [key.to_json() for key in keys]


def _optional_fields(target: dict[str, Any], **values: Any) -> None:
    target.update({key: value for key, value in values.items() if value})


@dataclass
class DropletCreateRequest:
    """A request to create one droplet."""

    name: str = ""
    region: str = ""
    size: str = ""
    image: DropletCreateImage = field(default_factory=DropletCreateImage)
    ssh_keys: list[DropletCreateSSHKey] | None = None
    backups: bool = False
    ipv6: bool = False
    private_networking: bool = False
    monitoring: bool = False
    user_data: str = ""
    volumes: list[DropletCreateVolume] | None = None
    tags: list[str] | None = None
    vpc_uuid: str = ""
    with_droplet_agent: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "name": self.name,
            "region": self.region,
            "size": self.size,
            "image": self.image.to_json(),
            "ssh_keys": _ssh_keys_json(self.ssh_keys),
            "backups": self.backups,
            "ipv6": self.ipv6,
            "private_networking": self.private_networking,
            "monitoring": self.monitoring,
        }
        _optional_fields(body, user_data=self.user_data)
        if self.volumes:
            body["volumes"] = [volume.to_json() for volume in self.volumes]
        body["tags"] = self.tags
        _optional_fields(body, vpc_uuid=self.vpc_uuid)
        if self.with_droplet_agent is not None:
            body["with_droplet_agent"] = self.with_droplet_agent
        return body


@dataclass
class DropletMultiCreateRequest:
    """A request to create several droplets at once."""

    names: list[str] | None = None
    region: str = ""
    size: str = ""
    image: DropletCreateImage = field(default_factory=DropletCreateImage)
    ssh_keys: list[DropletCreateSSHKey] | None = None
    backups: bool = False
    ipv6: bool = False
    private_networking: bool = False
    monitoring: bool = False
    user_data: str = ""
    tags: list[str] | None = None
    vpc_uuid: str = ""
    with_droplet_agent: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "names": self.names,
            "region": self.region,
            "size": self.size,
            "image": self.image.to_json(),
            "ssh_keys": _ssh_keys_json(self.ssh_keys),
            "backups": self.backups,
            "ipv6": self.ipv6,
            "private_networking": self.private_networking,
            "monitoring": self.monitoring,
        }
        _optional_fields(body, user_data=self.user_data)
        body["tags"] = self.tags
        _optional_fields(body, vpc_uuid=self.vpc_uuid)
        if self.with_droplet_agent is not None:
            body["with_droplet_agent"] = self.with_droplet_agent
        return body


def _root(document: Any) -> dict[str, Any]:
    return document if isinstance(document, dict) else {}


def _check_droplet_id(droplet_id: int) -> None:
    if droplet_id < 1:
        raise ArgError("droplet_id", "cannot be less than 1")


class DropletsService:
    """The droplet endpoints of the API.

    Every call returns the parsed result together with the Response.
    """

    def __init__(self, client: Client) -> None:
        self._client = client

    def _call(
        self,
        method: str,
        path: str,
        body: Any = None,
        *,
        links: bool = False,
        meta: bool = False,
    ) -> tuple[dict[str, Any], Response]:
        request = self._client.new_request(method, path, body)
        response = self._client.do(request, _root)
        root = response.data or {}
        if links and root.get("links") is not None:
            response.links = root["links"]
        if meta and root.get("meta") is not None:
            response.meta = root["meta"]
        return root, response

    def _collection(
        self,
        path: str,
        key: str,
        convert: Callable[[dict[str, Any]], Any],
        *,
        paged: bool = True,
    ) -> tuple[list[Any], Response]:
        root, response = self._call("GET", path, links=paged, meta=paged)
        return [convert(item) for item in root.get(key) or []], response

    def list(self, options: ListOptions | None = None) -> tuple[list[Droplet], Response]:
        """List all droplets."""
        path = add_options(DROPLET_BASE_PATH, options)
        return self._collection(path, "droplets", Droplet.from_dict)

    def list_by_tag(self, tag: str, options: ListOptions | None = None) -> tuple[list[Droplet], Response]:
        """List the droplets carrying ``tag``."""
        path = add_options(f"{DROPLET_BASE_PATH}?tag_name={tag}", options)
        return self._collection(path, "droplets", Droplet.from_dict)

    def get(self, droplet_id: int) -> tuple[Droplet | None, Response]:
        """Fetch one droplet."""
        _check_droplet_id(droplet_id)
        root, response = self._call("GET", f"{DROPLET_BASE_PATH}/{droplet_id}")
        droplet = root.get("droplet")
        return (Droplet.from_dict(droplet) if droplet is not None else None), response

    def create(self, request: DropletCreateRequest) -> tuple[Droplet | None, Response]:
        """Create a droplet."""
        if request is None:
            raise ArgError("request", "cannot be None")
        root, response = self._call("POST", DROPLET_BASE_PATH, request, links=True)
        droplet = root.get("droplet")
        return (Droplet.from_dict(droplet) if droplet is not None else None), response

    def create_multiple(self, request: DropletMultiCreateRequest) -> tuple[list[Droplet], Response]:
        """Create several droplets."""
        if request is None:
            raise ArgError("request", "cannot be None")
        root, response = self._call("POST", DROPLET_BASE_PATH, request, links=True)
        return [Droplet.from_dict(d) for d in root.get("droplets") or []], response

    def _delete(self, path: str) -> Response:
        return self._client.do(self._client.new_request("DELETE", path))

    def delete(self, droplet_id: int) -> Response:
        """Delete one droplet."""
        _check_droplet_id(droplet_id)
        return self._delete(f"{DROPLET_BASE_PATH}/{droplet_id}")

    def delete_by_tag(self, tag: str) -> Response:
        """Delete the droplets carrying ``tag``."""
        if not tag:
            raise ArgError("tag", "cannot be empty")
        return self._delete(f"{DROPLET_BASE_PATH}?tag_name={tag}")

    def kernels(self, droplet_id: int, options: ListOptions | None = None) -> tuple[list[Kernel], Response]:
        """List the kernels available to a droplet."""
        _check_droplet_id(droplet_id)
        path = add_options(f"{DROPLET_BASE_PATH}/{droplet_id}/kernels", options)
        return self._collection(path, "kernels", Kernel.from_dict)

    def snapshots(self, droplet_id: int, options: ListOptions | None = None) -> tuple[list[dict[str, Any]], Response]:
        """List a droplet's snapshot images."""
        _check_droplet_id(droplet_id)
        path = add_options(f"{DROPLET_BASE_PATH}/{droplet_id}/snapshots", options)
        return self._collection(path, "snapshots", dict)

    def backups(self, droplet_id: int, options: ListOptions | None = None) -> tuple[list[dict[str, Any]], Response]:
        """List a droplet's backup images."""
        _check_droplet_id(droplet_id)
        path = add_options(f"{DROPLET_BASE_PATH}/{droplet_id}/backups", options)
        return self._collection(path, "backups", dict)

    def actions(self, droplet_id: int, options: ListOptions | None = None) -> tuple[list[dict[str, Any]], Response]:
        """List the actions run on a droplet."""
        _check_droplet_id(droplet_id)
        path = add_options(f"{DROPLET_BASE_PATH}/{droplet_id}/actions", options)
        return self._collection(path, "actions", dict)

    def neighbors(self, droplet_id: int) -> tuple[list[Droplet], Response]:
        """List the droplets sharing hardware with a droplet."""
        _check_droplet_id(droplet_id)
        path = f"{DROPLET_BASE_PATH}/{droplet_id}/neighbors"
        return self._collection(path, "droplets", Droplet.from_dict, paged=False)