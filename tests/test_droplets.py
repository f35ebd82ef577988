import json
from urllib.parse import parse_qs, urlsplit

import pytest
import responses

from oceanapi.client import Client, ErrorResponse, ListOptions
from oceanapi.droplets import (
    Droplet,
    DropletCreateImage,
    DropletCreateRequest,
    DropletCreateSSHKey,
    DropletCreateVolume,
    DropletMultiCreateRequest,
    DropletsService,
    Kernel,
    NetworkV4,
    NetworkV6,
    Networks,
    NoNetworksError,
)
from oceanapi.errors import ArgError

BASE = "http://api.example.com/"
VPC = "880b7f98-f062-404d-b33c-458d545696f6"
PAGED_LIST = {"droplets": [{"id": 1}, {"id": 2}], "meta": {"total": 2}}
CREATE_RESPONSE = {
    "droplet": {"id": 1, "vpc_uuid": VPC},
    "links": {"actions": [{"id": 1, "href": "http://example.com", "rel": "create"}]},
}


@pytest.fixture
def mock():
    with responses.RequestsMock() as rsps:
        yield rsps


@pytest.fixture
def client():
    c = Client()
    c.base_url = BASE
    return c


@pytest.fixture
def service(client):
    return DropletsService(client)


def _query(call):
    return parse_qs(urlsplit(call.request.url).query)


def _body(call):
    return json.loads(call.request.body)


def test_list(mock, service):
    mock.add(responses.GET, BASE + "v2/droplets", json=PAGED_LIST)
    droplets, resp = service.list(None)
    assert droplets == [Droplet(id=1), Droplet(id=2)]
    assert resp.meta == {"total": 2}
    assert mock.calls[0].request.method == "GET"


def test_list_by_tag(mock, service):
    mock.add(responses.GET, BASE + "v2/droplets", json=PAGED_LIST)
    droplets, resp = service.list_by_tag("testing-1", None)
    assert _query(mock.calls[0])["tag_name"] == ["testing-1"]
    assert droplets == [Droplet(id=1), Droplet(id=2)]
    assert resp.meta == {"total": 2}


def test_list_multiple_pages_keeps_links(mock, service):
    links = {"pages": {"next": "http://example.com/v2/droplets/?page=2"}}
    mock.add(responses.GET, BASE + "v2/droplets", json={"droplets": [{"id": 1}, {"id": 2}], "links": links})
    _, resp = service.list(None)
    assert resp.links == links
    assert resp.meta is None


def test_retrieve_page_by_number(mock, service):
    links = {
        "pages": {
            "next": "http://example.com/v2/droplets/?page=3",
            "prev": "http://example.com/v2/droplets/?page=1",
            "last": "http://example.com/v2/droplets/?page=3",
            "first": "http://example.com/v2/droplets/?page=1",
        }
    }
    mock.add(responses.GET, BASE + "v2/droplets", json={"droplets": [{"id": 1}, {"id": 2}], "links": links})
    _, resp = service.list(ListOptions(page=2))
    assert _query(mock.calls[0])["page"] == ["2"]
    assert resp.links["pages"]["prev"].endswith("page=1")


def test_get(mock, service):
    mock.add(responses.GET, BASE + "v2/droplets/12345", json={"droplet": {"id": 12345}})
    droplet, _ = service.get(12345)
    assert droplet == Droplet(id=12345)


def test_get_rejects_bad_id(service):
    with pytest.raises(ArgError) as info:
        service.get(0)
    assert str(info.value) == "droplet_id is invalid because cannot be less than 1"


def test_create(mock, service):
    mock.add(responses.POST, BASE + "v2/droplets", json=CREATE_RESPONSE)
    request = DropletCreateRequest(
        name="name",
        region="region",
        size="size",
        image=DropletCreateImage(id=1),
        volumes=[
            DropletCreateVolume(id="hello-im-another-volume"),
            DropletCreateVolume(name="should be ignored due to Name", id="aaa-111-bbb-222-ccc"),
        ],
        tags=["one", "two"],
        vpc_uuid=VPC,
    )
    droplet, resp = service.create(request)
    assert _body(mock.calls[0]) == {
        "name": "name",
        "region": "region",
        "size": "size",
        "image": 1,
        "ssh_keys": None,
        "backups": False,
        "ipv6": False,
        "private_networking": False,
        "monitoring": False,
        "volumes": [{"id": "hello-im-another-volume"}, {"id": "aaa-111-bbb-222-ccc"}],
        "tags": ["one", "two"],
        "vpc_uuid": VPC,
    }
    assert droplet.id == 1
    assert droplet.vpc_uuid == VPC
    assert resp.links["actions"][0]["id"] == 1


def test_create_without_droplet_agent(mock, service):
    mock.add(responses.POST, BASE + "v2/droplets", json=CREATE_RESPONSE)
    request = DropletCreateRequest(
        name="name",
        region="region",
        size="size",
        image=DropletCreateImage(id=1),
        tags=["one", "two"],
        vpc_uuid=VPC,
        with_droplet_agent=False,
    )
    droplet, _ = service.create(request)
    body = _body(mock.calls[0])
    assert body["with_droplet_agent"] is False
    assert "volumes" not in body
    assert droplet.id == 1


def test_create_rejects_none(service):
    with pytest.raises(ArgError):
        service.create(None)


@pytest.mark.parametrize(
    "agent, want",
    [
        (False, '{"name":"foo","region":"","size":"","image":0,"ssh_keys":null,"backups":false,"ipv6":false,'
                '"private_networking":false,"monitoring":false,"tags":null,"with_droplet_agent":false}'),
        (True, '{"name":"foo","region":"","size":"","image":0,"ssh_keys":null,"backups":false,"ipv6":false,'
               '"private_networking":false,"monitoring":false,"tags":null,"with_droplet_agent":true}'),
        (None, '{"name":"foo","region":"","size":"","image":0,"ssh_keys":null,"backups":false,"ipv6":false,'
               '"private_networking":false,"monitoring":false,"tags":null}'),
    ],
)
def test_with_droplet_agent_encoding(client, agent, want):
    request = client.new_request("POST", "/foo", DropletCreateRequest(name="foo", with_droplet_agent=agent))
    assert request.body == (want + "\n").encode()


def test_user_data_encoding(client):
    request = client.new_request("POST", "/foo", DropletCreateRequest(name="l", user_data="u"))
    want = (
        '{"name":"l","region":"","size":"","image":0,"ssh_keys":null,"backups":false,"ipv6":false,'
        '"private_networking":false,"monitoring":false,"user_data":"u","tags":null}\n'
    )
    assert request.body == want.encode()


def test_create_identifiers_prefer_names():
    assert DropletCreateImage(id=3, slug="ubuntu").to_json() == "ubuntu"
    assert DropletCreateImage(id=3).to_json() == 3
    assert DropletCreateSSHKey(id=7, fingerprint="aa:bb").to_json() == "aa:bb"
    assert DropletCreateSSHKey(id=7).to_json() == 7
    assert DropletCreateVolume(name="vol").to_json() == {"name": "vol"}


def test_create_multiple(mock, service):
    mock.add(
        responses.POST,
        BASE + "v2/droplets",
        json={
            "droplets": [{"id": 1, "vpc_uuid": VPC}, {"id": 2, "vpc_uuid": VPC}],
            "links": {"actions": [{"id": 1, "href": "http://example.com", "rel": "multiple_create"}]},
        },
    )
    request = DropletMultiCreateRequest(
        names=["name1", "name2"],
        region="region",
        size="size",
        image=DropletCreateImage(id=1),
        tags=["one", "two"],
        vpc_uuid=VPC,
    )
    droplets, resp = service.create_multiple(request)
    assert _body(mock.calls[0]) == {
        "names": ["name1", "name2"],
        "region": "region",
        "size": "size",
        "image": 1,
        "ssh_keys": None,
        "backups": False,
        "ipv6": False,
        "private_networking": False,
        "monitoring": False,
        "tags": ["one", "two"],
        "vpc_uuid": VPC,
    }
    assert [d.id for d in droplets] == [1, 2]
    assert all(d.vpc_uuid == VPC for d in droplets)
    assert resp.links["actions"][0]["id"] == 1


def test_delete(mock, service):
    mock.add(responses.DELETE, BASE + "v2/droplets/12345", status=204)
    resp = service.delete(12345)
    assert resp.status_code == 204
    assert mock.calls[0].request.method == "DELETE"


def test_delete_by_tag(mock, service):
    mock.add(responses.DELETE, BASE + "v2/droplets", status=204)
    resp = service.delete_by_tag("testing-1")
    assert _query(mock.calls[0])["tag_name"] == ["testing-1"]
    assert resp.status_code == 204


def test_delete_by_tag_rejects_empty(service):
    with pytest.raises(ArgError) as info:
        service.delete_by_tag("")
    assert info.value.arg == "tag"


def test_kernels(mock, service):
    mock.add(responses.GET, BASE + "v2/droplets/12345/kernels",
             json={"kernels": [{"id": 1}, {"id": 2}], "meta": {"total": 2}})
    kernels, resp = service.kernels(12345, ListOptions(page=2))
    assert kernels == [Kernel(id=1), Kernel(id=2)]
    assert resp.meta == {"total": 2}


@pytest.mark.parametrize("name", ["snapshots", "backups", "actions"])
def test_image_and_action_listings(mock, service, name):
    mock.add(responses.GET, BASE + f"v2/droplets/12345/{name}",
             json={name: [{"id": 1}, {"id": 2}], "meta": {"total": 2}})
    items, resp = getattr(service, name)(12345, ListOptions(page=2))
    assert items == [{"id": 1}, {"id": 2}]
    assert resp.meta == {"total": 2}
    assert _query(mock.calls[0])["page"] == ["2"]


def test_neighbors(mock, service):
    mock.add(responses.GET, BASE + "v2/droplets/12345/neighbors", json={"droplets": [{"id": 1}, {"id": 2}]})
    neighbors, _ = service.neighbors(12345)
    assert neighbors == [Droplet(id=1), Droplet(id=2)]


def test_api_error_raises(mock, service):
    mock.add(responses.GET, BASE + "v2/droplets/5", status=404, json={"message": "not found"})
    with pytest.raises(ErrorResponse) as info:
        service.get(5)
    assert info.value.message == "not found"


def test_ip_methods():
    ipv6 = "1000:1000:1000:1000:0000:0000:004D:B001"
    droplet = Droplet(
        networks=Networks(
            v4=[NetworkV4(ip_address="192.168.0.1", type="public"), NetworkV4(ip_address="10.0.0.1", type="private")],
            v6=[NetworkV6(ip_address=ipv6, type="public")],
        )
    )
    assert droplet.public_ipv4() == "192.168.0.1"
    assert droplet.private_ipv4() == "10.0.0.1"
    assert droplet.public_ipv6() == ipv6


def test_ip_methods_without_match_return_empty():
    droplet = Droplet(networks=Networks())
    assert droplet.public_ipv4() == ""
    assert droplet.private_ipv4() == ""


def test_ip_methods_without_networks_raise():
    with pytest.raises(NoNetworksError):
        Droplet().public_ipv6()


def test_droplet_from_dict_parses_nested():
    droplet = Droplet.from_dict({
        "id": 9,
        "locked": True,
        "created_at": "2020-01-01T00:00:00Z",
        "kernel": {"id": 3, "name": "k", "version": "5"},
        "networks": {"v6": [{"ip_address": "::1", "netmask": 64, "type": "public"}]},
        "region": {"slug": "nyc3"},
    })
    assert droplet.locked is True
    assert droplet.created == "2020-01-01T00:00:00Z"
    assert droplet.kernel == Kernel(id=3, name="k", version="5")
    assert droplet.networks.v6[0].netmask == 64
    assert droplet.region == {"slug": "nyc3"}