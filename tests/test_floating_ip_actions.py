import json

import pytest
import responses

from oceanapi.client import Client, ErrorResponse, ListOptions
from oceanapi.floating_ip_actions import FloatingIPActionsService, floating_ip_action_path

BASE = "https://api.digitalocean.com/"
ACTIONS_URL = BASE + "v2/floating_ips/192.168.0.1/actions"


@pytest.fixture
def mocked():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


@pytest.fixture
def service():
    return FloatingIPActionsService(Client())


def test_action_path():
    assert floating_ip_action_path("192.168.0.1") == "v2/floating_ips/192.168.0.1/actions"


def test_assign(mocked, service):
    mocked.add(responses.POST, ACTIONS_URL, json={"action": {"status": "in-progress"}})
    action, _ = service.assign("192.168.0.1", 12345)
    assert action == {"status": "in-progress"}
    request = mocked.calls[0].request
    assert request.method == "POST"
    assert json.loads(request.body) == {"droplet_id": 12345, "type": "assign"}


def test_unassign(mocked, service):
    mocked.add(responses.POST, ACTIONS_URL, json={"action": {"status": "in-progress"}})
    action, _ = service.unassign("192.168.0.1")
    assert action == {"status": "in-progress"}
    assert json.loads(mocked.calls[0].request.body) == {"type": "unassign"}


def test_get(mocked, service):
    mocked.add(responses.GET, ACTIONS_URL + "/456", json={"action": {"status": "in-progress"}})
    action, _ = service.get("192.168.0.1", 456)
    assert action == {"status": "in-progress"}
    assert mocked.calls[0].request.method == "GET"


def test_list(mocked, service):
    mocked.add(responses.GET, ACTIONS_URL, json={"actions": [{"status": "in-progress"}]})
    actions, response = service.list("192.168.0.1", None)
    assert actions == [{"status": "in-progress"}]
    assert response.links is None


def test_list_multiple_pages(mocked, service):
    next_page = "http://example.com/v2/floating_ips/192.168.0.1/actions?page=2"
    mocked.add(
        responses.GET,
        ACTIONS_URL,
        json={"actions": [{"status": "in-progress"}], "links": {"pages": {"next": next_page}}},
    )
    _, response = service.list("192.168.0.1", None)
    assert response.links["pages"]["next"] == next_page
    assert "prev" not in response.links["pages"]


def test_list_page_by_number(mocked, service):
    pages = {
        "next": "http://example.com/v2/regions/?page=3",
        "prev": "http://example.com/v2/regions/?page=1",
        "last": "http://example.com/v2/regions/?page=3",
        "first": "http://example.com/v2/regions/?page=1",
    }
    mocked.add(
        responses.GET,
        ACTIONS_URL,
        json={"actions": [{"status": "in-progress"}], "links": {"pages": pages}},
    )
    actions, response = service.list("192.168.0.1", ListOptions(page=2))
    assert actions == [{"status": "in-progress"}]
    assert response.links["pages"] == pages
    assert mocked.calls[0].request.url.endswith("actions?page=2")


def test_error_status_raises(mocked, service):
    mocked.add(responses.GET, ACTIONS_URL + "/1", json={"message": "not found"}, status=404)
    with pytest.raises(ErrorResponse) as info:
        service.get("192.168.0.1", 1)
    assert info.value.message == "not found"