import json

import pytest
import responses

from oceanapi.client import Client, ErrorResponse
from oceanapi.errors import ArgError
from oceanapi.image_actions import ImageActionsService

BASE = "https://api.digitalocean.com"
IN_PROGRESS = {"status": "in-progress"}


@pytest.fixture
def mocked():
    with responses.RequestsMock() as rsps:
        yield rsps


@pytest.fixture
def service():
    return ImageActionsService(Client())


def test_transfer(mocked, service):
    mocked.add(responses.POST, f"{BASE}/v2/images/12345/actions", json={"action": IN_PROGRESS})

    action, _ = service.transfer(12345, {})

    assert action == IN_PROGRESS
    assert mocked.calls[0].request.method == "POST"
    assert json.loads(mocked.calls[0].request.body) == {}


def test_transfer_sends_request_fields(mocked, service):
    mocked.add(responses.POST, f"{BASE}/v2/images/12345/actions", json={"action": IN_PROGRESS})

    action, _ = service.transfer(12345, {"type": "transfer", "region": "nyc2"})

    assert action == IN_PROGRESS
    assert json.loads(mocked.calls[0].request.body) == {"type": "transfer", "region": "nyc2"}


def test_convert(mocked, service):
    mocked.add(responses.POST, f"{BASE}/v2/images/12345/actions", json={"action": IN_PROGRESS})

    action, _ = service.convert(12345)

    assert action == IN_PROGRESS
    assert json.loads(mocked.calls[0].request.body) == {"type": "convert"}


def test_get(mocked, service):
    mocked.add(responses.GET, f"{BASE}/v2/images/123/actions/456", json={"action": IN_PROGRESS})

    action, response = service.get(123, 456)

    assert action == IN_PROGRESS
    assert response.status_code == 200
    assert mocked.calls[0].request.method == "GET"


def test_invalid_image_id(service):
    with pytest.raises(ArgError) as info:
        service.convert(0)
    assert str(info.value) == "image_id is invalid because cannot be less than 1"
    with pytest.raises(ArgError) as info:
        service.transfer(0, {})
    assert info.value.arg == "image_id"


def test_transfer_requires_request(service):
    with pytest.raises(ArgError) as info:
        service.transfer(1, None)
    assert info.value.arg == "transfer_request"


def test_get_invalid_action_id(service):
    with pytest.raises(ArgError) as info:
        service.get(1, 0)
    assert info.value.arg == "action_id"


def test_api_error_is_raised(mocked, service):
    mocked.add(
        responses.GET,
        f"{BASE}/v2/images/1/actions/2",
        json={"message": "gone", "request_id": "req-1"},
        status=410,
    )

    with pytest.raises(ErrorResponse) as info:
        service.get(1, 2)
    assert info.value.request_id == "req-1"
    assert info.value.message == "gone"