import string

import httpx
import pytest
import respx
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from arcgis_portal._version import VERSION
from arcgis_portal.api_client.client import (
    USER_AGENT_NAME_VERSION_SEPARATOR,
    PortalApiClient,
    _construct_user_agent,
)
from arcgis_portal.api_client.models import ItemResource, UpdateItemResponse
from arcgis_portal.constants import RESOURCES_PAGE_SIZE, USER_AGENT
from arcgis_portal.errors import InvalidTokenError, PortalApiError, PortalError


@pytest.fixture
def base_url():
    return "http://portal-api-base/sharing/rest"


@pytest.fixture
def api_client(auth_token, base_url):
    return PortalApiClient(token=auth_token, base_url=base_url)


@pytest.fixture
def endpoint_url(base_url):
    return f"{base_url}/some-endpoint"


@pytest.fixture
def resource_dict():
    return {
        "resource": "config.json",
        "created": 1700000000000,
        "size": 42,
        "access": "inherit",
    }


def _resources_page(resources, next_start):
    return {
        "total": 2,
        "start": 1,
        "num": 1,
        "nextStart": next_start,
        "resources": resources,
    }


class TestConstructUserAgent:
    def test__construct_user_agent_with_defaults(self):
        ua, version = _construct_user_agent().split(USER_AGENT_NAME_VERSION_SEPARATOR)
        assert ua == USER_AGENT
        assert version == VERSION

    def test__construct_user_agent_custom_agent_and_version(self):
        ua, version = _construct_user_agent(
            user_agent="custom-user-agent", version="3.4.5"
        ).split(USER_AGENT_NAME_VERSION_SEPARATOR)
        assert ua == "custom-user-agent"
        assert version == "3.4.5"


@settings(suppress_health_check=[HealthCheck.function_scoped_fixture])
@given(
    token=st.text(string.ascii_letters + string.digits, min_size=1),
)
@respx.mock
def test_token_auth(token, base_url, endpoint_url):
    route_is_authenticated = respx.get(
        endpoint_url,
        headers__contains={"X-Esri-Authorization": f"Bearer {token}"},
    ).respond(json={})

    api_client = PortalApiClient(base_url=base_url, token=token)
    api_client.get("some-endpoint")
    assert route_is_authenticated.called


@respx.mock
def test_user_agent(api_client, endpoint_url):
    route = respx.get(
        endpoint_url, headers__contains={"user-agent": _construct_user_agent()}
    ).respond(json={})

    api_client.get("some-endpoint")
    assert route.called


@respx.mock
def test_get_requests_json_format(api_client, endpoint_url):
    route = respx.get(
        endpoint_url, params={"f": "json", "param1": "value1"}
    ).respond(json={})

    api_client.get("some-endpoint", params={"param1": "value1"})
    assert route.called


@respx.mock
def test_post_requests_json_format(api_client, endpoint_url):
    route = respx.post(
        endpoint_url, data={"f": "json", "field": "value"}
    ).respond(json={})

    api_client.post("some-endpoint", data={"field": "value"})
    assert route.called


@respx.mock
def test_post_does_not_modify_form_data(api_client, endpoint_url):
    respx.post(endpoint_url).respond(json={})
    data = {"field": "value"}

    api_client.post("some-endpoint", data=data)
    assert data == {"field": "value"}


@respx.mock
def test_get_raises_cannot_read(api_client, endpoint_url):
    with pytest.raises(PortalError, match="Couldn't read"):
        respx.get(endpoint_url).mock(side_effect=httpx.ConnectError("oops"))
        api_client.get("some-endpoint")


@respx.mock
def test_get_raises_on_error(api_client, endpoint_url):
    with pytest.raises(PortalError, match="returned error 404"):
        respx.get(endpoint_url).respond(404)
        api_client.get("some-endpoint")


@pytest.mark.parametrize("status_code", [401, 403])
@respx.mock
def test_get_raises_invalid_token_error_not_authenticated(
    api_client, endpoint_url, status_code
):
    with pytest.raises(InvalidTokenError):
        respx.get(endpoint_url).respond(status_code)
        api_client.get("some-endpoint")


@respx.mock
def test_get_raises_non_json(api_client, endpoint_url):
    with pytest.raises(PortalError, match="didn't return a valid JSON object"):
        respx.get(endpoint_url).respond(200, text="<html></html>")
        api_client.get("some-endpoint")


@pytest.mark.parametrize("code", [498, 499])
@respx.mock
def test_post_raises_invalid_token_error_on_error_body(api_client, endpoint_url, code):
    respx.post(endpoint_url).respond(
        json={"error": {"code": code, "message": "Invalid token.", "details": []}}
    )

    with pytest.raises(InvalidTokenError, match="Invalid token"):
        api_client.post("some-endpoint")


@respx.mock
def test_post_raises_portal_api_error_on_error_body(api_client, endpoint_url):
    respx.post(endpoint_url).respond(
        json={
            "error": {
                "code": 400,
                "messageCode": "CONT_0001",
                "message": "Item does not exist or is inaccessible.",
                "details": ["3ef"],
            }
        }
    )

    with pytest.raises(PortalApiError) as exc_info:
        api_client.post("some-endpoint")

    assert exc_info.value.code == 400
    assert exc_info.value.message == "Item does not exist or is inaccessible."
    assert exc_info.value.details == ["3ef"]


@respx.mock
def test_post_raises_portal_api_error_without_details(api_client, endpoint_url):
    respx.post(endpoint_url).respond(
        json={"error": {"code": 500, "message": "Unable to add resources."}}
    )

    with pytest.raises(PortalApiError) as exc_info:
        api_client.post("some-endpoint")

    assert exc_info.value.details == []


@respx.mock
def test_post_raises_on_malformed_error_body(api_client, endpoint_url):
    respx.post(endpoint_url).respond(json={"error": "something went wrong"})

    with pytest.raises(PortalError, match="malformed error object"):
        api_client.post("some-endpoint")


@respx.mock
def test_post_model(api_client, endpoint_url):
    respx.post(endpoint_url).respond(json={"success": True, "id": "3ef"})

    response = api_client.post_model("some-endpoint", UpdateItemResponse)
    assert response == UpdateItemResponse(success=True, id="3ef")


@respx.mock
def test_post_model_raises_unparsable(api_client, endpoint_url):
    respx.post(endpoint_url).respond(json={"success": True})

    with pytest.raises(PortalError, match="unparsable UpdateItemResponse"):
        api_client.post_model("some-endpoint", UpdateItemResponse)


@respx.mock
def test_get_model(api_client, endpoint_url):
    respx.get(endpoint_url).respond(json={"success": False, "id": "3ef"})

    response = api_client.get_model("some-endpoint", UpdateItemResponse)
    assert response.success is False


@pytest.mark.parametrize(
    "invalid_payload",
    [
        "not a paginated response",
        {"resources": []},
        {"nextStart": -1, "resources": "something but not a list"},
        {"nextStart": -1},
    ],
)
@respx.mock
def test_get_paginated_raises_invalid_pagination_schema(
    api_client, endpoint_url, invalid_payload
):
    with pytest.raises(PortalError, match="Paginated response expected"):
        respx.get(endpoint_url).respond(json=invalid_payload)
        next(
            api_client.get_paginated(
                "some-endpoint", ItemResource, data_key="resources"
            )
        )


@respx.mock
def test_get_paginated_raises_unparsable_element(api_client, endpoint_url):
    respx.get(endpoint_url).respond(
        json=_resources_page([{"resource": "no-size.json"}], next_start=-1)
    )

    with pytest.raises(PortalError, match="unparsable ItemResource"):
        list(
            api_client.get_paginated(
                "some-endpoint", ItemResource, data_key="resources"
            )
        )


@respx.mock
def test_get_paginated_single_page(api_client, endpoint_url, resource_dict):
    route = respx.get(
        endpoint_url,
        params={"f": "json", "num": str(RESOURCES_PAGE_SIZE), "param1": "value1"},
    ).respond(json=_resources_page([resource_dict], next_start=-1))

    data = list(
        api_client.get_paginated(
            "some-endpoint",
            ItemResource,
            data_key="resources",
            params={"param1": "value1"},
        )
    )

    assert route.call_count == 1
    assert data == [ItemResource.model_validate(resource_dict)]


@respx.mock
def test_get_paginated_multi_page(api_client, endpoint_url, resource_dict):
    second_page_route = respx.get(
        endpoint_url, params__contains={"start": "2"}
    ).respond(json=_resources_page([resource_dict], next_start=-1))
    first_page_route = respx.get(endpoint_url).respond(
        json=_resources_page([resource_dict], next_start=2)
    )

    data = list(
        api_client.get_paginated("some-endpoint", ItemResource, data_key="resources")
    )

    assert first_page_route.call_count == 1
    assert second_page_route.call_count == 1
    assert len(data) == 2


@respx.mock
def test_get_paginated_stops_on_empty_page(api_client, endpoint_url):
    route = respx.get(endpoint_url).respond(json=_resources_page([], next_start=5))

    data = list(
        api_client.get_paginated("some-endpoint", ItemResource, data_key="resources")
    )

    assert route.call_count == 1
    assert data == []
