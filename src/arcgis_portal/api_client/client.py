import json
from enum import Enum
from functools import cache
from http import HTTPStatus
from typing import Any, Iterator, Type, TypeVar

import httpx
from pydantic import ValidationError

from arcgis_portal._version import VERSION
from arcgis_portal.auth import TokenAuth
from arcgis_portal.constants import (
    HTTPX_TIMEOUT,
    INVALID_TOKEN_ERROR_CODES,
    RESOURCES_PAGE_SIZE,
    RESPONSE_FORMAT,
    USER_AGENT,
)
from arcgis_portal.errors import InvalidTokenError, PortalApiError, PortalError

from .models import ErrorResponse, PortalApiModel

T = TypeVar("T", bound=PortalApiModel)

USER_AGENT_NAME_VERSION_SEPARATOR = "/"


class RequestMethod(str, Enum):
    GET = "GET"
    POST = "POST"


@cache
def _construct_user_agent(
    *, user_agent: str = USER_AGENT, version: str = VERSION
) -> str:
    return f"{user_agent}{USER_AGENT_NAME_VERSION_SEPARATOR}{version}"


class _PaginatedResponse(PortalApiModel):
    next_start: int


class PortalApiClient:
    """API Client class encapsulating all HTTP interaction with a portal

    :param token: Token for the portal
    :param base_url: URL of the sharing REST API of the portal
    :param timeout: Global timeout for all HTTP requests sent to the portal

    """

    def __init__(
        self,
        *,
        token: str,
        base_url: str | httpx.URL,
        timeout: float = HTTPX_TIMEOUT,
    ):
        self._client = httpx.Client(
            auth=TokenAuth(token),
            base_url=httpx.URL(base_url),
            timeout=timeout,
            headers={"user-agent": _construct_user_agent()},
        )

    @cache
    def _full_url(self, api_path: str | httpx.URL) -> str:
        """Construct full URL from relative URL"""
        return str(self._client.build_request("", api_path).url)

    def _request(
        self, method: RequestMethod, api_path: str | httpx.URL, **kwargs: Any
    ) -> Any:
        """Wraps :meth:`httpx.Client.request` with defensive error handling

        The response format parameter is added to the query parameters of GET requests
        and to the form data of POST requests.

        :param method: HTTP method for the request
        :param api_path: Relative URL path inside the API name space (or a full URL)

        :returns: JSON payload of the response as Python object

        :raises: :exc:`~arcgis_portal.errors.PortalError` on request failure
        :raises: :exc:`~arcgis_portal.errors.PortalError` on non-2xx status code
        :raises: :exc:`~arcgis_portal.errors.PortalError` on non-JSON payload
        :raises: :exc:`~arcgis_portal.errors.InvalidTokenError` if the portal rejects
            the token
        :raises: :exc:`~arcgis_portal.errors.PortalApiError` if the portal responds
            with an error object

        """
        format_key = "params" if method == RequestMethod.GET else "data"
        kwargs[format_key] = {"f": RESPONSE_FORMAT, **(kwargs.get(format_key) or {})}

        try:
            response = self._client.request(method.value, api_path, **kwargs)
        except Exception as e:
            raise PortalError(
                "Couldn't read from the portal API "
                f"({method.value} {self._full_url(api_path)})",
            ) from e

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            if e.response.status_code in (
                HTTPStatus.UNAUTHORIZED,
                HTTPStatus.FORBIDDEN,
            ):
                raise InvalidTokenError
            else:
                raise PortalError(
                    f"Portal API returned error {response.status_code}"
                    f" ({method.value} {self._full_url(api_path)})"
                ) from e

        try:
            body = response.json()
        except json.JSONDecodeError as e:
            raise PortalError(
                "Portal API didn't return a valid JSON object "
                f"({method.value} {self._full_url(api_path)})",
            ) from e

        if isinstance(body, dict) and "error" in body:
            self._raise_for_error_body(body)

        return body

    def _raise_for_error_body(self, body: dict[str, Any]) -> None:
        try:
            error = ErrorResponse.model_validate(body).error
        except ValidationError as e:
            raise PortalError("Portal API returned a malformed error object") from e

        if error.code in INVALID_TOKEN_ERROR_CODES:
            raise InvalidTokenError(error.message)

        raise PortalApiError(error.message, error.code, error.details or ())

    def _validate(self, model: Type[T], body: Any, api_path: str | httpx.URL) -> T:
        try:
            return model.model_validate(body)
        except ValidationError as e:
            raise PortalError(
                f"Portal API returned an unparsable {model.__name__} "
                f"object ({self._full_url(api_path)})"
            ) from e

    def get(self, api_path: str | httpx.URL, **kwargs: Any) -> Any:
        """Wraps :meth:`httpx.Client.get` with defensive error handling

        :param api_path: Relative URL path inside the API name space (or a full URL)

        :returns: JSON payload of the response as Python object

        :raises: see :py:meth:`_request`

        """
        return self._request(RequestMethod.GET, api_path, **kwargs)

    def post(self, api_path: str | httpx.URL, **kwargs: Any) -> Any:
        """Wraps :meth:`httpx.Client.post` with defensive error handling

        :param api_path: Relative URL path inside the API name space (or a full URL)

        :returns: JSON payload of the response as Python object

        :raises: see :py:meth:`_request`

        """
        return self._request(RequestMethod.POST, api_path, **kwargs)

    def get_model(self, api_path: str | httpx.URL, model: Type[T], **kwargs: Any) -> T:
        """Send a GET request and parse the response into ``model``

        :raises: :exc:`~arcgis_portal.errors.PortalError` on invalid data schema
        :raises: see :py:meth:`get` for more errors raised by this method

        """
        return self._validate(model, self.get(api_path, **kwargs), api_path)

    def post_model(
        self, api_path: str | httpx.URL, model: Type[T], **kwargs: Any
    ) -> T:
        """Send a POST request and parse the response into ``model``

        :raises: :exc:`~arcgis_portal.errors.PortalError` on invalid data schema
        :raises: see :py:meth:`post` for more errors raised by this method

        """
        return self._validate(model, self.post(api_path, **kwargs), api_path)

    def get_paginated(
        self,
        api_path: str | httpx.URL,
        model: Type[T],
        *,
        data_key: str,
        **kwargs: Any,
    ) -> Iterator[T]:
        """Retrieve objects from a paginated portal API endpoint via HTTP GET

        The portal pages with the ``start`` and ``num`` query parameters and signals
        the start of the next page with ``nextStart``, which is ``-1`` on the last
        page.

        :param api_path: Relative URL path inside the portal API
        :param model: API response model class derived from
            :class:`~arcgis_portal.api_client.models.PortalApiModel`
        :param data_key: Key of the list of objects in each page

        :returns: Instances of ``model`` retrieved from the ``api_path`` endpoint

        :raises: :exc:`~arcgis_portal.errors.PortalError` on invalid pagination schema
        :raises: :exc:`~arcgis_portal.errors.PortalError` on invalid data schema
        :raises: see :py:meth:`get` for more errors raised by this method

        """
        params = {"num": RESOURCES_PAGE_SIZE, **kwargs.pop("params", {})}

        while True:
            response_body = self.get(api_path, params=params, **kwargs)

            try:
                paginated_response = _PaginatedResponse.model_validate(response_body)
            except ValidationError as e:
                raise PortalError(
                    f"Paginated response expected (GET {self._full_url(api_path)})"
                ) from e

            page_data = response_body.get(data_key)
            if not isinstance(page_data, list):
                raise PortalError(
                    f"Paginated response expected (GET {self._full_url(api_path)})"
                )

            if not page_data:
                break

            for elem in page_data:
                yield self._validate(model, elem, api_path)

            next_start = paginated_response.next_start
            if next_start < 1:
                break

            params = {**params, "start": next_start}
