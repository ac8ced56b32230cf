from collections.abc import Generator

from httpx import Auth, Request, Response

from arcgis_portal.errors import InvalidTokenError


class TokenAuth(Auth):
    """Token authentication scheme for use with ``httpx``

    :param token: Token for the portal, e.g. an API key or an OAuth access token

    """

    def __init__(self, token: str):
        if not isinstance(token, str):
            raise InvalidTokenError("Token must be a string")

        if not token:
            raise InvalidTokenError("Token must not be empty")

        self._auth_header = f"Bearer {token}"

    def auth_flow(self, request: Request) -> Generator[Request, Response, None]:
        """Inject token into authorization header"""
        request.headers["X-Esri-Authorization"] = self._auth_header
        yield request
