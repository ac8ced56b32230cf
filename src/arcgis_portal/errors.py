from typing import Sequence


class PortalError(Exception):
    """Base class for all errors raised by this library.

    In many situations this error will be raised with a concrete message describing the
    issue.

    """


class InvalidTokenError(PortalError):
    """The token used to authenticate with the portal is not valid

    Possible reasons:

    - Invalid format (e.g. empty string)
    - Token has expired
    - Token was issued for a different portal
    - Note: you can **not** use your password as a token

    """


class PortalApiError(PortalError):
    """The portal rejected a request

    The portal signals most failures with a successful HTTP status and an ``error``
    object in the response body. Its ``code``, ``message`` and ``details`` are
    available on this exception.

    """

    def __init__(self, message: str, code: int, details: Sequence[str] = ()):
        super().__init__(f"{message} (code {code})")
        self.message = message
        self.code = code
        self.details = list(details)
