from .client import PortalClient
from .errors import InvalidTokenError, PortalApiError, PortalError
from .iterable_tools import chunk
from .models import (
    ItemResource,
    ItemResources,
    RelationshipDirection,
    RelationshipType,
    ResourceAccess,
)

__all__ = [
    "InvalidTokenError",
    "ItemResource",
    "ItemResources",
    "PortalApiError",
    "PortalClient",
    "PortalError",
    "RelationshipDirection",
    "RelationshipType",
    "ResourceAccess",
    "chunk",
]
