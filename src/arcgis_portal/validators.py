from typing import Any, Optional, Sequence

import arcgis_portal.models as user_models
from arcgis_portal.errors import PortalError


def validate_item_id(item_id: str) -> str:
    if not isinstance(item_id, str) or not item_id.strip():
        raise PortalError(f"Invalid item id {item_id!r}")

    return item_id.strip()


def validate_item_ids(item_ids: Sequence[str]) -> list[str]:
    # a plain string is a sequence of one-character ids
    if isinstance(item_ids, str):
        raise PortalError("Item ids must be passed as a sequence, not a string")

    return [validate_item_id(item_id) for item_id in item_ids]


def validate_resource_arguments(
    resource: Optional[Any], content: Optional[str]
) -> None:
    if resource is None and content is None:
        raise PortalError("Either a resource file or text content must be provided")

    if resource is not None and content is not None:
        raise PortalError("Cannot add a resource file and text content at once")


def determine_owner(owner: Optional[str], username: Optional[str]) -> str:
    """Determine the user whose content is addressed by a request.

    An explicitly passed ``owner`` takes precedence over the ``username`` the client
    has been authenticated as.

    """
    if owner:
        return owner

    if username:
        return username

    raise PortalError(
        "Could not determine the owner of this item. Pass `owner` or create the "
        "client with a `username`."
    )


def validate_relationship_type(
    relationship_type: user_models.RelationshipType | str,
) -> str:
    if isinstance(relationship_type, user_models.RelationshipType):
        return relationship_type.value

    # the portal knows more relationship types than enumerated
    if not isinstance(relationship_type, str) or not relationship_type:
        raise PortalError(f"Invalid relationship type {relationship_type!r}")

    return relationship_type


def validate_relationship_direction(
    direction: user_models.RelationshipDirection | str,
) -> str:
    try:
        return user_models.RelationshipDirection(direction).value
    except ValueError as e:
        raise PortalError(f"Invalid relationship direction {direction!r}") from e


def validate_resource_name(name: str) -> str:
    if not isinstance(name, str) or not name.strip():
        raise PortalError(f"Invalid resource name {name!r}")

    return name
