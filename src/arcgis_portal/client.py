import json
from typing import IO, Any, Iterator, Mapping, Optional, Sequence, Union

import arcgis_portal.api_client.models as portal_api_models
import arcgis_portal.models as user_models
from arcgis_portal.api_client.client import PortalApiClient
from arcgis_portal.constants import (
    ARCGIS_ONLINE_PORTAL_URL,
    HTTPX_TIMEOUT,
    MAXIMUM_NUMBER_OF_ITEMS_PER_BULK_REQUEST,
)
from arcgis_portal.errors import PortalError
from arcgis_portal.iterable_tools import chunk
from arcgis_portal.params import append_custom_params
from arcgis_portal.validators import (
    determine_owner,
    validate_item_id,
    validate_item_ids,
    validate_relationship_direction,
    validate_relationship_type,
    validate_resource_arguments,
    validate_resource_name,
)

#: Binary content accepted for item data and item resources.
FileContent = Union[bytes, IO[bytes]]

ITEM_IDS_SEPARATOR = ","


def _serialize_json_data(data: Any) -> str:
    if isinstance(data, str):
        return data

    try:
        return json.dumps(data)
    except (TypeError, ValueError) as e:
        raise PortalError("Item data is not JSON serializable") from e


class PortalClient:
    """Main entrypoint for managing item content in an ArcGIS portal.

    You should instantiate it only once and use it for all requests to make the best use
    of connection pooling. This client is thread-safe.

    :param token: Token for the portal
    :param username: Name of the user the token has been issued for. Used as owner of
        items when no explicit ``owner`` is passed to a method.
    :param portal_url: URL of the sharing REST API of the portal. Defaults to
        ArcGIS Online.
    :param timeout: Global timeout for all HTTP requests sent to the portal

    """

    def __init__(
        self,
        token: str,
        username: Optional[str] = None,
        *,
        portal_url: Optional[str] = None,
        timeout: float = HTTPX_TIMEOUT,
    ) -> None:
        self._username = username
        self._portal_api_client = PortalApiClient(
            token=token,
            base_url=portal_url or ARCGIS_ONLINE_PORTAL_URL,
            timeout=timeout,
        )

    def _user_content_path(self, owner: Optional[str], path: str) -> str:
        return f"content/users/{determine_owner(owner, self._username)}/{path}"

    def add_item_json_data(
        self,
        item_id: str,
        data: Any,
        *,
        owner: Optional[str] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> user_models.UpdateItemResult:
        """Store JSON as the ``/data`` resource of an item.

        :param item_id: Identifier of the item
        :param data: JSON serializable object, or an already serialized JSON string
        :param owner: Owner of the item. Defaults to the ``username`` of the client.
        :param params: Additional request parameters, taking precedence over the ones
            derived from the arguments above

        :returns: Result echoing the item id

        :raises: |token-error|
        :raises: |api-error|
        :raises: |generic-error|

        """
        item_id = validate_item_id(item_id)
        api_path = self._user_content_path(owner, f"items/{item_id}/update")

        # the portal expects JSON data as string in the `text` form field
        form_data = append_custom_params(
            {"text": _serialize_json_data(data)}, params, operation="`data`"
        )

        return self._portal_api_client.post_model(
            api_path, portal_api_models.UpdateItemResponse, data=form_data
        ).to_user_model()

    def add_item_data(
        self,
        item_id: str,
        data: FileContent,
        *,
        filename: Optional[str] = None,
        owner: Optional[str] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> user_models.UpdateItemResult:
        """Upload a file as the ``/data`` resource of an item.

        :param item_id: Identifier of the item
        :param data: Content of the file as bytes or a binary file object
        :param filename: Name of the uploaded file
        :param owner: Owner of the item. Defaults to the ``username`` of the client.
        :param params: Additional request parameters. They cannot replace the
            multipart ``file`` field, which is always taken from ``data``.

        :returns: Result echoing the item id

        :raises: |token-error|
        :raises: |api-error|
        :raises: |generic-error|

        """
        item_id = validate_item_id(item_id)
        api_path = self._user_content_path(owner, f"items/{item_id}/update")

        # the portal expects the file in the `file` form field
        file = (filename, data) if filename else data

        return self._portal_api_client.post_model(
            api_path,
            portal_api_models.UpdateItemResponse,
            data=append_custom_params({}, params),
            files={"file": file},
        ).to_user_model()

    def add_item_relationship(
        self,
        origin_item_id: str,
        destination_item_id: str,
        relationship_type: user_models.RelationshipType | str,
        *,
        owner: Optional[str] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> bool:
        """Add a relationship between two items.

        :param origin_item_id: Identifier of the item the relationship starts at
        :param destination_item_id: Identifier of the item the relationship points to
        :param relationship_type: Type of the relationship
        :param owner: Owner of the origin item. Defaults to the ``username`` of the
            client.
        :param params: Additional request parameters

        :returns: Whether the relationship has been added

        :raises: |token-error|
        :raises: |api-error|
        :raises: |generic-error|

        """
        form_data = append_custom_params(
            {
                "originItemId": validate_item_id(origin_item_id),
                "destinationItemId": validate_item_id(destination_item_id),
                "relationshipType": validate_relationship_type(relationship_type),
            },
            params,
        )

        return self._portal_api_client.post_model(
            self._user_content_path(owner, "addRelationship"),
            portal_api_models.AddRelationshipResponse,
            data=form_data,
        ).success

    def add_item_resource(
        self,
        item_id: str,
        name: str,
        *,
        resource: Optional[FileContent] = None,
        content: Optional[str] = None,
        private: bool = False,
        owner: Optional[str] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> user_models.ItemResourceResult:
        """Add a file or text resource to an item.

        Exactly one of ``resource`` and ``content`` must be passed.

        :param item_id: Identifier of the item
        :param name: Name of the resource, e.g. ``config.json`` or ``images/logo.png``
        :param resource: Content of a file resource as bytes or a binary file object
        :param content: Text content of the resource
        :param private: Restrict access to the resource to the item owner and
            administrators. Otherwise, the resource inherits the access of the item.
        :param owner: Owner of the item. Defaults to the ``username`` of the client.
        :param params: Additional request parameters

        :returns: Result describing where the resource has been stored

        :raises: |token-error|
        :raises: |api-error|
        :raises: |generic-error|

        """
        item_id = validate_item_id(item_id)
        name = validate_resource_name(name)
        validate_resource_arguments(resource, content)
        api_path = self._user_content_path(owner, f"items/{item_id}/addResources")

        access = (
            user_models.ResourceAccess.PRIVATE
            if private
            else user_models.ResourceAccess.INHERIT
        )
        form_data = append_custom_params(
            {"fileName": name, "text": content, "access": access.value},
            params,
        )
        files = {"file": (name, resource)} if resource is not None else None

        return self._portal_api_client.post_model(
            api_path,
            portal_api_models.ItemResourceResponse,
            data=form_data,
            files=files,
        ).to_user_model()

    def _get_item_resources(
        self, item_id: str
    ) -> Iterator[portal_api_models.ItemResource]:
        """Get resources of an item from the API"""
        return self._portal_api_client.get_paginated(
            f"content/items/{item_id}/resources",
            portal_api_models.ItemResource,
            data_key="resources",
        )

    def get_item_resources(self, item_id: str) -> user_models.ItemResources:
        """Retrieve all resources of an item.

        :param item_id: Identifier of the item

        :returns: Resources of the item
        :rtype: :class:`~arcgis_portal.models.ItemResources`

        :raises: |token-error|
        :raises: |api-error|
        :raises: |generic-error|

        """
        item_id = validate_item_id(item_id)
        return user_models.ItemResources(
            resource.to_user_model() for resource in self._get_item_resources(item_id)
        )

    def get_related_items(
        self,
        item_id: str,
        relationship_type: user_models.RelationshipType | str,
        *,
        direction: user_models.RelationshipDirection = (
            user_models.RelationshipDirection.FORWARD
        ),
    ) -> list[user_models.RelatedItem]:
        """Retrieve the items related to an item.

        :param item_id: Identifier of the item
        :param relationship_type: Type of the relationships to follow
        :param direction: Follow relationships starting at the item (forward) or
            pointing to the item (reverse)

        :returns: Related items

        :raises: |token-error|
        :raises: |api-error|
        :raises: |generic-error|

        """
        item_id = validate_item_id(item_id)
        response = self._portal_api_client.get_model(
            f"content/items/{item_id}/relatedItems",
            portal_api_models.RelatedItemsResponse,
            params={
                "relationshipType": validate_relationship_type(relationship_type),
                "direction": validate_relationship_direction(direction),
            },
        )
        return [item.to_user_model() for item in response.related_items]

    def delete_items(
        self,
        item_ids: Sequence[str],
        *,
        owner: Optional[str] = None,
    ) -> list[user_models.DeleteItemResult]:
        """Delete multiple items of a user.

        Items are deleted in batches of at most
        :const:`~arcgis_portal.constants.MAXIMUM_NUMBER_OF_ITEMS_PER_BULK_REQUEST`
        items, sending one request per batch. Items that couldn't be deleted don't
        raise an error but are reported in the results.

        :param item_ids: Identifiers of the items
        :param owner: Owner of the items. Defaults to the ``username`` of the client.

        :returns: One result per item in the order of ``item_ids``

        :raises: |token-error|
        :raises: |api-error|
        :raises: |generic-error|

        """
        item_ids = validate_item_ids(item_ids)
        if not item_ids:
            return []

        api_path = self._user_content_path(owner, "deleteItems")

        results = []
        for batch in chunk(item_ids, MAXIMUM_NUMBER_OF_ITEMS_PER_BULK_REQUEST):
            response = self._portal_api_client.post_model(
                api_path,
                portal_api_models.DeleteItemsResponse,
                data={"items": ITEM_IDS_SEPARATOR.join(batch)},
            )
            results.extend(result.to_user_model() for result in response.results)

        return results
