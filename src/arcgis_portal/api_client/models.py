from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

import arcgis_portal.models as user_models


def _from_epoch_milliseconds(timestamp: int) -> datetime:
    return datetime.fromtimestamp(timestamp / 1000, tz=timezone.utc)


class PortalApiModel(BaseModel):
    """Base class for portal API object models using pydantic

    All objects received from the portal API are passed into models that derive from
    this class and thus use pydantic for schema definition and validation. The portal
    uses camelCase keys, which map onto snake_case fields.

    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorDetail(PortalApiModel):
    code: int
    message: str
    details: Optional[list[str]] = None


class ErrorResponse(PortalApiModel):
    """Body the portal responds with when a request failed, usually with HTTP 200"""

    error: ErrorDetail


class UpdateItemResponse(PortalApiModel):
    success: bool
    id: str

    def to_user_model(self) -> user_models.UpdateItemResult:
        """Convert into a user model"""

        return user_models.UpdateItemResult(item_id=self.id, success=self.success)


class ItemResourceResponse(PortalApiModel):
    success: bool
    item_id: str
    owner: str
    folder: Optional[str] = None

    def to_user_model(self) -> user_models.ItemResourceResult:
        """Convert into a user model"""

        return user_models.ItemResourceResult(
            item_id=self.item_id,
            owner=self.owner,
            folder=self.folder,
            success=self.success,
        )


class AddRelationshipResponse(PortalApiModel):
    success: bool


class DeleteItemResult(PortalApiModel):
    item_id: str
    success: bool
    error: Optional[ErrorDetail] = None

    def to_user_model(self) -> user_models.DeleteItemResult:
        """Convert into a user model"""

        return user_models.DeleteItemResult(
            item_id=self.item_id,
            success=self.success,
            error_message=self.error.message if self.error else None,
        )


class DeleteItemsResponse(PortalApiModel):
    results: list[DeleteItemResult]


class ItemResource(PortalApiModel):
    resource: str
    created: int
    size: int
    access: user_models.ResourceAccess = user_models.ResourceAccess.INHERIT

    def to_user_model(self) -> user_models.ItemResource:
        """Convert into a user model"""

        return user_models.ItemResource(
            name=self.resource,
            size=self.size,
            created=_from_epoch_milliseconds(self.created),
            access=self.access,
        )


class Item(PortalApiModel):
    id: str
    owner: str
    title: str
    type: str
    created: int
    modified: int

    def to_user_model(self) -> user_models.RelatedItem:
        """Convert into a user model"""

        return user_models.RelatedItem(
            id=self.id,
            owner=self.owner,
            title=self.title,
            type=self.type,
            created=_from_epoch_milliseconds(self.created),
            modified=_from_epoch_milliseconds(self.modified),
        )


class RelatedItemsResponse(PortalApiModel):
    total: int
    related_items: list[Item]
