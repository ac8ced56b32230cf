from dataclasses import asdict, dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

import pandas


class RelationshipType(str, Enum):
    """Enumeration of relationship types between two items. Compares to strings
    out-of-the-box:

    .. code-block:: pycon

        >>> RelationshipType.SERVICE_2_LAYER == 'Service2Layer'
        True

    """

    MAP_2_SERVICE = "Map2Service"
    WMA_2_CODE = "WMA2Code"
    MAP_2_FEATURE_COLLECTION = "Map2FeatureCollection"
    MOBILE_APP_2_CODE = "MobileApp2Code"
    SERVICE_2_DATA = "Service2Data"
    SERVICE_2_SERVICE = "Service2Service"
    MAP_2_APP_CONFIG = "Map2AppConfig"
    ITEM_2_ATTACHMENT = "Item2Attachment"
    ITEM_2_REPORT = "Item2Report"
    LISTED_2_PROVISIONED = "Listed2Provisioned"
    STYLE_2_STYLE = "Style2Style"
    SERVICE_2_STYLE = "Service2Style"
    SURVEY_2_SERVICE = "Survey2Service"
    SURVEY_2_DATA = "Survey2Data"
    SERVICE_2_ROUTE = "Service2Route"
    AREA_2_PACKAGE = "Area2Package"
    MAP_2_AREA = "Map2Area"
    SERVICE_2_LAYER = "Service2Layer"
    AREA_2_CUSTOM_PACKAGE = "Area2CustomPackage"
    TRACK_VIEW_2_MAP = "TrackView2Map"
    SURVEY_ADD_IN_2_DATA = "SurveyAddIn2Data"
    WORKFORCE_MAP_2_FEATURE_SERVICE = "WorkforceMap2FeatureService"
    THEME_2_STORY = "Theme2Story"
    WEB_STYLE_2_DESKTOP_STYLE = "WebStyle2DesktopStyle"
    SOLUTION_2_ITEM = "Solution2Item"


class RelationshipDirection(str, Enum):
    """Direction in which to follow relationships of an item."""

    FORWARD = "forward"
    REVERSE = "reverse"


class ResourceAccess(str, Enum):
    """Access level of an item resource."""

    #: The resource shares the access level of its item.
    INHERIT = "inherit"

    #: Only the item owner and administrators can access the resource.
    PRIVATE = "private"


@dataclass(frozen=True)
class UpdateItemResult:
    """Result of storing data on an item."""

    #: Identifier of the updated item.
    item_id: str

    #: Whether the portal reported success.
    success: bool


@dataclass(frozen=True)
class ItemResourceResult:
    """Result of adding a resource to an item."""

    #: Identifier of the item the resource was added to.
    item_id: str

    #: Owner of the item.
    owner: str

    #: Folder of the item, ``None`` for the root folder.
    folder: Optional[str]

    #: Whether the portal reported success.
    success: bool


@dataclass(frozen=True)
class DeleteItemResult:
    """Outcome of deleting a single item as part of a bulk deletion."""

    #: Identifier of the item.
    item_id: str

    #: Whether the item was deleted.
    success: bool

    #: Message of the portal in case the item couldn't be deleted.
    error_message: Optional[str] = None


@dataclass(frozen=True)
class RelatedItem:
    """An item found by following a relationship."""

    #: Identifier of the item.
    id: str

    #: Owner of the item.
    owner: str

    #: Title of the item.
    title: str

    #: Type of the item, e.g. ``Web Map`` or ``Feature Service``.
    type: str

    #: Creation time of the item, localized in UTC.
    created: datetime

    #: Time of the last modification of the item, localized in UTC.
    modified: datetime


@dataclass(frozen=True)
class ItemResource:
    """A file or text stored as resource of an item."""

    #: Name of the resource, including its prefix if it has one.
    name: str

    #: Size of the resource in bytes.
    size: int

    #: Creation time of the resource, localized in UTC.
    created: datetime

    #: Access level of the resource.
    access: ResourceAccess


class ItemResources(list[ItemResource]):
    """Representation of multiple item resources."""

    def to_dataframe(self) -> pandas.DataFrame:
        """Convert item resources into :py:class:`pandas.DataFrame`

        Each row in the dataframe represents one resource. The ``created`` column
        consists of :ref:`timezone-aware <python:datetime-naive-aware>`
        :py:class:`datetime.datetime` localized in UTC.

        :returns: DataFrame with item resources

        """
        if not self:
            return pandas.DataFrame()

        df = pandas.DataFrame.from_records([asdict(resource) for resource in self])
        df.created = pandas.to_datetime(df.created, utc=True)
        df.access = df.access.map(lambda access: ResourceAccess(access).value)
        return df
