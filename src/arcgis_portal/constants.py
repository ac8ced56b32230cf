#: Base URL of the sharing REST API of ArcGIS Online.
ARCGIS_ONLINE_PORTAL_URL = "https://www.arcgis.com/sharing/rest"

#: HTTP timeout for requests to the portal API.
#:
#: Reference: https://www.python-httpx.org/advanced/timeouts/
HTTPX_TIMEOUT = 30.0

#: The response format requested from the portal with every request (``f=json``).
RESPONSE_FORMAT = "json"

#: The maximum number of item ids sent in a single bulk request, e.g. when deleting
#: items.
MAXIMUM_NUMBER_OF_ITEMS_PER_BULK_REQUEST = 100

#: The number of item resources requested per page.
RESOURCES_PAGE_SIZE = 100

#: Error codes the portal responds with when a token is invalid (498) or missing
#: although required (499).
INVALID_TOKEN_ERROR_CODES = (498, 499)

#: The user agent that the library identifies itself as when making HTTP requests
USER_AGENT = "arcgis-portal-python"
