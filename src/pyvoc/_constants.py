"""Internal constants shared across the library."""

DEFAULT_REGION = "eu"
BASE_URL_TEMPLATE = "https://vocapi{region_suffix}.wirelesscar.net/customerapi/rest/v3.0/"

USER_AGENT = "yes"
DEVICE_ID = "Device"
OS_TYPE = "Android"
OS_VERSION = "22"
ORIGINATOR_TYPE = "App"

#: Seconds between two polls of a pending service operation.
DEFAULT_POLL_INTERVAL: float = 5.0
#: Seconds before an operation poll loop is abandoned.
DEFAULT_OPERATION_TIMEOUT: float = 600.0
#: Total seconds allowed for a single HTTP request.
DEFAULT_REQUEST_TIMEOUT: float = 30.0


def build_base_url(region: str) -> str:
    """Return the API base URL for *region* (``"eu"`` uses the unprefixed host)."""
    suffix = "" if region == DEFAULT_REGION else f"-{region}"
    return BASE_URL_TEMPLATE.format(region_suffix=suffix)
