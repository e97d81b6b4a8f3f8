from typing import Final
from urllib.parse import urlparse

MANAGEMENT_DEFAULT_SCOPE: Final[str] = "https://management.azure.com/.default"
AZURE_CLOUD_NAME: Final[str] = "AzureCloud"


def authority_from_url(url: str) -> str:
    """Return the URL authority (scheme + host).

    Args:
        url: Absolute URL (e.g., "https://login.microsoftonline.com/common/").

    Returns:
        The "<scheme>://<host>" portion of the URL.

    Raises:
        ValueError: If ``url`` is not absolute or lacks a host.
    """
    parsed = urlparse(url)
    if not parsed.scheme or not parsed.netloc:
        raise ValueError("authority must be an absolute URL")
    return f"{parsed.scheme}://{parsed.netloc}"
