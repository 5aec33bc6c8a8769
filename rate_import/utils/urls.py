from urllib.parse import urlsplit


def service_host(url: str) -> str:
    """
    Return scheme://host of a URL, used in user-facing messages.
    Port, path and query (where an access key could live) are dropped.
    """
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.hostname or ''}"
