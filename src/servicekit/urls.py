"""URL parsing helpers."""

import httpx


def parse_absolute_url(value: str) -> httpx.URL:
    """Parse a string that must be an absolute URL.

    Whitespace and control characters are rejected rather than
    percent-encoded.

    Args:
        value: URL string.

    Returns:
        Parsed URL.

    Raises:
        ValueError: If the string is not a valid absolute URL.
    """
    if not value:
        msg = "empty url"
        raise ValueError(msg)
    if any(ch.isspace() or ord(ch) < 0x20 or ord(ch) == 0x7F for ch in value):
        msg = "url contains whitespace or control characters"
        raise ValueError(msg)

    try:
        url = httpx.URL(value)
    except httpx.InvalidURL as e:
        raise ValueError(str(e)) from e

    if not url.scheme or not url.host:
        msg = "url must be absolute (scheme and host required)"
        raise ValueError(msg)
    return url
