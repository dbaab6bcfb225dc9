"""Base URL validation and path resolution.

Base URLs are validated strictly (``http``/``https`` only, sane host) while
paths are accepted as long as the combined URL still parses to a valid base.

>>> normalize_base("https://live.apitest.org/path/to/resource?x=1#top")
'https://live.apitest.org'
>>> resolve_path("https://live.apitest.org", "/user/1000")
'/user/1000'
"""

from logging import getLogger
from typing import Optional
from urllib.parse import SplitResult, urlsplit

from .constants import VALID_SCHEMES

logger = getLogger("requist")


def _split(url: str) -> Optional[SplitResult]:
    try:
        parsed = urlsplit(url)
        # accessing the port validates it
        parsed.port
    except ValueError:
        return None
    return parsed


def is_valid_scheme(scheme: str) -> bool:
    return scheme in VALID_SCHEMES


def is_valid_hostname(hostname: str) -> bool:
    """Check a host (optionally with port) taken from a parsed URL."""
    if not hostname:
        return False
    return not hostname.startswith(".") and not hostname.endswith(":")


def is_valid_base(url: str) -> bool:
    if not url:
        return False

    parsed = _split(url)
    if parsed is None:
        return False

    return is_valid_scheme(parsed.scheme) and is_valid_hostname(parsed.netloc)


def normalize_base(url: str) -> str:
    """Reduce ``url`` to ``scheme://host``.

    Returns an empty string when ``url`` is not a valid base URL.
    """
    if not is_valid_base(url):
        logger.debug(f"Rejected base URL: {url!r}")
        return ""

    parsed = urlsplit(url)
    return f"{parsed.scheme}://{parsed.netloc}"


def resolve_path(base: str, path: str) -> str:
    """Resolve ``path`` against ``base`` and return only the path component.

    Returns an empty string when the combined URL is not valid.
    """
    combined = f"{base}{path}"
    if not is_valid_base(combined):
        logger.debug(f"Rejected path {path!r} for base {base!r}")
        return ""

    return urlsplit(combined).path
