"""
Template listing retrieval from a remote mirror.

The mirror serves a newline-delimited ``.listing`` index next to the
template archives. Any failure here is fatal to a run.
"""

import logging
from typing import Optional

import requests

from constants import LISTING_FILENAME, LISTING_TIMEOUT
from core.exceptions import ListingEmptyError, StatusError
from utils.http import send_request
from utils.validation import validate_url

logger = logging.getLogger(__name__)


def listing_url(source_url: str) -> str:
    """Return the URL of the ``.listing`` index under a mirror root."""
    return f"{source_url.rstrip('/')}/{LISTING_FILENAME}"


def parse_listing(text: str) -> list[str]:
    """
    Split listing text into template names.

    Entries are trimmed; empty entries are dropped and order is preserved.

    Examples:
        >>> parse_listing("a\\n\\nb\\n")
        ['a', 'b']
    """
    return [entry.strip() for entry in text.split("\n") if entry.strip()]


def fetch_listing(
    source_url: str,
    session: Optional[requests.Session] = None,
    timeout: float = LISTING_TIMEOUT,
) -> list[str]:
    """
    Fetch and normalize the template listing of a mirror.

    Args:
        source_url: Mirror root URL
        session: Session to use (a new one is created if omitted)
        timeout: Request timeout in seconds

    Returns:
        Non-empty ordered list of template names

    Raises:
        ValidationException: If source_url is not an http(s) URL
        TransportError: If the mirror cannot be reached
        ReadError: If the body cannot be read
        StatusError: If the mirror answers with a non-2xx status
        ListingEmptyError: If the listing has no entries
    """
    source_url = validate_url(source_url, "mirror_url")
    url = listing_url(source_url)
    session = session or requests.Session()

    logger.info(f"Fetching template listing from {url}")
    response = send_request(session, "GET", url, timeout=timeout)

    if not 200 <= response.status_code < 300:
        raise StatusError("listing", response.status_code, response.text)

    templates = parse_listing(response.text)
    if not templates:
        raise ListingEmptyError(url)

    logger.info(f"We have {len(templates)} templates on mirror")
    return templates
