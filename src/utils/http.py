"""
HTTP transport helper shared by the listing fetcher and the Clair client.

Maps requests' exception hierarchy onto the Clairvz error taxonomy so that
callers only ever see TransportError or ReadError for network problems.
"""

import logging

import requests

from core.exceptions import ReadError, TransportError

logger = logging.getLogger(__name__)


def send_request(
    session: requests.Session,
    method: str,
    url: str,
    timeout: float,
    **kwargs,
) -> requests.Response:
    """
    Send a request and read the full response body.

    Args:
        session: Session used to send the request
        method: HTTP method ("GET", "POST")
        url: Target URL
        timeout: Per-request timeout in seconds
        **kwargs: Passed through to Session.request (params, data, headers)

    Returns:
        Response with its body already loaded

    Raises:
        ReadError: If the body could not be read completely
        TransportError: On connection, DNS or timeout failures
    """
    logger.debug(f"{method} {url}")
    try:
        response = session.request(method, url, timeout=timeout, **kwargs)
    except (requests.exceptions.ChunkedEncodingError, requests.exceptions.ContentDecodingError) as e:
        raise ReadError(url, str(e)) from e
    except requests.Timeout as e:
        raise TransportError(url, f"timed out after {timeout}s") from e
    except requests.RequestException as e:
        raise TransportError(url, str(e)) from e

    logger.debug(f"{method} {url} -> {response.status_code}")
    return response
