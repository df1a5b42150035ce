"""
Clair API client for layer registration and vulnerability lookup.

Implements the two Clair v1 exchanges Clairvz needs:
https://github.com/coreos/clair/blob/master/docs/API.md#insert-a-new-layer
https://github.com/coreos/clair/blob/master/docs/API.md#get-a-layers-vulnerabilities
"""

import json
import logging
from typing import Optional
from urllib.parse import quote, urlencode

import requests

from constants import (
    API_REQUEST_TIMEOUT,
    CLAIR_LAYERS_PATH,
    CLAIR_VULNERABILITIES_PATH,
    LOOKUP_SUCCESS_STATUS,
    REGISTER_SUCCESS_STATUS,
    TEMPLATE_ARCHIVE_SUFFIX,
)
from core.exceptions import DecodeError, EncodeError, StatusError
from core.models import RegisterImageRequest, ScannerEndpoint, VulnerabilityRecord
from utils.http import send_request

logger = logging.getLogger(__name__)


def template_archive_url(source_base_url: str, template_name: str) -> str:
    """Return the mirror URL of a template's archive."""
    return f"{source_base_url.rstrip('/')}/{template_name}{TEMPLATE_ARCHIVE_SUFFIX}"


class ClairClient:
    """
    Client for a Clair v1 API endpoint.

    No operation is retried; the first unsuccessful attempt is final and
    the caller decides whether to go on with other templates.
    """

    def __init__(
        self,
        endpoint: ScannerEndpoint,
        session: Optional[requests.Session] = None,
        timeout: float = API_REQUEST_TIMEOUT,
    ):
        """
        Initialize Clair client.

        Args:
            endpoint: Clair location and severity filter
            session: HTTP session (a new one is created if omitted)
            timeout: Per-request timeout in seconds
        """
        self.endpoint = endpoint
        self.session = session or requests.Session()
        self.timeout = timeout

    def layers_url(self) -> str:
        """URL for registering a layer."""
        return f"{self.endpoint.base_url}{CLAIR_LAYERS_PATH}"

    def vulnerabilities_url(self, template_name: str, with_query: bool = True) -> str:
        """
        URL for looking up a layer's vulnerabilities.

        Args:
            template_name: Layer ID
            with_query: Whether to append the minimumPriority query

        Returns:
            Full lookup URL
        """
        path = CLAIR_VULNERABILITIES_PATH.format(layer=quote(template_name, safe=""))
        url = f"{self.endpoint.base_url}{path}"
        if with_query:
            url += "?" + urlencode({"minimumPriority": self.endpoint.minimum_severity})
        return url

    def register_image(self, source_base_url: str, template_name: str) -> None:
        """
        Register a template archive with Clair as a parentless layer.

        Args:
            source_base_url: Mirror root the archive is downloaded from
            template_name: Template name, used as the layer ID

        Raises:
            UnsupportedFeatureError: If the endpoint requests HTTPS
            EncodeError: If the request body cannot be serialized
            TransportError: If Clair cannot be reached
            ReadError: If the response body cannot be read
            StatusError: If Clair does not answer 201 Created
        """
        url = self.layers_url()
        request = RegisterImageRequest(
            image_id=template_name,
            source_path=template_archive_url(source_base_url, template_name),
        )

        try:
            body = json.dumps(request.to_payload())
        except (TypeError, ValueError) as e:
            raise EncodeError("register", f"Cannot convert to json request: {e}", template_name) from e

        response = send_request(
            self.session,
            "POST",
            url,
            timeout=self.timeout,
            data=body,
            headers={"Content-Type": "application/json"},
        )

        if response.status_code != REGISTER_SUCCESS_STATUS:
            logger.debug(
                f"Register {template_name}: response not ok - {response.status_code} "
                f"with message: {response.text}"
            )
            raise StatusError("register", response.status_code, response.text, template_name)

        logger.debug(f"Layer {template_name} registered from {request.source_path}")

    def fetch_vulnerabilities(self, template_name: str) -> list[VulnerabilityRecord]:
        """
        Fetch vulnerabilities Clair found in a registered layer.

        Args:
            template_name: Layer ID

        Returns:
            Vulnerability records at or above the endpoint's minimum severity,
            in the order Clair returned them

        Raises:
            UnsupportedFeatureError: If the endpoint requests HTTPS
            TransportError: If Clair cannot be reached
            ReadError: If the response body cannot be read
            StatusError: If Clair does not answer 200 OK
            DecodeError: If a 200 body is not the expected JSON document
        """
        url = self.vulnerabilities_url(template_name, with_query=False)
        response = send_request(
            self.session,
            "GET",
            url,
            timeout=self.timeout,
            params={"minimumPriority": self.endpoint.minimum_severity},
        )

        if response.status_code != LOOKUP_SUCCESS_STATUS:
            logger.debug(
                f"Lookup {template_name}: response not ok - {response.status_code} "
                f"with message: {response.text}"
            )
            raise StatusError("lookup", response.status_code, response.text, template_name)

        return self._decode_vulnerabilities(response, template_name)

    def _decode_vulnerabilities(
        self, response: requests.Response, template_name: str
    ) -> list[VulnerabilityRecord]:
        """Decode a lookup body into vulnerability records."""
        try:
            data = response.json()
        except ValueError as e:
            raise DecodeError("lookup", f"Cannot parse answer from clair to json: {e}", template_name) from e

        if not isinstance(data, dict):
            raise DecodeError(
                "lookup", f"Expected a JSON object, got {type(data).__name__}", template_name
            )

        items = data.get("Vulnerabilities")
        if items is None:
            items = []
        if not isinstance(items, list):
            raise DecodeError(
                "lookup", f"'Vulnerabilities' is not an array: {type(items).__name__}", template_name
            )

        records = []
        for item in items:
            if not isinstance(item, dict):
                raise DecodeError(
                    "lookup", f"Vulnerability entry is not an object: {item!r}", template_name
                )
            wrong = [
                key for key in VulnerabilityRecord.WIRE_FIELDS
                if item.get(key) is not None and not isinstance(item[key], str)
            ]
            if wrong:
                raise DecodeError(
                    "lookup", f"Vulnerability fields are not strings: {', '.join(wrong)}", template_name
                )
            records.append(VulnerabilityRecord.from_dict(item))
        return records
