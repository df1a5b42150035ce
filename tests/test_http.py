"""Tests for the shared HTTP transport helper."""

import pytest
import requests

from core.exceptions import ReadError, TransportError
from utils.http import send_request


class TestSendRequest:
    """Tests for mapping requests errors onto Clairvz errors."""

    def test_returns_response(self, mock_session, make_response):
        response = make_response(201, "")
        mock_session.request.return_value = response

        result = send_request(mock_session, "POST", "http://clair/v1/layers", timeout=5, data="{}")

        assert result is response
        mock_session.request.assert_called_once_with("POST", "http://clair/v1/layers", timeout=5, data="{}")

    def test_content_decoding_is_read_error(self, mock_session):
        mock_session.request.side_effect = requests.exceptions.ContentDecodingError("bad gzip")

        with pytest.raises(ReadError) as exc_info:
            send_request(mock_session, "GET", "http://clair/x", timeout=5)

        assert exc_info.value.url == "http://clair/x"

    def test_other_request_errors_are_transport_errors(self, mock_session):
        mock_session.request.side_effect = requests.exceptions.TooManyRedirects("loop")

        with pytest.raises(TransportError) as exc_info:
            send_request(mock_session, "GET", "http://clair/x", timeout=5)

        assert "loop" in exc_info.value.reason

    def test_errors_are_not_status_checked(self, mock_session, make_response):
        """Test status handling is left to the caller."""
        mock_session.request.return_value = make_response(500, "boom")

        assert send_request(mock_session, "GET", "http://clair/x", timeout=5).status_code == 500
