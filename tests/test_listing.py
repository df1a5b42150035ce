"""Tests for the mirror listing fetcher."""

import pytest
import requests

from core.exceptions import (
    ListingEmptyError,
    ReadError,
    StatusError,
    TransportError,
    ValidationException,
)
from core.listing import fetch_listing, listing_url, parse_listing


class TestParseListing:
    """Tests for listing text normalization."""

    def test_drops_empty_entries(self):
        """Test blank lines are removed and order is kept."""
        assert parse_listing("a\n\nb\n") == ["a", "b"]

    def test_trims_carriage_returns(self):
        """Test CRLF listings produce clean names."""
        assert parse_listing("ubuntu-20.04\r\ndebian-11\r\n") == ["ubuntu-20.04", "debian-11"]

    def test_whitespace_only_entries_dropped(self):
        """Test entries that are only whitespace are discarded."""
        assert parse_listing("  \n\t\ncentos-7\n") == ["centos-7"]

    def test_empty_text(self):
        """Test empty body yields no entries."""
        assert parse_listing("") == []


class TestListingUrl:
    """Tests for listing URL construction."""

    def test_appends_listing(self):
        assert listing_url("http://mirror.example.org/t") == "http://mirror.example.org/t/.listing"

    def test_trailing_slash_not_doubled(self):
        """Test a trailing slash does not produce //.listing."""
        assert listing_url("http://mirror.example.org/t/") == "http://mirror.example.org/t/.listing"


class TestFetchListing:
    """Tests for fetching the listing over HTTP."""

    def test_fetch_success(self, mock_session, make_response):
        """Test a listing body is split into template names."""
        mock_session.request.return_value = make_response(200, "a\n\nb\n")

        result = fetch_listing("http://mirror.example.org/t", session=mock_session, timeout=5)

        assert result == ["a", "b"]
        mock_session.request.assert_called_once_with(
            "GET", "http://mirror.example.org/t/.listing", timeout=5
        )

    def test_connection_error_is_transport_error(self, mock_session):
        """Test DNS/connection failures raise TransportError."""
        mock_session.request.side_effect = requests.ConnectionError("Name or service not known")

        with pytest.raises(TransportError) as exc_info:
            fetch_listing("http://mirror.example.org", session=mock_session)

        assert "mirror.example.org/.listing" in str(exc_info.value)

    def test_timeout_is_transport_error(self, mock_session):
        """Test timeouts raise TransportError."""
        mock_session.request.side_effect = requests.Timeout("read timed out")

        with pytest.raises(TransportError, match="timed out"):
            fetch_listing("http://mirror.example.org", session=mock_session, timeout=3)

    def test_broken_body_is_read_error(self, mock_session):
        """Test an interrupted body raises ReadError, not TransportError."""
        mock_session.request.side_effect = requests.exceptions.ChunkedEncodingError("connection broken")

        with pytest.raises(ReadError):
            fetch_listing("http://mirror.example.org", session=mock_session)

    def test_not_found_is_status_error(self, mock_session, make_response):
        """Test a 404 listing is reported with its status."""
        mock_session.request.return_value = make_response(404, "not found")

        with pytest.raises(StatusError) as exc_info:
            fetch_listing("http://mirror.example.org", session=mock_session)

        assert exc_info.value.status_code == 404
        assert exc_info.value.detail == "not found"

    def test_empty_listing_raises(self, mock_session, make_response):
        """Test a listing with no entries is fatal."""
        mock_session.request.return_value = make_response(200, "\n\n")

        with pytest.raises(ListingEmptyError):
            fetch_listing("http://mirror.example.org", session=mock_session)

    @pytest.mark.parametrize("url", ["", "mirror.example.org", "ftp://mirror.example.org", "http://"])
    def test_invalid_url_rejected_before_request(self, url, mock_session):
        """Test malformed mirror URLs never reach the network."""
        with pytest.raises(ValidationException):
            fetch_listing(url, session=mock_session)

        mock_session.request.assert_not_called()
