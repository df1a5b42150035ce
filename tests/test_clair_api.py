"""Tests for the Clair API client."""

import json

import pytest
import requests

from core.exceptions import (
    DecodeError,
    ReadError,
    StatusError,
    TransportError,
    UnsupportedFeatureError,
)
from core.models import ScannerEndpoint, VulnerabilityRecord
from integrations.clair_api import ClairClient, template_archive_url

MIRROR = "http://mirror.example.org/templates"


@pytest.fixture
def client(endpoint, mock_session):
    """Clair client with a mocked session."""
    return ClairClient(endpoint, session=mock_session, timeout=10)


class TestRegisterImage:
    """Tests for layer registration."""

    def test_created_is_success(self, client, mock_session, make_response):
        """Test 201 Created completes without error."""
        mock_session.request.return_value = make_response(201, "")

        assert client.register_image(MIRROR, "ubuntu-20.04-x86_64") is None

    def test_request_shape(self, client, mock_session, make_response):
        """Test URL, headers and JSON body sent to Clair."""
        mock_session.request.return_value = make_response(201, "")

        client.register_image(MIRROR + "/", "ubuntu-20.04-x86_64")

        args, kwargs = mock_session.request.call_args
        assert args == ("POST", "http://127.0.0.1:6060/v1/layers")
        assert kwargs["headers"] == {"Content-Type": "application/json"}
        assert kwargs["timeout"] == 10
        assert json.loads(kwargs["data"]) == {
            "ID": "ubuntu-20.04-x86_64",
            "Path": "http://mirror.example.org/templates/ubuntu-20.04-x86_64.tar.gz",
            "ParantID": "",
        }

    def test_conflict_is_status_error(self, client, mock_session, make_response):
        """Test a non-201 answer carries the body verbatim."""
        mock_session.request.return_value = make_response(409, "conflict")

        with pytest.raises(StatusError) as exc_info:
            client.register_image(MIRROR, "ubuntu-20.04-x86_64")

        assert exc_info.value.detail == "conflict"
        assert exc_info.value.status_code == 409
        assert exc_info.value.operation == "register"
        assert exc_info.value.template == "ubuntu-20.04-x86_64"

    def test_ok_is_not_created(self, client, mock_session, make_response):
        """Test that only 201 counts as success."""
        mock_session.request.return_value = make_response(200, "{}")

        with pytest.raises(StatusError):
            client.register_image(MIRROR, "debian-11")

    def test_json_error_envelope_kept_verbatim(self, client, mock_session, make_response):
        """Test Clair's JSON error envelope is surfaced, not parsed."""
        body = '{"Error":{"Message":"could not find layer"}}'
        mock_session.request.return_value = make_response(422, body)

        with pytest.raises(StatusError) as exc_info:
            client.register_image(MIRROR, "debian-11")

        assert exc_info.value.detail == body

    def test_connection_refused_is_transport_error(self, client, mock_session):
        """Test an unreachable Clair raises TransportError."""
        mock_session.request.side_effect = requests.ConnectionError("Connection refused")

        with pytest.raises(TransportError):
            client.register_image(MIRROR, "debian-11")

    def test_tls_endpoint_fails_before_request(self, mock_session):
        """Test HTTPS is refused explicitly instead of downgraded."""
        endpoint = ScannerEndpoint(host="clair.example.org", port=6060, use_tls=True)
        client = ClairClient(endpoint, session=mock_session)

        with pytest.raises(UnsupportedFeatureError):
            client.register_image(MIRROR, "debian-11")

        mock_session.request.assert_not_called()


class TestFetchVulnerabilities:
    """Tests for per-layer vulnerability lookup."""

    def test_single_record(self, client, mock_session, make_response):
        """Test a 200 body decodes into matching records."""
        body = '{"Vulnerabilities":[{"ID":"CVE-1","Link":"x","Priority":"High","Description":"d"}]}'
        mock_session.request.return_value = make_response(200, body)

        result = client.fetch_vulnerabilities("ubuntu-x")

        assert result == [VulnerabilityRecord(id="CVE-1", link="x", severity="High", description="d")]

    def test_request_shape(self, client, mock_session, make_response):
        """Test lookup URL and minimumPriority query."""
        mock_session.request.return_value = make_response(200, '{"Vulnerabilities":[]}')

        client.fetch_vulnerabilities("ubuntu-x")

        mock_session.request.assert_called_once_with(
            "GET",
            "http://127.0.0.1:6060/v1/layers/ubuntu-x/vulnerabilities",
            timeout=10,
            params={"minimumPriority": "High"},
        )

    def test_order_preserved(self, client, mock_session, make_response):
        """Test records come back in service order."""
        items = [
            {"ID": f"CVE-{i}", "Link": "", "Priority": "Low", "Description": ""}
            for i in (3, 1, 2)
        ]
        mock_session.request.return_value = make_response(200, json.dumps({"Vulnerabilities": items}))

        result = client.fetch_vulnerabilities("debian-z")

        assert [r.id for r in result] == ["CVE-3", "CVE-1", "CVE-2"]

    @pytest.mark.parametrize("body", ["{}", '{"Vulnerabilities": null}'])
    def test_missing_array_is_empty(self, client, mock_session, make_response, body):
        """Test an absent or null array means no vulnerabilities."""
        mock_session.request.return_value = make_response(200, body)

        assert client.fetch_vulnerabilities("debian-z") == []

    def test_missing_fields_default_to_empty(self, client, mock_session, make_response):
        """Test partial records decode with empty strings."""
        mock_session.request.return_value = make_response(200, '{"Vulnerabilities":[{"ID":"CVE-9"}]}')

        result = client.fetch_vulnerabilities("debian-z")

        assert result == [VulnerabilityRecord(id="CVE-9", link="", severity="", description="")]

    def test_invalid_json_is_decode_error(self, client, mock_session, make_response):
        """Test malformed JSON on 200 is a DecodeError, not a StatusError."""
        mock_session.request.return_value = make_response(200, "{not json")

        with pytest.raises(DecodeError) as exc_info:
            client.fetch_vulnerabilities("ubuntu-x")

        assert not isinstance(exc_info.value, StatusError)

    @pytest.mark.parametrize("body", [
        "[]",
        '"text"',
        '{"Vulnerabilities": {"ID": "x"}}',
        '{"Vulnerabilities": [1]}',
        '{"Vulnerabilities": {}}',
        '{"Vulnerabilities": false}',
        '{"Vulnerabilities": ""}',
        '{"Vulnerabilities": 0}',
        '{"Vulnerabilities": [{"ID": 5}]}',
    ])
    def test_unexpected_shape_is_decode_error(self, client, mock_session, make_response, body):
        """Test well-formed JSON of the wrong shape is a DecodeError."""
        mock_session.request.return_value = make_response(200, body)

        with pytest.raises(DecodeError):
            client.fetch_vulnerabilities("ubuntu-x")

    def test_not_found_is_status_error(self, client, mock_session, make_response):
        """Test a non-200 answer carries the raw body."""
        mock_session.request.return_value = make_response(404, "layer not found")

        with pytest.raises(StatusError) as exc_info:
            client.fetch_vulnerabilities("ubuntu-x")

        assert exc_info.value.detail == "layer not found"
        assert exc_info.value.operation == "lookup"

    def test_broken_body_is_read_error(self, client, mock_session):
        """Test a truncated body raises ReadError."""
        mock_session.request.side_effect = requests.exceptions.ChunkedEncodingError("broken")

        with pytest.raises(ReadError):
            client.fetch_vulnerabilities("ubuntu-x")


class TestUrls:
    """Tests for URL helpers."""

    def test_vulnerabilities_url_with_query(self, client):
        assert client.vulnerabilities_url("ubuntu-x") == (
            "http://127.0.0.1:6060/v1/layers/ubuntu-x/vulnerabilities?minimumPriority=High"
        )

    def test_vulnerabilities_url_quotes_name(self, client):
        """Test names are quoted as a single path segment."""
        assert "/v1/layers/odd%2Fname/" in client.vulnerabilities_url("odd/name")

    def test_template_archive_url(self):
        assert template_archive_url("http://m/t/", "debian-11") == "http://m/t/debian-11.tar.gz"
