"""
Tests for the aiohttp-based HTTP transport.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from satusehat.errors import RequestError, TransportError
from satusehat.http import HTTPResponse, HTTPTransport
from satusehat.services.fhir_client import ResourceRequestBuilder


def _mock_session(status: int = 200, body: str = "{}", headers: dict | None = None):
    """Create a mock aiohttp session whose request() yields one response."""
    mock_response = AsyncMock()
    mock_response.status = status
    mock_response.text = AsyncMock(return_value=body)
    mock_response.headers = headers or {"Content-Type": "application/json"}

    mock_request = MagicMock()
    mock_request.__aenter__ = AsyncMock(return_value=mock_response)
    mock_request.__aexit__ = AsyncMock(return_value=False)

    mock_session = MagicMock()
    mock_session.__aenter__ = AsyncMock(return_value=mock_session)
    mock_session.__aexit__ = AsyncMock(return_value=False)
    mock_session.request = MagicMock(return_value=mock_request)
    return mock_session


class TestHTTPResponse:
    """Tests for HTTPResponse."""

    def test_ok_for_2xx(self):
        assert HTTPResponse(status=200, body="").ok is True
        assert HTTPResponse(status=204, body="").ok is True

    def test_not_ok_outside_2xx(self):
        assert HTTPResponse(status=301, body="").ok is False
        assert HTTPResponse(status=404, body="").ok is False
        assert HTTPResponse(status=500, body="").ok is False

    def test_json(self):
        assert HTTPResponse(status=200, body='{"a": 1}').json() == {"a": 1}

    def test_json_invalid(self):
        with pytest.raises(ValueError):
            HTTPResponse(status=200, body="nope").json()


class TestHTTPTransport:
    """Tests for HTTPTransport.request."""

    @pytest.mark.asyncio
    async def test_per_request_session(self):
        """Should open a session per request when none is supplied."""
        mock_session = _mock_session(status=201, body='{"id": "1"}')

        with patch("aiohttp.ClientSession", return_value=mock_session) as mock_session_cls:
            transport = HTTPTransport(timeout=5)
            response = await transport.request(
                "POST",
                "https://x/fhir/Patient",
                headers={"Content-Type": "application/json"},
                data='{"resourceType": "Patient"}',
            )

        assert response.status == 201
        assert response.body == '{"id": "1"}'
        assert response.headers["Content-Type"] == "application/json"
        mock_session_cls.assert_called_once()
        assert mock_session_cls.call_args.kwargs["timeout"].total == 5

        call = mock_session.request.call_args
        assert call.args == ("POST", "https://x/fhir/Patient")
        assert call.kwargs["data"] == '{"resourceType": "Patient"}'
        assert call.kwargs["headers"] == {"Content-Type": "application/json"}

    @pytest.mark.asyncio
    async def test_supplied_session(self):
        """Should reuse a caller-owned session and never close it."""
        mock_session = _mock_session(status=200, body="ok")

        with patch("aiohttp.ClientSession") as mock_session_cls:
            transport = HTTPTransport(session=mock_session)
            response = await transport.request("GET", "https://x/fhir/Patient/1")

        assert response.body == "ok"
        mock_session_cls.assert_not_called()
        mock_session.__aexit__.assert_not_called()
        mock_session.close.assert_not_called()

    def test_default_timeout(self):
        transport = HTTPTransport()
        assert transport.timeout == 30

    @pytest.mark.asyncio
    async def test_client_error_raises_transport_error(self):
        """aiohttp errors should become TransportError."""
        mock_session = _mock_session()
        mock_session.request = MagicMock(
            side_effect=aiohttp.ClientConnectionError("Connection refused")
        )

        transport = HTTPTransport(session=mock_session)

        with pytest.raises(TransportError) as exc_info:
            await transport.request("GET", "https://x/fhir/Patient/1")

        assert exc_info.value.method == "GET"
        assert exc_info.value.url == "https://x/fhir/Patient/1"
        assert "Connection refused" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_timeout_raises_transport_error(self):
        """Timeouts should become TransportError."""
        mock_session = _mock_session()
        mock_session.request.return_value.__aenter__ = AsyncMock(
            side_effect=asyncio.TimeoutError()
        )

        transport = HTTPTransport(session=mock_session, timeout=0.1)

        with pytest.raises(TransportError) as exc_info:
            await transport.request("GET", "https://x/fhir/Patient/1")

        assert exc_info.value.original_error == "TimeoutError"

    @pytest.mark.asyncio
    async def test_undecodable_body_is_replaced(self):
        """Bytes that are not valid in the charset should not escape as UnicodeDecodeError."""
        raw = b"\xff\xfe bad"
        mock_session = _mock_session(status=500)
        mock_response = mock_session.request.return_value.__aenter__.return_value
        mock_response.text = AsyncMock(
            side_effect=lambda encoding=None, errors="strict": raw.decode("utf-8", errors)
        )

        transport = HTTPTransport(session=mock_session)
        response = await transport.request("GET", "https://x/fhir/Patient/1")

        assert response.status == 500
        assert response.body == "\ufffd\ufffd bad"
        mock_response.text.assert_called_once_with(errors="replace")


class TestUndecodableErrorBody:
    """Undecodable error bodies still surface as typed errors."""

    @pytest.mark.asyncio
    async def test_resource_request_raises_request_error(self, mock_token_manager):
        raw = b"\xff\xfe bad"
        mock_session = _mock_session(status=500)
        mock_response = mock_session.request.return_value.__aenter__.return_value
        mock_response.text = AsyncMock(
            side_effect=lambda encoding=None, errors="strict": raw.decode("utf-8", errors)
        )
        builder = ResourceRequestBuilder(
            mock_token_manager,
            "https://x/fhir",
            "Patient",
            transport=HTTPTransport(session=mock_session),
        )

        with pytest.raises(RequestError) as exc_info:
            await builder.read("1")

        assert exc_info.value.status == 500
