"""Unit tests for utils.http module.

Tests:
- read_bounded() helper
  - Single and chunked reads
  - Size enforcement across chunks
- HttpResponse.ok / json()
- AiohttpFetcher.get()
  - Success, non-success status, oversized bodies
  - Transport error propagation
  - Proxy connector selection
"""

from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from tzmeta.utils.http import AiohttpFetcher, HttpResponse, read_bounded


def _mock_response(*chunks: bytes, status: int = 200, reason: str = "OK") -> MagicMock:
    """Build a mock aiohttp.ClientResponse that yields chunks then EOF."""
    resp = MagicMock()
    resp.status = status
    resp.reason = reason
    content = MagicMock()
    content.read = AsyncMock(side_effect=[*chunks, b""])
    resp.content = content
    return resp


def _mock_session(response: MagicMock) -> MagicMock:
    """Build a mock aiohttp.ClientSession whose get() yields *response*."""
    context_response = AsyncMock()
    context_response.__aenter__ = AsyncMock(return_value=response)
    context_response.__aexit__ = AsyncMock(return_value=False)

    session = MagicMock()
    session.get = MagicMock(return_value=context_response)

    context_session = AsyncMock()
    context_session.__aenter__ = AsyncMock(return_value=session)
    context_session.__aexit__ = AsyncMock(return_value=False)
    context_session.session = session
    return context_session


# =============================================================================
# read_bounded() Tests
# =============================================================================


class TestReadBounded:
    """Tests for read_bounded()."""

    async def test_returns_full_body(self) -> None:
        assert await read_bounded(_mock_response(b"hello world"), max_size=1024) == b"hello world"

    async def test_reassembles_chunks(self) -> None:
        assert await read_bounded(_mock_response(b"hello ", b"world"), max_size=1024) == (
            b"hello world"
        )

    async def test_accepts_body_at_exact_limit(self) -> None:
        assert await read_bounded(_mock_response(b"x" * 100), max_size=100) == b"x" * 100

    async def test_rejects_one_byte_over_limit(self) -> None:
        with pytest.raises(ValueError, match="Response body too large"):
            await read_bounded(_mock_response(b"x" * 101), max_size=100)

    async def test_rejects_when_chunks_exceed_limit(self) -> None:
        with pytest.raises(ValueError, match="Response body too large"):
            await read_bounded(_mock_response(b"x" * 60, b"x" * 60), max_size=100)

    async def test_read_size_shrinks_with_progress(self) -> None:
        resp = _mock_response(b"x" * 30, b"y" * 30)
        await read_bounded(resp, max_size=100)

        sizes = [c.args[0] for c in resp.content.read.call_args_list]
        assert sizes == [101, 71, 41]

    async def test_stops_reading_once_over_limit(self) -> None:
        resp = _mock_response(b"x" * 60, b"x" * 60, b"x" * 60)
        with pytest.raises(ValueError, match="Response body too large"):
            await read_bounded(resp, max_size=100)

        sizes = [c.args[0] for c in resp.content.read.call_args_list]
        assert sizes == [101, 41]


# =============================================================================
# HttpResponse Tests
# =============================================================================


class TestHttpResponse:
    """Tests for HttpResponse."""

    @pytest.mark.parametrize("status", [200, 201, 204, 299])
    def test_ok(self, status: int) -> None:
        assert HttpResponse(url="u", status=status).ok is True

    @pytest.mark.parametrize("status", [199, 301, 404, 500])
    def test_not_ok(self, status: int) -> None:
        assert HttpResponse(url="u", status=status).ok is False

    def test_json(self) -> None:
        assert HttpResponse(url="u", status=200, body=b'{"a": 1}').json() == {"a": 1}

    def test_json_invalid(self) -> None:
        with pytest.raises(ValueError):
            HttpResponse(url="u", status=200, body=b"<html>").json()


# =============================================================================
# AiohttpFetcher Tests
# =============================================================================


class TestAiohttpFetcher:
    """Tests for AiohttpFetcher.get()."""

    @pytest.fixture(autouse=True)
    def _no_real_connector(self):
        with patch("tzmeta.utils.http.aiohttp.TCPConnector"):
            yield

    async def test_success(self) -> None:
        session = _mock_session(_mock_response(b'{"name": "X"}'))
        with patch("tzmeta.utils.http.aiohttp.ClientSession", return_value=session):
            response = await AiohttpFetcher().get("https://example.com/meta.json")

        assert response.ok
        assert response.url == "https://example.com/meta.json"
        assert response.json() == {"name": "X"}

    async def test_timeout_passed_to_request(self) -> None:
        session = _mock_session(_mock_response(b"{}"))
        with patch("tzmeta.utils.http.aiohttp.ClientSession", return_value=session):
            await AiohttpFetcher(timeout=3.0).get("https://example.com/x")

        timeout = session.session.get.call_args.kwargs["timeout"]
        assert timeout.total == 3.0

    async def test_non_success_returns_response_without_body(self) -> None:
        resp = _mock_response(b"not found", status=404, reason="Not Found")
        with patch("tzmeta.utils.http.aiohttp.ClientSession", return_value=_mock_session(resp)):
            response = await AiohttpFetcher().get("https://example.com/x")

        assert response.status == 404
        assert response.reason == "Not Found"
        assert response.body == b""
        resp.content.read.assert_not_called()

    async def test_oversized_body_raises(self) -> None:
        session = _mock_session(_mock_response(b"x" * 20))
        with (
            patch("tzmeta.utils.http.aiohttp.ClientSession", return_value=session),
            pytest.raises(ValueError, match="too large"),
        ):
            await AiohttpFetcher(max_size=10).get("https://example.com/x")

    async def test_transport_error_propagates(self) -> None:
        session = AsyncMock()
        session.__aenter__ = AsyncMock(side_effect=aiohttp.ClientConnectionError("refused"))
        session.__aexit__ = AsyncMock(return_value=False)
        with (
            patch("tzmeta.utils.http.aiohttp.ClientSession", return_value=session),
            pytest.raises(aiohttp.ClientConnectionError),
        ):
            await AiohttpFetcher().get("https://example.com/x")

    async def test_proxy_connector_used(self) -> None:
        session = _mock_session(_mock_response(b"{}"))
        with (
            patch("tzmeta.utils.http.ProxyConnector.from_url") as from_url,
            patch("tzmeta.utils.http.aiohttp.ClientSession", return_value=session) as cls,
        ):
            await AiohttpFetcher(proxy_url="socks5://127.0.0.1:9050").get("https://example.com/x")

        from_url.assert_called_once_with("socks5://127.0.0.1:9050")
        assert cls.call_args.kwargs["connector"] is from_url.return_value

    async def test_direct_connector_without_proxy(self) -> None:
        session = _mock_session(_mock_response(b"{}"))
        with (
            patch("tzmeta.utils.http.aiohttp.TCPConnector") as tcp,
            patch("tzmeta.utils.http.aiohttp.ClientSession", return_value=session) as cls,
        ):
            await AiohttpFetcher().get("https://example.com/x")

        assert cls.call_args.kwargs["connector"] is tcp.return_value
