import httpx
import pytest

from client import ProxyClient
from core.exceptions import ProxyRequestFailed, ProxyResponseInvalid


def _proxy(status_code: int, content: bytes):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(status_code, content=content)

    return httpx.AsyncClient(transport=httpx.MockTransport(handler)), seen


@pytest.mark.asyncio
async def test_fetch_sends_target_header(recording_logger):
    http_client, seen = _proxy(200, b'{"hello": "world"}')
    client = ProxyClient("http://localhost:3000", http_client)

    data = await client.fetch("http://target.local/example.json", recording_logger)

    assert data == {"hello": "world"}
    assert (seen[0].url.host, seen[0].url.port) == ("localhost", 3000)
    assert seen[0].headers["X-Target-URL"] == "http://target.local/example.json"
    assert recording_logger.events[0][1] == "Sending request through proxy"


@pytest.mark.asyncio
async def test_error_status_raises(recording_logger):
    http_client, _ = _proxy(400, b'{"error":"Missing X-Target-URL header"}')
    client = ProxyClient("http://localhost:3000", http_client)

    with pytest.raises(ProxyRequestFailed) as exc_info:
        await client.fetch("http://target.local/", recording_logger)

    assert exc_info.value.status_code == 400
    assert "Missing X-Target-URL header" in exc_info.value.body
    assert recording_logger.errors[0][0] == 400


@pytest.mark.asyncio
async def test_non_json_success_raises():
    http_client, _ = _proxy(200, b"not json")
    client = ProxyClient("http://localhost:3000", http_client)

    with pytest.raises(ProxyResponseInvalid, match="Failed to parse response as JSON"):
        await client.fetch("http://target.local/")
