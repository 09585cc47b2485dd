"""Requester for the re-encryption proxy."""

import json
from json import JSONDecodeError
from typing import Any

import httpx

from core.exceptions import ProxyRequestFailed, ProxyResponseInvalid
from core.protocols import RequestLogger

TARGET_HEADER = "X-Target-URL"


class ProxyClient:
    """Send GET requests through the proxy on behalf of a target URL."""

    def __init__(self, proxy_address: str, http_client: httpx.AsyncClient) -> None:
        self._proxy_address = proxy_address
        self._client = http_client

    async def fetch(self, target_url: str, logger: RequestLogger | None = None) -> Any:
        """Ask the proxy to GET target_url and return the decoded JSON body.

        Raises:
            httpx.HTTPError: the proxy itself could not be reached
            ProxyRequestFailed: the proxy answered with a non-2xx status
            ProxyResponseInvalid: a 2xx answer did not carry JSON
        """
        if logger:
            logger.log_event(
                "info",
                "Sending request through proxy",
                proxy_addr=self._proxy_address,
                target_url=target_url,
            )
        response = await self._client.get(
            self._proxy_address,
            headers={TARGET_HEADER: target_url},
        )
        if logger:
            logger.log_event("debug", "Received response from proxy", status=response.status_code)

        if not response.is_success:
            if logger:
                logger.log_error(response.status_code, response.text, target_url=target_url)
            raise ProxyRequestFailed(response.status_code, response.text)

        try:
            return json.loads(response.content)
        except (JSONDecodeError, UnicodeDecodeError) as e:
            raise ProxyResponseInvalid(f"Failed to parse response as JSON: {e}") from e
