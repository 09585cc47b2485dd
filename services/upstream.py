"""HTTP forwarding to target URLs."""

import json
import math

import httpx

from core.exceptions import DecodeFailed, DispatchFailed
from core.request_types import UpstreamResult


class UpstreamClient:
    """Forward GET requests to arbitrary targets over a shared client."""

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        self._client = http_client

    async def fetch_json(self, target_url: str) -> UpstreamResult:
        """GET target_url once and return its status and JSON body.

        Only the status range is checked before the body is decoded, so a
        non-JSON error page raises DecodeFailed rather than passing its
        status through.
        """
        try:
            response = await self._client.get(target_url)
        except httpx.InvalidURL as e:
            raise DispatchFailed(f"invalid URL {target_url!r}: {e}", target_url) from e
        except httpx.HTTPError as e:
            raise DispatchFailed(_describe(e, target_url), target_url) from e

        status_code = response.status_code
        if not 100 <= status_code <= 599:
            raise DispatchFailed(f"invalid status code: {status_code}", target_url)

        try:
            body = json.loads(
                response.content,
                parse_constant=_reject_constant,
                parse_float=_parse_finite_float,
            )
        except (ValueError, RecursionError) as e:
            raise DecodeFailed(f"error decoding response body: {e}", target_url) from e

        return UpstreamResult(status_code, body)


def _describe(error: httpx.HTTPError, target_url: str) -> str:
    """Render an httpx error, falling back to its type when the message is empty."""
    message = str(error) or type(error).__name__
    return f"error sending request for url ({target_url}): {message}"


def _reject_constant(name: str):
    # NaN and Infinity are not JSON and cannot be relayed
    raise ValueError(f"invalid JSON constant {name}")


def _parse_finite_float(text: str) -> float:
    value = float(text)
    if math.isinf(value):
        raise ValueError(f"number out of range: {text}")
    return value
