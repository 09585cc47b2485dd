"""Shared request data types."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class UpstreamResult:
    """Status and decoded JSON body returned by a forwarding target."""

    status_code: int
    body: Any
