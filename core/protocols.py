"""Shared protocol definitions."""

from typing import Any, Protocol


class RequestLogger(Protocol):
    """Protocol for request logging (Dashboard, ConsoleLogger)."""

    def log_forward(self, target_url: str, status: int) -> None: ...
    def log_error(self, status: int, message: str, *, target_url: str | None = None) -> None: ...
    def log_event(self, level: str, message: str, **extra: Any) -> None: ...
