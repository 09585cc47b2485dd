from typing import Any

import httpx
import pytest

from ui import log_utils


class RecordingLogger:
    """RequestLogger that keeps every call for assertions."""

    def __init__(self):
        self.forwards: list[tuple[str, int]] = []
        self.errors: list[tuple[int, str, str | None]] = []
        self.events: list[tuple[str, str, dict[str, Any]]] = []

    def log_forward(self, target_url: str, status: int) -> None:
        self.forwards.append((target_url, status))

    def log_error(self, status: int, message: str, *, target_url: str | None = None) -> None:
        self.errors.append((status, message, target_url))

    def log_event(self, level: str, message: str, **extra: Any) -> None:
        self.events.append((level, message, extra))


@pytest.fixture(autouse=True)
def isolated_logs(tmp_path, monkeypatch):
    """Send log files to a temp dir and restore the default threshold."""
    monkeypatch.setattr(log_utils, "LOG_ROOT", tmp_path / "logs")
    monkeypatch.setattr(log_utils, "CLI_LOG_FILE", tmp_path / "logs" / "proxy.log")
    monkeypatch.setattr(log_utils, "_threshold", log_utils.LOG_LEVELS["info"])
    return tmp_path / "logs"


@pytest.fixture
def recording_logger():
    return RecordingLogger()


@pytest.fixture
def json_target():
    """Build a MockTransport that answers every request with fixed content."""

    def _build(status_code=200, content=b'{"hello": "world"}', content_type="application/json"):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                status_code,
                content=content,
                headers={"content-type": content_type},
            )

        transport = httpx.MockTransport(handler)
        transport.seen = seen
        return transport

    return _build
