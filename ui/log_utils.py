"""Shared logging utilities."""

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any
from uuid import uuid4

from core.exceptions import ConfigurationError

LOG_ROOT = Path.cwd() / "logs"
CLI_LOG_FILE = LOG_ROOT / "proxy.log"

LOG_LEVELS = {"debug": 10, "info": 20, "warning": 30, "error": 40}

_threshold = LOG_LEVELS["info"]


def configure_cli_log(level: str) -> None:
    """Set the minimum level written by write_cli_log."""
    global _threshold
    try:
        _threshold = LOG_LEVELS[level.lower()]
    except KeyError:
        choices = ", ".join(LOG_LEVELS)
        raise ConfigurationError(f"Unknown log level {level!r} (expected one of: {choices})") from None


def is_enabled(level: str) -> bool:
    """Return True if messages at level pass the configured threshold."""
    return LOG_LEVELS.get(level.lower(), LOG_LEVELS["error"]) >= _threshold


def write_incoming_log(
    method: str,
    path: str,
    headers: dict[str, str],
    body: Any,
    *,
    log_root: Path | None = None,
) -> Path | None:
    """Write a single incoming request log entry.

    Only written at debug verbosity; returns None otherwise.
    """
    if not is_enabled("debug"):
        return None
    payload = {
        "timestamp": _utc_now(),
        "method": method,
        "path": path,
        "headers": _redact_headers(headers),
        "body": body,
    }
    return _write_json((log_root or LOG_ROOT) / "incoming", payload)


def write_cli_log(
    level: str,
    message: str,
    *,
    log_file: Path | None = None,
    **extra: Any,
) -> bool:
    """Append a line to the rolling CLI log file.

    Returns False when the level is below the configured threshold.
    """
    if not is_enabled(level):
        return False
    log_file = log_file or CLI_LOG_FILE
    log_file.parent.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S")
    line = format_log_line(level, message, **extra)
    with log_file.open("a") as f:
        f.write(f"[{timestamp}] {line}\n")
    return True


def format_log_line(level: str, message: str, **extra: Any) -> str:
    """Render 'LEVEL: message key=value ...'."""
    extra_str = " ".join(f"{k}={v}" for k, v in extra.items()) if extra else ""
    line = f"{level.upper()}: {message}"
    if extra_str:
        line += f" {extra_str}"
    return line


def _write_json(folder: Path, payload: dict[str, Any]) -> Path:
    """Write payload to a unique JSON file in the given folder."""
    folder.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%S.%fZ")
    file_path = folder / f"{timestamp}_{uuid4().hex}.json"
    file_path.write_text(json.dumps(payload, indent=2, default=str))
    return file_path


def _redact_headers(headers: dict[str, str]) -> dict[str, str]:
    """Redact sensitive headers."""
    redacted = {}
    for key, value in headers.items():
        lowered = key.lower()
        if "key" in lowered or "authorization" in lowered or lowered == "cookie":
            redacted[key] = _mask(value)
        else:
            redacted[key] = value
    return redacted


def _mask(value: str) -> str:
    if len(value) <= 10:
        return "***"
    return value[:6] + "..." + value[-4:]


def _utc_now() -> str:
    return datetime.now(UTC).isoformat()


def clear_logs(log_file: Path | None = None) -> None:
    """Truncate the CLI log file from a previous run."""
    log_file = log_file or CLI_LOG_FILE
    if log_file.exists():
        log_file.write_text("")
