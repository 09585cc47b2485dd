"""Target URL extraction from inbound request headers."""

from collections.abc import Iterable

from core.exceptions import MissingTarget

TARGET_HEADER = b"x-target-url"


def extract_target_url(raw_headers: Iterable[tuple[bytes, bytes]]) -> str:
    """Return the X-Target-URL value from raw (name, value) header pairs.

    Header names match case-insensitively. A value containing anything other
    than visible ASCII or tab is treated as empty, so undecodable and missing
    values both raise MissingTarget.
    """
    for name, value in raw_headers:
        if name.lower() == TARGET_HEADER:
            break
    else:
        raise MissingTarget("absent")

    target_url = decode_header_value(value)
    if target_url:
        return target_url
    raise MissingTarget("undecodable" if value else "empty")


def decode_header_value(value: bytes) -> str:
    """Decode a header value as visible ASCII, or return "" if it isn't."""
    if all(b == 0x09 or 0x20 <= b <= 0x7E for b in value):
        return value.decode("ascii")
    return ""
