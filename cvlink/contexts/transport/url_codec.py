"""
URL Obfuscation Codec

Turns an external URL into a short opaque token for a query parameter, and back.

Current format (Unicode-safe):
    token = base64(percent_escape(url))
    percent_escape matches JavaScript's encodeURIComponent, so the base64 input is
    always ASCII and tokens interoperate with links built in the browser.

Legacy format (raw bytes):
    token = base64(utf8(url))
    Older links were produced this way. Decoding tries the current format first and
    only then the legacy one, recording which succeeded.

Usage:
    from cvlink.contexts.transport.url_codec import encode_url, decode_url

    token = encode_url("https://example.com/cv-config.json")
    url = decode_url(token)  # "" if the token is malformed
"""

import base64
import binascii
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional
from urllib.parse import quote, unquote

from cvlink.contexts.transport.logger import _log_debug, _log_error

# Characters encodeURIComponent leaves untouched besides alphanumerics
URI_COMPONENT_SAFE = "-_.!~*'()"

# A "%" not followed by two hex digits is malformed
MALFORMED_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


class UrlEncoding(str, Enum):
    """Token formats that decode_url_tagged() can recognise."""

    UNICODE_SAFE = "unicode-safe"
    RAW_BYTES = "raw-bytes"


@dataclass(frozen=True)
class DecodedUrl:
    """Successful decode attempt and the format that produced it."""

    url: str
    encoding: UrlEncoding

    @property
    def is_legacy(self) -> bool:
        return self.encoding is not UrlEncoding.UNICODE_SAFE


def percent_escape(text: str) -> str:
    """Escape text the way encodeURIComponent does (UTF-8, uppercase hex)."""
    return quote(text, safe=URI_COMPONENT_SAFE, encoding="utf-8", errors="strict")


def percent_unescape(text: str) -> str:
    """
    Reverse percent_escape().

    Raises:
        ValueError: On malformed escapes or escapes that are not valid UTF-8
    """
    if MALFORMED_ESCAPE.search(text):
        raise ValueError("malformed percent escape")
    return unquote(text, encoding="utf-8", errors="strict")


def b64decode_lenient(token: str) -> bytes:
    """
    Strict standard-alphabet base64 decode that tolerates query-string damage.

    Form decoding of a query string turns "+" into " "; padding may have been
    stripped by hand-edited links.

    Raises:
        binascii.Error: If the token is not base64
    """
    cleaned = token.replace(" ", "+").strip()
    cleaned += "=" * (-len(cleaned) % 4)
    return base64.b64decode(cleaned, validate=True)


def encode_url(url: str) -> str:
    """
    Encode a URL into an opaque token (current Unicode-safe format).

    Args:
        url: Any string, typically an absolute http(s) URL

    Returns:
        Token, or "" if the value cannot be encoded
    """
    if not isinstance(url, str):
        _log_error(f"Failed to encode URL: expected str, got {type(url).__name__}")
        return ""

    try:
        escaped = percent_escape(url)
    except UnicodeEncodeError as e:
        # Lone surrogates have no UTF-8 form
        _log_error(f"Failed to encode URL: {e}")
        return ""

    return base64.b64encode(escaped.encode("ascii")).decode("ascii")


def decode_unicode_safe(token: str) -> str:
    """Decode the current format. Raises binascii.Error or ValueError."""
    escaped = b64decode_lenient(token).decode("ascii")
    return percent_unescape(escaped)


def _decode_raw_bytes(token: str) -> str:
    return b64decode_lenient(token).decode("utf-8")


# Attempted in order; the first format that decodes wins
DECODERS = (
    (UrlEncoding.UNICODE_SAFE, decode_unicode_safe),
    (UrlEncoding.RAW_BYTES, _decode_raw_bytes),
)


def decode_url_tagged(token: str) -> Optional[DecodedUrl]:
    """
    Decode a token, trying the current format before the legacy one.

    Does not log failures; callers decide how loudly to report them.

    Args:
        token: Token produced by encode_url() or by the legacy encoder

    Returns:
        DecodedUrl with the winning format, or None if no format decodes
    """
    if not isinstance(token, str) or not token.strip():
        return None

    for encoding, decoder in DECODERS:
        try:
            url = decoder(token)
        except (binascii.Error, ValueError) as e:
            _log_debug(f"URL token is not {encoding.value}: {e}")
            continue
        return DecodedUrl(url=url, encoding=encoding)

    return None


def decode_url(token: str) -> str:
    """
    Decode a token back to its URL. Never raises.

    Args:
        token: Token produced by encode_url()

    Returns:
        The URL, or "" if the token is malformed (logged)
    """
    if token == "":
        return ""

    decoded = decode_url_tagged(token)
    if decoded is None:
        _log_error("Failed to decode URL token")
        return ""
    return decoded.url
