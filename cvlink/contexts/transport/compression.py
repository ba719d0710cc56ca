"""
Payload Compression Codec

Compresses a UTF-8 JSON payload into a URL-safe token for the configData and
techData query parameters, and back.

Pipeline:
    UTF-8 encode -> gzip -> base64 (chunked) -> "+" to "-", "/" to "_", drop "="

gzip framing (rather than a bare zlib stream) keeps tokens compatible with links
generated in the browser.
"""

import base64
import binascii
import gzip
import zlib

from cvlink.exceptions import CompressionError, DecompressionError
from cvlink.settings import SETTINGS

# Multiple of 3 so every chunk encodes without padding and chunks concatenate cleanly
CHUNK_SIZE = 3 * 2730

QUERY_OVERHEAD = SETTINGS["link"]["query_overhead"]
LINK_WARNING_THRESHOLD = SETTINGS["link"]["warning_threshold"]

_TO_URL_SAFE = str.maketrans({"+": "-", "/": "_"})
_FROM_URL_SAFE = str.maketrans({"-": "+", "_": "/"})


def _b64encode_chunked(data: bytes) -> str:
    """Base64-encode in fixed-size chunks so large payloads never build one giant call."""
    parts = []
    for start in range(0, len(data), CHUNK_SIZE):
        parts.append(base64.b64encode(data[start : start + CHUNK_SIZE]).decode("ascii"))
    return "".join(parts)


def compress_and_encode(payload: str) -> str:
    """
    Compress a payload and encode it as a URL-safe token.

    Args:
        payload: Any string, typically serialized JSON

    Returns:
        Token containing only [A-Za-z0-9_-]

    Raises:
        CompressionError: If payload is not a string
    """
    if not isinstance(payload, str):
        raise CompressionError(f"Failed to compress data: expected str, got {type(payload).__name__}")

    try:
        raw = payload.encode("utf-8")
    except UnicodeEncodeError as e:
        raise CompressionError(f"Failed to compress data: {e}") from e

    # mtime=0 keeps the token deterministic for identical payloads
    compressed = gzip.compress(raw, mtime=0)

    encoded = _b64encode_chunked(compressed)
    return encoded.translate(_TO_URL_SAFE).rstrip("=")


def decode_and_decompress(token: str) -> str:
    """
    Reverse compress_and_encode().

    Args:
        token: Token produced by compress_and_encode()

    Returns:
        The original payload

    Raises:
        DecompressionError: If the token is malformed, truncated or not UTF-8
    """
    if not isinstance(token, str):
        raise DecompressionError(f"Failed to decompress data: expected str, got {type(token).__name__}")

    standard = token.strip().translate(_FROM_URL_SAFE)
    if not standard:
        raise DecompressionError("Failed to decompress data: empty token")
    standard += "=" * (-len(standard) % 4)

    try:
        compressed = base64.b64decode(standard, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecompressionError(f"Failed to decompress data: invalid base64 ({e})") from e

    try:
        raw = gzip.decompress(compressed)
    except (OSError, EOFError, zlib.error) as e:
        raise DecompressionError(f"Failed to decompress data: {e}") from e

    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecompressionError(f"Failed to decompress data: payload is not UTF-8 ({e})") from e


def estimate_encoded_length(base_url_length: int, payload_a: str, payload_b: str) -> int:
    """
    Estimate the length of a link carrying two compressed payloads.

    Compresses both payloads for real instead of guessing a ratio, then adds the
    base URL and the query separators. Advisory only: used to warn, never to reject.

    Args:
        base_url_length: Length of the link up to (not including) the query string
        payload_a: First payload (the document JSON)
        payload_b: Second payload (the tech registry JSON)

    Returns:
        Upper-bound estimate of the final link length
    """
    token_a = compress_and_encode(payload_a)
    token_b = compress_and_encode(payload_b)
    return base_url_length + len(token_a) + len(token_b) + QUERY_OVERHEAD


def exceeds_link_warning(length: int, threshold: int = None) -> bool:
    """Whether a link of this length deserves a size warning."""
    if threshold is None:
        threshold = LINK_WARNING_THRESHOLD
    return length > threshold
