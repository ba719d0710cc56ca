"""
Inline payload decoding with legacy fallback.

configData and techData carry a compressed token (current format). Links made
before compression was introduced carry the payload as plain Unicode-safe base64,
the same format the URL codec uses. Decoding tries the compressed format first
and only then the legacy one, and reports which one succeeded.
"""

import binascii
import json
from dataclasses import dataclass
from enum import Enum
from typing import Any

from cvlink.contexts.transport.compression import decode_and_decompress
from cvlink.contexts.transport.logger import _log_debug
from cvlink.contexts.transport.url_codec import decode_unicode_safe
from cvlink.exceptions import DecodeFailure, DecompressionError, ParseFailure


class PayloadEncoding(str, Enum):
    """Inline payload formats, in the order they are attempted."""

    COMPRESSED = "compressed"
    LEGACY_PLAIN = "legacy-plain"


@dataclass(frozen=True)
class DecodedPayload:
    """Decoded inline payload and the format that produced it."""

    text: str
    encoding: PayloadEncoding

    @property
    def is_legacy(self) -> bool:
        return self.encoding is not PayloadEncoding.COMPRESSED


def decode_inline_payload(token: str, source: str = None) -> DecodedPayload:
    """
    Decode an inline payload token.

    Args:
        token: Value of configData or techData
        source: Provenance tag attached to the failure, if any

    Returns:
        DecodedPayload with text and winning format

    Raises:
        DecodeFailure: If neither format decodes the token
    """
    try:
        return DecodedPayload(decode_and_decompress(token), PayloadEncoding.COMPRESSED)
    except DecompressionError as e:
        compressed_error = e.message
        _log_debug(f"Inline payload is not {PayloadEncoding.COMPRESSED.value}: {compressed_error}")

    try:
        text = decode_unicode_safe(token)
    except (binascii.Error, ValueError) as e:
        raise DecodeFailure(
            f"Payload is neither compressed ({compressed_error}) nor legacy plain ({e})",
            source=source,
        ) from e

    return DecodedPayload(text, PayloadEncoding.LEGACY_PLAIN)


def parse_payload_json(text: str, source: str = None) -> Any:
    """
    Parse decoded payload text as JSON.

    Raises:
        ParseFailure: If the text is not valid JSON
    """
    try:
        return json.loads(text)
    except ValueError as e:
        raise ParseFailure(f"Invalid JSON: {e}", source=source) from e
    except RecursionError as e:
        raise ParseFailure("Invalid JSON: nesting too deep", source=source) from e
