"""
Transport Context

Responsibilities:
- Obfuscates external URLs into opaque tokens and back
- Compresses inline payloads into URL-safe tokens and back
- Decodes legacy token formats still found in shared links
- Fetches remote JSON with typed failures

Owns: Token formats, URL size estimation, HTTP access
Never: Decides what a payload means or whether it is valid
"""

from cvlink.contexts.transport.compression import (
    compress_and_encode,
    decode_and_decompress,
    estimate_encoded_length,
    exceeds_link_warning,
)
from cvlink.contexts.transport.fetch import create_client, fetch_json
from cvlink.contexts.transport.inline_payload import (
    DecodedPayload,
    PayloadEncoding,
    decode_inline_payload,
    parse_payload_json,
)
from cvlink.contexts.transport.url_codec import (
    DecodedUrl,
    UrlEncoding,
    decode_url,
    decode_url_tagged,
    encode_url,
)

__all__ = [
    # URL obfuscation
    "encode_url",
    "decode_url",
    "decode_url_tagged",
    "DecodedUrl",
    "UrlEncoding",
    # Inline payloads
    "compress_and_encode",
    "decode_and_decompress",
    "decode_inline_payload",
    "parse_payload_json",
    "DecodedPayload",
    "PayloadEncoding",
    "estimate_encoded_length",
    "exceeds_link_warning",
    # Remote fetch
    "create_client",
    "fetch_json",
]
