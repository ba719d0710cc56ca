"""Unit tests for compressed inline payload tokens."""

import base64
import gzip
import re
import secrets

import pytest

from cvlink.contexts.transport.compression import (
    CHUNK_SIZE,
    compress_and_encode,
    decode_and_decompress,
    estimate_encoded_length,
    exceeds_link_warning,
)
from cvlink.contexts.transport.inline_payload import (
    PayloadEncoding,
    decode_inline_payload,
    parse_payload_json,
)
from cvlink.contexts.transport.url_codec import encode_url
from cvlink.exceptions import CompressionError, DecodeFailure, DecompressionError, ParseFailure

URL_SAFE_TOKEN = re.compile(r"^[A-Za-z0-9_-]*$")


@pytest.mark.unit
@pytest.mark.parametrize(
    "payload",
    [
        "",
        '{"personal":{"name":"A"}}',
        "日本語 ✓ émoji 🎉",
        "+/=&?#% reserved",
    ],
)
def test_round_trip(payload):
    """decode_and_decompress reverses compress_and_encode."""
    token = compress_and_encode(payload)

    assert URL_SAFE_TOKEN.match(token)
    assert decode_and_decompress(token) == payload


@pytest.mark.unit
def test_large_payload_spans_several_chunks():
    """Incompressible payloads larger than one chunk survive the round trip."""
    payload = secrets.token_hex(3 * CHUNK_SIZE)
    assert decode_and_decompress(compress_and_encode(payload)) == payload


@pytest.mark.unit
def test_encoding_is_deterministic():
    assert compress_and_encode('{"a": 1}') == compress_and_encode('{"a": 1}')


@pytest.mark.unit
def test_accepts_browser_gzip_header():
    """Tokens produced with a non-zero gzip mtime still decode."""
    compressed = gzip.compress("héllo".encode("utf-8"), mtime=1700000000)
    token = base64.urlsafe_b64encode(compressed).decode("ascii").rstrip("=")

    assert decode_and_decompress(token) == "héllo"


@pytest.mark.unit
def test_compress_rejects_non_string():
    with pytest.raises(CompressionError):
        compress_and_encode({"not": "a string"})


@pytest.mark.unit
@pytest.mark.parametrize("token", ["", "!!!", "aGVsbG8"])
def test_decompress_rejects_malformed_tokens(token):
    """Empty, non-base64 and non-gzip tokens all raise DecompressionError."""
    with pytest.raises(DecompressionError):
        decode_and_decompress(token)


@pytest.mark.unit
def test_decompress_rejects_truncated_token():
    token = compress_and_encode('{"personal": {"name": "A", "title": {"en": "B"}}}')

    with pytest.raises(DecompressionError):
        decode_and_decompress(token[: len(token) // 2])


@pytest.mark.unit
def test_estimate_grows_with_payload_size():
    """High-entropy payloads of increasing size give strictly increasing estimates."""
    estimates = [
        estimate_encoded_length(40, secrets.token_hex(size), "{}")
        for size in (100, 1000, 5000, 20000)
    ]
    assert estimates == sorted(set(estimates))


@pytest.mark.unit
def test_estimate_covers_actual_link():
    config_token = compress_and_encode('{"a": 1}')
    tech_token = compress_and_encode("{}")
    actual = len(f"https://x.io/view?configData={config_token}&techData={tech_token}")

    assert estimate_encoded_length(len("https://x.io/view"), '{"a": 1}', "{}") >= actual


@pytest.mark.unit
def test_warning_threshold():
    assert exceeds_link_warning(6001)
    assert not exceeds_link_warning(6000)
    assert exceeds_link_warning(11, threshold=10)


class TestInlinePayload:
    """Inline payload decoding with legacy fallback."""

    @pytest.mark.unit
    def test_compressed_payload(self):
        decoded = decode_inline_payload(compress_and_encode('{"a": 1}'))

        assert decoded.text == '{"a": 1}'
        assert decoded.encoding is PayloadEncoding.COMPRESSED
        assert not decoded.is_legacy

    @pytest.mark.unit
    def test_legacy_plain_payload(self):
        """Uncompressed Unicode-safe base64 payloads from older links still decode."""
        decoded = decode_inline_payload(encode_url('{"name": "Zoë"}'))

        assert decoded.text == '{"name": "Zoë"}'
        assert decoded.encoding is PayloadEncoding.LEGACY_PLAIN
        assert decoded.is_legacy

    @pytest.mark.unit
    def test_undecodable_payload(self):
        with pytest.raises(DecodeFailure) as exc_info:
            decode_inline_payload("!!!", source="inlineData")

        assert exc_info.value.source == "inlineData"
        assert exc_info.value.stage == "decode"

    @pytest.mark.unit
    def test_parse_invalid_json(self):
        with pytest.raises(ParseFailure) as exc_info:
            parse_payload_json("{not json", source="inlineData")

        assert exc_info.value.stage == "parse"
