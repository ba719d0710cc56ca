"""Unit tests for URL obfuscation tokens."""

import base64

import pytest

from cvlink.contexts.transport.url_codec import (
    UrlEncoding,
    b64decode_lenient,
    decode_url,
    decode_url_tagged,
    encode_url,
    percent_escape,
    percent_unescape,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    "url",
    [
        "https://example.com/cv-config.json",
        "https://example.com/çv/日本語.json?lang=fr",
        "https://example.com/a+b/c=d?x=1&y=2 3#frag",
    ],
)
def test_round_trip(url):
    """Decoding an encoded URL yields the original."""
    assert decode_url(encode_url(url)) == url


@pytest.mark.unit
def test_empty_url():
    """Empty input encodes to an empty token, which decodes to nothing."""
    assert encode_url("") == ""
    assert decode_url_tagged("") is None


@pytest.mark.unit
def test_empty_token_decodes_silently(log_records):
    assert decode_url(encode_url("")) == ""
    assert log_records.at("ERROR") == []


@pytest.mark.unit
def test_token_is_base64_of_escaped_url():
    """Tokens interoperate with encodeURIComponent-based encoders."""
    token = encode_url("https://example.com/x.json")
    assert base64.b64decode(token).decode("ascii") == "https%3A%2F%2Fexample.com%2Fx.json"


@pytest.mark.unit
def test_percent_escape_matches_uri_component():
    assert percent_escape("a b&c/é!'()*~") == "a%20b%26c%2F%C3%A9!'()*~"


@pytest.mark.unit
def test_percent_unescape_rejects_malformed():
    with pytest.raises(ValueError):
        percent_unescape("100%zz")


@pytest.mark.unit
def test_current_format_is_tagged_unicode_safe():
    decoded = decode_url_tagged(encode_url("https://example.com/é.json"))

    assert decoded.url == "https://example.com/é.json"
    assert decoded.encoding is UrlEncoding.UNICODE_SAFE
    assert not decoded.is_legacy


@pytest.mark.unit
def test_legacy_raw_bytes_token():
    """Tokens made from raw UTF-8 bytes still decode, tagged as legacy."""
    url = "https://example.com/çv.json"
    token = base64.b64encode(url.encode("utf-8")).decode("ascii")

    decoded = decode_url_tagged(token)

    assert decoded.url == url
    assert decoded.encoding is UrlEncoding.RAW_BYTES
    assert decoded.is_legacy


@pytest.mark.unit
def test_space_damaged_token_is_repaired():
    """Form decoding turns "+" into " "; the decoder undoes it."""
    assert b64decode_lenient(" /8") == b"\xfb\xff"


@pytest.mark.unit
def test_missing_padding_is_tolerated():
    token = encode_url("https://example.com/a")
    assert decode_url(token.rstrip("=")) == "https://example.com/a"


@pytest.mark.unit
def test_malformed_token_returns_empty_and_logs(log_records):
    """decode_url never raises; it logs one error instead."""
    assert decode_url("not base64!!") == ""
    assert len(log_records.at("ERROR")) == 1


@pytest.mark.unit
def test_tagged_decode_does_not_log_errors(log_records):
    assert decode_url_tagged("not base64!!") is None
    assert log_records.at("ERROR") == []


@pytest.mark.unit
def test_encode_non_string_returns_empty(log_records):
    assert encode_url(None) == ""
    assert len(log_records.at("ERROR")) == 1
