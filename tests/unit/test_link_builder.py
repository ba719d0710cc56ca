"""Unit tests for shareable link generation."""

import json

import pytest

from cvlink.contexts.authoring import (
    build_inline_link,
    build_url_mode_link,
    example_document,
    example_tech_registry,
    fetch_document_template,
    parse_document_json,
    view_base_url,
)
from cvlink.contexts.loading import parse_query
from cvlink.contexts.transport.compression import decode_and_decompress
from cvlink.contexts.transport.url_codec import decode_url
from cvlink.contexts.validation import is_valid, validate_document
from cvlink.exceptions import FetchFailure, InvalidLinkInputError

BASE_URL = "https://example.com/cv"


@pytest.mark.unit
@pytest.mark.parametrize(
    "page_url, expected",
    [
        ("https://example.com/cv/generate", "https://example.com/cv"),
        ("https://example.com/cv/generate/?draft=1", "https://example.com/cv"),
        ("https://example.com/generate#form", "https://example.com"),
        ("https://example.com/cv/", "https://example.com/cv"),
    ],
)
def test_view_base_url(page_url, expected):
    assert view_base_url(page_url) == expected


class TestUrlModeLink:
    """Links pointing at hosted JSON files."""

    @pytest.mark.unit
    def test_config_only(self):
        link = build_url_mode_link(BASE_URL, "https://cdn.example.com/cv.json")
        params = parse_query(link)

        assert link.startswith("https://example.com/cv/view?config=")
        assert set(params) == {"config"}
        assert decode_url(params["config"]) == "https://cdn.example.com/cv.json"

    @pytest.mark.unit
    def test_with_tech_registry(self):
        link = build_url_mode_link(
            BASE_URL, "https://cdn.example.com/cv.json", "https://cdn.example.com/tech+colors.json"
        )
        params = parse_query(link)

        assert decode_url(params["tech-registry"]) == "https://cdn.example.com/tech+colors.json"

    @pytest.mark.unit
    @pytest.mark.parametrize("config_url", ["", "   ", None])
    def test_missing_config_url(self, config_url):
        with pytest.raises(InvalidLinkInputError, match="configuration URL"):
            build_url_mode_link(BASE_URL, config_url)

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "config_url, tech_url",
        [("cv.json", None), ("https://cdn.example.com/cv.json", "/tech.json")],
    )
    def test_relative_urls_rejected(self, config_url, tech_url):
        with pytest.raises(InvalidLinkInputError, match="valid URL"):
            build_url_mode_link(BASE_URL, config_url, tech_url)


class TestInlineLink:
    """Links carrying the compressed configuration."""

    @pytest.mark.unit
    def test_payloads_survive(self):
        document = example_document()
        registry = example_tech_registry()

        inline = build_inline_link(BASE_URL, document, registry)
        params = parse_query(inline.url)

        assert inline.url.startswith("https://example.com/cv/view?configData=")
        assert json.loads(decode_and_decompress(params["configData"])) == document
        assert json.loads(decode_and_decompress(params["techData"])) == registry

    @pytest.mark.unit
    def test_estimate_is_an_upper_bound(self):
        inline = build_inline_link(BASE_URL, example_document(), example_tech_registry())

        assert inline.estimated_length >= inline.length
        assert not inline.exceeds_warning

    @pytest.mark.unit
    def test_oversized_link_warns_but_is_built(self, log_records):
        inline = build_inline_link(BASE_URL, example_document(), {}, warning_threshold=10)

        assert inline.exceeds_warning
        assert inline.url
        assert len(log_records.at("WARNING")) == 1

    @pytest.mark.unit
    def test_unserializable_document(self):
        with pytest.raises(InvalidLinkInputError):
            build_inline_link(BASE_URL, {"when": object()}, {})


@pytest.mark.unit
def test_example_document_is_valid():
    """The example seeds the generator, so it must load in the viewer."""
    assert is_valid(validate_document(example_document()))


@pytest.mark.unit
def test_example_accessors_return_copies():
    example_document()["personal"]["name"] = "Changed"
    example_tech_registry()["React"]["color"] = "#000000"

    assert example_document()["personal"]["name"] == "Jane Doe"
    assert example_tech_registry()["React"]["color"] == "#61DAFB"


@pytest.mark.unit
def test_parse_document_json():
    assert parse_document_json('{"a": 1}') == ({"a": 1}, "")

    data, error = parse_document_json("{oops")
    assert data is None
    assert error


class TestFetchDocumentTemplate:
    """Pre-filling the generator from a hosted configuration."""

    @pytest.mark.unit
    def test_fetch(self, server):
        server.serve("https://cdn.example.com/cv.json", {"personal": {"name": "A"}})

        data = server.run(lambda client: fetch_document_template("https://cdn.example.com/cv.json", client))

        assert data == {"personal": {"name": "A"}}

    @pytest.mark.unit
    def test_not_found(self, server):
        with pytest.raises(FetchFailure) as exc_info:
            server.run(lambda client: fetch_document_template("https://cdn.example.com/missing.json", client))

        assert exc_info.value.status_code == 404

    @pytest.mark.unit
    def test_relative_url(self, server):
        with pytest.raises(InvalidLinkInputError):
            server.run(lambda client: fetch_document_template("cv.json", client))
