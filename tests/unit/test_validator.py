"""Unit tests for structural validation of candidate documents."""

import copy

import pytest

from cvlink.contexts.validation import (
    ResumeDocument,
    Source,
    StructuralError,
    check_structure,
    is_valid,
    validate_document,
)


def _without(document, path):
    """Copy of document with the dotted path removed."""
    result = copy.deepcopy(document)
    *parents, leaf = path.split(".")
    target = result
    for key in parents:
        target = target[key]
    del target[leaf]
    return result


@pytest.mark.unit
def test_minimal_document_is_valid(minimal_document):
    outcome = validate_document(minimal_document, Source.INLINE_DATA)

    assert is_valid(outcome)
    assert outcome.name == "A"
    assert outcome.title == {"en": "B"}
    assert outcome.default_language == "en"
    assert outcome.available_languages == ["en"]
    assert outcome.source is Source.INLINE_DATA


@pytest.mark.unit
def test_empty_labels_object_is_accepted(minimal_document):
    """labels is checked for presence only."""
    assert minimal_document["labels"] == {}
    assert is_valid(validate_document(minimal_document))


@pytest.mark.unit
@pytest.mark.parametrize("candidate", [None, [], "config", 42])
def test_non_object_candidate(candidate):
    outcome = validate_document(candidate, Source.REMOTE_URL)

    assert isinstance(outcome, StructuralError)
    assert outcome.field is None
    assert outcome.source is Source.REMOTE_URL
    assert "expected an object" in outcome.message


@pytest.mark.unit
@pytest.mark.parametrize(
    "path",
    [
        "personal",
        "personal.name",
        "personal.title",
        "languages",
        "languages.default",
        "languages.available",
        "labels",
    ],
)
def test_missing_required_field(minimal_document, path):
    outcome = validate_document(_without(minimal_document, path), Source.INLINE_DATA)

    assert isinstance(outcome, StructuralError)
    assert outcome.field == path
    assert outcome.message == f"Invalid config structure: missing required field '{path}'"
    assert outcome.source is Source.INLINE_DATA


@pytest.mark.unit
def test_null_counts_as_missing(minimal_document):
    minimal_document["labels"] = None
    assert check_structure(minimal_document) == (
        "labels",
        "Invalid config structure: missing required field 'labels'",
    )


@pytest.mark.unit
def test_available_languages_must_be_a_list(minimal_document):
    minimal_document["languages"]["available"] = "en"
    outcome = validate_document(minimal_document, Source.REMOTE_URL)

    assert outcome.field == "languages.available"
    assert "must be a non-empty list, got string" in outcome.message


@pytest.mark.unit
def test_empty_available_languages(minimal_document):
    minimal_document["languages"]["available"] = []
    outcome = validate_document(minimal_document)

    assert outcome.field == "languages.available"
    assert "is empty" in outcome.message


@pytest.mark.unit
def test_empty_name(minimal_document):
    minimal_document["personal"]["name"] = ""
    assert check_structure(minimal_document)[0] == "personal.name"


@pytest.mark.unit
def test_title_must_be_localized(minimal_document):
    """A bare string title is rejected rather than coerced."""
    minimal_document["personal"]["title"] = "Developer"
    outcome = validate_document(minimal_document)

    assert outcome.field == "personal.title"
    assert "localized string" in outcome.message


@pytest.mark.unit
def test_first_failure_wins(minimal_document):
    """Checks stop at the first failure in declaration order."""
    del minimal_document["personal"]["name"]
    del minimal_document["languages"]

    assert validate_document(minimal_document).field == "personal.name"


@pytest.mark.unit
def test_extra_fields_are_carried_through(minimal_document):
    minimal_document["theme"] = {"preset": "minimal"}
    document = validate_document(minimal_document)

    assert "theme" in document
    assert document["theme"] == {"preset": "minimal"}
    assert document.get("skills", []) == []


class TestResumeDocument:
    """ResumeDocument never exposes its internal state."""

    @pytest.mark.unit
    def test_candidate_mutation_does_not_leak(self, minimal_document):
        document = validate_document(minimal_document)
        minimal_document["personal"]["name"] = "Changed"

        assert document.name == "A"

    @pytest.mark.unit
    def test_section_access_returns_copies(self, minimal_document):
        document = ResumeDocument(minimal_document)
        document["personal"]["name"] = "Changed"
        document.to_dict()["languages"]["available"].append("fr")

        assert document.name == "A"
        assert document.available_languages == ["en"]

    @pytest.mark.unit
    def test_equality_compares_content(self, minimal_document):
        assert ResumeDocument(minimal_document, Source.INLINE_DATA) == ResumeDocument(
            minimal_document, Source.REMOTE_URL
        )


@pytest.mark.unit
def test_nesting_too_deep_to_copy(minimal_document):
    """A candidate that cannot be copied is reported, not raised."""
    nested = []
    for _ in range(2000):
        nested = [nested]
    minimal_document["skills"] = nested

    outcome = validate_document(minimal_document, Source.INLINE_DATA)

    assert isinstance(outcome, StructuralError)
    assert "nesting too deep" in outcome.message
    assert outcome.source is Source.INLINE_DATA
