"""
Structural validation of candidate documents.

Checks the minimal shape the transport contract requires and nothing more.
Returns a ResumeDocument or a StructuralError; bad link data is an expected
outcome here, so no exception is raised for it.

Checks run in order and stop at the first failure:
    1. candidate is an object
    2. personal is an object
    3. personal.name is a non-empty string
    4. personal.title is a non-empty localized string
    5. languages is an object
    6. languages.default is a non-empty string
    7. languages.available is a non-empty list
    8. labels is an object (not inspected further)
"""

from typing import Any, Callable, List, Optional, Tuple, Union

from cvlink.contexts.validation.document import ResumeDocument, Source, StructuralError

ValidationOutcome = Union[ResumeDocument, StructuralError]

_MISSING = object()


def _is_object(value: Any) -> bool:
    return isinstance(value, dict)


def _is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def _is_non_empty_object(value: Any) -> bool:
    return isinstance(value, dict) and len(value) > 0


def _is_non_empty_list(value: Any) -> bool:
    return isinstance(value, list) and len(value) > 0


def _is_empty(value: Any) -> bool:
    return isinstance(value, (str, list, dict)) and len(value) == 0


# (dotted path, predicate, expected description)
REQUIRED_FIELDS: List[Tuple[str, Callable[[Any], bool], str]] = [
    ("personal", _is_object, "an object"),
    ("personal.name", _is_non_empty_string, "a non-empty string"),
    ("personal.title", _is_non_empty_object, "a non-empty localized string"),
    ("languages", _is_object, "an object"),
    ("languages.default", _is_non_empty_string, "a non-empty string"),
    ("languages.available", _is_non_empty_list, "a non-empty list"),
    ("labels", _is_object, "an object"),
]


def _lookup(candidate: dict, path: str) -> Any:
    """Resolve a dotted path; parents are guaranteed objects by earlier checks."""
    value: Any = candidate
    for key in path.split("."):
        if key not in value:
            return _MISSING
        value = value[key]
    return value


def _describe(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "list"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def check_structure(candidate: Any) -> Optional[Tuple[str, str]]:
    """
    Find the first structural problem in a candidate.

    Returns:
        (field, message) for the first failing check, or None if the shape is valid
    """
    if not _is_object(candidate):
        return "", f"Invalid config structure: expected an object, got {_describe(candidate)}"

    for path, predicate, expected in REQUIRED_FIELDS:
        value = _lookup(candidate, path)

        if value is _MISSING or value is None:
            return path, f"Invalid config structure: missing required field '{path}'"

        if predicate(value):
            continue

        if _is_empty(value):
            return path, f"Invalid config structure: required field '{path}' is empty"

        return path, (
            f"Invalid config structure: '{path}' must be {expected}, got {_describe(value)}"
        )

    return None


def validate_document(candidate: Any, source: Source = Source.UNKNOWN) -> ValidationOutcome:
    """
    Validate a parsed candidate document.

    Args:
        candidate: Parsed JSON value of unknown shape
        source: Transport path the candidate came from, attached to any error

    Returns:
        ResumeDocument if the required shape is present, else StructuralError

    Examples:
        >>> outcome = validate_document({"personal": {}}, Source.INLINE_DATA)
        >>> outcome.field
        'personal.name'
    """
    problem = check_structure(candidate)
    if problem is not None:
        field, message = problem
        return StructuralError(message=message, source=Source(source), field=field or None)

    try:
        return ResumeDocument(candidate, source=Source(source))
    except RecursionError:
        return StructuralError(
            message="Invalid config structure: nesting too deep", source=Source(source)
        )


def is_valid(outcome: ValidationOutcome) -> bool:
    """Whether validate_document() produced a document."""
    return isinstance(outcome, ResumeDocument)
