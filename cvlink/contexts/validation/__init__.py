"""
Validation Context

Responsibilities:
- Represents a validated resume document
- Checks the minimal structure a candidate needs to be rendered
- Tags structural errors with the transport path that produced the candidate

Owns: ResumeDocument, StructuralError, provenance tags
Never: Decodes tokens, fetches data or chooses fallbacks
"""

from cvlink.contexts.validation.document import ResumeDocument, Source, StructuralError
from cvlink.contexts.validation.validator import (
    ValidationOutcome,
    check_structure,
    is_valid,
    validate_document,
)

__all__ = [
    "ResumeDocument",
    "Source",
    "StructuralError",
    "ValidationOutcome",
    "check_structure",
    "is_valid",
    "validate_document",
]
