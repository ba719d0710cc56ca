"""
Resume Document Structure

Typed wrapper around a validated resume configuration. Only the fields the
transport contract requires get accessors; everything else (skills, experiences,
education, theme, ...) is carried through untouched for the view layer.

A ResumeDocument is only ever constructed by validate_document() or from the
bundled default, so holding one means the required shape is present.
"""

import copy
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

LocalizedString = Dict[str, str]


class Source(str, Enum):
    """Provenance of a candidate: which transport path produced it."""

    INLINE_DATA = "inlineData"
    REMOTE_URL = "remoteUrl"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class StructuralError:
    """
    Candidate was valid JSON but had the wrong shape.

    Attributes:
        message: Human-readable description naming the field
        source: Transport path the candidate came from
        field: Dotted path of the first offending field (e.g., "languages.available")
    """

    message: str
    source: Source = Source.UNKNOWN
    field: Optional[str] = None

    def __str__(self) -> str:
        return f"[{self.source.value}] {self.message}"


class ResumeDocument:
    """
    Validated resume configuration.

    Attributes:
        source: Transport path the document arrived through (UNKNOWN for bundled data)
    """

    def __init__(self, data: Mapping[str, Any], source: Source = Source.UNKNOWN):
        self._data = copy.deepcopy(dict(data))
        self.source = source

    def __repr__(self) -> str:
        return f"ResumeDocument(name={self.name!r}, source={self.source.value!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResumeDocument):
            return NotImplemented
        return self._data == other._data

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def __getitem__(self, key: str) -> Any:
        """Deep copy of a top-level section, so callers cannot mutate the document."""
        return copy.deepcopy(self._data[key])

    def get(self, key: str, default: Any = None) -> Any:
        if key not in self._data:
            return default
        return self[key]

    @property
    def name(self) -> str:
        return self._data["personal"]["name"]

    @property
    def title(self) -> LocalizedString:
        return dict(self._data["personal"]["title"])

    @property
    def default_language(self) -> str:
        return self._data["languages"]["default"]

    @property
    def available_languages(self) -> List[str]:
        return list(self._data["languages"]["available"])

    @property
    def labels(self) -> Dict[str, Any]:
        return copy.deepcopy(self._data["labels"])

    def to_dict(self) -> Dict[str, Any]:
        """Independent copy of the full configuration."""
        return copy.deepcopy(self._data)
