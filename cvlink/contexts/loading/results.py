"""
Load results and failure records.

Loaders never raise for bad link data. They return (or store) a record saying
what was attempted, how it ended and, on failure, which stage broke, so the view
layer can tell "nothing to load" apart from "could not load".
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from cvlink.contexts.transport.inline_payload import PayloadEncoding
from cvlink.contexts.transport.url_codec import UrlEncoding
from cvlink.contexts.validation.document import ResumeDocument, Source, StructuralError
from cvlink.exceptions import FetchFailure, ParseFailure, TransportError

TokenEncoding = Union[PayloadEncoding, UrlEncoding]


class LoadMode(str, Enum):
    """Transport mode selected from the query parameters."""

    INLINE_DATA = "inlineData"
    REMOTE_URL = "remoteUrl"
    DEFAULT = "default"

    @property
    def source(self) -> Source:
        return Source(self.value) if self is not LoadMode.DEFAULT else Source.UNKNOWN


class LoadOutcome(str, Enum):
    """How a load ended."""

    LOADED = "loaded"
    DEFAULT_ABSENT = "default-absent"
    DEFAULT_FAILED = "default-failed"


class FailureKind(str, Enum):
    """Failure taxonomy of the transport pipeline."""

    DECODE = "DecodeFailure"
    FETCH = "FetchFailure"
    PARSE = "ParseFailure"
    STRUCTURE = "StructuralError"


@dataclass(frozen=True)
class LoadFailure:
    """
    Why a load fell back to the bundled default.

    Attributes:
        kind: Failure category
        source: Transport path that produced the bad data
        stage: Pipeline stage that failed ("decode", "fetch", "parse", "validate")
        message: Underlying error message
    """

    kind: FailureKind
    source: Source
    stage: str
    message: str

    @classmethod
    def from_error(cls, error: TransportError, source: Source) -> "LoadFailure":
        if isinstance(error, FetchFailure):
            kind = FailureKind.FETCH
        elif isinstance(error, ParseFailure):
            kind = FailureKind.PARSE
        else:
            kind = FailureKind.DECODE
        return cls(kind=kind, source=source, stage=error.stage or kind.value, message=error.message)

    @classmethod
    def from_structural(cls, error: StructuralError) -> "LoadFailure":
        return cls(
            kind=FailureKind.STRUCTURE, source=error.source, stage="validate", message=error.message
        )

    def __str__(self) -> str:
        return f"{self.source.value}: {self.kind.value} at {self.stage}: {self.message}"


@dataclass
class LoadResult:
    """
    Result from DocumentLoader.load().

    Attributes:
        document: Loaded document, or the bundled default
        mode: Transport mode selected from the query
        outcome: LOADED, DEFAULT_ABSENT (nothing to load) or DEFAULT_FAILED
        failure: Failure details when outcome is DEFAULT_FAILED
        encoding: Token format that decoded successfully, if any
    """

    document: ResumeDocument
    mode: LoadMode
    outcome: LoadOutcome
    failure: Optional[LoadFailure] = None
    encoding: Optional[TokenEncoding] = None

    @property
    def used_default(self) -> bool:
        return self.outcome is not LoadOutcome.LOADED
