"""Custom exceptions for the configuration transport pipeline."""

from typing import Optional


class TransportError(Exception):
    """
    Base class for failures while moving a payload through a link.

    Loaders catch this family at their boundary and fall back to the bundled
    defaults. Anything outside it is a programmer error and propagates.

    Attributes:
        message: Error description
        stage: Pipeline stage that failed (e.g., "decode", "fetch", "parse")
        source: Provenance tag of the transport path, if known
    """

    kind = "TransportError"

    def __init__(self, message: str, stage: Optional[str] = None, source: Optional[str] = None):
        self.message = message
        self.stage = stage
        self.source = source
        super().__init__(message)


class DecodeFailure(TransportError):
    """Raised when a transport token cannot be decoded."""

    kind = "DecodeFailure"

    def __init__(self, message: str, stage: str = "decode", source: Optional[str] = None):
        super().__init__(message, stage=stage, source=source)


class DecompressionError(DecodeFailure):
    """Raised when a compressed token is malformed, truncated or not valid UTF-8."""


class CompressionError(TransportError):
    """Raised when a payload cannot be compressed (e.g., not a string)."""

    kind = "CompressionError"

    def __init__(self, message: str, stage: str = "compress", source: Optional[str] = None):
        super().__init__(message, stage=stage, source=source)


class FetchFailure(TransportError):
    """
    Raised when a remote resource cannot be fetched.

    Attributes:
        url: URL that was requested
        status_code: HTTP status, or None for network errors
    """

    kind = "FetchFailure"

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        source: Optional[str] = None,
    ):
        self.url = url
        self.status_code = status_code
        super().__init__(message, stage="fetch", source=source)


class ParseFailure(TransportError):
    """Raised when a decoded or fetched payload is not valid JSON."""

    kind = "ParseFailure"

    def __init__(self, message: str, source: Optional[str] = None):
        super().__init__(message, stage="parse", source=source)


class MissingConfigurationError(RuntimeError):
    """
    Raised when required environment configuration is missing.

    Distinct from transport failures: this is a deployment error, never the
    result of bad link data, so loaders do not swallow it.
    """


class InvalidLinkInputError(ValueError):
    """Raised by the authoring tool when a link cannot be built from the given input."""
