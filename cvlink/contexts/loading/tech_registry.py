"""
Tech Registry Loading and Color Resolution

Two registries feed tech badge colors:
- DefaultTechRegistry: the bundled registry hosted at RESOURCES_URL, fetched once
- TechRegistryCache: an optional custom registry carried by the link itself

Resolution order for a tech name:
    custom registry -> default registry -> NEUTRAL_COLOR

Usage:
    cache = TechRegistryCache.create(default_registry=DefaultTechRegistry())
    await cache.load("?techData=...")
    cache.resolve("React")  # "#61DAFB"

Each page view owns its own cache object, so independent views (and tests)
never share state.
"""

import copy
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

import httpx

from cvlink.contexts.loading.defaults import DEFAULT_REGISTRY_FILE_NAME, NEUTRAL_COLOR
from cvlink.contexts.loading.logger import (
    _log_debug,
    _log_info,
    _log_success,
    _log_warning,
    log_legacy_format,
    log_load_failure,
)
from cvlink.contexts.loading.query import (
    TECH_DATA_PARAM,
    TECH_REGISTRY_PARAM,
    QueryInput,
    parse_query,
)
from cvlink.contexts.loading.results import FailureKind, LoadFailure, TokenEncoding
from cvlink.contexts.transport.fetch import fetch_json
from cvlink.contexts.transport.inline_payload import decode_inline_payload, parse_payload_json
from cvlink.contexts.transport.url_codec import decode_url_tagged
from cvlink.contexts.validation.document import Source
from cvlink.exceptions import DecodeFailure, ParseFailure, TransportError
from cvlink.settings import get_resources_url

TechRegistry = Dict[str, Dict[str, Any]]


def entry_color(entry: Any) -> Optional[str]:
    """Color of a registry entry, or None if the entry has no usable color."""
    if isinstance(entry, dict):
        color = entry.get("color")
        if isinstance(color, str) and color:
            return color
    return None


class DefaultTechRegistry:
    """
    Bundled default registry, fetched from RESOURCES_URL once and kept for the process.

    Attributes:
        resources_url: Explicit base URL; RESOURCES_URL is used when None
    """

    def __init__(self, entries: Mapping[str, Any] = None, resources_url: str = None):
        """
        Initialize the default registry.

        Args:
            entries: Preloaded entries (skips the fetch entirely)
            resources_url: Base URL hosting tech-registry.json
        """
        self.resources_url = resources_url
        self._entries: Optional[TechRegistry] = dict(entries) if entries is not None else None

    @property
    def is_loaded(self) -> bool:
        return self._entries is not None

    def registry_url(self) -> str:
        """
        URL of the hosted default registry.

        Raises:
            MissingConfigurationError: If no base URL is configured
        """
        return f"{get_resources_url(self.resources_url)}{DEFAULT_REGISTRY_FILE_NAME}"

    async def fetch(self, client: httpx.AsyncClient = None) -> TechRegistry:
        """
        Fetch the default registry unless it is already loaded.

        Args:
            client: Shared HTTP client

        Returns:
            Copy of the registry entries

        Raises:
            MissingConfigurationError: If RESOURCES_URL is not defined
            FetchFailure: On network error or non-2xx status
            ParseFailure: If the body is not a JSON object
        """
        if self._entries is not None:
            return copy.deepcopy(self._entries)

        url = self.registry_url()
        data = await fetch_json(url, client=client)
        if not isinstance(data, dict):
            raise ParseFailure("Invalid tech-registry structure: must be an object")

        try:
            entries = copy.deepcopy(data)
        except RecursionError as e:
            raise ParseFailure("Invalid tech-registry structure: nesting too deep") from e

        self._entries = data
        _log_debug(f"Default tech registry loaded ({len(data)} entries)")
        return entries

    def get_color(self, name: str) -> str:
        """
        Color for a tech name from the default registry.

        Returns NEUTRAL_COLOR when the name is unknown or the registry is not loaded yet.
        """
        if self._entries is None:
            _log_warning("Tech registry not loaded yet. Call `await fetch()` first.")
            return NEUTRAL_COLOR
        return entry_color(self._entries.get(name)) or NEUTRAL_COLOR


class TechRegistryCache:
    """
    Custom tech registry carried by a link, with layered color resolution.

    The slot holds either a registry decoded from the current link or None
    (bundled default only). Every load() overwrites it.
    """

    def __init__(self, default_registry: DefaultTechRegistry = None):
        self.default_registry = default_registry if default_registry is not None else DefaultTechRegistry()
        self._entries: Optional[TechRegistry] = None
        self.source: Optional[Source] = None
        self.encoding: Optional[TokenEncoding] = None
        self.failure: Optional[LoadFailure] = None

    @classmethod
    def create(cls, default_registry: DefaultTechRegistry = None) -> "TechRegistryCache":
        """Create an empty cache for one page view."""
        return cls(default_registry=default_registry)

    @property
    def entries(self) -> Optional[Mapping[str, Any]]:
        """Read-only view of the custom registry, or None."""
        if self._entries is None:
            return None
        return MappingProxyType(self._entries)

    @property
    def has_custom_registry(self) -> bool:
        return self._entries is not None

    def clear(self) -> None:
        """Drop the custom registry."""
        self._store(None)

    def _store(
        self,
        entries: Optional[TechRegistry],
        source: Source = None,
        encoding: TokenEncoding = None,
        failure: LoadFailure = None,
    ) -> None:
        self._entries = entries
        self.source = source
        self.encoding = encoding
        self.failure = failure

    async def load(self, query: QueryInput, client: httpx.AsyncClient = None) -> None:
        """
        Load the custom registry named by the query, if any.

        techData (inline) wins over tech-registry (remote URL). With neither, the
        slot is cleared and only the bundled default applies. Failures are logged
        and clear the slot; nothing is raised for bad link data.

        Args:
            query: Query string, page URL or parsed parameters
            client: Shared HTTP client for remote mode
        """
        params = parse_query(query)
        inline_token = params.get(TECH_DATA_PARAM)
        remote_token = params.get(TECH_REGISTRY_PARAM)

        if inline_token:
            source = Source.INLINE_DATA
        elif remote_token:
            source = Source.REMOTE_URL
        else:
            _log_debug("No custom tech registry in link, using bundled default")
            self._store(None)
            return

        try:
            if source is Source.INLINE_DATA:
                registry, encoding = self._decode_inline(inline_token)
            else:
                registry, encoding = await self._fetch_remote(remote_token, client)
        except TransportError as e:
            failure = LoadFailure.from_error(e, source)
            log_load_failure("tech-registry", failure)
            self._store(None, source=source, failure=failure)
            return

        if not isinstance(registry, dict):
            failure = LoadFailure(
                kind=FailureKind.STRUCTURE,
                source=source,
                stage="validate",
                message="Invalid tech-registry structure: must be an object",
            )
            log_load_failure("tech-registry", failure)
            self._store(None, source=source, failure=failure)
            return

        # Lenient per entry: a bad entry falls through to the default at resolve time
        for key, value in registry.items():
            if entry_color(value) is None:
                _log_warning(f'Invalid tech-registry entry for "{key}": missing or invalid color')

        self._store(registry, source=source, encoding=encoding)
        _log_success(
            f"{source.value}: custom tech registry loaded ({len(registry)} entries, "
            f"format: {encoding.value})"
        )

    def _decode_inline(self, token: str) -> Tuple[Any, TokenEncoding]:
        payload = decode_inline_payload(token, source=Source.INLINE_DATA.value)
        if payload.is_legacy:
            log_legacy_format("tech-registry", Source.INLINE_DATA.value, payload.encoding.value)
        return parse_payload_json(payload.text, source=Source.INLINE_DATA.value), payload.encoding

    async def _fetch_remote(
        self, token: str, client: httpx.AsyncClient = None
    ) -> Tuple[Any, TokenEncoding]:
        decoded = decode_url_tagged(token)
        if decoded is None or not decoded.url:
            raise DecodeFailure(
                "Failed to decode tech-registry URL", source=Source.REMOTE_URL.value
            )
        if decoded.is_legacy:
            log_legacy_format("tech-registry", Source.REMOTE_URL.value, decoded.encoding.value)

        _log_info(f"Fetching custom tech registry from {decoded.url}")
        registry = await fetch_json(decoded.url, client=client, source=Source.REMOTE_URL.value)
        return registry, decoded.encoding

    def resolve(self, name: str) -> str:
        """
        Color for a tech name: custom registry, then default registry, then NEUTRAL_COLOR.

        Never raises and never returns None. Before load() has run this behaves as
        if no custom registry was given.
        """
        if self._entries is not None:
            color = entry_color(self._entries.get(name))
            if color is not None:
                return color

        return self.default_registry.get_color(name) or NEUTRAL_COLOR
