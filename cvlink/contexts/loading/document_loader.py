"""
Document Loading

Selects a transport mode from the query, drives decode/fetch/validate, and
returns either the document the link carries or the bundled default.

Mode precedence:
    configData (inline) > config (remote URL) > default

All-or-nothing: any failure at any stage discards the candidate, logs one error
tagged with the transport path, and returns the bundled default. The tech
registry is always loaded first so colors resolve against a settled cache.
"""

import time
from typing import Any, Tuple

import httpx

from cvlink.contexts.loading.defaults import default_document
from cvlink.contexts.loading.logger import (
    _log_debug,
    _log_info,
    log_legacy_format,
    log_load_failure,
    log_load_result,
)
from cvlink.contexts.loading.query import CONFIG_DATA_PARAM, CONFIG_PARAM, QueryInput, parse_query
from cvlink.contexts.loading.results import (
    LoadFailure,
    LoadMode,
    LoadOutcome,
    LoadResult,
    TokenEncoding,
)
from cvlink.contexts.loading.tech_registry import TechRegistryCache
from cvlink.contexts.transport.fetch import fetch_json
from cvlink.contexts.transport.inline_payload import decode_inline_payload, parse_payload_json
from cvlink.contexts.transport.url_codec import decode_url_tagged
from cvlink.contexts.validation.document import ResumeDocument, Source, StructuralError
from cvlink.contexts.validation.validator import validate_document
from cvlink.exceptions import DecodeFailure, TransportError


def select_mode(params: dict) -> LoadMode:
    """Pick the document transport mode from parsed query parameters."""
    if params.get(CONFIG_DATA_PARAM):
        return LoadMode.INLINE_DATA
    if params.get(CONFIG_PARAM):
        return LoadMode.REMOTE_URL
    return LoadMode.DEFAULT


class DocumentLoader:
    """
    Loads the resume document a link describes.

    Holds no per-load state, so calling load() again with the same query yields
    the same document. The only shared state is the tech registry cache, which
    each load() overwrites.

    Attributes:
        tech_registry: Cache loaded before every document load
        client: Shared HTTP client (a short-lived one is used per fetch when None)
    """

    def __init__(
        self,
        tech_registry: TechRegistryCache = None,
        default: ResumeDocument = None,
        client: httpx.AsyncClient = None,
    ):
        self.tech_registry = tech_registry if tech_registry is not None else TechRegistryCache.create()
        self._default = default
        self.client = client

    @property
    def default(self) -> ResumeDocument:
        """Bundled default document (loaded lazily on first use)."""
        if self._default is None:
            self._default = default_document()
        return self._default

    async def load(self, query: QueryInput) -> LoadResult:
        """
        Load the document for a page view.

        Args:
            query: Query string, page URL or parsed parameters

        Returns:
            LoadResult carrying the document, selected mode and outcome
        """
        start = time.perf_counter()
        params = parse_query(query)

        await self.tech_registry.load(params, client=self.client)

        mode = select_mode(params)
        _log_debug(f"Document transport mode: {mode.value}")

        if mode is LoadMode.DEFAULT:
            result = LoadResult(self.default, mode, LoadOutcome.DEFAULT_ABSENT)
            log_load_result("document", result)
            return result

        source = mode.source
        try:
            if mode is LoadMode.INLINE_DATA:
                candidate, encoding = self._decode_inline(params[CONFIG_DATA_PARAM])
            else:
                candidate, encoding = await self._fetch_remote(params[CONFIG_PARAM])
        except TransportError as e:
            return self._fall_back(mode, LoadFailure.from_error(e, source))

        outcome = validate_document(candidate, source)
        if isinstance(outcome, StructuralError):
            return self._fall_back(mode, LoadFailure.from_structural(outcome))

        result = LoadResult(outcome, mode, LoadOutcome.LOADED, encoding=encoding)
        log_load_result("document", result)
        _log_debug(f"Document load took {time.perf_counter() - start:.2f}s")
        return result

    def _fall_back(self, mode: LoadMode, failure: LoadFailure) -> LoadResult:
        log_load_failure("document", failure)
        result = LoadResult(self.default, mode, LoadOutcome.DEFAULT_FAILED, failure=failure)
        log_load_result("document", result)
        return result

    def _decode_inline(self, token: str) -> Tuple[Any, TokenEncoding]:
        source = Source.INLINE_DATA.value
        payload = decode_inline_payload(token, source=source)
        if payload.is_legacy:
            log_legacy_format("document", source, payload.encoding.value)
        return parse_payload_json(payload.text, source=source), payload.encoding

    async def _fetch_remote(self, token: str) -> Tuple[Any, TokenEncoding]:
        source = Source.REMOTE_URL.value
        decoded = decode_url_tagged(token)
        if decoded is None or not decoded.url:
            raise DecodeFailure("Failed to decode config URL", source=source)
        if decoded.is_legacy:
            log_legacy_format("document", source, decoded.encoding.value)

        _log_info(f"Fetching document from {decoded.url}")
        candidate = await fetch_json(decoded.url, client=self.client, source=source)
        return candidate, decoded.encoding


async def load_document(query: QueryInput, client: httpx.AsyncClient = None) -> ResumeDocument:
    """
    Load the document for a query with a fresh registry cache.

    Convenience wrapper for callers that only need the document.
    """
    loader = DocumentLoader(client=client)
    result = await loader.load(query)
    return result.document
