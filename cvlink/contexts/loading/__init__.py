"""
Loading Context

Responsibilities:
- Selects the transport mode a link uses for its document and tech registry
- Drives decoding, fetching and validation through the other contexts
- Falls back to bundled defaults on any failure, reporting why
- Resolves tech colors through custom, default and neutral layers

Owns: Mode precedence, fallback policy, registry caches, page view lifecycle
Never: Defines token formats or document structure rules
"""

from cvlink.contexts.loading.defaults import NEUTRAL_COLOR, default_document
from cvlink.contexts.loading.document_loader import DocumentLoader, load_document, select_mode
from cvlink.contexts.loading.page_view import PageView
from cvlink.contexts.loading.query import (
    CONFIG_DATA_PARAM,
    CONFIG_PARAM,
    TECH_DATA_PARAM,
    TECH_REGISTRY_PARAM,
    parse_query,
)
from cvlink.contexts.loading.results import (
    FailureKind,
    LoadFailure,
    LoadMode,
    LoadOutcome,
    LoadResult,
)
from cvlink.contexts.loading.tech_registry import DefaultTechRegistry, TechRegistryCache

__all__ = [
    # Orchestration
    "DocumentLoader",
    "load_document",
    "select_mode",
    "PageView",
    # Tech registry
    "DefaultTechRegistry",
    "TechRegistryCache",
    "NEUTRAL_COLOR",
    # Results
    "LoadResult",
    "LoadFailure",
    "LoadMode",
    "LoadOutcome",
    "FailureKind",
    # Query parameters
    "parse_query",
    "CONFIG_PARAM",
    "CONFIG_DATA_PARAM",
    "TECH_REGISTRY_PARAM",
    "TECH_DATA_PARAM",
    "default_document",
]
