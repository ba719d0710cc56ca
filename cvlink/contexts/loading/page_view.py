"""
Page View Controller

Owns everything one page view needs: the default registry, the custom registry
cache and the document loader. Views never share caches, so opening a second
link cannot leak the first link's registry.

Usage:
    view = await PageView.open("?configData=...&techData=...")
    view.document.name
    view.tech_color("React")
    view.result.outcome  # LOADED / DEFAULT_ABSENT / DEFAULT_FAILED
"""

from typing import Optional

import httpx

from cvlink.contexts.loading.document_loader import DocumentLoader
from cvlink.contexts.loading.logger import _log_warning
from cvlink.contexts.loading.query import QueryInput
from cvlink.contexts.loading.results import LoadResult
from cvlink.contexts.loading.tech_registry import DefaultTechRegistry, TechRegistryCache
from cvlink.contexts.validation.document import ResumeDocument
from cvlink.exceptions import MissingConfigurationError, TransportError
from cvlink.settings import get_resources_url


class PageView:
    """
    Loaded state of one page view.

    Attributes:
        tech_registry: Registry cache used for color resolution in this view
        loader: Document loader bound to the cache
        result: LoadResult of the most recent open()/reload()
    """

    def __init__(
        self,
        default_registry: DefaultTechRegistry = None,
        client: httpx.AsyncClient = None,
        default: ResumeDocument = None,
    ):
        self.default_registry = default_registry if default_registry is not None else DefaultTechRegistry()
        self.tech_registry = TechRegistryCache.create(default_registry=self.default_registry)
        self.loader = DocumentLoader(self.tech_registry, default=default, client=client)
        self.client = client
        self.result: Optional[LoadResult] = None

    @classmethod
    async def open(
        cls,
        query: QueryInput,
        client: httpx.AsyncClient = None,
        resources_url: str = None,
        default_registry: DefaultTechRegistry = None,
        require_default_registry: bool = False,
    ) -> "PageView":
        """
        Build a view and load the link's document and registry.

        Args:
            query: Query string, page URL or parsed parameters
            client: Shared HTTP client
            resources_url: Base URL of the bundled default registry (RESOURCES_URL if None)
            default_registry: Preloaded default registry (skips its fetch)
            require_default_registry: Raise if no resources URL is configured
                                      instead of running without default colors

        Returns:
            PageView with result populated

        Raises:
            MissingConfigurationError: Only when require_default_registry is set
                                       and no resources URL is configured
        """
        if default_registry is None:
            default_registry = DefaultTechRegistry(resources_url=resources_url)

        view = cls(default_registry=default_registry, client=client)
        await view.ensure_default_registry(required=require_default_registry)
        await view.reload(query)
        return view

    async def ensure_default_registry(self, required: bool = False) -> bool:
        """
        Fetch the bundled default registry if it is not loaded yet.

        Returns:
            True if the default registry is available
        """
        if self.default_registry.is_loaded:
            return True

        try:
            get_resources_url(self.default_registry.resources_url)
        except MissingConfigurationError:
            if required:
                raise
            _log_warning("RESOURCES_URL is not defined, default tech colors unavailable")
            return False

        try:
            await self.default_registry.fetch(client=self.client)
        except TransportError as e:
            _log_warning(f"Default tech registry unavailable: {e.message}")
            return False
        return True

    async def reload(self, query: QueryInput) -> LoadResult:
        """Run the document loader again (the registry cache is overwritten)."""
        self.result = await self.loader.load(query)
        return self.result

    @property
    def document(self) -> ResumeDocument:
        if self.result is None:
            return self.loader.default
        return self.result.document

    def tech_color(self, name: str) -> str:
        """Resolved color for a tech name in this view."""
        return self.tech_registry.resolve(name)
