"""
Shareable Link Generation

Builds viewer links in either transport mode:

- URL mode: the link carries obfuscated URLs of hosted JSON files
      <base>/view?config=<token>[&tech-registry=<token>]
- Inline mode: the link carries the compressed JSON itself
      <base>/view?configData=<token>&techData=<token>

Inline links grow with the document. Their size is estimated before encoding so
the author can be warned; the warning never blocks generation.
"""

import json
import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple
from urllib.parse import quote, urlparse

import httpx

from cvlink.contexts.authoring.logger import _log_info, _log_warning, log_link_built
from cvlink.contexts.loading.query import (
    CONFIG_DATA_PARAM,
    CONFIG_PARAM,
    TECH_DATA_PARAM,
    TECH_REGISTRY_PARAM,
)
from cvlink.contexts.transport.compression import (
    LINK_WARNING_THRESHOLD,
    compress_and_encode,
    estimate_encoded_length,
    exceeds_link_warning,
)
from cvlink.contexts.transport.fetch import fetch_json
from cvlink.contexts.transport.url_codec import encode_url
from cvlink.exceptions import InvalidLinkInputError, ParseFailure
from cvlink.settings import SETTINGS

VIEW_PATH = SETTINGS["link"]["view_path"]

GENERATE_SUFFIX = re.compile(r"/generate/?$")


@dataclass
class InlineLink:
    """
    Generated inline-mode link.

    Attributes:
        url: Full link
        estimated_length: Estimate computed before encoding
        exceeds_warning: Whether the estimate is above the warning threshold
    """

    url: str
    estimated_length: int
    exceeds_warning: bool

    @property
    def length(self) -> int:
        return len(self.url)


def view_base_url(page_url: str) -> str:
    """
    Base URL for generated links, given the generator page's own URL.

    Drops query and fragment and a trailing "/generate".

    Examples:
        >>> view_base_url("https://example.com/cv/generate?x=1")
        'https://example.com/cv'
    """
    parsed = urlparse(page_url)
    path = GENERATE_SUFFIX.sub("", parsed.path).rstrip("/")
    return f"{parsed.scheme}://{parsed.netloc}{path}" if parsed.scheme else path


def is_absolute_url(value: str) -> bool:
    """Whether value parses as an absolute URL with scheme and host."""
    if not isinstance(value, str) or not value.strip():
        return False
    parsed = urlparse(value.strip())
    return bool(parsed.scheme) and bool(parsed.netloc)


def _query_value(token: str) -> str:
    # URL-codec tokens may contain "+", "/" and "="
    return quote(token, safe="")


def build_url_mode_link(
    base_url: str, config_url: str, tech_registry_url: Optional[str] = None
) -> str:
    """
    Build a link pointing at hosted configuration files.

    Args:
        base_url: Viewer base URL (see view_base_url())
        config_url: Absolute URL of the resume JSON
        tech_registry_url: Optional absolute URL of a tech registry JSON

    Returns:
        Shareable link

    Raises:
        InvalidLinkInputError: If config_url is missing or either URL is not absolute
    """
    if not config_url or not config_url.strip():
        raise InvalidLinkInputError("Please provide a configuration URL")

    tech_registry_url = tech_registry_url.strip() if tech_registry_url else ""

    if not is_absolute_url(config_url) or (tech_registry_url and not is_absolute_url(tech_registry_url)):
        raise InvalidLinkInputError(
            "Please enter a valid URL format (e.g., https://example.com/cv-config.json)"
        )

    link = f"{base_url.rstrip('/')}{VIEW_PATH}?{CONFIG_PARAM}={_query_value(encode_url(config_url.strip()))}"

    if tech_registry_url:
        link += f"&{TECH_REGISTRY_PARAM}={_query_value(encode_url(tech_registry_url))}"

    log_link_built("url", len(link))
    return link


def build_inline_link(
    base_url: str,
    document: Mapping[str, Any],
    tech_registry: Mapping[str, Any],
    warning_threshold: int = LINK_WARNING_THRESHOLD,
) -> InlineLink:
    """
    Build a link that carries the document and registry inside it.

    Args:
        base_url: Viewer base URL (see view_base_url())
        document: Resume configuration (not validated here; the viewer validates)
        tech_registry: Tech registry mapping
        warning_threshold: Length above which exceeds_warning is set

    Returns:
        InlineLink with the URL and size information

    Raises:
        InvalidLinkInputError: If the data cannot be serialized as JSON
    """
    try:
        config_json = json.dumps(document, ensure_ascii=False, separators=(",", ":"))
        tech_json = json.dumps(tech_registry, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        raise InvalidLinkInputError(f"Failed to generate link: {e}") from e

    view_url = f"{base_url.rstrip('/')}{VIEW_PATH}"
    estimated_length = estimate_encoded_length(len(view_url), config_json, tech_json)
    exceeds = exceeds_link_warning(estimated_length, warning_threshold)

    if exceeds:
        _log_warning(
            f"The generated link will be approximately {round(estimated_length / 1000)}KB, "
            "which may be too long for some browsers or servers. Consider URL mode "
            "or reducing the amount of data."
        )

    link = (
        f"{view_url}?{CONFIG_DATA_PARAM}={compress_and_encode(config_json)}"
        f"&{TECH_DATA_PARAM}={compress_and_encode(tech_json)}"
    )

    log_link_built("inline", len(link), estimated_length)
    return InlineLink(url=link, estimated_length=estimated_length, exceeds_warning=exceeds)


def parse_document_json(text: str) -> Tuple[Optional[Any], str]:
    """
    Parse JSON typed into the generator's editor.

    Returns:
        (data, "") on success, (None, error message) on invalid JSON
    """
    try:
        return json.loads(text), ""
    except ValueError as e:
        return None, str(e) or "Invalid JSON"


async def fetch_document_template(url: str, client: httpx.AsyncClient = None) -> Any:
    """
    Fetch a hosted configuration to pre-fill the generator.

    Raises:
        InvalidLinkInputError: If url is not absolute
        FetchFailure: If the configuration cannot be fetched
        ParseFailure: If it is not a JSON object
    """
    if not is_absolute_url(url):
        raise InvalidLinkInputError("Please provide a configuration URL to load data")

    data = await fetch_json(url.strip(), client=client)
    if not isinstance(data, dict):
        raise ParseFailure("Failed to fetch configuration: expected a JSON object")

    _log_info(f"Loaded configuration template from {url}")
    return data
