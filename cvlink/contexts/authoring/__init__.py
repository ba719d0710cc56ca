"""
Authoring Context

Responsibilities:
- Provides example data to start a new configuration from
- Builds shareable links in URL mode and inline mode
- Warns when an inline link is likely too long

Owns: Link layout, example data
Never: Loads or validates documents for viewing
"""

from cvlink.contexts.authoring.examples import example_document, example_tech_registry
from cvlink.contexts.authoring.link_builder import (
    InlineLink,
    build_inline_link,
    build_url_mode_link,
    fetch_document_template,
    parse_document_json,
    view_base_url,
)

__all__ = [
    "example_document",
    "example_tech_registry",
    "InlineLink",
    "build_inline_link",
    "build_url_mode_link",
    "fetch_document_template",
    "parse_document_json",
    "view_base_url",
]
