"""
Bundled defaults for the loading context.

The default document is what a viewer sees when a link carries no configuration
or when the configuration it carries cannot be loaded.
"""

from cvlink.contexts.validation.document import ResumeDocument, Source
from cvlink.settings import SETTINGS, load_data_file

DEFAULT_DOCUMENT_FILE = "default_document.yaml"

# Last-resort color for tech names no registry knows
NEUTRAL_COLOR = SETTINGS["registry"]["neutral_color"]

DEFAULT_REGISTRY_FILE_NAME = SETTINGS["registry"]["default_file_name"]


def default_document() -> ResumeDocument:
    """Fresh copy of the bundled default resume."""
    return ResumeDocument(load_data_file(DEFAULT_DOCUMENT_FILE), source=Source.UNKNOWN)
