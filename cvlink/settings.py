"""
Settings for the transport pipeline.

Environment values come from .env via python-dotenv. Tunable constants live in
cvlink/data/settings.yaml and are loaded with OmegaConf; a deployment may point
CVLINK_SETTINGS_PATH at its own YAML to override individual keys.

Environment:
    RESOURCES_URL: Base URL hosting the bundled default tech-registry.json
    CVLINK_SETTINGS_PATH: Optional settings override file
    LOGS_PATH: Log directory used by the command-line scripts
"""

import copy
import os
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv
from omegaconf import OmegaConf

from cvlink.exceptions import MissingConfigurationError

load_dotenv()

DATA_PATH = Path(__file__).parent / "data"
DEFAULT_SETTINGS_PATH = DATA_PATH / "settings.yaml"


def load_settings(config_path: Path = None) -> Dict[str, Any]:
    """
    Load pipeline settings, merging an optional override over the packaged defaults.

    Args:
        config_path: Optional override file (defaults to CVLINK_SETTINGS_PATH env variable)

    Returns:
        Plain nested dict of settings
    """
    defaults = OmegaConf.load(DEFAULT_SETTINGS_PATH)

    if config_path is None and os.getenv("CVLINK_SETTINGS_PATH"):
        config_path = Path(os.getenv("CVLINK_SETTINGS_PATH"))

    if config_path is not None:
        merged = OmegaConf.merge(defaults, OmegaConf.load(config_path))
    else:
        merged = defaults

    return OmegaConf.to_container(merged, resolve=True)


SETTINGS = load_settings()


def get_resources_url(resources_url: str = None) -> str:
    """
    Resolve the base URL hosting the bundled default registry.

    Args:
        resources_url: Explicit base URL; falls back to RESOURCES_URL

    Returns:
        Base URL, always ending with "/"

    Raises:
        MissingConfigurationError: If no base URL is configured
    """
    url = resources_url or os.getenv("RESOURCES_URL")
    if not url:
        raise MissingConfigurationError("RESOURCES_URL is not defined")
    return url if url.endswith("/") else f"{url}/"


def get_logs_path() -> Path:
    """Log directory for script sessions (LOGS_PATH, default outs/logs)."""
    return Path(os.getenv("LOGS_PATH", "outs/logs"))


_data_cache: Dict[str, Dict[str, Any]] = {}


def load_data_file(file_name: str) -> Dict[str, Any]:
    """
    Load a packaged YAML data file from cvlink/data.

    Parsed once per process; each call returns an independent copy. Interpolation
    is left unresolved so user-facing text containing "${" stays literal.

    Args:
        file_name: File name inside cvlink/data (e.g., "default_document.yaml")

    Returns:
        Plain nested dict
    """
    if file_name not in _data_cache:
        _data_cache[file_name] = OmegaConf.to_container(
            OmegaConf.load(DATA_PATH / file_name), resolve=False
        )
    return copy.deepcopy(_data_cache[file_name])
