"""
Example data for the link generator.

The example document and registry seed manual entry: an author starts from them,
edits, and generates a link. Every accessor returns a fresh copy so callers can
edit freely.
"""

import copy
from typing import Any, Dict

from cvlink.settings import load_data_file

EXAMPLE_DOCUMENT_FILE = "example_document.yaml"

EXAMPLE_TECH_REGISTRY = {
    "React": {"color": "#61DAFB"},
    "TypeScript": {"color": "#3178C6"},
    "JavaScript": {"color": "#F7DF1E"},
    "Node.js": {"color": "#339933"},
    "Python": {"color": "#3776AB"},
    "PostgreSQL": {"color": "#4169E1"},
    "MongoDB": {"color": "#47A248"},
    "Docker": {"color": "#2496ED"},
    "Kubernetes": {"color": "#326CE5"},
    "AWS": {"color": "#FF9900"},
    "Tailwind CSS": {"color": "#06B6D4"},
    "Vue": {"color": "#4FC08D"},
    "Angular": {"color": "#DD0031"},
    "Next.js": {"color": "#000000"},
    "GraphQL": {"color": "#E10098"},
    "Redis": {"color": "#DC382D"},
    "Go": {"color": "#00ADD8"},
    "Rust": {"color": "#DEA584"},
    "Java": {"color": "#007396"},
    "Spring Boot": {"color": "#6DB33F"},
}


def example_document() -> Dict[str, Any]:
    """Example resume configuration (Jane Doe, English and French)."""
    return load_data_file(EXAMPLE_DOCUMENT_FILE)


def example_tech_registry() -> Dict[str, Dict[str, str]]:
    """Example tech registry covering the techs used in example_document()."""
    return copy.deepcopy(EXAMPLE_TECH_REGISTRY)
