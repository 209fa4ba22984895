"""SwiftCamp utilities."""

from .document_loader import load_document, YAML_SUFFIXES

__all__ = ["load_document", "YAML_SUFFIXES"]
