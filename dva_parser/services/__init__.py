"""Collaborators of the model parser backed by the file system."""

from .config_provider import EXTENSION_DIALECTS, ExtensionConfigProvider, detect_dialect
from .reader import FileSourceReader

__all__ = [
    "EXTENSION_DIALECTS",
    "ExtensionConfigProvider",
    "FileSourceReader",
    "detect_dialect",
]
