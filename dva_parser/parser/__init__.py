"""Parser module for extracting dva models from JavaScript and TypeScript.

This module provides tree-sitter based parsing of model files and the
extraction of ``namespace``, ``reducers`` and ``effects`` declarations into
structured Pydantic models.

Example:
    >>> from dva_parser.parser import DvaModelParser
    >>> from dva_parser.services import ExtensionConfigProvider
    >>> parser = DvaModelParser(ExtensionConfigProvider())
    >>> models = await parser.parse_file("src/models/app.ts")
    >>> print(models[0].namespace)
"""

from .base import (
    ConfigProvider,
    GenerationError,
    ParsedSource,
    ParserError,
    SourceGenerator,
    SourceParser,
    SourceReader,
    SourceSyntaxError,
)
from .models import (
    Dialect,
    DvaModel,
    FileModels,
    MethodInfo,
    ParserConfig,
    Position,
    ScanError,
    ScanResult,
    SourceLocation,
)
from .extractor import ModelExtractor
from .generator import SourceSliceGenerator, node_location
from .locator import locate_candidates
from .model_parser import DvaModelParser
from .tree_sitter import TreeSitterSourceParser

__all__ = [
    # Interfaces
    "ConfigProvider",
    "SourceGenerator",
    "SourceParser",
    "SourceReader",
    "ParsedSource",
    # Errors
    "ParserError",
    "SourceSyntaxError",
    "GenerationError",
    # Implementations
    "DvaModelParser",
    "ModelExtractor",
    "SourceSliceGenerator",
    "TreeSitterSourceParser",
    "locate_candidates",
    "node_location",
    # Models
    "Dialect",
    "DvaModel",
    "FileModels",
    "MethodInfo",
    "ParserConfig",
    "Position",
    "ScanError",
    "ScanResult",
    "SourceLocation",
]
