"""Collaborator interfaces and errors for the model parser.

This module defines the abstract interfaces the model parsing pipeline
depends on (source reading, per-file parser configuration, source parsing
and source regeneration) together with the exception hierarchy raised across
the pipeline boundary.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

from .models import ParserConfig

if TYPE_CHECKING:
    from tree_sitter import Node, Tree


class SourceReader(ABC):
    """Reads the full text contents of a source file."""

    @abstractmethod
    async def read(self, file_path: Path | str) -> str:
        """Read a source file.

        Args:
            file_path: Path to the file to read.

        Returns:
            The decoded file contents.

        Raises:
            FileNotFoundError: If the file does not exist.
            OSError: If the file cannot be read.
            UnicodeDecodeError: If the file cannot be decoded.
        """
        ...


class ConfigProvider(ABC):
    """Provides the parser configuration that applies to a file."""

    @abstractmethod
    def get_config(self, file_path: Path | str) -> ParserConfig | None:
        """Get the parser configuration for a file.

        Args:
            file_path: Path to the source file.

        Returns:
            The parser configuration, or None when no configuration applies
            to the file (the file is then not parsed at all).
        """
        ...


class ParsedSource:
    """A parsed program together with the bytes it was parsed from.

    Attributes:
        tree: The tree-sitter parse tree.
        source: The UTF-8 encoded source the tree was built from.
        config: The configuration used to parse the source.
    """

    __slots__ = ("tree", "source", "config")

    def __init__(self, tree: "Tree", source: bytes, config: ParserConfig) -> None:
        self.tree = tree
        self.source = source
        self.config = config

    @property
    def statements(self) -> list["Node"]:
        """Top-level statement nodes of the program, in source order."""
        return list(self.tree.root_node.named_children)


class SourceParser(ABC):
    """Parses source text into a program tree."""

    @abstractmethod
    def parse(self, source_code: str, config: ParserConfig) -> ParsedSource:
        """Parse source code.

        Args:
            source_code: The source code to parse.
            config: Parser configuration for the file.

        Returns:
            The parsed program.

        Raises:
            SourceSyntaxError: If the source cannot be parsed cleanly.
            ParserError: If no grammar is available for the dialect.
        """
        ...


class SourceGenerator(ABC):
    """Regenerates source text for a single tree node."""

    @abstractmethod
    def generate(self, node: "Node", source: bytes) -> str:
        """Regenerate the source text of a node.

        Args:
            node: The node to serialize.
            source: The bytes the node's tree was parsed from.

        Returns:
            The source text of the node.

        Raises:
            GenerationError: If the node cannot be serialized.
        """
        ...


class ParserError(Exception):
    """Exception raised for parser errors.

    Attributes:
        message: Explanation of the error.
        file_path: Path to the file being parsed when error occurred.
        line: Line number where error occurred, if known.
        column: Column number where error occurred, if known.
    """

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize the ParserError.

        Args:
            message: Explanation of the error.
            file_path: Path to the file being parsed.
            line: Line number where error occurred.
            column: Column number where error occurred.
        """
        self.message = message
        self.file_path = file_path
        self.line = line
        self.column = column

        details = []
        if file_path:
            details.append(f"file={file_path}")
        if line is not None:
            details.append(f"line={line}")
        if column is not None:
            details.append(f"column={column}")

        full_message = f"{message} ({', '.join(details)})" if details else message

        super().__init__(full_message)


class SourceSyntaxError(ParserError):
    """Raised when the source contains syntax errors."""


class GenerationError(ParserError):
    """Raised when a node cannot be turned back into source text."""
