"""Tree-sitter based source parser.

This module provides the source parser used by the model parser. It loads
the JavaScript and TypeScript tree-sitter grammars on first use and turns
source text into a parse tree, rejecting sources with syntax errors unless
error recovery is enabled.
"""

from typing import TYPE_CHECKING

import structlog

from .base import ParsedSource, ParserError, SourceParser, SourceSyntaxError
from .models import Dialect, ParserConfig

if TYPE_CHECKING:
    from tree_sitter import Node, Parser, Tree

logger = structlog.get_logger(__name__)


class TreeSitterSourceParser(SourceParser):
    """Source parser backed by tree-sitter grammars.

    Grammars are loaded lazily the first time a source is parsed. A grammar
    that fails to import is logged and left unavailable.
    """

    def __init__(self) -> None:
        """Initialize the TreeSitterSourceParser (lazy initialization)."""
        self._initialized = False
        self._parsers: dict[Dialect, Parser] = {}
        logger.debug("TreeSitterSourceParser created (lazy initialization)")

    def _ensure_initialized(self) -> None:
        """Load the tree-sitter grammars once."""
        if self._initialized:
            return

        try:
            self._init_javascript_parser()
        except ImportError as e:
            logger.warning(f"Failed to initialize JavaScript parser: {e}")

        try:
            self._init_typescript_parser()
        except ImportError as e:
            logger.warning(f"Failed to initialize TypeScript parser: {e}")

        self._initialized = True
        logger.info(
            "TreeSitterSourceParser initialized",
            dialects=sorted(d.value for d in self._parsers),
        )

    def _init_javascript_parser(self) -> None:
        """Initialize the JavaScript tree-sitter parser (JSX included)."""
        import tree_sitter_javascript
        from tree_sitter import Language, Parser

        language = Language(tree_sitter_javascript.language())
        self._parsers[Dialect.JAVASCRIPT] = Parser(language)
        logger.debug("JavaScript tree-sitter parser initialized")

    def _init_typescript_parser(self) -> None:
        """Initialize the TypeScript and TSX tree-sitter parsers."""
        import tree_sitter_typescript
        from tree_sitter import Language, Parser

        ts_language = Language(tree_sitter_typescript.language_typescript())
        self._parsers[Dialect.TYPESCRIPT] = Parser(ts_language)

        tsx_language = Language(tree_sitter_typescript.language_tsx())
        self._parsers[Dialect.TSX] = Parser(tsx_language)

        logger.debug("TypeScript tree-sitter parser initialized")

    def supported_dialects(self) -> list[Dialect]:
        """Get the dialects with a loaded grammar.

        Returns:
            List of dialects that can be parsed.
        """
        self._ensure_initialized()
        return list(self._parsers)

    def _get_parser(self, dialect: Dialect) -> "Parser":
        """Get the tree-sitter parser for a dialect.

        Raises:
            ParserError: If no grammar is available for the dialect.
        """
        self._ensure_initialized()
        if dialect not in self._parsers:
            raise ParserError(f"No parser available for dialect: {dialect.value}")
        return self._parsers[dialect]

    def parse(self, source_code: str, config: ParserConfig) -> ParsedSource:
        """Parse source code into a tree-sitter tree.

        Args:
            source_code: The source code to parse.
            config: Parser configuration for the file.

        Returns:
            The parsed program.

        Raises:
            SourceSyntaxError: If the tree contains syntax errors and error
                recovery is disabled.
            ParserError: If no grammar is available for the dialect.
        """
        parser = self._get_parser(config.dialect)

        # tree-sitter requires bytes
        source = source_code.encode("utf-8")
        tree: Tree = parser.parse(source)

        if tree.root_node.has_error:
            error_nodes = self._find_error_nodes(tree.root_node)
            if not config.error_recovery:
                first = error_nodes[0] if error_nodes else tree.root_node
                raise SourceSyntaxError(
                    f"Syntax error in {config.dialect.value} source",
                    line=first.start_point[0] + 1,
                    column=first.start_point[1],
                )
            logger.debug("Parse tree contains errors", error_count=len(error_nodes))

        return ParsedSource(tree, source, config)

    def _find_error_nodes(self, node: "Node") -> list["Node"]:
        """Find all error nodes in the parse tree.

        Args:
            node: The root node to search from.

        Returns:
            List of nodes representing parsing errors, in document order.
        """
        errors: list[Node] = []

        if node.type == "ERROR" or node.is_missing:
            errors.append(node)

        for child in node.children:
            if child.has_error or child.is_missing:
                errors.extend(self._find_error_nodes(child))

        return errors
