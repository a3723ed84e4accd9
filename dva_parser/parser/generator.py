"""Source regeneration for tree-sitter nodes.

tree-sitter trees keep exact byte ranges, so a node's source is recovered by
slicing the bytes it was parsed from. The slice is optionally dedented so that
an entry lifted out of a nested object reads as if it were written at the top
level.
"""

from typing import TYPE_CHECKING

from .base import GenerationError, SourceGenerator
from .models import Position, SourceLocation

if TYPE_CHECKING:
    from tree_sitter import Node


class SourceSliceGenerator(SourceGenerator):
    """Regenerates node source by slicing the original bytes.

    Attributes:
        dedent: Remove the entry's own indentation from continuation lines.
    """

    def __init__(self, dedent: bool = True) -> None:
        self.dedent = dedent

    def generate(self, node: "Node", source: bytes) -> str:
        """Regenerate the source text of a node.

        Args:
            node: The node to serialize.
            source: The bytes the node's tree was parsed from.

        Returns:
            The source text of the node.

        Raises:
            GenerationError: If the node contains syntax errors or its bytes
                are not valid UTF-8.
        """
        line, column = node.start_point[0] + 1, node.start_point[1]
        if node.has_error or node.is_missing:
            raise GenerationError(
                f"Cannot regenerate {node.type} node containing syntax errors",
                line=line,
                column=column,
            )

        try:
            text = source[node.start_byte : node.end_byte].decode("utf-8")
        except UnicodeDecodeError as e:
            raise GenerationError(f"Invalid UTF-8 in {node.type} node: {e}", line=line) from e

        if not self.dedent or "\n" not in text:
            return text

        indent = _line_indent(source, node.start_byte)
        if not indent:
            return text
        return _strip_indent(text, indent)


def _line_indent(source: bytes, offset: int) -> str:
    """Get the leading whitespace of the line containing ``offset``."""
    line_start = source.rfind(b"\n", 0, offset) + 1
    prefix = source[line_start:offset].decode("utf-8", errors="replace")
    return prefix[: len(prefix) - len(prefix.lstrip(" \t"))]


def _strip_indent(text: str, indent: str) -> str:
    lines = text.split("\n")
    stripped = [lines[0]]
    for line in lines[1:]:
        stripped.append(line[len(indent) :] if line.startswith(indent) else line)
    return "\n".join(stripped)


def _utf16_column(source: bytes, offset: int, byte_column: int) -> int:
    # tree-sitter columns count UTF-8 bytes; locations count UTF-16 code units
    line_prefix = source[offset - byte_column : offset].decode("utf-8", errors="replace")
    return len(line_prefix.encode("utf-16-le")) // 2


def node_location(node: "Node", source: bytes) -> SourceLocation:
    """Build the source location span of a node.

    Args:
        node: The tree-sitter node.
        source: The bytes the node's tree was parsed from.

    Returns:
        Location with 1-indexed lines and 0-indexed columns in UTF-16 code units.
    """
    start_row, start_col = node.start_point[0], node.start_point[1]
    end_row, end_col = node.end_point[0], node.end_point[1]

    return SourceLocation(
        start=Position(
            line=start_row + 1,
            column=_utf16_column(source, node.start_byte, start_col),
        ),
        end=Position(
            line=end_row + 1,
            column=_utf16_column(source, node.end_byte, end_col),
        ),
    )
