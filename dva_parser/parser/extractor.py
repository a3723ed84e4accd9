"""Model extractor for dva model declarations.

This module turns a candidate object literal into a validated ``DvaModel``.
Extraction is best effort: entries that cannot be named or regenerated are
skipped, and a candidate without a namespace or without any reducer or
effect yields no model. Nothing in this module raises to its caller.
"""

import re
from typing import TYPE_CHECKING, NamedTuple

import structlog
from pydantic import ValidationError

from .base import GenerationError, SourceGenerator
from .generator import SourceSliceGenerator, node_location
from .models import DvaModel, MethodInfo

if TYPE_CHECKING:
    from tree_sitter import Node

logger = structlog.get_logger(__name__)

NAMESPACE_KEY = "namespace"
METHOD_GROUPS = ("reducers", "effects")

IDENTIFIER_KEYS = frozenset({"property_identifier", "identifier"})

_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}
_CODE_POINT_ESCAPE = re.compile(
    r"\\(?:u\{(?P<braced>[0-9a-fA-F]+)\}|u(?P<unicode>[0-9a-fA-F]{4})|x(?P<hex>[0-9a-fA-F]{2}))"
)


class MethodEntry(NamedTuple):
    """A successfully extracted reducer or effect."""

    name: str
    info: MethodInfo


def _node_text(node: "Node", source: bytes) -> str:
    return source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def _decode_escape(text: str) -> str:
    match = _CODE_POINT_ESCAPE.fullmatch(text)
    if match:
        code = match.group("braced") or match.group("unicode") or match.group("hex")
        try:
            return chr(int(code, 16))
        except (ValueError, OverflowError):
            return text

    body = text[1:]
    # line continuation
    if body and body[0] in "\r\n\u2028\u2029":
        return ""
    return _SIMPLE_ESCAPES.get(body, body)


def string_value(node: "Node", source: bytes) -> str:
    """Decode the value of a JavaScript string literal node.

    Args:
        node: A ``string`` node.
        source: The bytes the node's tree was parsed from.

    Returns:
        The literal's value without quotes, escape sequences decoded.
    """
    parts: list[str] = []
    for child in node.named_children:
        text = _node_text(child, source)
        parts.append(_decode_escape(text) if child.type == "escape_sequence" else text)
    # Escaped surrogate pairs combine into one code point; lone halves become U+FFFD
    return "".join(parts).encode("utf-16-le", "surrogatepass").decode("utf-16-le", "replace")


def _key_name(key: "Node | None", source: bytes) -> str | None:
    """Get the identifier text of a property key, None for other keys."""
    if key is None or key.type not in IDENTIFIER_KEYS:
        return None
    return _node_text(key, source)


class ModelExtractor:
    """Builds ``DvaModel`` records from candidate object literals.

    Attributes:
        generator: Regenerates the source text of each reducer and effect.
    """

    def __init__(self, generator: SourceGenerator | None = None) -> None:
        self.generator = generator or SourceSliceGenerator()

    def extract(self, node: "Node", source: bytes) -> DvaModel | None:
        """Extract a model from a candidate node.

        Args:
            node: Candidate node, expected to be an object literal.
            source: The bytes the node's tree was parsed from.

        Returns:
            The validated model, or None when the candidate has no namespace,
            has neither reducers nor effects, or fails validation.
        """
        namespace = ""
        groups: dict[str, dict[str, MethodInfo]] = {group: {} for group in METHOD_GROUPS}

        # A non-object candidate has no pairs and falls through to validation
        for prop in node.named_children:
            if prop.type != "pair":
                continue

            key = _key_name(prop.child_by_field_name("key"), source)
            value = prop.child_by_field_name("value")
            if key is None or value is None:
                continue

            if key == NAMESPACE_KEY:
                if value.type == "string":
                    namespace = string_value(value, source)
                continue

            if key in groups and value.type == "object":
                for entry in value.named_children:
                    extracted = self._extract_entry(entry, source)
                    if extracted is not None:
                        groups[key][extracted.name] = extracted.info

        if not namespace:
            logger.debug("Discarding candidate without namespace", line=node.start_point[0] + 1)
            return None

        if not any(groups.values()):
            logger.debug("Discarding model without reducers or effects", namespace=namespace)
            return None

        try:
            return DvaModel(
                namespace=namespace,
                reducers=groups["reducers"],
                effects=groups["effects"],
            )
        except ValidationError as e:
            logger.debug("Discarding invalid model", line=node.start_point[0] + 1, error=str(e))
            return None

    def _extract_entry(self, entry: "Node", source: bytes) -> MethodEntry | None:
        """Extract one reducer or effect entry.

        Args:
            entry: A property of a ``reducers`` or ``effects`` object.
            source: The bytes the node's tree was parsed from.

        Returns:
            The extracted entry, or None when the entry must be skipped.
        """
        if entry.type == "comment":
            return None

        try:
            name = self._method_name(entry, source)
            code = self.generator.generate(entry, source)
            info = MethodInfo(code=code, loc=node_location(entry, source))
        except Exception as e:
            # One bad entry never aborts the rest of the model
            logger.debug(
                "Skipping entry",
                node_type=entry.type,
                line=entry.start_point[0] + 1,
                error=str(e),
            )
            return None

        return MethodEntry(name=name, info=info)

    def _method_name(self, entry: "Node", source: bytes) -> str:
        """Derive the method name of an entry.

        Raises:
            GenerationError: If the entry has no usable name.
        """
        if entry.type == "shorthand_property_identifier":
            return _node_text(entry, source)

        if entry.type == "pair":
            key = entry.child_by_field_name("key")
        elif entry.type == "method_definition":
            key = entry.child_by_field_name("name")
        else:
            key = None

        if key is not None and key.type == "computed_property_name":
            # [ACTION_TYPE] is named after the constant it references
            inner = key.named_children
            key = inner[0] if len(inner) == 1 and inner[0].type == "identifier" else None

        if key is not None:
            if key.type == "string":
                return string_value(key, source)
            name = _key_name(key, source)
            if name is not None:
                return name

        raise GenerationError(
            f"Cannot derive a method name from {entry.type}",
            line=entry.start_point[0] + 1,
            column=entry.start_point[1],
        )
