"""Candidate locator for dva model declarations.

Scans the top-level statements of a program for object literals that may be
model declarations. Three shapes are recognized, each optionally behind
``export default``:

    export default { namespace: 'app', ... };
    app.model({ namespace: 'app', ... });
    export default { namespace: 'app', ... } as Model;

Any other statement is ignored.
"""

from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tree_sitter import Node

OBJECT = "object"
CALL_EXPRESSION = "call_expression"

# Nodes wrapping an expression with a type assertion
TYPE_ASSERTIONS = frozenset({"as_expression", "satisfies_expression", "type_assertion"})


def _unwrap_parentheses(node: "Node") -> "Node":
    while node.type == "parenthesized_expression" and node.named_child_count:
        node = node.named_children[0]
    return node


def _unwrap_statement(node: "Node") -> "Node | None":
    """Unwrap a top-level statement to the expression it carries.

    ``export default`` yields its payload, an expression statement yields its
    expression. Other statements are returned as-is.
    """
    if node.type == "export_statement":
        if not any(child.type == "default" for child in node.children):
            return None
        payload = node.child_by_field_name("value") or node.child_by_field_name("declaration")
        return _unwrap_parentheses(payload) if payload is not None else None

    if node.type == "expression_statement" and node.named_child_count:
        return _unwrap_parentheses(node.named_children[0])

    return node


def _asserted_expression(node: "Node") -> "Node | None":
    # `<T>expr` puts the type first; `expr as T` and `expr satisfies T` put it last
    children = [child for child in node.named_children if child.type != "comment"]
    if not children:
        return None
    inner = children[-1] if node.type == "type_assertion" else children[0]
    return _unwrap_parentheses(inner)


def _call_arguments(node: "Node") -> list["Node"]:
    arguments = node.child_by_field_name("arguments")
    # tagged templates carry a template_string instead of an argument list
    if arguments is None or arguments.type != "arguments":
        return []
    return [arg for arg in arguments.named_children if arg.type == OBJECT]


def locate_candidates(statements: Iterable["Node"]) -> list["Node"]:
    """Find the object literals that may declare a model.

    Args:
        statements: Top-level statement nodes of a program, in source order.

    Returns:
        Candidate nodes in discovery order: statements in source order, call
        arguments in argument order. Type-asserted expressions are returned
        without checking that they are object literals.
    """
    candidates: list[Node] = []

    for statement in statements:
        node = _unwrap_statement(statement)
        if node is None:
            continue

        if node.type == OBJECT:
            candidates.append(node)
        elif node.type == CALL_EXPRESSION:
            candidates.extend(_call_arguments(node))
        elif node.type in TYPE_ASSERTIONS:
            inner = _asserted_expression(node)
            if inner is not None:
                candidates.append(inner)

    return candidates
