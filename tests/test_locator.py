"""Tests for the candidate locator."""

import pytest

from dva_parser.parser.locator import locate_candidates
from dva_parser.parser.models import Dialect, ParserConfig
from dva_parser.parser.tree_sitter import TreeSitterSourceParser


def _candidates(parser: TreeSitterSourceParser, code: str, dialect: Dialect = Dialect.JAVASCRIPT):
    parsed = parser.parse(code, ParserConfig(dialect=dialect))
    nodes = locate_candidates(parsed.statements)
    texts = [parsed.source[n.start_byte : n.end_byte].decode("utf-8") for n in nodes]
    return nodes, texts


@pytest.mark.requires_tree_sitter
class TestLocateCandidates:
    """Tests for locate_candidates over real parse trees."""

    def test_default_export_object(self, source_parser: TreeSitterSourceParser):
        """A default-exported object literal is one candidate."""
        nodes, texts = _candidates(source_parser, "export default { a: 1 };")

        assert [n.type for n in nodes] == ["object"]
        assert texts == ["{ a: 1 }"]

    def test_parenthesized_default_export(self, source_parser: TreeSitterSourceParser):
        """Parentheses around the payload are unwrapped."""
        nodes, texts = _candidates(source_parser, "export default ({ a: 1 });")
        assert texts == ["{ a: 1 }"]

    def test_bare_object_expression_statement(self, source_parser: TreeSitterSourceParser):
        """An object literal used as a statement is a candidate."""
        nodes, texts = _candidates(source_parser, "({ a: 1 });")
        assert texts == ["{ a: 1 }"]

    def test_call_arguments_in_order(self, source_parser: TreeSitterSourceParser):
        """Every object literal argument of a call is a candidate, in order."""
        code = "register(1, { a: 1 }, other, { b: 2 }, 'x');"
        nodes, texts = _candidates(source_parser, code)

        assert texts == ["{ a: 1 }", "{ b: 2 }"]

    def test_member_call(self, source_parser: TreeSitterSourceParser):
        """Method calls such as app.model(...) are recognized."""
        nodes, texts = _candidates(source_parser, "app.model({ a: 1 });")
        assert texts == ["{ a: 1 }"]

    def test_default_exported_call(self, source_parser: TreeSitterSourceParser):
        """A default-exported call is unwrapped before classification."""
        nodes, texts = _candidates(source_parser, "export default defineModel({ a: 1 });")
        assert texts == ["{ a: 1 }"]

    def test_call_without_object_arguments(self, source_parser: TreeSitterSourceParser):
        """A call without object arguments yields nothing."""
        nodes, _ = _candidates(source_parser, "app.start('#root');\nfoo();")
        assert nodes == []

    def test_tagged_template_ignored(self, source_parser: TreeSitterSourceParser):
        """Tagged templates have no argument list."""
        nodes, _ = _candidates(source_parser, "css`color: red;`;")
        assert nodes == []

    def test_statements_in_source_order(self, source_parser: TreeSitterSourceParser):
        """Candidates follow statement order, then argument order."""
        code = "a({ one: 1 }, { two: 2 });\nexport default { three: 3 };\nb({ four: 4 });"
        _, texts = _candidates(source_parser, code)

        assert texts == ["{ one: 1 }", "{ two: 2 }", "{ three: 3 }", "{ four: 4 }"]

    def test_unrelated_statements_ignored(self, source_parser: TreeSitterSourceParser):
        """Declarations, named exports and imports are not candidates."""
        code = """import x from 'x';
const model = { a: 1 };
export const other = { b: 2 };
export default function App() { return null; }
// { c: 3 }
"""
        nodes, _ = _candidates(source_parser, code)
        assert nodes == []

    def test_empty_program(self, source_parser: TreeSitterSourceParser):
        """An empty file has no candidates."""
        nodes, _ = _candidates(source_parser, "")
        assert nodes == []

    def test_as_expression(self, source_parser: TreeSitterSourceParser):
        """The asserted expression of `as` is a candidate."""
        nodes, texts = _candidates(
            source_parser, "export default { a: 1 } as Model;", Dialect.TYPESCRIPT
        )
        assert texts == ["{ a: 1 }"]

    def test_satisfies_expression(self, source_parser: TreeSitterSourceParser):
        """The asserted expression of `satisfies` is a candidate."""
        nodes, texts = _candidates(
            source_parser, "export default { a: 1 } satisfies Model;", Dialect.TYPESCRIPT
        )
        assert texts == ["{ a: 1 }"]

    def test_angle_bracket_assertion(self, source_parser: TreeSitterSourceParser):
        """The expression of a `<T>expr` assertion is a candidate."""
        nodes, texts = _candidates(
            source_parser, "export default <Model>{ a: 1 };", Dialect.TYPESCRIPT
        )
        assert texts == ["{ a: 1 }"]

    def test_asserted_non_object_is_still_returned(self, source_parser: TreeSitterSourceParser):
        """Type-asserted expressions are not checked to be object literals."""
        nodes, texts = _candidates(
            source_parser, "export default model as Model;", Dialect.TYPESCRIPT
        )

        assert texts == ["model"]
        assert nodes[0].type == "identifier"

    def test_tsx_dialect(self, source_parser: TreeSitterSourceParser):
        """TSX sources use the same shapes."""
        nodes, texts = _candidates(
            source_parser, "export default { a: 1 } as Model;", Dialect.TSX
        )
        assert texts == ["{ a: 1 }"]
