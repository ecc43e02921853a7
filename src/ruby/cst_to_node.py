"""
CST to syntax tree - converts the tree-sitter Ruby CST to the generic syntax tree.

The generic tree mirrors the classic Ruby AST the feature extractor expects:
class/module/sclass/def/defs nodes with positional children, bodies grouped in
BEGIN nodes, and bare identifier statements (`private`) turned into
receiver-less SEND nodes.
"""

from typing import List, Optional

from syntax.node import Node, NodeKind, Location
from ruby.utils import _extract_text, _get_source_bytes, _node_line_col

# CST node types whose named children are statements
STATEMENT_CONTAINERS = {
    "program",
    "body_statement",
    "parenthesized_statements",
    "begin",
    "then",
    "else",
    "ensure",
    "do",
    "block_body",
}

# CST node types that group statements the way the classic AST's `begin` does
GROUPING_TYPES = {"program", "body_statement", "parenthesized_statements"}

IGNORED_TYPES = {"comment"}


class NodeBuilder:
    """
    Transforms tree-sitter CST nodes into generic syntax nodes.

    Usage:
        builder = NodeBuilder(source_code)
        node = builder.build(root_node)
    """

    def __init__(self, source_code: str):
        self.source = source_code
        self.source_bytes = _get_source_bytes(source_code)

    def _get_text(self, ts_node) -> str:
        return _extract_text(self.source_bytes, ts_node.start_byte, ts_node.end_byte)

    def _location(self, ts_node) -> Location:
        line, col = _node_line_col(ts_node)
        return Location(line, col)

    def _field(self, ts_node, name: str):
        return ts_node.child_by_field_name(name)

    def build(self, ts_node, in_statements: bool = False) -> Optional[Node]:
        """Convert one CST node (and its subtree). Returns None for dropped nodes."""
        t = ts_node.type
        if t in IGNORED_TYPES:
            return None

        if t == "class":
            return self._build_class(ts_node)
        elif t == "module":
            return self._build_module(ts_node)
        elif t == "singleton_class":
            return self._build_singleton_class(ts_node)
        elif t == "method":
            return self._build_method(ts_node)
        elif t == "singleton_method":
            return self._build_singleton_method(ts_node)
        elif t in ("constant", "scope_resolution"):
            return self._build_const(ts_node)
        elif t == "self":
            return Node(NodeKind.SELF, (), self._location(ts_node))
        elif t == "call":
            return self._build_call(ts_node)
        elif t == "identifier" and in_statements:
            # A bare identifier statement is a receiver-less call with no arguments
            return Node(NodeKind.SEND, (None, self._get_text(ts_node)), self._location(ts_node))

        if t in GROUPING_TYPES:
            kind = NodeKind.BEGIN
        elif t == "begin":
            kind = NodeKind.KWBEGIN
        else:
            kind = NodeKind.OTHER
        children = self._build_all(ts_node.named_children, t in STATEMENT_CONTAINERS)
        return Node(kind, tuple(children), self._location(ts_node))

    def _build_all(self, ts_nodes, in_statements: bool = False) -> List[Node]:
        nodes = []
        for ts_node in ts_nodes:
            node = self.build(ts_node, in_statements)
            if node is not None:
                nodes.append(node)
        return nodes

    def _build_optional(self, ts_node) -> Optional[Node]:
        return self.build(ts_node) if ts_node is not None else None

    def _build_body(self, ts_node) -> Optional[Node]:
        """
        Body of a class/module/method as one BEGIN node.

        Grammars without a `body` field put the statements directly under the
        declaration; those unnamed-field children are grouped here instead.
        """
        body = self._field(ts_node, "body")
        if body is not None:
            return self.build(body, in_statements=True)

        statements = []
        for i, child in enumerate(ts_node.children):
            if not child.is_named or ts_node.field_name_for_child(i) is not None:
                continue
            statements.append(child)
        if not statements:
            return None
        return Node(NodeKind.BEGIN, tuple(self._build_all(statements, True)), self._location(statements[0]))

    # =========================================================================
    # Declarations
    # =========================================================================

    def _build_class(self, ts_node) -> Node:
        return Node(
            NodeKind.CLASS,
            (
                self._build_optional(self._field(ts_node, "name")),
                self._build_optional(self._field(ts_node, "superclass")),
                self._build_body(ts_node),
            ),
            self._location(ts_node),
        )

    def _build_module(self, ts_node) -> Node:
        return Node(
            NodeKind.MODULE,
            (self._build_optional(self._field(ts_node, "name")), self._build_body(ts_node)),
            self._location(ts_node),
        )

    def _build_singleton_class(self, ts_node) -> Node:
        return Node(
            NodeKind.SCLASS,
            (self._build_optional(self._field(ts_node, "value")), self._build_body(ts_node)),
            self._location(ts_node),
        )

    def _method_name(self, ts_node) -> Optional[str]:
        name = self._field(ts_node, "name")
        return self._get_text(name) if name is not None else None

    def _build_method(self, ts_node) -> Node:
        return Node(
            NodeKind.DEF,
            (
                self._method_name(ts_node),
                self._build_optional(self._field(ts_node, "parameters")),
                self._build_body(ts_node),
            ),
            self._location(ts_node),
        )

    def _build_singleton_method(self, ts_node) -> Node:
        return Node(
            NodeKind.DEFS,
            (
                self._build_optional(self._field(ts_node, "object")),
                self._method_name(ts_node),
                self._build_optional(self._field(ts_node, "parameters")),
                self._build_body(ts_node),
            ),
            self._location(ts_node),
        )

    # =========================================================================
    # Expressions
    # =========================================================================

    def _build_const(self, ts_node) -> Node:
        if ts_node.type == "constant":
            return Node(NodeKind.CONST, (None, self._get_text(ts_node)), self._location(ts_node))

        # scope_resolution: `A::B`, or `::B` when the scope is omitted
        scope = self._build_optional(self._field(ts_node, "scope"))
        name = self._field(ts_node, "name")
        name_text = self._get_text(name) if name is not None else None
        return Node(NodeKind.CONST, (scope, name_text), self._location(ts_node))

    def _build_call(self, ts_node) -> Node:
        receiver = self._build_optional(self._field(ts_node, "receiver"))
        method = self._field(ts_node, "method")
        selector = self._get_text(method) if method is not None else "call"

        args: List[Node] = []
        arguments = self._field(ts_node, "arguments")
        if arguments is not None:
            args.extend(self._build_all(arguments.named_children))
        block = self._field(ts_node, "block")
        if block is not None:
            block_node = self.build(block)
            if block_node is not None:
                args.append(block_node)

        return Node(NodeKind.SEND, (receiver, selector, *args), self._location(ts_node))


def build_node_from_source(source_code: str, root) -> Node:
    """Convert a parsed tree-sitter root into the generic syntax tree."""
    node = NodeBuilder(source_code).build(root, in_statements=True)
    assert node is not None
    return node
