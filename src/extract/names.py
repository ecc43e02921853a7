"""
Name resolution for classes, modules and methods.

Qualified paths are built from the scope stack (ancestor nodes, outermost
first). Only CLASS and MODULE ancestors contribute segments; singleton-class
blocks and statement groupings are transparent.
"""

from typing import List, Tuple

from core.utils import join_qualified
from syntax.node import Node, NodeKind
from extract.errors import MalformedNode, UnsupportedReceiverKind

ScopeStack = Tuple[Node, ...]

TYPE_KINDS = (NodeKind.CLASS, NodeKind.MODULE)


def _child(node: Node, idx: int):
    if idx >= len(node.children):
        raise MalformedNode(f"{node.kind.value} node has no child at position {idx}", node)
    return node.children[idx]


def _name_child(node: Node, idx: int) -> str:
    name = _child(node, idx)
    if not isinstance(name, str) or not name:
        raise MalformedNode(f"{node.kind.value} node has no name at position {idx}", node)
    return name


def const_segments(node: Node) -> List[str]:
    """Path segments of a CONST node: `A::B::C` -> ["A", "B", "C"]."""
    if not isinstance(node, Node) or node.kind != NodeKind.CONST:
        raise MalformedNode("expected a constant", node if isinstance(node, Node) else None)
    name = _name_child(node, 1)
    scope = node.children[0]
    if isinstance(scope, Node) and scope.kind == NodeKind.CONST:
        return const_segments(scope) + [name]
    return [name]


def type_segments(node: Node) -> List[str]:
    """Segments a class or module declaration adds to the qualified path."""
    name_node = _child(node, 0)
    if not isinstance(name_node, Node):
        raise MalformedNode(f"{node.kind.value} node has no name constant", node)
    return const_segments(name_node)


def type_name(node: Node) -> str:
    """Simple declared name of a class or module (`class A::B` -> "B")."""
    return type_segments(node)[-1]


def enclosing_names(ancestors: ScopeStack) -> List[str]:
    segments: List[str] = []
    for ancestor in ancestors:
        if ancestor.kind in TYPE_KINDS:
            segments.extend(type_segments(ancestor))
    return segments


def method_name(node: Node) -> str:
    """Declared name of a DEF or DEFS node."""
    if node.kind == NodeKind.DEFS:
        return _name_child(node, 1)
    return _name_child(node, 0)


def method_class_name(node: Node, ancestors: ScopeStack) -> str:
    """
    Qualified class name a method is declared on.

    For `def self.foo` and plain `def foo` this is the lexical enclosing path.
    For `def Foo.bar` the innermost enclosing segment is replaced by the
    receiver's name, since the declaration re-targets that constant.
    """
    if node.kind != NodeKind.DEFS:
        return join_qualified(enclosing_names(ancestors))

    receiver = _child(node, 0)
    if isinstance(receiver, Node) and receiver.kind == NodeKind.SELF:
        return join_qualified(enclosing_names(ancestors))
    if isinstance(receiver, Node) and receiver.kind == NodeKind.CONST:
        names = enclosing_names(ancestors)
        if names:
            names.pop()
        names.append(const_segments(receiver)[-1])
        return join_qualified(names)

    shape = receiver.kind.value if isinstance(receiver, Node) else type(receiver).__name__
    raise UnsupportedReceiverKind(f"unrecognized method receiver: {shape}", node)
