"""
Generic syntax tree consumed by the feature extractor.

The shape follows the classic Ruby AST: every node has a kind tag, a tuple of
positional children and a source location. Children are nodes, plain strings
(identifiers, selectors) or None for absent optional parts:

    CLASS   (name CONST, superclass | None, body | None)
    MODULE  (name CONST, body | None)
    SCLASS  (target, body | None)
    DEF     (name, params | None, body | None)
    DEFS    (receiver, name, params | None, body | None)
    SEND    (receiver | None, selector, *args)
    CONST   (scope CONST | None, name)
    BEGIN, KWBEGIN, OTHER: sub-nodes in source order

Nodes are immutable once built.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, Tuple


class NodeKind(Enum):
    CLASS = "class"
    MODULE = "module"
    SCLASS = "sclass"  # class << self ... end
    DEF = "def"
    DEFS = "defs"  # def self.foo / def Foo.foo
    SEND = "send"
    CONST = "const"
    SELF = "self"
    BEGIN = "begin"  # implicit statement grouping
    KWBEGIN = "kwbegin"  # explicit begin ... end
    OTHER = "other"


@dataclass(frozen=True)
class Location:
    """Source position: 1-indexed line, 0-indexed column."""

    line: int
    column: int = 0


@dataclass(frozen=True, eq=False)
class Node:
    """
    One syntax tree node.

    Equality is identity: two structurally equal statements at different
    positions are different nodes.
    """

    kind: NodeKind
    children: Tuple[Any, ...] = ()
    location: Location = Location(1)

    def child_nodes(self) -> Iterator["Node"]:
        """Yield children that are nodes, skipping names and empty slots."""
        for child in self.children:
            if isinstance(child, Node):
                yield child

    def __repr__(self) -> str:
        return f"Node({self.kind.value}, line={self.location.line})"


def const(name: str, scope: "Node | None" = None, line: int = 1) -> Node:
    """Build a CONST node (`Foo`, or `A::Foo` when scope is given)."""
    return Node(NodeKind.CONST, (scope, name), Location(line))


def const_path(name: str, line: int = 1) -> Node:
    """Build a CONST node chain from a qualified path ("A::B" -> A::B)."""
    node = None
    for part in name.split("::"):
        node = const(part, node, line)
    assert node is not None
    return node
