"""
Method visibility from preceding sibling statements.

A bare `private` / `protected` / `public` statement switches the default
visibility of the declarations that follow it in the same block. Only the
immediate parent's children before the method are looked at, nearest first.

Known limitation: argument-style calls (`private :foo`, `private def foo`)
are not recognized and leave the method public.
"""

from typing import List

from syntax.node import Node, NodeKind
from features.base import Visibility
from extract.names import ScopeStack

VISIBILITY_SELECTORS = {v.value: v for v in Visibility}


def preceding_siblings(node: Node, ancestors: ScopeStack) -> List[Node]:
    """Sibling nodes before `node` in its parent's children, in source order."""
    if not ancestors:
        return []
    parent = ancestors[-1]
    siblings: List[Node] = []
    for child in parent.children:
        if child is node:
            return siblings
        if isinstance(child, Node):
            siblings.append(child)
    return []


def bare_visibility(node: Node) -> "Visibility | None":
    """Visibility switched by `node` if it is a bare visibility statement."""
    if node.kind != NodeKind.SEND or len(node.children) != 2:
        return None
    receiver, selector = node.children
    if receiver is not None or not isinstance(selector, str):
        return None
    return VISIBILITY_SELECTORS.get(selector)


def resolve_visibility(node: Node, ancestors: ScopeStack) -> Visibility:
    for sibling in reversed(preceding_siblings(node, ancestors)):
        visibility = bare_visibility(sibling)
        if visibility is not None:
            return visibility
    return Visibility.PUBLIC
