"""
Node classifier: decides what the feature extractor does with a node.
"""

from enum import Enum
from typing import Dict

from syntax.node import Node, NodeKind


class NodeAction(Enum):
    CLASS_LIKE = "class_like"
    INSTANCE_METHOD = "instance_method"
    STATIC_METHOD = "static_method"
    IGNORE = "ignore"


# Singleton-class blocks are IGNORE: they shape static detection and naming
# but never produce a feature of their own.
NODE_ACTIONS: Dict[NodeKind, NodeAction] = {
    NodeKind.CLASS: NodeAction.CLASS_LIKE,
    NodeKind.MODULE: NodeAction.CLASS_LIKE,
    NodeKind.DEF: NodeAction.INSTANCE_METHOD,
    NodeKind.DEFS: NodeAction.STATIC_METHOD,
    NodeKind.SCLASS: NodeAction.IGNORE,
    NodeKind.SEND: NodeAction.IGNORE,
    NodeKind.CONST: NodeAction.IGNORE,
    NodeKind.SELF: NodeAction.IGNORE,
    NodeKind.BEGIN: NodeAction.IGNORE,
    NodeKind.KWBEGIN: NodeAction.IGNORE,
    NodeKind.OTHER: NodeAction.IGNORE,
}

_unmapped = set(NodeKind) - set(NODE_ACTIONS)
if _unmapped:
    raise RuntimeError(f"NodeKind(s) without a classifier action: {sorted(k.value for k in _unmapped)}")


def classify(node: Node) -> NodeAction:
    """Map a node to the action the feature builder takes for it."""
    return NODE_ACTIONS[node.kind]
