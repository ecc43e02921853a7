"""
Feature tree builder - walks a syntax tree and assembles its feature tree.

The walk is depth first. Every visited node is on the scope stack while its
subtree is visited; the stack is a tuple extended per call, so it is never
shared between siblings.

Where features attach:
- a class/module becomes a ClassFeature holding the features of its subtree
- a method becomes a MethodFeature on the nearest enclosing class (or the
  root); anything declared inside a method body attaches there too
- singleton-class blocks are transparent

Failures on single nodes become diagnostics:
- UnsupportedReceiverKind: the method is skipped, its subtree still visited
- MalformedNode: the whole subtree is skipped
- subtrees nested deeper than MAX_DEPTH are skipped like malformed ones
"""

from dataclasses import dataclass
from typing import List, Tuple

from core.utils import debug
from syntax.node import Node, NodeKind
from features.base import ClassFeature, MethodFeature, Feature
from extract.classify import NodeAction, classify
from extract.errors import Diagnostic, ExtractionError, MalformedNode, UnsupportedReceiverKind
from extract.names import ScopeStack, type_name, method_name, method_class_name
from extract.visibility import resolve_visibility


@dataclass(frozen=True)
class ExtractionResult:
    """Feature tree of one file plus the per-node failures met building it."""

    features: Tuple[Feature, ...] = ()
    diagnostics: Tuple[Diagnostic, ...] = ()


def is_singleton_scoped(ancestors: ScopeStack) -> bool:
    """True when the parent is a singleton-class block, or a grouping directly inside one."""
    if not ancestors:
        return False
    parent = ancestors[-1]
    if parent.kind == NodeKind.SCLASS:
        return True
    # Only one grouping level directly inside the singleton block is transparent
    return parent.kind == NodeKind.BEGIN and len(ancestors) > 1 and ancestors[-2].kind == NodeKind.SCLASS


class FeatureTreeBuilder:
    """
    Builds the feature tree of one file.

    Usage:
        builder = FeatureTreeBuilder("app/models/user.rb")
        result = builder.build(root_node)
    """

    # Deepest scope stack visited; deeper subtrees become diagnostics
    MAX_DEPTH = 200

    def __init__(self, file_path: str):
        self.file_path = file_path
        self._diagnostics: List[Diagnostic] = []

    def _location(self, node: Node) -> str:
        return f"{self.file_path}:{node.location.line}"

    def _record(self, err: ExtractionError) -> None:
        diagnostic = Diagnostic.from_error(err, self.file_path)
        debug(f"[FeatureTreeBuilder] {diagnostic}")
        self._diagnostics.append(diagnostic)

    def build(self, root) -> ExtractionResult:
        """Extract the feature tree rooted at `root`. Never raises for bad input."""
        self._diagnostics = []
        if not isinstance(root, Node):
            self._record(MalformedNode(f"root is not a syntax node: {type(root).__name__}"))
            return ExtractionResult((), tuple(self._diagnostics))

        try:
            features = self._visit(root, ())
        except RecursionError:
            self._record(MalformedNode("syntax tree nested too deeply to traverse", root))
            features = []

        return ExtractionResult(tuple(features), tuple(self._diagnostics))

    def _visit_children(self, node: Node, scope: ScopeStack) -> List[Feature]:
        features: List[Feature] = []
        for child in node.child_nodes():
            features.extend(self._visit(child, scope))
        return features

    def _visit(self, node: Node, ancestors: ScopeStack) -> List[Feature]:
        if len(ancestors) >= self.MAX_DEPTH:
            self._record(MalformedNode(f"syntax tree nested deeper than {self.MAX_DEPTH} levels", node))
            return []

        scope = ancestors + (node,)
        action = classify(node)

        if action == NodeAction.IGNORE:
            return self._visit_children(node, scope)

        if action == NodeAction.CLASS_LIKE:
            try:
                name = type_name(node)
            except MalformedNode as e:
                self._record(e)
                return []
            children = self._visit_children(node, scope)
            return [ClassFeature(name, self._location(node), tuple(children))]

        try:
            feature = self._method_feature(node, ancestors, action)
        except UnsupportedReceiverKind as e:
            self._record(e)
            return self._visit_children(node, scope)
        except MalformedNode as e:
            self._record(e)
            return []

        return [feature] + self._visit_children(node, scope)

    def _method_feature(self, node: Node, ancestors: ScopeStack, action: NodeAction) -> MethodFeature:
        if action == NodeAction.STATIC_METHOD:
            static = True
        else:
            static = is_singleton_scoped(ancestors)

        return MethodFeature(
            name=method_name(node),
            location=self._location(node),
            class_name=method_class_name(node, ancestors),
            static=static,
            visibility=resolve_visibility(node, ancestors),
        )


def extract_features(root, file_path: str) -> ExtractionResult:
    """Build the feature tree of one parsed file."""
    return FeatureTreeBuilder(file_path).build(root)
