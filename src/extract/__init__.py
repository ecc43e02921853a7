"""
Feature extraction: syntax tree -> ordered feature tree.

- extract/classify.py: what to do with each node kind
- extract/names.py: declared names and qualified class paths
- extract/visibility.py: public/protected/private from preceding statements
- extract/builder.py: the traversal that assembles the tree
"""

from extract.builder import ExtractionResult, FeatureTreeBuilder, extract_features
from extract.classify import NodeAction, classify
from extract.errors import (
    Diagnostic,
    ExtractionError,
    MalformedNode,
    UnsupportedReceiverKind,
    UnclassifiableReceiver,
)

__all__ = [
    "ExtractionResult",
    "FeatureTreeBuilder",
    "extract_features",
    "NodeAction",
    "classify",
    "Diagnostic",
    "ExtractionError",
    "MalformedNode",
    "UnsupportedReceiverKind",
    "UnclassifiableReceiver",
]
