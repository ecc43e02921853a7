"""
Generic syntax tree shared by the parser adapters and the feature extractor.
"""

from syntax.node import Node, NodeKind, Location, const, const_path

__all__ = ["Node", "NodeKind", "Location", "const", "const_path"]
