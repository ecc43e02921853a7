"""
Ruby source code parsing - main entry points.

- ruby/utils.py: shared utilities (text extraction, line/col)
- ruby/cst_to_node.py: tree-sitter CST -> generic syntax tree
"""

import sys
from typing import Tuple

from core.utils import error
from syntax.node import Node
from ruby.utils import _extract_text
from ruby.cst_to_node import build_node_from_source

try:
    import tree_sitter_ruby
    from tree_sitter import Language, Parser
except ImportError:
    error("tree-sitter not installed. Run: pip install tree-sitter tree-sitter-ruby")
    sys.exit(1)

RUBY_EXTENSIONS = (".rb",)

_ruby_language = None


def _setup_tree_sitter_ruby() -> Language:
    global _ruby_language
    if _ruby_language is None:
        _ruby_language = Language(tree_sitter_ruby.language())
    return _ruby_language


def parse_ruby_source(source_code: str):
    """
    Parse Ruby source code using tree-sitter and return the root node.
    """
    parser = Parser(_setup_tree_sitter_ruby())
    tree = parser.parse(bytes(source_code, "utf8"))
    return tree.root_node


def parse_ruby_file(path: str) -> Tuple[str, object, Node]:
    """Read and parse a Ruby file: (source_code, tree-sitter root, syntax tree)."""
    with open(path, "r", encoding="utf-8") as f:
        source_code = f.read()
    root = parse_ruby_source(source_code)
    return source_code, root, build_node_from_source(source_code, root)


def find_error_nodes(node, source_code: str, errors: list, depth: int = 0, max_depth: int = 50) -> None:
    """Find ERROR nodes in the parse tree (for debugging parse failures)."""
    if depth > max_depth:
        return
    if node.type == "ERROR" or node.is_missing:
        text = _extract_text(source_code, node.start_byte, node.end_byte)
        if len(text) > 100:
            text = text[:100] + "..."
        errors.append((node, depth, text))
    for child in node.children:
        find_error_nodes(child, source_code, errors, depth + 1, max_depth)
