"""
Debug and development CLI commands: AST dumps, parser check.
"""

from typing import List

from ruby.parse import parse_ruby_source, find_error_nodes
from ruby.cst_to_node import build_node_from_source
from ruby.utils import _extract_text, _get_source_bytes
from syntax.node import Node
from core.utils import error


def dump_ast_tree(source_code: str, root, max_depth: int = 10) -> None:
    """Print the tree-sitter AST structure for debugging."""
    source_bytes = _get_source_bytes(source_code)

    def print_node(node, depth: int = 0):
        if depth > max_depth:
            return

        indent = "  " * depth
        text = _extract_text(source_bytes, node.start_byte, node.end_byte)

        if len(text) > 60:
            text = text[:60] + "..."
        text = text.replace("\n", "\\n")

        print(f"{indent}{node.type} [{node.start_byte}:{node.end_byte}] {repr(text)}")

        for child in node.children:
            print_node(child, depth + 1)

    print_node(root)


def dump_node_tree(node: Node, max_depth: int = 20) -> None:
    """Print the generic syntax tree the feature extractor sees."""

    def print_node(n: Node, depth: int = 0):
        if depth > max_depth:
            return
        indent = "  " * depth
        names = [repr(c) for c in n.children if isinstance(c, str)]
        names_str = f" {' '.join(names)}" if names else ""
        print(f"{indent}({n.kind.value}{names_str}) :{n.location.line}")
        for child in n.child_nodes():
            print_node(child, depth + 1)

    print_node(node)


def check_parser_errors(input_file: str, source_code: str, root) -> bool:
    """Check for parser errors in AST. Returns True if errors found."""
    errors: list = []
    find_error_nodes(root, source_code, errors)
    if errors:
        error(f"PARSER ERRORS FOUND in {input_file}: {len(errors)} ERROR node(s)")
        for err_node, err_depth, err_text in errors:
            indent = "  " * err_depth
            line = err_node.start_point[0] + 1
            error(f"{indent}ERROR line {line} [{err_node.start_byte}:{err_node.end_byte}] {repr(err_text)}")
        return True
    return False


def check_parser_impl(source_files: List[str]) -> int:
    """Validate all files parse correctly (no ERROR nodes)."""
    print("Parser check mode: Validating parse trees...")
    has_errors = False
    for source_file in source_files:
        try:
            with open(source_file, "r", encoding="utf-8") as f:
                source_code = f.read()
        except Exception as e:
            error(f"Failed to read {source_file}: {e}")
            has_errors = True
            continue
        try:
            root = parse_ruby_source(source_code)
        except Exception as e:
            error(f"Failed to parse {source_file}: {e}")
            has_errors = True
            continue
        if check_parser_errors(source_file, source_code, root):
            has_errors = True
    if has_errors:
        error("Parser validation FAILED: ERROR nodes found in AST")
        return 1
    else:
        print("✓ Parser validation PASSED: No ERROR nodes found")
        return 0


def dump_ast_impl(source_files: List[str]) -> None:
    """Dump both the tree-sitter CST and the generic syntax tree for all source files."""
    for source_file in source_files:
        try:
            with open(source_file, "r", encoding="utf-8") as f:
                source_code = f.read()
        except (OSError, UnicodeDecodeError) as e:
            error(f"Failed to read {source_file}: {e}")
            continue
        try:
            root = parse_ruby_source(source_code)
        except Exception as e:
            error(f"parsing {source_file}: {e}")
            continue
        print(f"\n=== AST for {source_file} ===")
        dump_ast_tree(source_code, root)
        print(f"\n=== Syntax tree for {source_file} ===")
        dump_node_tree(build_node_from_source(source_code, root))
        print("=== End AST ===\n")
