"""
Shared utilities for Ruby parsing.
"""

from typing import Tuple, Union


def _get_source_bytes(source_code: Union[str, bytes]) -> bytes:
    """UTF-8 bytes of the source (for tree-sitter byte offset extraction)."""
    if isinstance(source_code, bytes):
        return source_code
    return source_code.encode("utf-8")


def _extract_text(source_code: Union[str, bytes], start_byte: int, end_byte: int) -> str:
    """
    Extract text from source using tree-sitter byte offsets.

    Tree-sitter returns byte offsets, but Python strings use character offsets,
    which differ as soon as the file has non-ASCII characters. Callers that
    extract many spans should encode once and pass the bytes.
    """
    source_bytes = _get_source_bytes(source_code)
    return source_bytes[start_byte:end_byte].decode("utf-8", errors="replace")


def _node_line_col(node) -> Tuple[int, int]:
    """(1-indexed line, 0-indexed column) of a tree-sitter node."""
    row, column = node.start_point
    return (row + 1, column)
