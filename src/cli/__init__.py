"""
CLI utilities: environment validation, file collection, debug commands.
"""

from cli.helpers import (
    validate_environment,
    collect_source_files,
)
from cli.debug import (
    dump_ast_tree,
    dump_node_tree,
    dump_ast_impl,
    check_parser_impl,
)

__all__ = [
    "validate_environment",
    "collect_source_files",
    "dump_ast_tree",
    "dump_node_tree",
    "dump_ast_impl",
    "check_parser_impl",
]
