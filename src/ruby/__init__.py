"""
Ruby front end: tree-sitter parsing and conversion to the generic syntax tree.
"""
