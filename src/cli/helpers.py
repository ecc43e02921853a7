"""
CLI helper functions: environment validation, file collection.
"""

import importlib.util
import sys
from pathlib import Path
from typing import List

from core.utils import error
from ruby.parse import RUBY_EXTENSIONS

# Dependency directories skipped at any depth
SKIP_DIR_NAMES = {"vendor", "node_modules"}

# Build output directories, skipped only directly under the input root
ROOT_BUILD_DIR_NAMES = {"tmp", "log"}


def validate_environment() -> None:
    """
    Validate that the tree-sitter Ruby grammar is importable.
    Exits with error if validation fails.
    """
    errors = []
    for module_name, package in (("tree_sitter", "tree-sitter"), ("tree_sitter_ruby", "tree-sitter-ruby")):
        if importlib.util.find_spec(module_name) is None:
            errors.append(f"{package} not installed. Run: pip install {package}")

    if errors:
        error("Environment validation failed:\n")
        for i, err in enumerate(errors, 1):
            error(f"\n{i}. {err}\n")
        sys.exit(1)


def _is_skipped_dir(dir_path: Path, root: Path) -> bool:
    """Check if a directory under root is hidden, a dependency directory or a root build directory."""
    parts = dir_path.relative_to(root).parts
    if parts and parts[0] in ROOT_BUILD_DIR_NAMES:
        return True
    for part in parts:
        if part.startswith(".") or part in SKIP_DIR_NAMES:
            return True
    return False


def collect_source_files(input_path: str) -> List[str]:
    """Collect Ruby source files from a path (file or directory)."""
    path = Path(input_path)
    if not path.exists():
        return []
    if path.is_file():
        return [str(path)]
    if path.is_dir():
        source_files = []
        for ext in RUBY_EXTENSIONS:
            for file_path in path.rglob(f"*{ext}"):
                if _is_skipped_dir(file_path.parent, path):
                    continue
                source_files.append(str(file_path))
        return sorted(source_files)
    return []
