"""
Feature extraction runner.

Parses every source file of a project context and extracts its feature tree.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from core.context import ProjectContext, SourceFileContext

from core.utils import debug, warn, error
from extract.builder import extract_features
from ruby.parse import parse_ruby_source
from ruby.cst_to_node import build_node_from_source


class FeatureRunner:
    """Fills each SourceFileContext with its syntax tree, features and diagnostics."""

    def run(self, ctx: "ProjectContext") -> None:
        for file_ctx in ctx.source_files.values():
            self.run_file(file_ctx)

        num_features = len(ctx.features)
        num_diagnostics = len(ctx.diagnostics)
        debug(f"[FeatureRunner] {len(ctx.source_files)} file(s), {num_features} top-level feature(s), {num_diagnostics} diagnostic(s)")

    def run_file(self, file_ctx: "SourceFileContext") -> None:
        path = file_ctx.path
        if file_ctx.source_code is None:
            try:
                with open(path, "r", encoding="utf-8") as f:
                    file_ctx.source_code = f.read()
            except (OSError, UnicodeDecodeError) as e:
                error(f"Failed to read {path}: {e}")
                file_ctx.failed = True
                return

        try:
            file_ctx.root = parse_ruby_source(file_ctx.source_code)
            file_ctx.node = build_node_from_source(file_ctx.source_code, file_ctx.root)
        except Exception as e:
            error(f"Failed to parse {path}: {e}")
            file_ctx.failed = True
            return

        result = extract_features(file_ctx.node, path)
        file_ctx.features = result.features
        file_ctx.diagnostics = result.diagnostics

        for diagnostic in result.diagnostics:
            warn(str(diagnostic))
        debug(f"[FeatureRunner] {path}: {len(result.features)} top-level feature(s)")
