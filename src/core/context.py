"""
Describes the per-run context keeping the parsed sources and extracted feature trees of the project under analysis.
"""

from typing import List, Dict, Any, Optional, Tuple
from dataclasses import dataclass

from syntax.node import Node
from features.base import Feature
from extract.errors import Diagnostic


@dataclass
class SourceFileContext:
    path: str
    root: Optional[Any] = None  # tree-sitter root node
    node: Optional[Node] = None  # generic syntax tree
    source_code: Optional[str] = None
    features: Tuple[Feature, ...] = ()
    diagnostics: Tuple[Diagnostic, ...] = ()
    failed: bool = False  # True if the file could not be read or parsed


class ProjectContext:
    """
    Describes the whole project-under-analysis: one SourceFileContext per file,
    in the order the files were collected.
    """

    def __init__(self, source_files: List[str]):
        self.source_files: Dict[str, SourceFileContext] = {path: SourceFileContext(path) for path in source_files}

    @property
    def features(self) -> List[Feature]:
        """Top-level features of all files, file order first, then declaration order."""
        result: List[Feature] = []
        for file_ctx in self.source_files.values():
            result.extend(file_ctx.features)
        return result

    @property
    def diagnostics(self) -> List[Diagnostic]:
        result: List[Diagnostic] = []
        for file_ctx in self.source_files.values():
            result.extend(file_ctx.diagnostics)
        return result

    @property
    def failed_files(self) -> List[str]:
        return [path for path, file_ctx in self.source_files.items() if file_ctx.failed]
