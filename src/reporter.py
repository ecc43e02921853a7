import json
import os
from enum import Enum
from typing import List, Optional, Sequence, TextIO

from core.context import ProjectContext
from core.utils import get_simple_name
from features.base import ClassFeature, Feature, Visibility, features_to_dicts, public_only


_USE_COLOR = not os.environ.get("FEATMAP_NO_COLORS")


class _C:
    """ANSI color codes."""

    RESET = "\033[0m" if _USE_COLOR else ""
    BOLD = "\033[1m" if _USE_COLOR else ""
    DIM = "\033[2m" if _USE_COLOR else ""
    RED = "\033[31m" if _USE_COLOR else ""
    YELLOW = "\033[33m" if _USE_COLOR else ""
    CYAN = "\033[36m" if _USE_COLOR else ""


def _visibility_color(visibility: Visibility) -> str:
    colors = {
        Visibility.PUBLIC: "",
        Visibility.PROTECTED: _C.YELLOW,
        Visibility.PRIVATE: _C.RED,
    }
    return colors.get(visibility, "")


class OutputMode(Enum):
    """Feature tree output formats."""

    SHORT = "short"  # Indented outline per file
    JSON = "json"  # Machine-readable feature list


def _line_of(location: str) -> str:
    return location.rsplit(":", 1)[-1]


def format_outline(features: Sequence[Feature], indent: int = 1) -> List[str]:
    """Render a feature tree as indented outline lines."""
    lines: List[str] = []
    pad = "  " * indent
    for feature in features:
        line = _line_of(feature.location)
        if isinstance(feature, ClassFeature):
            lines.append(f"{pad}{_C.BOLD}{feature.name}{_C.RESET} {_C.DIM}:{line}{_C.RESET}")
            lines.extend(format_outline(feature.children, indent + 1))
            continue

        # Methods nested under their class only need the simple owner name
        owner = get_simple_name(feature.class_name) if feature.class_name else ""
        sep = "." if feature.static else "#"
        label = f"{owner}{sep}{feature.name}" if owner else feature.name
        tags = []
        if feature.static:
            tags.append("static")
        if feature.visibility != Visibility.PUBLIC:
            color = _visibility_color(feature.visibility)
            tags.append(f"{color}{feature.visibility.value}{_C.RESET}")
        tags_str = f" [{', '.join(tags)}]" if tags else ""
        lines.append(f"{pad}{_C.CYAN}{label}{_C.RESET}{tags_str} {_C.DIM}:{line}{_C.RESET}")
    return lines


def report_features(
    ctx: ProjectContext,
    output_mode: OutputMode = OutputMode.SHORT,
    output_file: Optional[TextIO] = None,
    only_public: bool = False,
) -> int:
    """
    Report the extracted feature trees.

    Args:
        ctx: Project context with extracted features
        output_mode: SHORT (default) or JSON
        output_file: Optional file handle to write output to (in addition to stdout)
        only_public: Drop protected and private methods from the output

    Returns: Number of top-level features reported
    """
    if output_mode == OutputMode.JSON:
        return report_features_json(ctx, output_file, only_public)

    def _print(msg: str = ""):
        print(msg)
        if output_file:
            print(msg, file=output_file)

    total = 0
    for path, file_ctx in ctx.source_files.items():
        features = public_only(file_ctx.features) if only_public else file_ctx.features
        if not features:
            continue
        total += len(features)
        _print(f"{_C.BOLD}{path}{_C.RESET}")
        for line in format_outline(features):
            _print(line)

    if total == 0:
        _print("No features found")
    return total


def report_features_json(
    ctx: ProjectContext,
    output_file: Optional[TextIO] = None,
    only_public: bool = False,
) -> int:
    """Report the top-level features of all files as one JSON list."""
    features = ctx.features
    if only_public:
        features = list(public_only(features))

    json_str = json.dumps(features_to_dicts(features), indent=2)
    print(json_str)
    if output_file:
        print(json_str, file=output_file)

    return len(features)
