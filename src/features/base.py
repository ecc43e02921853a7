"""
Feature tree value types.

A feature is one unit of the extracted structural model: a class/module or a
method. A file's feature tree is the tuple of its top-level features; classes
nest methods and further classes in declaration order.

Serialized form (one dict per feature):
    class:  {"name", "location", "children", "type": "class"}
    method: {"name", "location", "type": "function", "class_name", "static"}
            plus "visibility" for non-public methods
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, List, Sequence, Tuple, Union


class Visibility(Enum):
    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"


@dataclass(frozen=True)
class ClassFeature:
    """A class or module declaration."""

    name: str
    location: str  # "<file_path>:<line>"
    children: Tuple["Feature", ...] = ()

    @property
    def visibility(self) -> Visibility:
        return Visibility.PUBLIC


@dataclass(frozen=True)
class MethodFeature:
    """An instance or static method declaration."""

    name: str
    location: str
    class_name: str = ""  # "::"-joined enclosing path, empty at top level
    static: bool = False
    visibility: Visibility = Visibility.PUBLIC


Feature = Union[ClassFeature, MethodFeature]


def feature_to_dict(feature: Feature) -> Dict[str, Any]:
    if isinstance(feature, ClassFeature):
        return {
            "name": feature.name,
            "location": feature.location,
            "children": [feature_to_dict(c) for c in feature.children],
            "type": "class",
        }
    result: Dict[str, Any] = {
        "name": feature.name,
        "location": feature.location,
        "type": "function",
        "class_name": feature.class_name,
        "static": feature.static,
    }
    if feature.visibility != Visibility.PUBLIC:
        result["visibility"] = feature.visibility.value
    return result


def features_to_dicts(features: Sequence[Feature]) -> List[Dict[str, Any]]:
    return [feature_to_dict(f) for f in features]


def public_only(features: Sequence[Feature]) -> Tuple[Feature, ...]:
    """Copy of a feature tree without protected and private methods."""
    kept: List[Feature] = []
    for feature in features:
        if isinstance(feature, ClassFeature):
            kept.append(replace(feature, children=public_only(feature.children)))
        elif feature.visibility == Visibility.PUBLIC:
            kept.append(feature)
    return tuple(kept)


def iter_methods(features: Sequence[Feature]):
    """Yield every method feature in the tree, depth first."""
    for feature in features:
        if isinstance(feature, MethodFeature):
            yield feature
        else:
            yield from iter_methods(feature.children)
