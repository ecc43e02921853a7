"""
Feature tree model: classes, modules and methods extracted from source files.

The extraction itself lives in `extract`; `features.runner` drives it over a
whole project.
"""

from features.base import (
    ClassFeature,
    MethodFeature,
    Feature,
    Visibility,
    feature_to_dict,
    features_to_dicts,
    public_only,
    iter_methods,
)

__all__ = [
    "ClassFeature",
    "MethodFeature",
    "Feature",
    "Visibility",
    "feature_to_dict",
    "features_to_dicts",
    "public_only",
    "iter_methods",
]
