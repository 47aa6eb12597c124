"""Core graph model and policies.

This package contains the asset key model, the dependency query and
ignore policies, the traversal engine and the budget evaluator used by
every dependency source.
"""

from .budget import Strictness, Verdict, VerdictStatus, evaluate_budget, kilobytes_to_bytes
from .errors import ConfigurationError, HeavyReferenceError, RegistryExportError
from .ignore import IgnoreRules, is_node_ignored, is_root_ignored, scoped_classes_for
from .query import DependencyCategory, DependencyFlag, DependencyQuery, QueryPolicy, query_for
from .traversal import CODE_PACKAGE_PREFIX, TraversalResult, traverse
from .types import AssetKey, AssetKeyKind, ResolvedNode

__all__ = [
    "AssetKey",
    "AssetKeyKind",
    "ResolvedNode",
    "DependencyCategory",
    "DependencyFlag",
    "DependencyQuery",
    "QueryPolicy",
    "query_for",
    "IgnoreRules",
    "is_root_ignored",
    "is_node_ignored",
    "scoped_classes_for",
    "CODE_PACKAGE_PREFIX",
    "TraversalResult",
    "traverse",
    "Strictness",
    "Verdict",
    "VerdictStatus",
    "evaluate_budget",
    "kilobytes_to_bytes",
    "HeavyReferenceError",
    "ConfigurationError",
    "RegistryExportError",
]
