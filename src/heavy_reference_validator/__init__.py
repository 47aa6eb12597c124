"""Heavy Reference Validator.

This package checks how much content an asset drags in: it walks the
asset's transitive dependencies in an asset registry, sums their
on-disk size and compares the total against a configurable budget.
"""

# Core library interface
from .pipeline import ValidationPipeline, validate
from .registry import SourceRegistry
from .sources.base import DependencySource

# Core types and policies
from .core import (
    AssetKey,
    ConfigurationError,
    HeavyReferenceError,
    IgnoreRules,
    RegistryExportError,
    ResolvedNode,
    Strictness,
    Verdict,
    VerdictStatus,
)
from .config import ValidationConfig, ValidatorSettings, load_settings
from .reporting import build_diagnostic, verdict_to_dict

__version__ = "0.1.0"

# Auto-discover and register all platforms
SourceRegistry.discover_platforms()

__all__ = [
    # Primary library interface
    "validate",
    "ValidationPipeline",
    "SourceRegistry",
    "DependencySource",
    # Configuration
    "ValidationConfig",
    "ValidatorSettings",
    "load_settings",
    # Core types
    "AssetKey",
    "ResolvedNode",
    "IgnoreRules",
    "Strictness",
    "Verdict",
    "VerdictStatus",
    # Reporting
    "build_diagnostic",
    "verdict_to_dict",
    # Errors
    "HeavyReferenceError",
    "ConfigurationError",
    "RegistryExportError",
]
