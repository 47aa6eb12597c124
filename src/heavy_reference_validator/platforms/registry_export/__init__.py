"""Registry export platform.

This platform reads a JSON export of an asset registry so validation
can run outside the editor (CI, pre-submit hooks, scripts).
"""

from pathlib import Path
from typing import Any

from .source import AssetRecord, DependencyEdge, RegistryExportSource

# Auto-register with the registry
from ...registry import SourceRegistry


def _create_registry_export_source(
    path: Path | None = None,
    document: dict[str, Any] | None = None,
    include_unknown: bool = True,
    **kwargs,
) -> RegistryExportSource:
    """Factory function for creating registry export sources.

    Args:
        path: Export file to load
        document: Already parsed export document (used instead of path)
        include_unknown: Keep edges to assets missing from the export
        **kwargs: Additional parameters (unused)

    Returns:
        RegistryExportSource instance

    Raises:
        ValueError: If neither path nor document is given
    """
    if document is not None:
        return RegistryExportSource.from_document(document, include_unknown=include_unknown)
    if path is None:
        raise ValueError("registry_export source needs a 'path' or a 'document'")
    return RegistryExportSource.from_file(Path(path), include_unknown=include_unknown)


# Auto-register at module import
SourceRegistry.register_factory('registry_export', _create_registry_export_source)

__all__ = [
    "AssetRecord",
    "DependencyEdge",
    "RegistryExportSource",
]
