"""Base abstractions for dependency sources.

This module defines the interface the traversal uses to look up node
metadata and forward dependency edges. Implementations wrap a concrete
asset registry (an exported registry file, an editor session, etc.)
and are treated as read-only oracles.
"""

from abc import ABC, abstractmethod

from ..core.query import DependencyQuery
from ..core.types import AssetKey, ResolvedNode, object_path_for


class DependencySource(ABC):
    """Abstract base class for all dependency sources.

    Implementations provide lookup by object path, synthetic nodes for
    primary asset ids, and forward edges. ``resolve`` ties the lookups
    together so the traversal never needs to know which kind of key it
    holds.

    Sources must be safe for concurrent reads if validations run in
    parallel; the traversal never mutates them.
    """

    def list_assets(self) -> list[AssetKey]:
        """List the assets known to this source.

        Optional; sources backed by a live registry may not support it.

        Raises:
            NotImplementedError: If the source cannot enumerate its assets
        """
        raise NotImplementedError(f"{type(self).__name__} cannot list its assets")

    def resolve(self, key: AssetKey) -> ResolvedNode | None:
        """Resolve metadata for a key.

        Packages are looked up by the object path of their main asset
        (``/Game/A/B`` -> ``/Game/A/B.B``). Primary asset ids get a
        synthetic node.

        Args:
            key: Key to resolve

        Returns:
            ResolvedNode, or None if the source has no record for the key
        """
        if key.is_package:
            return self.find_asset_by_object_path(key, object_path_for(key.name))
        return self.create_primary_asset_node(key)

    @abstractmethod
    def find_asset_by_object_path(self, key: AssetKey, object_path: str) -> ResolvedNode | None:
        """Look up a package's main asset.

        Args:
            key: Package key being resolved
            object_path: Object path of the package's main asset

        Returns:
            ResolvedNode, or None if not found
        """
        pass

    @abstractmethod
    def create_primary_asset_node(self, key: AssetKey) -> ResolvedNode:
        """Build metadata for a primary asset id.

        Args:
            key: Primary asset id key

        Returns:
            Synthetic ResolvedNode for the id
        """
        pass

    @abstractmethod
    def get_dependencies(self, key: AssetKey, query: DependencyQuery) -> list[AssetKey]:
        """Get forward dependency edges of a node.

        Args:
            key: Node to expand
            query: Categories and flags edges must match

        Returns:
            Keys of the matching dependencies, in source order
        """
        pass

    def filter_for_current_registry_source(
        self, keys: list[AssetKey], query: DependencyQuery
    ) -> list[AssetKey]:
        """Drop edges outside the active registry view.

        The default view includes everything.

        Args:
            keys: Dependencies returned by ``get_dependencies``
            query: Query the dependencies were requested with

        Returns:
            Filtered keys, in the same order
        """
        return list(keys)
