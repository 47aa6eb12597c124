"""Type definitions for the asset dependency graph.

This module defines the identity of a node in the dependency graph
(AssetKey) and the metadata a dependency source resolves for it
(ResolvedNode).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

# Class name given to nodes the registry could not locate
MISSING_ASSET_CLASS = "MissingAsset"

# Class name given to synthetic nodes built from a primary asset id
PRIMARY_ASSET_CLASS = "PrimaryAssetId"


class AssetKeyKind(str, Enum):
    """Tag of an AssetKey."""

    PACKAGE = "package"
    PRIMARY = "primary"


@dataclass(frozen=True, order=True)
class AssetKey:
    """Identity of a node in the dependency graph.

    A key is either a package (``/Game/Weapons/BP_Rifle``) or a primary
    asset id (``Map:Arena``). Keys are hashable and totally ordered
    (by kind, then payload) so they can be used in sets and sorted for
    deterministic output.

    Use the ``package`` and ``primary`` constructors rather than building
    keys field by field.

    Attributes:
        kind: Whether this is a package or a primary asset id
        primary_type: Primary asset type (empty for packages)
        name: Long package name, or the primary asset name
    """

    kind: AssetKeyKind
    primary_type: str
    name: str

    @classmethod
    def package(cls, name: str) -> "AssetKey":
        """Build a package key from a long package name."""
        return cls(AssetKeyKind.PACKAGE, "", name)

    @classmethod
    def primary(cls, primary_type: str, name: str) -> "AssetKey":
        """Build a primary asset id key."""
        return cls(AssetKeyKind.PRIMARY, primary_type, name)

    @classmethod
    def parse(cls, text: str) -> "AssetKey":
        """Parse the text form of a key.

        Example:
            >>> AssetKey.parse("/Game/Weapons/BP_Rifle").is_package
            True
            >>> str(AssetKey.parse("Map:Arena"))
            'Map:Arena'

        Args:
            text: Package name (leading ``/``) or ``Type:Name`` primary id

        Returns:
            The parsed key

        Raises:
            ValueError: If the text is neither form
        """
        text = text.strip()
        if text.startswith("/"):
            return cls.package(text)

        primary_type, sep, name = text.partition(":")
        if not sep or not primary_type or not name:
            raise ValueError(
                f"Invalid asset key: '{text}'. "
                "Expected a package name like /Game/Path/Asset or a primary id like Type:Name"
            )
        return cls.primary(primary_type, name)

    @property
    def is_package(self) -> bool:
        return self.kind is AssetKeyKind.PACKAGE

    @property
    def is_primary(self) -> bool:
        return self.kind is AssetKeyKind.PRIMARY

    @property
    def package_name(self) -> str:
        """Long package name, or empty string for primary ids."""
        return self.name if self.is_package else ""

    @property
    def is_valid(self) -> bool:
        """Whether the key carries a usable package name or primary id."""
        if self.is_package:
            return bool(self.name)
        return bool(self.primary_type) and bool(self.name)

    def __str__(self) -> str:
        if self.is_package:
            return self.name
        return f"{self.primary_type}:{self.name}"


def object_path_for(package_name: str) -> str:
    """Build the object path of the main asset in a package.

    Example:
        "/Game/Weapons/BP_Rifle" -> "/Game/Weapons/BP_Rifle.BP_Rifle"

    Args:
        package_name: Long package name

    Returns:
        ``<package>.<trailing segment>``
    """
    asset_name = package_name.rstrip("/").rsplit("/", 1)[-1]
    return f"{package_name}.{asset_name}"


@dataclass(frozen=True)
class ResolvedNode:
    """Metadata resolved for an AssetKey.

    Attributes:
        key: The key this node was resolved for
        class_name: Most specific class of the asset
        disk_size: On-disk size in bytes, None if it could not be determined
        exists: False for keys that did not resolve to a concrete asset
        ancestry: Class names from most specific to most general
    """

    key: AssetKey
    class_name: str = MISSING_ASSET_CLASS
    disk_size: int | None = None
    exists: bool = True
    ancestry: tuple[str, ...] = ()

    @classmethod
    def placeholder(cls, key: AssetKey) -> "ResolvedNode":
        """Node used when the registry has no record for a key."""
        return cls(key=key, class_name=MISSING_ASSET_CLASS, disk_size=None, exists=False)

    @property
    def lineage(self) -> frozenset[str]:
        """Own class plus every ancestor class."""
        classes = set(self.ancestry)
        if self.class_name:
            classes.add(self.class_name)
        return frozenset(classes)

    def is_a(self, classes: Iterable[str]) -> bool:
        """Check whether this node is, or descends from, any of the classes."""
        return not self.lineage.isdisjoint(classes)
