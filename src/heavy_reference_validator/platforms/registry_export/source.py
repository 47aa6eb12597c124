"""Asset registry export source.

This module provides a DependencySource backed by a JSON export of an
asset registry: one record per asset with its class, ancestry, on-disk
size and outgoing dependency edges. Edges without a category are
package edges on a package record and manage edges on a primary id
record.

Example document::

    {
      "version": 1,
      "assets": [
        {
          "id": "/Game/Characters/BP_Hero",
          "class": "Blueprint",
          "ancestry": ["Blueprint", "BlueprintCore", "Object"],
          "disk_size": 48213,
          "dependencies": [
            {"target": "/Game/Characters/SK_Hero", "category": "package", "flags": ["game", "hard"]},
            {"target": "/Script/Engine"}
          ]
        },
        {
          "id": "Map:Arena",
          "class": "PrimaryAssetLabel",
          "dependencies": [
            {"target": "/Game/Maps/Arena"}
          ]
        }
      ]
    }
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from jsonschema import ValidationError

from ...core.errors import RegistryExportError
from ...core.query import DependencyCategory, DependencyFlag, DependencyQuery
from ...core.schema import (
    REGISTRY_EXPORT_SCHEMA,
    describe_validation_error,
    load_json_document,
    validate_document,
)
from ...core.types import PRIMARY_ASSET_CLASS, AssetKey, ResolvedNode, object_path_for
from ...sources.base import DependencySource

# Flags assumed for edges that don't list any
DEFAULT_EDGE_FLAGS = {
    DependencyCategory.PACKAGE: frozenset({DependencyFlag.GAME, DependencyFlag.HARD}),
    DependencyCategory.MANAGE: frozenset({DependencyFlag.GAME, DependencyFlag.DIRECT}),
}


@dataclass(frozen=True)
class DependencyEdge:
    """Forward edge from one asset to another."""

    target: AssetKey
    category: DependencyCategory
    flags: frozenset[DependencyFlag]


@dataclass
class AssetRecord:
    """One asset in the export."""

    key: AssetKey
    class_name: str
    ancestry: tuple[str, ...] = ()
    disk_size: int | None = None
    dependencies: list[DependencyEdge] = field(default_factory=list)

    def to_node(self) -> ResolvedNode:
        return ResolvedNode(
            key=self.key,
            class_name=self.class_name,
            disk_size=self.disk_size,
            exists=True,
            ancestry=self.ancestry,
        )


def _parse_key(text: str, where: str) -> AssetKey:
    try:
        return AssetKey.parse(text)
    except ValueError as e:
        raise RegistryExportError(f"{where}: {e}") from e


def _parse_edge(data: dict[str, Any], owner: AssetKey, where: str) -> DependencyEdge:
    target = _parse_key(data["target"], where)
    # Packages hold package edges, primary ids hold manage edges
    default_category = DependencyCategory.PACKAGE if owner.is_package else DependencyCategory.MANAGE
    category = DependencyCategory(data.get("category", default_category.value))

    if "flags" in data:
        flags = frozenset(DependencyFlag(f) for f in data["flags"])
    else:
        flags = DEFAULT_EDGE_FLAGS[category]

    return DependencyEdge(target=target, category=category, flags=flags)


def _parse_record(data: dict[str, Any], index: int) -> AssetRecord:
    where = f"assets -> {index}"
    key = _parse_key(data["id"], where)
    class_name = data["class"]

    ancestry = tuple(data.get("ancestry", ()))
    if not ancestry or ancestry[0] != class_name:
        ancestry = (class_name, *ancestry)

    return AssetRecord(
        key=key,
        class_name=class_name,
        ancestry=ancestry,
        disk_size=data.get("disk_size"),
        dependencies=[
            _parse_edge(edge, key, f"{where} -> dependencies -> {i}")
            for i, edge in enumerate(data.get("dependencies", []))
        ],
    )


class RegistryExportSource(DependencySource):
    """Dependency source for an exported asset registry.

    Example:
        >>> source = RegistryExportSource.from_file(Path('registry.json'))
        >>> node = source.resolve(AssetKey.package('/Game/Characters/BP_Hero'))
        >>> node.disk_size
        48213
    """

    def __init__(self, records: list[AssetRecord], include_unknown: bool = True):
        """Initialize the source.

        Args:
            records: Parsed asset records
            include_unknown: Keep edges to assets that are not in the export.
                When False the registry filter drops them, primary ids
                included, restricting traversal to the exported view.

        Raises:
            RegistryExportError: If two records share an id
        """
        self.include_unknown = include_unknown
        self._records: dict[AssetKey, AssetRecord] = {}
        self._by_object_path: dict[str, AssetRecord] = {}

        for record in records:
            if record.key in self._records:
                raise RegistryExportError(f"Duplicate asset id in export: {record.key}")
            self._records[record.key] = record
            if record.key.is_package:
                self._by_object_path[object_path_for(record.key.name)] = record

    @classmethod
    def from_document(cls, document: dict[str, Any], include_unknown: bool = True) -> "RegistryExportSource":
        """Build a source from a parsed export document.

        Raises:
            RegistryExportError: If the document violates the export schema
        """
        try:
            validate_document(document, REGISTRY_EXPORT_SCHEMA)
        except ValidationError as e:
            raise RegistryExportError(f"Invalid registry export {describe_validation_error(e)}") from e

        records = [_parse_record(data, i) for i, data in enumerate(document["assets"])]
        return cls(records, include_unknown=include_unknown)

    @classmethod
    def from_file(cls, path: Path, include_unknown: bool = True) -> "RegistryExportSource":
        """Load a source from an export file.

        Raises:
            RegistryExportError: If the file is missing, not JSON, or invalid
        """
        try:
            document = load_json_document(path)
        except FileNotFoundError as e:
            raise RegistryExportError(f"Registry export not found: {path}") from e
        except ValueError as e:
            raise RegistryExportError(f"Registry export is not valid JSON: {path}: {e}") from e

        return cls.from_document(document, include_unknown=include_unknown)

    def __contains__(self, key: AssetKey) -> bool:
        return key in self._records

    def list_assets(self) -> list[AssetKey]:
        return sorted(self._records)

    def find_asset_by_object_path(self, key: AssetKey, object_path: str) -> ResolvedNode | None:
        record = self._by_object_path.get(object_path)
        if record is None:
            return None
        return record.to_node()

    def create_primary_asset_node(self, key: AssetKey) -> ResolvedNode:
        """Build a node for a primary asset id.

        Exported records for the id supply class and ancestry; otherwise
        the node is synthetic with no size.
        """
        record = self._records.get(key)
        if record is not None:
            return record.to_node()
        return ResolvedNode(
            key=key,
            class_name=PRIMARY_ASSET_CLASS,
            disk_size=None,
            exists=True,
            ancestry=(PRIMARY_ASSET_CLASS,),
        )

    def get_dependencies(self, key: AssetKey, query: DependencyQuery) -> list[AssetKey]:
        record = self._records.get(key)
        if record is None:
            return []
        return [edge.target for edge in record.dependencies if query.matches(edge.category, edge.flags)]

    def filter_for_current_registry_source(
        self, keys: list[AssetKey], query: DependencyQuery
    ) -> list[AssetKey]:
        if self.include_unknown:
            return list(keys)
        return [key for key in keys if key in self._records]
