"""Shared fixtures for validator tests."""

from typing import Any

import pytest

from heavy_reference_validator.platforms.registry_export import RegistryExportSource


def make_asset(
    asset_id: str,
    cls: str = "StaticMesh",
    size: int | None = 0,
    deps: tuple[str, ...] | list[str] = (),
    ancestry: list[str] | None = None,
) -> dict[str, Any]:
    """Build one asset record for a registry export document."""
    record: dict[str, Any] = {
        "id": asset_id,
        "class": cls,
        "disk_size": size,
        "dependencies": [{"target": target} for target in deps],
    }
    if ancestry is not None:
        record["ancestry"] = ancestry
    return record


@pytest.fixture
def asset():
    """Factory for asset records."""
    return make_asset


@pytest.fixture
def build_source():
    """Factory for registry export sources built from asset records."""

    def _build(*assets: dict[str, Any], include_unknown: bool = True) -> RegistryExportSource:
        return RegistryExportSource.from_document(
            {"version": 1, "assets": list(assets)},
            include_unknown=include_unknown,
        )

    return _build


@pytest.fixture
def hero_document() -> dict[str, Any]:
    """Blueprint -> mesh -> texture chain with a code reference."""
    return {
        "version": 1,
        "assets": [
            make_asset(
                "/Game/Characters/BP_Hero",
                cls="Blueprint",
                size=50_000,
                deps=["/Game/Characters/SK_Hero", "/Script/Engine"],
                ancestry=["Blueprint", "BlueprintCore", "Object"],
            ),
            make_asset(
                "/Game/Characters/SK_Hero",
                cls="SkeletalMesh",
                size=2_000_000,
                deps=["/Game/Characters/T_Hero"],
            ),
            make_asset("/Game/Characters/T_Hero", cls="Texture2D", size=3_000_000),
        ],
    }
