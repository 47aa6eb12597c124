"""Tests for the validation entry point and pipeline."""

import logging

import pytest

from heavy_reference_validator import SourceRegistry, ValidationPipeline, validate
from heavy_reference_validator.config import ValidationConfig
from heavy_reference_validator.core.budget import Strictness, VerdictStatus, kilobytes_to_bytes
from heavy_reference_validator.core.ignore import IgnoreRules
from heavy_reference_validator.core.types import AssetKey
from heavy_reference_validator.platforms.registry_export import RegistryExportSource

HERO = AssetKey.package("/Game/Characters/BP_Hero")


@pytest.fixture
def hero_source(hero_document) -> RegistryExportSource:
    return RegistryExportSource.from_document(hero_document)


class TestValidate:
    """Test end-to-end validation against a registry export."""

    def test_heavy_chain_fails_when_strict(self, hero_source: RegistryExportSource) -> None:
        config = ValidationConfig(max_bytes=kilobytes_to_bytes(4096), strictness=Strictness.ERROR)

        verdict = validate(HERO, config, hero_source)

        assert verdict.status is VerdictStatus.FAIL
        assert verdict.total_bytes == 5_000_000
        assert verdict.root == HERO

    def test_heavy_chain_warns_by_default(self, hero_source: RegistryExportSource) -> None:
        config = ValidationConfig(max_bytes=kilobytes_to_bytes(4096))

        assert validate(HERO, config, hero_source).status is VerdictStatus.WARN

    def test_within_budget_passes(self, hero_source: RegistryExportSource) -> None:
        config = ValidationConfig(max_bytes=5_000_000, strictness=Strictness.ERROR)

        verdict = validate(HERO, config, hero_source)

        assert verdict.status is VerdictStatus.PASS
        assert verdict.traversal is not None
        assert verdict.traversal.visited[0] == HERO

    def test_disabled_validator_is_not_applicable(self, hero_source: RegistryExportSource) -> None:
        config = ValidationConfig(max_bytes=0, enabled=False)

        verdict = validate(HERO, config, hero_source)

        assert verdict.status is VerdictStatus.NOT_APPLICABLE
        assert verdict.traversal is None

    def test_ignored_root_class_short_circuits(self, hero_source: RegistryExportSource) -> None:
        config = ValidationConfig(
            max_bytes=0,
            strictness=Strictness.ERROR,
            ignore_rules=IgnoreRules(ignored_root_classes=frozenset({"BlueprintCore"})),
        )

        verdict = validate(HERO, config, hero_source)

        assert verdict.status is VerdictStatus.NOT_APPLICABLE
        assert verdict.total_bytes == 0

    def test_scoped_ignore_applies_under_matching_root(self, hero_source: RegistryExportSource) -> None:
        config = ValidationConfig(
            max_bytes=kilobytes_to_bytes(4096),
            strictness=Strictness.ERROR,
            ignore_rules=IgnoreRules(scoped_ignores={"Blueprint": ("SkeletalMesh",)}),
        )

        verdict = validate(HERO, config, hero_source)

        # Mesh is ignored and not expanded, so its texture is never reached
        assert verdict.total_bytes == 0
        assert verdict.status is VerdictStatus.PASS

    def test_scoped_ignore_with_expansion(self, hero_source: RegistryExportSource) -> None:
        config = ValidationConfig(
            max_bytes=kilobytes_to_bytes(4096),
            strictness=Strictness.ERROR,
            ignore_rules=IgnoreRules(scoped_ignores={"Blueprint": ("SkeletalMesh",)}),
            expand_ignored=True,
        )

        assert validate(HERO, config, hero_source).total_bytes == 3_000_000

    def test_scoped_ignore_needs_matching_root(self, hero_source: RegistryExportSource) -> None:
        config = ValidationConfig(
            max_bytes=kilobytes_to_bytes(4096),
            ignore_rules=IgnoreRules(scoped_ignores={"UserWidget": ("SkeletalMesh",)}),
        )

        assert validate(HERO, config, hero_source).total_bytes == 5_000_000

    def test_code_reference_root_is_not_applicable(self, hero_source: RegistryExportSource) -> None:
        config = ValidationConfig(max_bytes=0)

        verdict = validate(AssetKey.package("/Script/Engine"), config, hero_source)

        assert verdict.status is VerdictStatus.NOT_APPLICABLE

    def test_node_guard_marks_traversal(self, hero_source: RegistryExportSource) -> None:
        config = ValidationConfig(max_bytes=kilobytes_to_bytes(4096), max_visited_nodes=2)

        verdict = validate(HERO, config, hero_source)

        assert verdict.total_bytes == 2_000_000
        assert verdict.traversal is not None
        assert verdict.traversal.truncated

    def test_primary_root_follows_managed_assets(self, build_source, asset) -> None:
        source = build_source(
            asset("Map:Arena", cls="PrimaryAssetLabel", size=None, deps=["/Game/Maps/Arena"]),
            asset("/Game/Maps/Arena", cls="World", size=9_000_000),
        )
        config = ValidationConfig(max_bytes=1024, strictness=Strictness.ERROR)

        verdict = validate(AssetKey.primary("Map", "Arena"), config, source)

        assert verdict.status is VerdictStatus.FAIL
        assert verdict.total_bytes == 9_000_000

    def test_missing_root_is_resolved_once(
        self, hero_source: RegistryExportSource, caplog: pytest.LogCaptureFixture
    ) -> None:
        config = ValidationConfig(max_bytes=0)

        with caplog.at_level(logging.WARNING):
            verdict = validate(AssetKey.package("/Game/Gone"), config, hero_source)

        assert verdict.status is VerdictStatus.PASS
        assert verdict.total_bytes == 0
        assert caplog.text.count("not found") == 1


class TestValidationPipeline:
    """Test validating several roots."""

    def test_validate_many_keeps_order(self, hero_source: RegistryExportSource) -> None:
        pipeline = ValidationPipeline(hero_source, ValidationConfig(max_bytes=kilobytes_to_bytes(4096)))
        mesh = AssetKey.package("/Game/Characters/SK_Hero")

        verdicts = list(pipeline.validate_many([HERO, mesh]))

        assert [v.root for v in verdicts] == [HERO, mesh]
        assert [v.total_bytes for v in verdicts] == [5_000_000, 3_000_000]

    def test_validate_all_covers_every_package(self, hero_source: RegistryExportSource) -> None:
        pipeline = ValidationPipeline(hero_source, ValidationConfig(max_bytes=kilobytes_to_bytes(4096)))

        statuses = {str(v.root): v.status for v in pipeline.validate_all()}

        assert statuses == {
            "/Game/Characters/BP_Hero": VerdictStatus.WARN,
            "/Game/Characters/SK_Hero": VerdictStatus.PASS,
            "/Game/Characters/T_Hero": VerdictStatus.PASS,
        }

    def test_registry_creates_pipeline(self, hero_document) -> None:
        pipeline = SourceRegistry.create_pipeline(
            'registry_export',
            ValidationConfig(max_bytes=0, strictness=Strictness.ERROR),
            document=hero_document,
        )

        assert isinstance(pipeline.source, RegistryExportSource)
        assert pipeline.validate(HERO).status is VerdictStatus.FAIL

    def test_registry_rejects_unknown_source(self) -> None:
        with pytest.raises(ValueError, match="Unknown source"):
            SourceRegistry.create_source('nonexistent')

    def test_registry_lists_export_platform(self) -> None:
        assert 'registry_export' in SourceRegistry.list_sources()
