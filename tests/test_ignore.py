"""Tests for the ignore-list policy."""

from heavy_reference_validator.core.ignore import (
    IgnoreRules,
    is_node_ignored,
    is_root_ignored,
    scoped_classes_for,
)
from heavy_reference_validator.core.types import AssetKey, ResolvedNode


def _node(class_name: str, *ancestors: str) -> ResolvedNode:
    return ResolvedNode(
        key=AssetKey.package(f"/Game/{class_name}"),
        class_name=class_name,
        ancestry=(class_name, *ancestors),
    )


GAME_MODE_BP = _node("BP_GameMode", "GameModeBase", "Actor", "Object")
WIDGET_BP = _node("EditorUtilityWidgetBlueprint", "WidgetBlueprint", "Blueprint", "Object")


class TestRootGate:
    """Test the global ignore gate."""

    def test_descendant_of_ignored_root_is_skipped(self) -> None:
        rules = IgnoreRules(ignored_root_classes=frozenset({"WidgetBlueprint"}))
        assert is_root_ignored(WIDGET_BP, rules)

    def test_unrelated_root_is_validated(self) -> None:
        rules = IgnoreRules(ignored_root_classes=frozenset({"WidgetBlueprint"}))
        assert not is_root_ignored(GAME_MODE_BP, rules)

    def test_empty_rules(self) -> None:
        assert not is_root_ignored(GAME_MODE_BP, IgnoreRules())


class TestScopedGate:
    """Test per-node scoped ignores."""

    def test_collects_classes_for_matching_parents(self) -> None:
        rules = IgnoreRules(
            scoped_ignores={
                "GameModeBase": ("World", "DataTable"),
                "Actor": ("SoundWave",),
                "UserWidget": ("Font",),
            }
        )
        assert scoped_classes_for(GAME_MODE_BP, rules) == {"World", "DataTable", "SoundWave"}

    def test_no_match_gives_empty_set(self) -> None:
        rules = IgnoreRules(scoped_ignores={"UserWidget": ("Font",)})
        assert scoped_classes_for(GAME_MODE_BP, rules) == frozenset()

    def test_node_descending_from_scoped_class_is_ignored(self) -> None:
        sound = _node("SoundWaveProcedural", "SoundWave", "SoundBase", "Object")
        assert is_node_ignored(sound, frozenset({"SoundWave"}))

    def test_other_nodes_are_counted(self) -> None:
        texture = _node("Texture2D", "Texture", "Object")
        assert not is_node_ignored(texture, frozenset({"SoundWave"}))
        assert not is_node_ignored(texture, frozenset())

    def test_from_dict(self) -> None:
        rules = IgnoreRules.from_dict(
            {
                "ignored_root_classes": ["EditorUtilityBlueprint"],
                "scoped_ignores": {"GameModeBase": ["World"]},
            }
        )
        assert rules.ignored_root_classes == {"EditorUtilityBlueprint"}
        assert rules.scoped_ignores == {"GameModeBase": ("World",)}
