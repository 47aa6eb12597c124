"""Ignore-list policy.

Two gates are evaluated against class ancestry:

- The global gate skips validation entirely when the validation root
  is, or descends from, one of ``ignored_root_classes``.
- The scoped gate applies while traversing: when the root descends from
  a key of ``scoped_ignores``, any node whose class descends from one of
  that key's classes contributes zero size.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping

from .types import ResolvedNode


@dataclass(frozen=True)
class IgnoreRules:
    """Configured ignore lists.

    Attributes:
        ignored_root_classes: Root classes (and subclasses) never validated
        scoped_ignores: Parent class -> asset classes ignored under it
            (not part of the hash)
    """

    ignored_root_classes: frozenset[str] = frozenset()
    scoped_ignores: Mapping[str, tuple[str, ...]] = field(default_factory=dict, hash=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "IgnoreRules":
        return cls(
            ignored_root_classes=frozenset(data.get("ignored_root_classes", [])),
            scoped_ignores={
                parent: tuple(classes)
                for parent, classes in data.get("scoped_ignores", {}).items()
            },
        )


NO_IGNORES = IgnoreRules()


def is_root_ignored(root: ResolvedNode, rules: IgnoreRules) -> bool:
    """Check the global gate for a validation root.

    Args:
        root: Resolved validation root
        rules: Configured ignore lists

    Returns:
        True if the root should not be validated at all
    """
    return root.is_a(rules.ignored_root_classes)


def scoped_classes_for(root: ResolvedNode, rules: IgnoreRules) -> frozenset[str]:
    """Collect the asset classes ignored while validating this root.

    Every scoped entry whose parent class appears in the root's lineage
    contributes its class list.

    Args:
        root: Resolved validation root
        rules: Configured ignore lists

    Returns:
        Set of class names whose instances contribute zero size
    """
    lineage = root.lineage
    classes: set[str] = set()
    for parent, ignored in rules.scoped_ignores.items():
        if parent in lineage:
            classes.update(ignored)
    return frozenset(classes)


def is_node_ignored(node: ResolvedNode, scoped_classes: frozenset[str]) -> bool:
    """Check the scoped gate for a traversed node."""
    if not scoped_classes:
        return False
    return node.is_a(scoped_classes)
