"""Dependency query policy.

Decides which dependency edges to request for a node, based on the kind
of its AssetKey. Package nodes follow hard game references (things that
are loaded together). Primary asset ids follow direct "manage" edges,
which describe ownership rather than load-time necessity.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable

from .types import AssetKey


class DependencyCategory(str, Enum):
    """Kind of dependency edge."""

    PACKAGE = "package"
    MANAGE = "manage"


class DependencyFlag(str, Enum):
    """Property of a dependency edge."""

    GAME = "game"
    HARD = "hard"
    DIRECT = "direct"


@dataclass(frozen=True)
class DependencyQuery:
    """Categories and flags to request from a dependency source.

    An edge matches when its category is one of ``categories`` and it
    carries every flag in ``flags``.
    """

    categories: frozenset[DependencyCategory] = frozenset()
    flags: frozenset[DependencyFlag] = frozenset()

    def matches(self, category: DependencyCategory, flags: Iterable[DependencyFlag]) -> bool:
        return category in self.categories and self.flags <= frozenset(flags)

    def to_dict(self) -> dict[str, list[str]]:
        return {
            "categories": sorted(c.value for c in self.categories),
            "flags": sorted(f.value for f in self.flags),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DependencyQuery":
        """Build a query from its JSON form.

        Args:
            data: Dictionary with ``categories`` and ``flags`` string lists

        Raises:
            ValueError: If a category or flag name is unknown
        """
        return cls(
            categories=frozenset(DependencyCategory(c) for c in data.get("categories", [])),
            flags=frozenset(DependencyFlag(f) for f in data.get("flags", [])),
        )


PACKAGE_QUERY = DependencyQuery(
    categories=frozenset({DependencyCategory.PACKAGE}),
    flags=frozenset({DependencyFlag.GAME, DependencyFlag.HARD}),
)

PRIMARY_QUERY = DependencyQuery(
    categories=frozenset({DependencyCategory.MANAGE}),
    flags=frozenset({DependencyFlag.GAME, DependencyFlag.DIRECT}),
)


@dataclass(frozen=True)
class QueryPolicy:
    """Per-kind dependency queries.

    The defaults reproduce the package/primary split. Settings may swap
    either query without touching the traversal.
    """

    package: DependencyQuery = field(default=PACKAGE_QUERY)
    primary: DependencyQuery = field(default=PRIMARY_QUERY)

    def query_for(self, key: AssetKey) -> DependencyQuery:
        return self.package if key.is_package else self.primary


DEFAULT_QUERY_POLICY = QueryPolicy()


def query_for(key: AssetKey, policy: QueryPolicy = DEFAULT_QUERY_POLICY) -> DependencyQuery:
    """Get the dependency query for a key.

    Args:
        key: Node whose dependencies are about to be requested
        policy: Query policy to apply (defaults to the package/primary split)

    Returns:
        DependencyQuery for the key's kind
    """
    return policy.query_for(key)
