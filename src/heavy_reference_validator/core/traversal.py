"""Transitive dependency-size traversal.

This module walks the forward dependency edges of a root asset
breadth-first and sums the on-disk size of every reachable node, except
the root itself. Each key is visited and expanded at most once, so
cycles and diamonds are handled by the visited set alone.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from .ignore import is_node_ignored
from .query import DEFAULT_QUERY_POLICY, QueryPolicy
from .types import AssetKey, ResolvedNode

if TYPE_CHECKING:
    from ..sources.base import DependencySource

logger = logging.getLogger(__name__)

# Package paths under this prefix are native code, not content
CODE_PACKAGE_PREFIX = "/Script/"


class NodeClass(str, Enum):
    """How a key is handled before it reaches the dependency source."""

    ASSET = "asset"
    UNSUPPORTED = "unsupported"
    CODE_REFERENCE = "code_reference"


class SkipReason(str, Enum):
    """Why a visited node contributed nothing to the total."""

    UNSUPPORTED = "unsupported"
    CODE_REFERENCE = "code_reference"
    MISSING = "missing"
    IGNORED = "ignored"


def classify_key(key: AssetKey) -> NodeClass:
    """Classify a key before resolution.

    Args:
        key: Key taken off the frontier

    Returns:
        UNSUPPORTED for degenerate keys, CODE_REFERENCE for native code
        packages, ASSET otherwise
    """
    if not key.is_valid:
        return NodeClass.UNSUPPORTED
    if key.package_name.startswith(CODE_PACKAGE_PREFIX):
        return NodeClass.CODE_REFERENCE
    return NodeClass.ASSET


def resolve_node(key: AssetKey, source: "DependencySource") -> ResolvedNode:
    """Resolve a key, degrading to a placeholder when it is not found.

    Args:
        key: Key classified as ASSET
        source: Dependency source to query

    Returns:
        The source's node, or a placeholder with ``exists=False``
    """
    node = source.resolve(key)
    if node is None:
        logger.warning("Asset not found in registry, treating as missing: %s", key)
        return ResolvedNode.placeholder(key)
    return node


@dataclass
class TraversalState:
    """Mutable state owned by a single traversal run."""

    frontier: deque[AssetKey] = field(default_factory=deque)
    visited: set[AssetKey] = field(default_factory=set)
    total_bytes: int = 0
    position: int = 0

    def add(self, size: int) -> None:
        self.total_bytes += size


@dataclass
class TraversalResult:
    """Outcome of a traversal.

    Attributes:
        root: Root key the traversal started from
        total_bytes: Summed size of counted nodes (root excluded)
        visited: Keys in visitation order
        contributions: Bytes counted per key, for keys that added to the total
        skipped: Keys that contributed nothing, with the reason
        truncated: True if the node guard stopped the walk early
    """

    root: AssetKey
    total_bytes: int = 0
    visited: list[AssetKey] = field(default_factory=list)
    contributions: dict[AssetKey, int] = field(default_factory=dict)
    skipped: dict[AssetKey, SkipReason] = field(default_factory=dict)
    truncated: bool = False

    def heaviest(self, count: int = 5) -> list[tuple[AssetKey, int]]:
        """Largest contributors, biggest first (ties broken by key)."""
        ranked = sorted(self.contributions.items(), key=lambda item: (-item[1], item[0]))
        return ranked[:count]


def traverse(
    root: AssetKey,
    source: "DependencySource",
    scoped_classes: frozenset[str] = frozenset(),
    query_policy: QueryPolicy = DEFAULT_QUERY_POLICY,
    expand_ignored: bool = False,
    max_visited_nodes: int | None = None,
    root_node: ResolvedNode | None = None,
) -> TraversalResult:
    """Sum the on-disk size of everything the root transitively references.

    Args:
        root: Validation root; visited and expanded but never counted
        source: Dependency source providing metadata and edges
        scoped_classes: Classes that contribute zero size (scoped ignores)
        query_policy: Dependency query per key kind
        expand_ignored: Whether ignored nodes still have their edges followed
        max_visited_nodes: Stop after visiting this many nodes (None = no limit)
        root_node: Root as already resolved by the caller, if any

    Returns:
        TraversalResult with the total and per-node bookkeeping
    """
    state = TraversalState(frontier=deque([root]))
    result = TraversalResult(root=root)

    while state.frontier:
        key = state.frontier.popleft()
        is_root = state.position == 0
        state.position += 1

        if key in state.visited:
            continue

        if max_visited_nodes is not None and len(state.visited) >= max_visited_nodes:
            logger.warning(
                "Stopped traversal of %s after %d nodes; total is a lower bound",
                root,
                len(state.visited),
            )
            result.truncated = True
            break

        state.visited.add(key)
        result.visited.append(key)

        node_class = classify_key(key)
        if node_class is NodeClass.UNSUPPORTED:
            logger.info("Asset not included in size: %s", key)
            result.skipped[key] = SkipReason.UNSUPPORTED
            continue
        if node_class is NodeClass.CODE_REFERENCE:
            logger.info("Code reference excluded from size: %s", key)
            result.skipped[key] = SkipReason.CODE_REFERENCE
            continue

        if is_root and root_node is not None:
            node = root_node
        else:
            node = resolve_node(key, source)
        if not node.exists:
            result.skipped[key] = SkipReason.MISSING
            continue

        ignored = not is_root and is_node_ignored(node, scoped_classes)
        if ignored:
            logger.debug("Ignoring size of %s (%s)", key, node.class_name)
            result.skipped[key] = SkipReason.IGNORED
        elif not is_root:
            _count_node(node, state, result)

        if not ignored or expand_ignored:
            query = query_policy.query_for(key)
            dependencies = source.get_dependencies(key, query)
            dependencies = source.filter_for_current_registry_source(dependencies, query)
            state.frontier.extend(dependencies)

    result.total_bytes = state.total_bytes
    logger.debug(
        "Traversal of %s visited %d nodes, total %d bytes",
        root,
        len(result.visited),
        result.total_bytes,
    )
    return result


def _count_node(node: ResolvedNode, state: TraversalState, result: TraversalResult) -> None:
    if node.disk_size is None:
        # Primary ids are synthetic and never carry a size
        if node.key.is_package:
            logger.warning("Cannot stat size for %s", node.key)
        return
    if node.disk_size < 0:
        logger.warning("Ignoring negative size %d for %s", node.disk_size, node.key)
        return

    state.add(node.disk_size)
    result.contributions[node.key] = node.disk_size
