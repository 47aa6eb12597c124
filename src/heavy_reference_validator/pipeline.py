"""Validation pipeline.

This module provides the main interface for validating the reference
size of assets. The pipeline is source-agnostic: it works with any
DependencySource implementation.
"""

import logging
from collections.abc import Iterable, Iterator

from .config import ValidationConfig
from .core.budget import Verdict, evaluate_budget, not_applicable
from .core.ignore import is_root_ignored, scoped_classes_for
from .core.traversal import NodeClass, classify_key, resolve_node, traverse
from .core.types import AssetKey
from .sources.base import DependencySource

logger = logging.getLogger(__name__)


def validate(root: AssetKey, config: ValidationConfig, source: DependencySource) -> Verdict:
    """Validate the cumulative size of everything a root asset references.

    Args:
        root: Asset being validated
        config: Budget, strictness and ignore lists for this run
        source: Dependency source to traverse

    Returns:
        Verdict with status, total and root. NOT_APPLICABLE when the
        validator is disabled, the root is not a content asset, or the
        root's class is on the ignored root list.
    """
    if not config.enabled:
        logger.debug("Heavy reference validation disabled, skipping %s", root)
        return not_applicable(root)

    if classify_key(root) is not NodeClass.ASSET:
        logger.info("Root %s is not a content asset, skipping", root)
        return not_applicable(root)

    root_node = resolve_node(root, source)
    if is_root_ignored(root_node, config.ignore_rules):
        logger.info("Root %s (%s) is on the ignore list, skipping", root, root_node.class_name)
        return not_applicable(root)

    result = traverse(
        root,
        source,
        scoped_classes=scoped_classes_for(root_node, config.ignore_rules),
        query_policy=config.query_policy,
        expand_ignored=config.expand_ignored,
        max_visited_nodes=config.max_visited_nodes,
        root_node=root_node,
    )

    verdict = evaluate_budget(
        result.total_bytes,
        config.max_bytes,
        config.strictness,
        root,
        traversal=result,
    )
    logger.info(
        "%s references %d bytes (budget %d): %s",
        root,
        verdict.total_bytes,
        config.max_bytes,
        verdict.status.value,
    )
    return verdict


class ValidationPipeline:
    """Validate many roots against one source and configuration.

    Example:
        >>> source = RegistryExportSource.from_file(Path('registry.json'))
        >>> pipeline = ValidationPipeline(source, ValidatorSettings().to_config())
        >>> for verdict in pipeline.validate_all():
        ...     print(verdict.root, verdict.status.value)
    """

    def __init__(self, source: DependencySource, config: ValidationConfig):
        """Initialize the pipeline.

        Args:
            source: Dependency source to traverse
            config: Configuration applied to every root
        """
        self.source = source
        self.config = config

    def validate(self, root: AssetKey) -> Verdict:
        """Validate a single root."""
        return validate(root, self.config, self.source)

    def validate_many(self, roots: Iterable[AssetKey]) -> Iterator[Verdict]:
        """Validate each root in turn.

        Every root gets its own traversal state; nothing is cached
        between runs.

        Yields:
            One verdict per root, in input order
        """
        for root in roots:
            yield self.validate(root)

    def validate_all(self) -> Iterator[Verdict]:
        """Validate every package asset the source lists.

        Raises:
            NotImplementedError: If the source cannot enumerate its assets
        """
        roots = [key for key in self.source.list_assets() if key.is_package]
        return self.validate_many(roots)
