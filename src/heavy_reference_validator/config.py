"""Validator settings.

``ValidatorSettings`` is the persisted form of the developer settings
(budget in kilobytes, error-or-warning toggle, ignore lists).
``ValidationConfig`` is the explicit value ``validate`` runs with, so
no code path reads settings from global state.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from jsonschema import ValidationError

from .core.budget import Strictness, kilobytes_to_bytes
from .core.errors import ConfigurationError
from .core.ignore import NO_IGNORES, IgnoreRules
from .core.query import DEFAULT_QUERY_POLICY, DependencyQuery, QueryPolicy
from .core.schema import (
    SETTINGS_SCHEMA,
    describe_validation_error,
    load_json_document,
    validate_document,
)

DEFAULT_MAX_SIZE_KILOBYTES = 10 * 1024


@dataclass(frozen=True)
class ValidationConfig:
    """Configuration for a single validation run.

    Attributes:
        max_bytes: Largest allowed cumulative reference size
        strictness: Severity when the budget is exceeded
        ignore_rules: Global and scoped ignore lists
        enabled: When False every root is NOT_APPLICABLE
        expand_ignored: Follow edges of nodes matched by scoped ignores
        max_visited_nodes: Optional guard on traversal size
        query_policy: Dependency query per key kind
    """

    max_bytes: int
    strictness: Strictness = Strictness.WARNING
    ignore_rules: IgnoreRules = NO_IGNORES
    enabled: bool = True
    expand_ignored: bool = False
    max_visited_nodes: int | None = None
    query_policy: QueryPolicy = DEFAULT_QUERY_POLICY


@dataclass
class ValidatorSettings:
    """Persisted validator settings."""

    enabled: bool = True
    error_on_overflow: bool = False
    max_size_kilobytes: int = DEFAULT_MAX_SIZE_KILOBYTES
    ignored_root_classes: list[str] = field(default_factory=list)
    scoped_ignores: dict[str, list[str]] = field(default_factory=dict)
    expand_ignored_dependencies: bool = False
    max_visited_nodes: int | None = None
    dependency_queries: dict[str, dict[str, list[str]]] = field(default_factory=dict)

    @property
    def strictness(self) -> Strictness:
        return Strictness.ERROR if self.error_on_overflow else Strictness.WARNING

    def to_config(self) -> ValidationConfig:
        """Build the explicit run configuration from these settings."""
        ignore_rules = IgnoreRules.from_dict(
            {
                "ignored_root_classes": self.ignored_root_classes,
                "scoped_ignores": self.scoped_ignores,
            }
        )

        query_policy = DEFAULT_QUERY_POLICY
        if self.dependency_queries:
            query_policy = QueryPolicy(
                package=_query_or_default(self.dependency_queries, "package", DEFAULT_QUERY_POLICY.package),
                primary=_query_or_default(self.dependency_queries, "primary", DEFAULT_QUERY_POLICY.primary),
            )

        return ValidationConfig(
            max_bytes=kilobytes_to_bytes(self.max_size_kilobytes),
            strictness=self.strictness,
            ignore_rules=ignore_rules,
            enabled=self.enabled,
            expand_ignored=self.expand_ignored_dependencies,
            max_visited_nodes=self.max_visited_nodes,
            query_policy=query_policy,
        )


def _query_or_default(
    queries: dict[str, dict[str, list[str]]], kind: str, default: DependencyQuery
) -> DependencyQuery:
    if kind not in queries:
        return default
    return DependencyQuery.from_dict(queries[kind])


def settings_from_dict(data: dict[str, Any]) -> ValidatorSettings:
    """Validate and convert a settings document.

    Args:
        data: Parsed settings JSON

    Returns:
        ValidatorSettings with defaults for omitted keys

    Raises:
        ConfigurationError: If the document violates the settings schema
    """
    try:
        validate_document(data, SETTINGS_SCHEMA)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid settings {describe_validation_error(e)}") from e

    return ValidatorSettings(
        enabled=data.get("enabled", True),
        error_on_overflow=data.get("error_on_overflow", False),
        max_size_kilobytes=data.get("max_size_kilobytes", DEFAULT_MAX_SIZE_KILOBYTES),
        ignored_root_classes=list(data.get("ignored_root_classes", [])),
        scoped_ignores={k: list(v) for k, v in data.get("scoped_ignores", {}).items()},
        expand_ignored_dependencies=data.get("expand_ignored_dependencies", False),
        max_visited_nodes=data.get("max_visited_nodes"),
        dependency_queries=dict(data.get("dependency_queries", {})),
    )


def load_settings(path: Path) -> ValidatorSettings:
    """Load settings from a JSON file.

    Args:
        path: Path to the settings file

    Returns:
        Parsed and validated settings

    Raises:
        ConfigurationError: If the file is missing, unreadable, or invalid
    """
    try:
        data = load_json_document(path)
    except FileNotFoundError as e:
        raise ConfigurationError(f"Settings file not found: {path}") from e
    except ValueError as e:
        raise ConfigurationError(f"Settings file is not valid JSON: {path}: {e}") from e

    return settings_from_dict(data)
