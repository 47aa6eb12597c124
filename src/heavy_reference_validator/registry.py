"""Source registry for factory-based pipeline creation.

This module provides a central registry for dependency source factories,
enabling source-agnostic pipeline creation and automatic platform
discovery.
"""

import importlib
from pathlib import Path
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from .config import ValidationConfig
    from .pipeline import ValidationPipeline
    from .sources.base import DependencySource


class SourceRegistry:
    """Central registry for dependency source factories.

    Platforms register themselves when imported, and the registry can
    automatically discover all available platforms.
    """

    _factories: dict[str, Callable[..., "DependencySource"]] = {}

    @classmethod
    def register_factory(cls, name: str, factory: Callable[..., "DependencySource"]) -> None:
        """Register a factory function for creating sources.

        Args:
            name: Name of the source (e.g., 'registry_export')
            factory: Callable that creates a DependencySource instance

        Example:
            >>> def create_export_source(path: Path) -> RegistryExportSource:
            ...     return RegistryExportSource.from_file(path)
            >>> SourceRegistry.register_factory('registry_export', create_export_source)
        """
        cls._factories[name] = factory

    @classmethod
    def create_source(cls, source_name: str, **kwargs) -> "DependencySource":
        """Create a source by name.

        Args:
            source_name: Name of the registered source
            **kwargs: Arguments passed to the source factory

        Returns:
            DependencySource instance

        Raises:
            ValueError: If source_name is not registered
        """
        if source_name not in cls._factories:
            available = ', '.join(cls._factories.keys()) or 'none'
            raise ValueError(
                f"Unknown source: '{source_name}'. Available sources: {available}"
            )

        return cls._factories[source_name](**kwargs)

    @classmethod
    def create_pipeline(
        cls, source_name: str, config: "ValidationConfig", **kwargs
    ) -> "ValidationPipeline":
        """Create a pipeline from a registered source.

        Args:
            source_name: Name of the registered source
            config: Validation configuration for the pipeline
            **kwargs: Arguments passed to the source factory

        Returns:
            ValidationPipeline configured with the requested source

        Example:
            >>> pipeline = SourceRegistry.create_pipeline(
            ...     'registry_export',
            ...     ValidatorSettings().to_config(),
            ...     path=Path('registry.json'),
            ... )
        """
        # Import here to avoid circular dependency
        from .pipeline import ValidationPipeline

        source = cls.create_source(source_name, **kwargs)
        return ValidationPipeline(source, config)

    @classmethod
    def list_sources(cls) -> list[str]:
        """List all registered source names."""
        return list(cls._factories.keys())

    @classmethod
    def discover_platforms(cls) -> None:
        """Auto-discover and import all platforms.

        This method iterates through the platforms/ directory and
        attempts to import each platform module. Platforms with
        missing dependencies are skipped.

        Platforms register themselves when imported via their
        __init__.py files.
        """
        platforms_dir = Path(__file__).parent / 'platforms'

        if not platforms_dir.exists():
            return

        for platform_path in platforms_dir.iterdir():
            if not platform_path.is_dir():
                continue

            if not (platform_path / '__init__.py').exists():
                continue

            try:
                # This triggers auto-registration via the platform's __init__.py
                importlib.import_module(
                    f'.platforms.{platform_path.name}',
                    package='heavy_reference_validator'
                )
            except ImportError:
                # Platform dependencies not installed
                pass
