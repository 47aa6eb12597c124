"""Dependency source interfaces.

This package contains the base class for dependency sources.
Concrete implementations live in the platforms/ directory.
"""

from .base import DependencySource

__all__ = ["DependencySource"]
