"""Exceptions raised by the validator."""


class HeavyReferenceError(Exception):
    """Base class for validator errors."""


class ConfigurationError(HeavyReferenceError, ValueError):
    """Settings document is missing, malformed, or violates its schema."""


class RegistryExportError(HeavyReferenceError, ValueError):
    """Asset registry export is missing, malformed, or violates its schema."""
